"""Pydantic models shared across the progression engine"""
