"""Village models for gamification"""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BuildingKind(str, Enum):
    """Building categories"""
    HOUSE = "house"
    CAFE = "cafe"
    FARM = "farm"
    GARDEN = "garden"
    FOUNTAIN = "fountain"


class Building(BaseModel):
    """Village building unlocked by village level"""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: BuildingKind
    name: str
    icon: str
    unlock_level: int = Field(ge=1, le=10)


class Resident(BaseModel):
    """Animal resident that moved into the village"""
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    icon: str
    arrival_timestamp: datetime = Field(default_factory=datetime.now)
