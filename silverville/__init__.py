"""SilverVille: walking, diet and memory-game progression for a virtual village"""

__version__ = "0.1.0"
