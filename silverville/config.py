"""Configuration management"""
import os
from dotenv import load_dotenv

load_dotenv()

# Walking
WALK_GOAL: int = int(os.getenv("WALK_GOAL", "5000"))
QUIZ_INTERVAL: int = int(os.getenv("QUIZ_INTERVAL", "1000"))
QUIZ_RESULT_DELAY_SECONDS: float = float(os.getenv("QUIZ_RESULT_DELAY_SECONDS", "3.0"))
QUIZ_CORRECT_EXP: int = int(os.getenv("QUIZ_CORRECT_EXP", "5"))

# Cafe mini-game
CAFE_TOTAL_ROUNDS: int = int(os.getenv("CAFE_TOTAL_ROUNDS", "3"))
CAFE_POINTS_PER_CORRECT: int = int(os.getenv("CAFE_POINTS_PER_CORRECT", "10"))
CAFE_EXP_PER_CORRECT: int = int(os.getenv("CAFE_EXP_PER_CORRECT", "10"))
# Daily cafe score that counts as a full mini-game share of the health score
CAFE_SCORE_MAX: int = int(os.getenv("CAFE_SCORE_MAX", "30"))
CAFE_FEEDBACK_DELAY_SECONDS: float = float(os.getenv("CAFE_FEEDBACK_DELAY_SECONDS", "1.8"))

# Remote scoring / record service
REMOTE_API_URL: str = os.getenv("REMOTE_API_URL", "http://localhost:3000/api")
REMOTE_API_TIMEOUT: float = float(os.getenv("REMOTE_API_TIMEOUT", "10"))
ENABLE_REMOTE_SERVICES: bool = os.getenv("ENABLE_REMOTE_SERVICES", "false").lower() == "true"

# Speech
SPEECH_LANGUAGE: str = os.getenv("SPEECH_LANGUAGE", "ko-KR")
SPEECH_RATE: float = float(os.getenv("SPEECH_RATE", "0.85"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if WALK_GOAL <= 0:
        raise ValueError("WALK_GOAL must be positive")
    if QUIZ_INTERVAL <= 0:
        raise ValueError("QUIZ_INTERVAL must be positive")
    if CAFE_TOTAL_ROUNDS <= 0:
        raise ValueError("CAFE_TOTAL_ROUNDS must be positive")
    if CAFE_SCORE_MAX <= 0:
        raise ValueError("CAFE_SCORE_MAX must be positive")
    if QUIZ_RESULT_DELAY_SECONDS < 0 or CAFE_FEEDBACK_DELAY_SECONDS < 0:
        raise ValueError("Auto-advance delays cannot be negative")
    if ENABLE_REMOTE_SERVICES and not REMOTE_API_URL:
        raise ValueError("REMOTE_API_URL is required when ENABLE_REMOTE_SERVICES is true")
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"Unknown LOG_LEVEL: {LOG_LEVEL}")
