"""Diet analysis models"""
from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class DietAnalysis(BaseModel):
    """Scored meal photo (or local substitute) ready to apply to the ledger"""
    id: UUID = Field(default_factory=uuid4)
    mind_score: float = Field(ge=0, le=10)
    detected_foods: list[str] = Field(default_factory=list)
    fertilizer: int = Field(ge=0)
    feedback: str
    source: str = "local"  # "remote" or "local"
    analyzed_at: datetime = Field(default_factory=datetime.now)
