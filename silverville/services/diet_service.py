"""
DietService - Meal Scoring Business Logic

Turns a photographed meal into a MIND diet score and a fertilizer grant.
Image analysis is delegated to the remote service; when it is disabled or
fails, a local substitute meal keeps the flow going.
"""

import logging
import random
from typing import Dict, List, Optional, Set
from uuid import UUID

from silverville.gamification.ledger import ProgressionLedger
from silverville.gamification.rewards import diet_reward, mind_feedback, mind_score
from silverville.models.diet import DietAnalysis
from silverville.resilience.fallback import FallbackStrategy, execute_with_fallbacks

logger = logging.getLogger(__name__)

# Sample meals used when no image analysis is available
MOCK_MEALS: List[List[str]] = [
    ["spinach", "salmon", "tofu", "brown rice"],
    ["broccoli", "mackerel", "walnut", "tofu"],
    ["kale", "chicken breast", "blueberry", "almond"],
    ["lettuce", "tuna", "fermented soybean paste", "brown rice"],
    ["spinach", "walnut", "strawberry", "olive oil"],
    ["napa cabbage", "salmon", "nuts"],
    ["instant noodles", "snacks"],
]


class DietService:
    """
    Service for meal scoring.

    Responsibilities:
    - Meal analysis (remote first, local substitute on failure)
    - Applying a scored meal to the ledger exactly once
    - Best-effort reporting of the result to the remote service
    """

    def __init__(self, ledger: ProgressionLedger, remote_client=None, rng: Optional[random.Random] = None):
        """
        Initialize DietService.

        Args:
            ledger: Progression ledger to credit
            remote_client: Optional RemoteClient; None means local-only
            rng: Random source for the local substitute meal
        """
        self.ledger = ledger
        self.remote = remote_client
        self.rng = rng or random.Random()
        self._applied: Set[UUID] = set()
        logger.debug("DietService initialized")

    async def analyze_meal(self, image_b64: Optional[str] = None) -> DietAnalysis:
        """Score a meal photo without touching the ledger"""
        strategies = []
        if self.remote is not None and image_b64:
            strategies.append(FallbackStrategy("remote_analysis", self._analyze_remote, priority=1))
        strategies.append(FallbackStrategy("local_mock", self._analyze_local, priority=2))

        return await execute_with_fallbacks(strategies, image_b64)

    def score_foods(self, foods: List[str], source: str = "local") -> DietAnalysis:
        """Score an explicit food list with the local MIND table"""
        score = mind_score(foods)
        return self._build_analysis(score, foods, source)

    def apply_analysis(self, analysis: DietAnalysis) -> Dict[str, int]:
        """
        Record the diet score and grant fertilizer once per analysis

        Returns:
            {'fertilizer_awarded': int, 'fertilizer_total': int}
        """
        if analysis.id in self._applied:
            logger.info(f"Diet analysis {analysis.id} already applied; skipping grant")
            return {"fertilizer_awarded": 0, "fertilizer_total": self.ledger.fertilizer}

        self._applied.add(analysis.id)
        self.ledger.set_diet_score(analysis.mind_score, analysis.detected_foods)
        total = self.ledger.add_fertilizer(analysis.fertilizer)

        logger.info(
            f"Meal scored {analysis.mind_score} ({analysis.source}); "
            f"+{analysis.fertilizer} fertilizer"
        )
        return {"fertilizer_awarded": analysis.fertilizer, "fertilizer_total": total}

    async def process_meal(self, image_b64: Optional[str] = None) -> DietAnalysis:
        """Analyze, apply and report a meal in one step"""
        analysis = await self.analyze_meal(image_b64)
        self.apply_analysis(analysis)
        await self._record_remote(analysis)
        return analysis

    async def _analyze_remote(self, image_b64: Optional[str]) -> DietAnalysis:
        data = await self.remote.analyze_diet(image_b64)
        score = max(0.0, min(10.0, data["mindScore"]))
        return self._build_analysis(score, data["detectedItems"], "remote")

    async def _analyze_local(self, image_b64: Optional[str]) -> DietAnalysis:
        foods = self.rng.choice(MOCK_MEALS)
        return self.score_foods(list(foods), source="local")

    async def _record_remote(self, analysis: DietAnalysis) -> None:
        if self.remote is None:
            return
        try:
            await self.remote.record_diet(analysis.mind_score, analysis.detected_foods, analysis.fertilizer)
        except Exception as e:
            logger.warning(f"Could not record diet result remotely: {e}")

    @staticmethod
    def _build_analysis(score: float, foods: List[str], source: str) -> DietAnalysis:
        return DietAnalysis(
            mind_score=score,
            detected_foods=list(foods),
            fertilizer=diet_reward(score),
            feedback=mind_feedback(score),
            source=source,
        )
