"""
Walk Quiz Bank

Hands out quiz items without repeating any item until the whole catalog has
been used, then starts a fresh cycle. The used-id cycle lives only as long as
the bank instance; nothing is persisted.
"""

from typing import List, Optional, Sequence
import logging
import random

from silverville.exceptions import ValidationError
from silverville.models.quiz import QuizItem

logger = logging.getLogger(__name__)


# Built-in catalog used when the remote quiz service is unavailable
FALLBACK_QUIZZES: List[QuizItem] = [
    QuizItem(
        id="q1",
        prompt="What is the capital of South Korea?",
        choices=("Busan", "Seoul", "Daegu", "Incheon"),
        correct_choice="Seoul",
        explanation="Seoul has been the capital for more than 600 years.",
    ),
    QuizItem(
        id="q2",
        prompt="Which fruit is red and crunchy and keeps the doctor away?",
        choices=("Banana", "Orange", "Apple", "Grape"),
        correct_choice="Apple",
        explanation="An apple a day keeps the doctor away!",
    ),
    QuizItem(
        id="q3",
        prompt="Spring, summer, autumn... which season comes next?",
        choices=("Spring", "Summer", "Autumn", "Winter"),
        correct_choice="Winter",
        explanation="The year goes spring, summer, autumn, winter.",
    ),
    QuizItem(
        id="q4",
        prompt="What is 5 times 7?",
        choices=("30", "35", "40", "45"),
        correct_choice="35",
        explanation="5 x 7 = 35, from the five times table!",
    ),
    QuizItem(
        id="q5",
        prompt="What color is a clear sky?",
        choices=("Red", "Yellow", "Blue", "Green"),
        correct_choice="Blue",
        explanation="On a clear day the sky is blue.",
    ),
    QuizItem(
        id="q6",
        prompt="How many months are in a year?",
        choices=("10 months", "11 months", "12 months", "13 months"),
        correct_choice="12 months",
        explanation="January through December makes 12 months.",
    ),
    QuizItem(
        id="q7",
        prompt="What sound does a puppy make?",
        choices=("Meow", "Woof", "Moo", "Cock-a-doodle-doo"),
        correct_choice="Woof",
        explanation="Puppies say woof, kittens say meow.",
    ),
    QuizItem(
        id="q8",
        prompt="How many colors are in a rainbow?",
        choices=("5", "6", "7", "8"),
        correct_choice="7",
        explanation="Red, orange, yellow, green, blue, indigo, violet: 7 colors.",
    ),
]


class QuizBank:
    """Dispenses quiz items, covering the catalog before any repeat"""

    def __init__(self, catalog: Optional[Sequence[QuizItem]] = None, rng: Optional[random.Random] = None):
        catalog = list(FALLBACK_QUIZZES if catalog is None else catalog)
        if not catalog:
            raise ValidationError("Quiz catalog cannot be empty", field="catalog")

        ids = [item.id for item in catalog]
        if len(set(ids)) != len(ids):
            raise ValidationError("Quiz catalog contains duplicate ids", field="catalog", value=ids)

        self.catalog = catalog
        self.rng = rng or random.Random()
        self.used_ids: set[str] = set()

    def next(self) -> QuizItem:
        """Draw a quiz item not yet used in this cycle"""
        available = [item for item in self.catalog if item.id not in self.used_ids]

        if not available:
            logger.debug(f"Quiz catalog exhausted after {len(self.used_ids)} items; starting new cycle")
            self.used_ids.clear()
            available = self.catalog

        item = self.rng.choice(available)
        self.used_ids.add(item.id)
        return item

    def reset(self) -> None:
        self.used_ids.clear()

    def __len__(self) -> int:
        return len(self.catalog)

    @classmethod
    async def from_remote(cls, client, rng: Optional[random.Random] = None) -> 'QuizBank':
        """
        Build a bank from the remote quiz catalog, falling back to the built-in one

        Args:
            client: RemoteClient (or None when remote services are disabled)
            rng: Random source for selection
        """
        if client is None:
            return cls(rng=rng)

        try:
            catalog = await client.get_quiz_catalog()
            bank = cls(catalog, rng=rng)
            logger.info(f"Loaded {len(bank)} quizzes from remote service")
            return bank
        except Exception as e:
            logger.warning(f"Remote quiz catalog unavailable, using built-in quizzes: {e}")
            return cls(rng=rng)
