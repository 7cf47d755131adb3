"""
Barista Round Generation

Builds rounds for the working-memory cafe game: an animal customer orders a
drink, another customer interrupts with small talk, and the player picks the
ordered drink out of four menu cards.
"""

from typing import Any, Dict, List, Optional
import logging
import random

from silverville import config
from silverville.models.cafe import CafeRound, Customer, MenuItem

logger = logging.getLogger(__name__)

CHOICES_PER_ROUND = 4

MENU_ITEMS: List[MenuItem] = [
    MenuItem(id="ice_americano", name="Iced Americano", icon="🧊☕"),
    MenuItem(id="hot_americano", name="Hot Americano", icon="☕"),
    MenuItem(id="cafe_latte", name="Cafe Latte", icon="🥛☕"),
    MenuItem(id="green_tea_latte", name="Green Tea Latte", icon="🍵"),
    MenuItem(id="strawberry_ade", name="Strawberry Ade", icon="🍓🥤"),
    MenuItem(id="lemon_ade", name="Lemonade", icon="🍋🥤"),
    MenuItem(id="cappuccino", name="Cappuccino", icon="☕🫧"),
    MenuItem(id="hot_chocolate", name="Hot Chocolate", icon="🍫☕"),
]

CUSTOMERS: List[Customer] = [
    Customer(name="Somi", icon="🐰", personality="chatty"),
    Customer(name="Dubu", icon="🐻", personality="easygoing"),
    Customer(name="Carrot", icon="🐿️", personality="lively"),
    Customer(name="Boksil", icon="🐶", personality="friendly"),
    Customer(name="Choco", icon="🐱", personality="aloof"),
]

DISTRACTOR_LINES: List[str] = [
    "Lovely weather today, isn't it?",
    "I watched such a fun drama on TV yesterday!",
    "The flowers are blooming so nicely these days.",
    "The music in this cafe is really nice!",
    "My grandson is coming to visit this week.",
    "Have you been keeping well lately?",
    "Oh, I'd like something too, but I can't decide.",
]

ORDER_TEMPLATES: List[str] = [
    "One {item}, please.",
    "I'll have a {item}!",
    "Could I get a {item}, please?",
    "I feel like a {item} today.",
]


class CafeRoundGenerator:
    """Random round source; inject a seeded Random for reproducible games"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate_round(self) -> CafeRound:
        customer = self.rng.choice(CUSTOMERS)
        correct_item = self.rng.choice(MENU_ITEMS)
        others = [m for m in MENU_ITEMS if m.id != correct_item.id]
        choices = self.rng.sample(others, CHOICES_PER_ROUND - 1) + [correct_item]
        self.rng.shuffle(choices)

        order = self.rng.choice(ORDER_TEMPLATES).format(item=correct_item.name)
        return CafeRound(
            customer=customer,
            correct_item=correct_item,
            order_text=f"{customer.name} is ordering. {order}",
            distractor_text=self.rng.choice(DISTRACTOR_LINES),
            choices=choices,
        )

    def generate_rounds(self, count: Optional[int] = None) -> List[CafeRound]:
        count = config.CAFE_TOTAL_ROUNDS if count is None else count
        return [self.generate_round() for _ in range(count)]


def round_from_remote(payload: Dict[str, Any]) -> CafeRound:
    """
    Convert a remote barista session payload into a round

    Expected payload:
        {
            'customer': {'name': str, 'emoji': str},
            'order': str,
            'menu': [{'id': str, 'name': str, 'emoji': str}, ...],
            'answerId': str,
            'distractor': str
        }
    """
    menu = [MenuItem(id=m["id"], name=m["name"], icon=m.get("emoji", "")) for m in payload["menu"]]
    answer_id = payload["answerId"]
    correct_item = next((m for m in menu if m.id == answer_id), None)
    if correct_item is None:
        raise ValueError(f"Remote session answer '{answer_id}' is not on its menu")

    customer = payload["customer"]
    return CafeRound(
        customer=Customer(
            name=customer["name"],
            icon=customer.get("emoji", ""),
            personality=customer.get("personality", "friendly"),
        ),
        correct_item=correct_item,
        order_text=payload["order"],
        distractor_text=payload["distractor"],
        choices=menu,
    )


async def fetch_rounds(client, generator: CafeRoundGenerator, count: Optional[int] = None) -> List[CafeRound]:
    """
    Fetch remote barista rounds, substituting locally generated ones on failure

    Args:
        client: RemoteClient, or None when remote services are disabled
        generator: Local round source
        count: Number of rounds (defaults to CAFE_TOTAL_ROUNDS)
    """
    count = config.CAFE_TOTAL_ROUNDS if count is None else count
    if client is None:
        return generator.generate_rounds(count)

    rounds: List[CafeRound] = []
    for _ in range(count):
        try:
            payload = await client.get_barista_session()
            rounds.append(round_from_remote(payload))
        except Exception as e:
            logger.warning(f"Remote barista session unavailable, generating locally: {e}")
            rounds.append(generator.generate_round())
    return rounds
