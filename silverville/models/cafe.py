"""Models for the barista memory mini-game"""
from pydantic import BaseModel, ConfigDict, Field, model_validator


class MenuItem(BaseModel):
    """Drink on the cafe menu"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str


class Customer(BaseModel):
    """Animal customer placing an order"""
    model_config = ConfigDict(frozen=True)

    name: str
    icon: str
    personality: str


class CafeRound(BaseModel):
    """
    One order-remember-choose round

    The customer's order is spoken, a second customer interrupts with
    small talk, then the player picks the ordered drink from the choices.
    """
    model_config = ConfigDict(frozen=True)

    customer: Customer
    correct_item: MenuItem
    order_text: str
    distractor_text: str
    choices: list[MenuItem] = Field(min_length=2)

    @model_validator(mode='after')
    def correct_item_offered(self) -> 'CafeRound':
        ids = [item.id for item in self.choices]
        if len(set(ids)) != len(ids):
            raise ValueError("Round choices must be distinct")
        if self.correct_item.id not in ids:
            raise ValueError(f"Correct item '{self.correct_item.id}' missing from choices")
        return self
