"""Village building catalog"""

from typing import List

from silverville.models.village import Building, BuildingKind

BUILDINGS: List[Building] = [
    Building(id="town_hall", kind=BuildingKind.HOUSE, name="Town Hall", icon="🏛️", unlock_level=1),
    Building(id="cafe", kind=BuildingKind.CAFE, name="Cafe", icon="☕", unlock_level=2),
    Building(id="farm", kind=BuildingKind.FARM, name="Farm", icon="🌾", unlock_level=3),
    Building(id="garden", kind=BuildingKind.GARDEN, name="Garden", icon="🌸", unlock_level=4),
    Building(id="fountain", kind=BuildingKind.FOUNTAIN, name="Fountain", icon="⛲", unlock_level=5),
]


def buildings_for_level(level: int) -> List[Building]:
    """Catalog buildings whose unlock level has been reached"""
    return [b for b in BUILDINGS if b.unlock_level <= level]
