"""
Service layer for silverville

Services sit between the game engine and the outside world: the remote
scoring/record API, meal analysis, and the dependency container that wires
the ledger, capabilities and sessions together.
"""

from silverville.services.container import ServiceContainer, get_container, init_container
from silverville.services.diet_service import DietService
from silverville.services.remote_client import RemoteClient

__all__ = [
    "ServiceContainer",
    "get_container",
    "init_container",
    "DietService",
    "RemoteClient",
]
