"""
Can't Stop Odds Game Server Client.

HTTP access to the authoritative game server and its state models.
"""

from src.client.api import GameApiClient, GameApiError
from src.client.models import GameStateResponse, NewGameResponse, PairingPlayability

__all__ = [
    "GameApiClient",
    "GameApiError",
    "GameStateResponse",
    "NewGameResponse",
    "PairingPlayability",
]
