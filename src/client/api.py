"""
Can't Stop Odds - Game Server Client

Thin httpx wrapper over the authoritative game server. Every action returns
the server's new state; the client keeps no game state of its own.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from src.client.models import GameStateResponse, NewGameResponse
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class GameApiError(Exception):
    """Raised when the game server cannot be reached or answers badly."""


class GameApiClient:
    """Talks to the game server's ``/games`` endpoints."""

    RETRY_DELAY = 0.3

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 2,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.retries = retries
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> GameApiClient:
        """Build a client from application settings."""
        settings = settings or get_settings()
        return cls(
            settings.game_api_url,
            timeout=settings.request_timeout,
            retries=settings.request_retries,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> GameApiClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- Game actions ----------------------------------------------------

    def create_game(
        self,
        player1_name: str = "Player 1",
        player2_name: str = "Player 2",
    ) -> NewGameResponse:
        """Start a new game and return its id and initial state."""
        payload = self._post(
            "/games",
            json={"player1_name": player1_name, "player2_name": player2_name},
        )
        return self._parse(NewGameResponse, payload)

    def roll(self, game_id: str) -> GameStateResponse:
        """Roll the four dice for the current player."""
        return self._action(game_id, "roll")

    def choose(
        self,
        game_id: str,
        pairing_index: int,
        chosen_number: int | None = None,
    ) -> GameStateResponse:
        """
        Lock in a pairing.

        Args:
            game_id: Game to act on
            pairing_index: Index into the state's ``valid_pairings``
            chosen_number: Sum to play when the pairing needs a choice
        """
        return self._action(
            game_id,
            "choose",
            json={"pairing_index": pairing_index, "chosen_number": chosen_number},
        )

    def stop(self, game_id: str) -> GameStateResponse:
        """Bank this turn's progress and pass the turn."""
        return self._action(game_id, "stop")

    def continue_turn(self, game_id: str) -> GameStateResponse:
        """Acknowledge a bust and pass the turn."""
        return self._action(game_id, "continue")

    def undo(self, game_id: str) -> GameStateResponse:
        return self._action(game_id, "undo")

    def redo(self, game_id: str) -> GameStateResponse:
        return self._action(game_id, "redo")

    # -- Transport -------------------------------------------------------

    def _action(
        self,
        game_id: str,
        action: str,
        json: dict[str, Any] | None = None,
    ) -> GameStateResponse:
        payload = self._post(f"/games/{game_id}/{action}", json=json)
        if "state" not in payload:
            raise GameApiError(f"Response to {action!r} has no state.")
        return self._parse(GameStateResponse, payload["state"])

    def _post(self, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST with simple retry on transient connection errors."""
        for attempt in range(self.retries + 1):
            try:
                logger.debug("POST %s (attempt %d)", path, attempt + 1)
                response = self._http.post(path, json=json)
                response.raise_for_status()
                return response.json()
            except httpx.TransportError as exc:
                if attempt == self.retries:
                    logger.exception("Game server unreachable for %s", path)
                    raise GameApiError(f"Game server unreachable: {exc}") from exc
                logger.warning("Transient error on %s, retrying: %s", path, exc)
                time.sleep(self.RETRY_DELAY)
            except httpx.HTTPStatusError as exc:
                logger.exception("Game server rejected %s", path)
                raise GameApiError(
                    f"Game server returned {exc.response.status_code} for {path}."
                ) from exc
            except ValueError as exc:
                logger.exception("Invalid JSON from %s", path)
                raise GameApiError(f"Invalid JSON from {path}.") from exc
        raise GameApiError(f"No response for {path}.")

    @staticmethod
    def _parse(model: type, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.exception("Malformed %s payload", model.__name__)
            raise GameApiError(f"Malformed {model.__name__} payload.") from exc
