"""Tests for src/client/api.py — GameApiClient over a mocked transport."""

import json
from unittest.mock import patch

import httpx
import pytest

from src.client.api import GameApiClient, GameApiError
from src.config.settings import Settings


def _client(handler, retries: int = 2) -> GameApiClient:
    return GameApiClient(
        "http://game.test/api/",
        retries=retries,
        transport=httpx.MockTransport(handler),
    )


class TestGameActions:
    def test_create_game(self, server_state):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"game_id": "g1", "state": server_state})

        with _client(handler) as client:
            created = client.create_game("Ada", "Grace")

        assert seen["path"] == "/api/games"
        assert seen["body"] == {"player1_name": "Ada", "player2_name": "Grace"}
        assert created.game_id == "g1"
        assert created.state.temp_progress == {5: 2, 9: 1}

    @pytest.mark.parametrize(
        "method,endpoint",
        [
            ("roll", "roll"),
            ("stop", "stop"),
            ("continue_turn", "continue"),
            ("undo", "undo"),
            ("redo", "redo"),
        ],
    )
    def test_simple_actions(self, server_state, method, endpoint):
        paths = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json={"state": server_state})

        with _client(handler) as client:
            state = getattr(client, method)("g1")

        assert paths == [f"/api/games/g1/{endpoint}"]
        assert state.active_runners == [5, 9]

    def test_choose_sends_index_and_number(self, server_state):
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"state": server_state})

        with _client(handler) as client:
            client.choose("g1", 1, 10)
            client.choose("g1", 0)

        assert bodies == [
            {"pairing_index": 1, "chosen_number": 10},
            {"pairing_index": 0, "chosen_number": None},
        ]


class TestErrors:
    def test_http_error_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"detail": "Not your turn"})

        with _client(handler) as client:
            with pytest.raises(GameApiError, match="400"):
                client.roll("g1")

    def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        with _client(handler) as client:
            with pytest.raises(GameApiError, match="Invalid JSON"):
                client.roll("g1")

    def test_missing_state(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": True})

        with _client(handler) as client:
            with pytest.raises(GameApiError, match="no state"):
                client.stop("g1")

    def test_malformed_state(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"state": {"active_runners": "lots"}})

        with _client(handler) as client:
            with pytest.raises(GameApiError, match="Malformed"):
                client.roll("g1")

    @patch("src.client.api.time.sleep")
    def test_retries_transient_errors(self, mock_sleep, server_state):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            if len(calls) < 3:
                raise httpx.ConnectError("connection reset", request=request)
            return httpx.Response(200, json={"state": server_state})

        with _client(handler, retries=2) as client:
            state = client.roll("g1")

        assert len(calls) == 3
        assert mock_sleep.call_count == 2
        assert state.current_player == 1

    @patch("src.client.api.time.sleep")
    def test_gives_up_after_retries(self, mock_sleep):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            raise httpx.ConnectError("refused", request=request)

        with _client(handler, retries=1) as client:
            with pytest.raises(GameApiError, match="unreachable"):
                client.roll("g1")

        assert len(calls) == 2
        assert mock_sleep.call_count == 1


class TestFromSettings:
    def test_uses_settings(self):
        settings = Settings(
            game_api_url="http://server.test/api",
            request_timeout=3.0,
            request_retries=4,
        )
        client = GameApiClient.from_settings(settings)
        try:
            assert client.retries == 4
            assert str(client._http.base_url).rstrip("/") == "http://server.test/api"
            assert client._http.timeout.connect == 3.0
        finally:
            client.close()
