"""Tests for FastAPI server."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient
from server.main import app, games
from plusslash.core.board import board_from_string
from plusslash.core.state import GameState, Outcome, Phase


@pytest.fixture(autouse=True)
def clear_games():
    """Clear games before each test."""
    games.clear()
    yield
    games.clear()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


def create_game(client, **options) -> str:
    response = client.post("/games", json=options)
    assert response.status_code == 200
    return response.json()["game_id"]


class TestHealthEndpoint:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"


class TestCreateGame:
    def test_create_game_default(self, client):
        response = client.post("/games")
        assert response.status_code == 200
        data = response.json()
        assert len(data["game_id"]) == 8

    def test_create_game_with_options(self, client):
        game_id = create_game(client, mode="pvp", bot_depth=2)
        assert games[game_id].bot.config.depth == 2

    def test_invalid_depth(self, client):
        response = client.post("/games", json={"bot_depth": 0})
        assert response.status_code == 422

    def test_create_multiple_games(self, client):
        assert create_game(client) != create_game(client)


class TestGetGame:
    def test_get_game(self, client):
        game_id = create_game(client)
        response = client.get(f"/games/{game_id}")
        assert response.status_code == 200
        data = response.json()

        assert data["game_id"] == game_id
        assert data["mode"] == "pve"
        assert data["board"] == ["empty"] * 9
        assert data["current_player"] == 1
        assert data["phase"] == "expansion"
        assert data["last_move"] is None
        assert data["status"] == "playing"
        assert data["outcome"] == "undecided"
        assert data["winner"] is None
        assert data["ply"] == 0
        assert data["legal_moves"] == list(range(9))
        assert not data["can_undo"]

    def test_get_nonexistent_game(self, client):
        response = client.get("/games/nope")
        assert response.status_code == 404


class TestMakeMove:
    def test_make_move(self, client):
        game_id = create_game(client)
        response = client.post(f"/games/{game_id}/move", json={"index": 0})
        assert response.status_code == 200
        data = response.json()
        assert data["board"][0] == "vertical"
        assert data["current_player"] == 2
        assert data["last_move"] == 0
        assert 0 not in data["legal_moves"]
        assert data["ply"] == 1

    def test_illegal_move(self, client):
        game_id = create_game(client)
        client.post(f"/games/{game_id}/move", json={"index": 0})
        response = client.post(f"/games/{game_id}/move", json={"index": 0})
        assert response.status_code == 400

    def test_out_of_range_move(self, client):
        game_id = create_game(client)
        response = client.post(f"/games/{game_id}/move", json={"index": 9})
        assert response.status_code == 400

    def test_move_unknown_game(self, client):
        response = client.post("/games/nope/move", json={"index": 0})
        assert response.status_code == 404

    def test_winning_move_finishes_game(self, client):
        game_id = create_game(client, mode="pvp")
        history = games[game_id].history
        history.states = [GameState(
            board=board_from_string("/ / + | - | - | -"),
            phase=Phase.BATTLE,
        )]
        response = client.post(f"/games/{game_id}/move", json={"index": 2})
        data = response.json()
        assert data["status"] == "finished"
        assert data["winner"] == 1
        assert data["outcome"] == "one_wins"
        assert data["winning_line"] == [0, 1, 2]
        assert data["legal_moves"] == []

        response = client.post(f"/games/{game_id}/move", json={"index": 4})
        assert response.status_code == 409


class TestAIMove:
    def test_ai_move(self, client):
        game_id = create_game(client, bot_depth=1)
        response = client.post(f"/games/{game_id}/ai")
        assert response.status_code == 200
        data = response.json()
        assert data["index"] == 4
        assert data["cell"] == "b2"
        assert data["source"] == "search"
        assert data["game_state"]["board"][4] == "vertical"
        assert data["game_state"]["current_player"] == 2

    def test_ai_takes_win(self, client):
        game_id = create_game(client)
        games[game_id].history.states = [GameState(
            board=board_from_string("/ / + | - | - | -"),
            phase=Phase.BATTLE,
        )]
        data = client.post(f"/games/{game_id}/ai").json()
        assert data["index"] == 2
        assert data["game_state"]["status"] == "finished"

    def test_ai_on_finished_game(self, client):
        game_id = create_game(client)
        games[game_id].history.states = [GameState(
            board=board_from_string("- / - / + / - / -"),
            phase=Phase.BATTLE,
            outcome=Outcome.DRAW,
        )]
        response = client.post(f"/games/{game_id}/ai")
        assert response.status_code == 409


class TestLegalMoves:
    def test_legal_moves(self, client):
        game_id = create_game(client)
        client.post(f"/games/{game_id}/move", json={"index": 4})
        data = client.get(f"/games/{game_id}/legal-moves").json()
        indices = [m["index"] for m in data["moves"]]
        assert indices == [0, 1, 2, 3, 5, 6, 7, 8]
        assert data["moves"][0]["cell"] == "a1"


class TestUndoRedo:
    def test_undo_redo_pvp(self, client):
        game_id = create_game(client, mode="pvp")
        client.post(f"/games/{game_id}/move", json={"index": 4})
        client.post(f"/games/{game_id}/move", json={"index": 0})

        data = client.post(f"/games/{game_id}/undo").json()
        assert data["ply"] == 1
        assert data["board"][0] == "empty"
        assert data["can_redo"]

        data = client.post(f"/games/{game_id}/redo").json()
        assert data["ply"] == 2
        assert data["board"][0] == "horizontal"

    def test_undo_pve_takes_back_bot_reply(self, client):
        game_id = create_game(client, bot_depth=1)
        client.post(f"/games/{game_id}/move", json={"index": 0})
        client.post(f"/games/{game_id}/ai")

        data = client.post(f"/games/{game_id}/undo").json()
        assert data["ply"] == 0
        assert data["current_player"] == 1

    def test_nothing_to_undo(self, client):
        game_id = create_game(client)
        response = client.post(f"/games/{game_id}/undo")
        assert response.status_code == 400

    def test_nothing_to_redo(self, client):
        game_id = create_game(client)
        response = client.post(f"/games/{game_id}/redo")
        assert response.status_code == 400


class TestRecord:
    def test_record(self, client):
        game_id = create_game(client, mode="pvp")
        client.post(f"/games/{game_id}/move", json={"index": 4})
        client.post(f"/games/{game_id}/move", json={"index": 0})
        data = client.get(f"/games/{game_id}/record").json()
        assert data["moves"] == [4, 0]
        assert data["result"] == "*"
        assert "1. b2 a1" in data["text"]
