"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from web.api import app, error_kind
from regicide_engine.errors import IllegalPlay, InvalidSelection, NoJesterCharge


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def game(client):
    response = client.post("/api/games", json={"players": 1, "seed": 42})
    assert response.status_code == 200
    return response.json()


def first_action(body, action_type):
    return next(a for a in body["legal_actions"] if a["type"] == action_type)


class TestErrorKind:
    def test_snake_case_names(self):
        assert error_kind(IllegalPlay("x")) == "illegal_play"
        assert error_kind(InvalidSelection("x")) == "invalid_selection"
        assert error_kind(NoJesterCharge("x")) == "no_jester_charge"


class TestGames:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_create_game(self, game):
        state = game["state"]
        assert state["phase"] == "INPUT"
        assert len(state["players"]) == 1
        assert len(state["players"][0]["hand"]) == 8
        assert state["enemy"]["card"]["rank_name"] == "JACK"
        assert state["castle_count"] == 11
        assert game["legal_actions"]

    def test_cards_carry_colour(self, game):
        hand = game["state"]["players"][0]["hand"]
        for card in hand:
            assert card["is_red"] == (card["suit_name"] in ("HEARTS", "DIAMONDS"))
        assert game["state"]["enemy"]["card"]["is_red"] in (True, False)

    def test_invalid_player_count(self, client):
        assert client.post("/api/games", json={"players": 5}).status_code == 422

    def test_unknown_strategy(self, client):
        response = client.post("/api/games", json={"strategy": "psychic"})
        assert response.status_code == 400

    def test_list_and_delete(self, client, game):
        game_id = game["game_id"]
        assert any(g["id"] == game_id for g in client.get("/api/games").json())

        assert client.delete(f"/api/games/{game_id}").json() == {"deleted": True}
        assert client.get(f"/api/games/{game_id}").status_code == 404
        assert client.delete(f"/api/games/{game_id}").status_code == 404

    def test_unknown_game(self, client):
        assert client.post("/api/games/nope/yield").status_code == 404


class TestActions:
    def test_play_legal_cards(self, client, game):
        action = first_action(game, "PLAY")

        response = client.post(
            f"/api/games/{game['game_id']}/play", json={"indices": action["indices"]}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["messages"]
        assert len(body["state"]["log"]) == 2

    def test_illegal_play_returns_error_body(self, client, game):
        response = client.post(f"/api/games/{game['game_id']}/play", json={"indices": [99]})

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "error"
        assert body["error"] == "invalid_selection"
        assert body["message"]

    def test_rejected_action_leaves_game_unchanged(self, client, game):
        game_id = game["game_id"]
        response = client.post(f"/api/games/{game_id}/discard", json={"indices": [0]})
        assert response.status_code == 400
        assert response.json()["error"] == "illegal_discard"

        assert client.get(f"/api/games/{game_id}").json()["state"] == game["state"]

    def test_yield_then_discard(self, client, game):
        game_id = game["game_id"]

        body = client.post(f"/api/games/{game_id}/yield").json()
        assert body["state"]["phase"] == "ENEMY_ATTACK"
        assert body["state"]["required_discard"] == 10

        action = first_action(body, "DISCARD")
        body = client.post(
            f"/api/games/{game_id}/discard", json={"indices": action["indices"]}
        ).json()
        assert body["state"]["phase"] == "INPUT"

    def test_jester_power(self, client, game):
        body = client.post(f"/api/games/{game['game_id']}/jester").json()
        player = body["state"]["players"][0]
        assert player["jester_charges"] == 1
        assert player["jesters_used"] == 1
        assert len(player["hand"]) == 8

    def test_action_history(self, client, game):
        game_id = game["game_id"]
        client.post(f"/api/games/{game_id}/yield")
        history = client.get(f"/api/games/{game_id}").json()["action_history"]
        assert [h["action_type"] for h in history] == ["YIELD"]


class TestAuto:
    def test_strategy_takes_an_action(self, client):
        game = client.post("/api/games", json={"seed": 3, "strategy": "greedy"}).json()

        response = client.post(f"/api/games/{game['game_id']}/auto")

        assert response.status_code == 200
        history = client.get(f"/api/games/{game['game_id']}").json()["action_history"]
        assert len(history) == 1

    def test_auto_needs_a_strategy(self, client, game):
        assert client.post(f"/api/games/{game['game_id']}/auto").status_code == 400

    def test_list_strategies(self, client):
        names = {s["name"] for s in client.get("/api/strategies").json()}
        assert names == {"random", "greedy"}
