"""
JSON endpoints, exercised through the Flask test client.
"""


def create_game(client, **overrides):
    payload = {
        "date": "2024-06-01",
        "time": "18:00",
        "location": "Court A",
        "players_needed": 2,
        "priority_list": ["p1", "p2", "p3"],
    }
    payload.update(overrides)
    return client.post("/api/games", json=payload)


def act_as(client, candidate_id):
    resp = client.post("/api/me", json={"candidate_id": candidate_id})
    assert resp.status_code == 200
    return resp


def test_default_user_is_registered(client):
    resp = client.get("/api/me")

    assert resp.status_code == 200
    assert resp.get_json()["me"] == {"id": "user-1", "name": "You", "contact": "555-0100"}


def test_home_summary(client):
    create_game(client)

    body = client.get("/").get_json()
    assert body["my_games"] == 1
    assert body["pending_invites"] == 0

    act_as(client, "p1")
    body = client.get("/").get_json()
    assert body["me"]["id"] == "p1"
    assert body["pending_invites"] == 1


def test_create_and_view_game(client):
    resp = create_game(client)
    assert resp.status_code == 201

    game = resp.get_json()["game"]
    assert game["organizerId"] == "user-1"
    assert game["organizerName"] == "You"
    assert [inv["playerId"] for inv in game["invites"]] == ["p1", "p2"]

    detail = client.get(f"/api/games/{game['id']}").get_json()["game"]
    assert detail["id"] == game["id"]
    assert detail["isFull"] is False

    mine = client.get("/api/games/mine").get_json()["games"]
    assert [g["id"] for g in mine] == [game["id"]]


def test_create_validation_errors(client):
    resp = create_game(client, location="")
    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "ValidationError"

    resp = create_game(client, priority_list=["p1", "p1"])
    assert resp.status_code == 400

    resp = create_game(client, priority_list=["p1", "ghost"])
    assert resp.status_code == 404

    assert client.get("/api/games/mine").get_json()["games"] == []


def test_respond_flow(client):
    game_id = create_game(client).get_json()["game"]["id"]

    act_as(client, "p1")
    invites = client.get("/api/invites/mine").get_json()["games"]
    assert [g["id"] for g in invites] == [game_id]

    resp = client.post(f"/api/games/{game_id}/respond", json={"decision": "decline"})
    assert resp.status_code == 200
    game = resp.get_json()["game"]
    assert [(i["playerId"], i["status"]) for i in game["invites"]] == [
        ("p1", "declined"), ("p2", "pending"), ("p3", "pending"),
    ]

    # second identical response is refused and changes nothing
    resp = client.post(f"/api/games/{game_id}/respond", json={"decision": "decline"})
    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "NoActiveInvite"

    game = client.get(f"/api/games/{game_id}").get_json()["game"]
    assert len(game["declined"]) == 1
    assert len(game["invites"]) == 3
    assert client.get("/api/invites/mine").get_json()["games"] == []


def test_respond_to_game_until_full(client):
    game_id = create_game(client).get_json()["game"]["id"]

    for pid in ("p1", "p2"):
        act_as(client, pid)
        assert client.post(f"/api/games/{game_id}/respond", json={"decision": "accept"}).status_code == 200

    game = client.get(f"/api/games/{game_id}").get_json()["game"]
    assert game["isFull"] is True
    assert [c["playerId"] for c in game["confirmed"]] == ["p1", "p2"]

    # p3 was invited after p1's accept; the game is full now
    act_as(client, "p3")
    resp = client.post(f"/api/games/{game_id}/respond", json={"decision": "accept"})
    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "EventFull"


def test_respond_bad_decision_and_missing_game(client):
    game_id = create_game(client).get_json()["game"]["id"]
    act_as(client, "p1")

    resp = client.post(f"/api/games/{game_id}/respond", json={"decision": "maybe"})
    assert resp.status_code == 400

    resp = client.post("/api/games/game-missing/respond", json={"decision": "accept"})
    assert resp.status_code == 404

    assert client.get("/api/games/game-missing").status_code == 404


def test_uninvited_player_cannot_respond(client):
    game_id = create_game(client).get_json()["game"]["id"]
    act_as(client, "p9")

    resp = client.post(f"/api/games/{game_id}/respond", json={"decision": "accept"})
    assert resp.status_code == 409


def test_players_endpoints(client):
    players = client.get("/api/players").get_json()["players"]
    assert len(players) == 15

    resp = client.post("/api/players", json={"name": "Pat Kim"})
    assert resp.status_code == 201
    pat = resp.get_json()["player"]
    assert pat["name"] == "Pat Kim"

    assert client.post("/api/players", json={"name": ""}).status_code == 400
    assert client.post("/api/me", json={"candidate_id": "ghost"}).status_code == 404

    act_as(client, pat["id"])
    assert client.get("/api/me").get_json()["me"]["id"] == pat["id"]


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_reset_to_default_user(client):
    act_as(client, "p4")

    resp = client.delete("/api/me")

    assert resp.get_json()["me"]["id"] == "user-1"
    assert client.get("/api/me").get_json()["me"]["id"] == "user-1"
