import pytest

from app.helpers.errors import ConcurrentUpdate, EventFull, NoActiveInvite, NotFound, ValidationError
from app.helpers.events import PENDING
from tests.conftest import NOW


def create(manager, **overrides):
    kwargs = dict(
        organizer_id="org",
        date="2024-06-01",
        time="18:00",
        location="Court A",
        players_needed=2,
        priority_list=["A", "B", "C"],
        now=NOW,
    )
    kwargs.update(overrides)
    return manager.create_event(**kwargs)


def test_create_persists_event(manager, events):
    event = create(manager)

    assert event.id.startswith("game-")
    assert events.get(event.id) == event
    assert [inv.status for inv in event.invites] == [PENDING, PENDING]
    assert event.invites[0].player_name == "Avery"


def test_create_ids_are_unique(manager):
    ids = {create(manager).id for _ in range(20)}
    assert len(ids) == 20


@pytest.mark.parametrize("overrides", [
    {"date": ""},
    {"time": "   "},
    {"location": None},
    {"organizer_id": ""},
    {"players_needed": 0},
    {"players_needed": -3},
    {"players_needed": True},
    {"players_needed": "lots"},
    {"players_needed": 2.5},
    {"priority_list": []},
    {"priority_list": "ABC"},
    {"priority_list": ["A", "B", "A"]},
    {"priority_list": ["A", ""]},
])
def test_create_rejects_bad_input(manager, events, overrides):
    with pytest.raises(ValidationError):
        create(manager, **overrides)

    assert events.list() == []


def test_create_rejects_unknown_player(manager, events):
    with pytest.raises(NotFound):
        create(manager, priority_list=["A", "nobody"])

    assert events.list() == []


def test_create_rejects_unknown_organizer(manager, events):
    with pytest.raises(NotFound):
        create(manager, organizer_id="ghost", priority_list=["A"], players_needed=1)

    assert events.list() == []


def test_players_needed_accepts_numeric_string(manager):
    assert create(manager, players_needed="3").players_needed == 3


def test_list_owned_events(manager):
    first = create(manager)
    create(manager, organizer_id="A", priority_list=["B"])
    second = create(manager)

    assert [e.id for e in manager.list_owned_events("org")] == [first.id, second.id]
    assert manager.list_owned_events("nobody") == []


def test_list_pending_invites(manager):
    game = create(manager)
    other = create(manager, priority_list=["C", "A"], players_needed=1)

    assert [e.id for e in manager.list_pending_invites("A")] == [game.id]
    assert [e.id for e in manager.list_pending_invites("C")] == [other.id]

    manager.respond_to_invite(game.id, "A", "accept", now=NOW)
    assert manager.list_pending_invites("A") == []


def test_get_event_not_found(manager):
    with pytest.raises(NotFound):
        manager.get_event("game-missing")


def test_respond_to_invite_persists(manager, events):
    game = create(manager)

    updated = manager.respond_to_invite(game.id, "A", "decline", now=NOW)

    assert events.get(game.id) == updated
    assert updated.invited_ids == ("A", "B", "C")


def test_respond_to_invite_failure_leaves_store_untouched(manager, events):
    game = create(manager)

    with pytest.raises(NoActiveInvite):
        manager.respond_to_invite(game.id, "C", "accept", now=NOW)
    with pytest.raises(NotFound):
        manager.respond_to_invite("game-missing", "A", "accept", now=NOW)

    assert events.get(game.id) == game


def test_lost_race_is_reported(manager, events):
    game = create(manager)
    stale, version = events.get_versioned(game.id)

    manager.respond_to_invite(game.id, "A", "decline", now=NOW)

    with pytest.raises(ConcurrentUpdate):
        events.put(stale, expected_version=version)
    assert events.get(game.id).invited_ids == ("A", "B", "C")


def test_describe_event(manager):
    game = create(manager)
    game = manager.respond_to_invite(game.id, "A", "accept", now=NOW)

    view = manager.describe_event(game)

    assert view["organizerName"] == "Organizer"
    assert view["isFull"] is False
    assert view["openSlots"] == 1
    assert [inv["playerId"] for inv in view["pendingInvites"]] == ["B", "C"]
    assert view["playersNeeded"] == 2


def test_refused_accept_leaves_invite_pending_on_full_game(manager):
    game = create(manager)
    manager.respond_to_invite(game.id, "A", "accept", now=NOW)
    game = manager.respond_to_invite(game.id, "B", "accept", now=NOW)
    assert game.is_full

    with pytest.raises(EventFull):
        manager.respond_to_invite(game.id, "C", "accept", now=NOW)

    # C still sees the game, flagged as full
    listed = manager.list_pending_invites("C")
    assert [e.id for e in listed] == [game.id]
    view = manager.describe_event(listed[0])
    assert view["isFull"] is True
    assert view["openSlots"] == 0
    assert [inv["playerId"] for inv in view["pendingInvites"]] == ["C"]
