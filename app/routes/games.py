from flask import Blueprint, current_app, jsonify, request

from app.helpers.errors import WaterfallError
from app.helpers.session import get_current_user, get_manager

games_bp = Blueprint("games", __name__)

@games_bp.route("/api/games", methods=["POST"])
def create_game():
    """
    Create a game organised by the current user.

    Payload:
      {
        "date": "2024-06-01",
        "time": "18:00",
        "location": "Court A",
        "players_needed": 10,
        "priority_list": ["p3", "p1", "p7"]
      }

    The first players_needed ids in priority_list are invited straight away.
    """
    data = request.get_json(force=True, silent=True) or {}
    me = get_current_user()
    manager = get_manager()

    event = manager.create_event(
        me.id,
        data.get("date"),
        data.get("time"),
        data.get("location"),
        data.get("players_needed", data.get("playersNeeded")),
        data.get("priority_list", data.get("priorityList")),
    )

    current_app.logger.info(
        "Game created id=%s organizer=%s needed=%s invited=%s",
        event.id, me.id, event.players_needed, len(event.invites),
    )
    return jsonify({"game": manager.describe_event(event)}), 201


@games_bp.route("/api/games/mine", methods=["GET"])
def my_games():
    me = get_current_user()
    manager = get_manager()
    return jsonify({
        "games": [manager.describe_event(e) for e in manager.list_owned_events(me.id)],
    })


@games_bp.route("/api/invites/mine", methods=["GET"])
def my_invites():
    """Games where the current user has an invite still waiting on them."""
    me = get_current_user()
    manager = get_manager()
    return jsonify({
        "games": [manager.describe_event(e) for e in manager.list_pending_invites(me.id)],
    })


@games_bp.route("/api/games/<event_id>", methods=["GET"])
def game_detail(event_id):
    manager = get_manager()
    return jsonify({"game": manager.describe_event(manager.get_event(event_id))})


@games_bp.route("/api/games/<event_id>/respond", methods=["POST"])
def respond_to_game(event_id):
    """
    Accept or decline the current user's invite.

    Payload:
      {"decision": "accept"}   # or "decline"
    """
    data = request.get_json(force=True, silent=True) or {}
    me = get_current_user()
    manager = get_manager()

    event = manager.respond_to_invite(event_id, me.id, data.get("decision"))

    current_app.logger.info(
        "Game respond id=%s player=%s decision=%r confirmed=%s/%s invites=%s",
        event.id, me.id, data.get("decision"),
        len(event.confirmed), event.players_needed, len(event.invites),
    )
    return jsonify({"game": manager.describe_event(event)})


@games_bp.app_errorhandler(WaterfallError)
def handle_waterfall_error(err):
    current_app.logger.info("Request refused (%s): %s", type(err).__name__, err)
    return jsonify({"error": str(err), "kind": type(err).__name__}), err.status_code
