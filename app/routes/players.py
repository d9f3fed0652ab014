from flask import Blueprint, current_app, jsonify, request

from app.helpers.errors import NotFound
from app.helpers.roster import SqlRosterStore
from app.helpers.session import clear_current_user, get_current_user, set_current_user

players_bp = Blueprint("players", __name__)

@players_bp.route("/api/players", methods=["GET"])
def list_players():
    return jsonify({"players": [c.to_dict() for c in SqlRosterStore().list()]})


@players_bp.route("/api/players", methods=["POST"])
def add_player():
    """
    Register a player.

    Payload:
      {"name": "Pat Kim", "contact": "555-0199"}   # contact optional
    """
    data = request.get_json(force=True, silent=True) or {}

    candidate = SqlRosterStore().add(
        data.get("name") or "",
        contact=data.get("contact"),
    )
    return jsonify({"player": candidate.to_dict()}), 201


@players_bp.route("/api/me", methods=["GET"])
def whoami():
    return jsonify({"me": get_current_user().to_dict()})


@players_bp.route("/api/me", methods=["POST"])
def switch_user():
    """Act as another roster player. No auth: this is a single-user app."""
    data = request.get_json(force=True, silent=True) or {}
    candidate_id = (data.get("candidate_id") or "").strip()

    candidate = SqlRosterStore().get(candidate_id)
    if not candidate:
        raise NotFound(f"Player {candidate_id or '?'} is not on the roster.")

    set_current_user(candidate.id)
    current_app.logger.info("Current user switched to %s", candidate.id)
    return jsonify({"me": candidate.to_dict()})


@players_bp.route("/api/me", methods=["DELETE"])
def reset_user():
    """Drop back to the configured default user."""
    clear_current_user()
    return jsonify({"me": get_current_user().to_dict()})
