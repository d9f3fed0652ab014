from flask import Blueprint, jsonify

from app.helpers.session import get_current_user, get_manager

index_bp = Blueprint("index", __name__)

@index_bp.route("/")
def index():
    """
    Home summary for the current user:
    - their profile
    - how many games they organise
    - how many invites are waiting on them
    """
    me = get_current_user()
    manager = get_manager()

    my_games = manager.list_owned_events(me.id)
    my_invites = manager.list_pending_invites(me.id)

    return jsonify({
        "me": me.to_dict(),
        "my_games": len(my_games),
        "pending_invites": len(my_invites),
    })


@index_bp.route("/health")
def health():
    return jsonify({"ok": True})
