from flask import current_app, session

from app.helpers.event_store import SqlEventStore
from app.helpers.events import Candidate
from app.helpers.lifecycle import EventManager
from app.helpers.roster import SqlRosterStore, ensure_candidate


def get_manager() -> EventManager:
    return EventManager(SqlRosterStore(), SqlEventStore())


def get_current_user() -> Candidate:
    """
    The one "current user" the app acts as.

    Uses session["candidate_id"] when it still points at a roster entry,
    otherwise falls back to the configured default user, registering
    them on first use.
    """
    roster = SqlRosterStore()

    candidate_id = (session.get("candidate_id") or "").strip()
    if candidate_id:
        candidate = roster.get(candidate_id)
        if candidate:
            return candidate
        session.pop("candidate_id", None)

    cfg = current_app.config
    return ensure_candidate(
        roster,
        cfg["DEFAULT_USER_ID"],
        cfg["DEFAULT_USER_NAME"],
        contact=cfg["DEFAULT_USER_CONTACT"],
    )


def set_current_user(candidate_id: str):
    session["candidate_id"] = (candidate_id or "").strip()


def clear_current_user():
    session.pop("candidate_id", None)
