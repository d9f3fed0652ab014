import secrets
import time as _time
from datetime import datetime
from typing import List, Optional

from app.helpers.errors import NotFound, ValidationError
from app.helpers.events import Event
from app.helpers.time import utcnow_iso
from app.helpers.waterfall import make_invite, respond


def make_event_id() -> str:
    # ns timestamp first so ids sort in creation order
    return f"game-{_time.time_ns()}-{secrets.token_hex(3)}"


def _required_text(value, label: str) -> str:
    text = (value or "").strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(f"{label} is required.")
    return text


def _players_needed(value) -> int:
    # bool is an int subclass; True is not a headcount
    if isinstance(value, bool):
        raise ValidationError("Players needed must be a whole number.")
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Players needed must be a whole number.")
    if isinstance(value, float) and value != n:
        raise ValidationError("Players needed must be a whole number.")
    if n < 1:
        raise ValidationError("Players needed must be at least 1.")
    return n


def _priority_list(value) -> List[str]:
    if isinstance(value, str) or not value:
        raise ValidationError("Add at least one player to the priority list.")

    ids = []
    seen = set()
    for raw in value:
        candidate_id = (raw or "").strip() if isinstance(raw, str) else ""
        if not candidate_id:
            raise ValidationError("Priority list entries must be player ids.")
        if candidate_id in seen:
            raise ValidationError(f"{candidate_id} appears more than once in the priority list.")
        seen.add(candidate_id)
        ids.append(candidate_id)
    return ids


class EventManager:
    """
    Creates pickup games and answers the read views over them.

    Both stores are injected. respond_to_invite() is the only write path
    after creation: load, run the waterfall, compare-and-swap it back.
    """

    def __init__(self, roster, events):
        self.roster = roster
        self.events = events

    def create_event(
        self,
        organizer_id: str,
        date: str,
        time: str,
        location: str,
        players_needed,
        priority_list,
        now: Optional[datetime] = None,
    ) -> Event:
        organizer_id = _required_text(organizer_id, "Organizer")
        date = _required_text(date, "Date")
        time = _required_text(time, "Time")
        location = _required_text(location, "Location")
        needed = _players_needed(players_needed)
        ids = _priority_list(priority_list)

        # resolve every id up front so nothing is written on a bad one
        if self.roster.get(organizer_id) is None:
            raise NotFound(f"Organizer {organizer_id} is not on the roster.")

        candidates = []
        for candidate_id in ids:
            candidate = self.roster.get(candidate_id)
            if candidate is None:
                raise NotFound(f"Player {candidate_id} is not on the roster.")
            candidates.append(candidate)

        sent_at = utcnow_iso(now)
        first_batch = candidates[:needed]

        event = Event(
            id=make_event_id(),
            organizer_id=organizer_id,
            date=date,
            time=time,
            location=location,
            players_needed=needed,
            priority_list=tuple(ids),
            invites=tuple(make_invite(c, sent_at) for c in first_batch),
        )

        self.events.put(event)
        return event

    def get_event(self, event_id: str) -> Event:
        event = self.events.get(event_id)
        if event is None:
            raise NotFound(f"Game {event_id} not found.")
        return event

    def list_owned_events(self, organizer_id: str) -> List[Event]:
        by_organizer = getattr(self.events, "list_for_organizer", None)
        if by_organizer is not None:
            return by_organizer(organizer_id)
        return [e for e in self.events.list() if e.organizer_id == organizer_id]

    def list_pending_invites(self, candidate_id: str) -> List[Event]:
        return [e for e in self.events.list() if e.has_pending_invite(candidate_id)]

    def respond_to_invite(self, event_id: str, candidate_id: str, decision: str, now: Optional[datetime] = None) -> Event:
        found = self.events.get_versioned(event_id)
        if found is None:
            raise NotFound(f"Game {event_id} not found.")

        event, version = found
        updated = respond(event, candidate_id, decision, self.roster, now=now)
        self.events.put(updated, expected_version=version)
        return updated

    def describe_event(self, event: Event) -> dict:
        """Event record plus the derived fields the game detail view shows."""
        organizer = self.roster.get(event.organizer_id)
        pending = event.pending_invites()

        view = event.to_record()
        view.update(
            organizerName=organizer.name if organizer else None,
            isFull=event.is_full,
            openSlots=event.open_slots,
            pendingInvites=[inv.to_record() for inv in pending],
        )
        return view
