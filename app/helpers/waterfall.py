from datetime import datetime
from typing import Optional

from app.helpers.errors import EventFull, NoActiveInvite, NotFound, ValidationError
from app.helpers.events import (
    ACCEPTED,
    DECLINED,
    PENDING,
    Confirmation,
    Decline,
    Event,
    Invite,
)
from app.helpers.time import utcnow_iso


def normalize_decision(raw: Optional[str]) -> str:
    """Map whatever the client sent onto a terminal invite status."""
    k = (raw or "").strip().lower()

    if k in ("accept", "accepted"):
        return ACCEPTED
    if k in ("decline", "declined"):
        return DECLINED

    raise ValidationError(f"Unknown decision {raw!r}. Use 'accept' or 'decline'.")


def next_uninvited(priority_list, invited) -> Optional[str]:
    """
    Earliest candidate in the priority list who has never been invited.

    Invited candidates are never reconsidered, whatever their status.
    """
    for candidate_id in priority_list:
        if candidate_id not in invited:
            return candidate_id
    return None


def make_invite(candidate, sent_at: str) -> Invite:
    return Invite(
        player_id=candidate.id,
        player_name=candidate.name,
        status=PENDING,
        sent_at=sent_at,
    )


def backfill(event: Event, roster, now: Optional[datetime] = None, vacancies: int = 1) -> Event:
    """
    Invite down the priority list while the event has vacancies.

    Vacancy is measured against confirmations only; outstanding pending
    invites are not counted, so an accept on an unfilled event still
    issues a new invite. `vacancies` caps how many invites one call may
    send: a single response opens at most one.
    """
    sent_at = utcnow_iso(now)
    invites = list(event.invites)
    invited = {inv.player_id for inv in invites}
    issued = 0

    while len(event.confirmed) < event.players_needed and issued < vacancies:
        next_id = next_uninvited(event.priority_list, invited)
        if next_id is None:
            # pool exhausted, the game stays short
            break

        candidate = roster.get(next_id)
        if candidate is None:
            raise NotFound(f"Player {next_id} is not on the roster")

        invites.append(make_invite(candidate, sent_at))
        invited.add(next_id)
        issued += 1

    if not issued:
        return event
    return event.evolve(invites=tuple(invites))


def respond(event: Event, candidate_id: str, decision: str, roster, now: Optional[datetime] = None) -> Event:
    """
    Resolve a candidate's pending invite and backfill the vacancy.

    Returns a new Event; the one passed in is left untouched. Raises
    NoActiveInvite when the candidate has nothing pending on this event,
    which also makes a repeated response fail instead of applying twice.
    """
    status = normalize_decision(decision)

    index = None
    for i, inv in enumerate(event.invites):
        if inv.player_id == candidate_id and inv.is_pending:
            index = i
            break
    if index is None:
        raise NoActiveInvite(event.id, candidate_id)

    if status == ACCEPTED and event.is_full:
        raise EventFull(f"{event.id} already has {event.players_needed} confirmed players")

    stamp = utcnow_iso(now)
    invite = event.invites[index]

    invites = list(event.invites)
    invites[index] = Invite(
        player_id=invite.player_id,
        player_name=invite.player_name,
        status=status,
        sent_at=invite.sent_at,
    )

    if status == ACCEPTED:
        updated = event.evolve(
            invites=tuple(invites),
            confirmed=event.confirmed + (Confirmation(invite.player_id, invite.player_name, stamp),),
        )
    else:
        updated = event.evolve(
            invites=tuple(invites),
            declined=event.declined + (Decline(invite.player_id, invite.player_name, stamp),),
        )

    return backfill(updated, roster, now)
