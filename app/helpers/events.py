"""
Value types for a pickup game and its invite waterfall.

Everything here is immutable: the engine builds a new Event per response
and the stores swap it in. Field names on the persisted record are the
camelCase keys the stored JSON has always used.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

PENDING = "pending"
ACCEPTED = "accepted"
DECLINED = "declined"

INVITE_STATUSES = (PENDING, ACCEPTED, DECLINED)

RECORD_FIELDS = (
    "id",
    "organizerId",
    "date",
    "time",
    "location",
    "playersNeeded",
    "priorityList",
    "invites",
    "confirmed",
    "declined",
)


@dataclass(frozen=True)
class Candidate:
    id: str
    name: str
    contact: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "contact": self.contact}


@dataclass(frozen=True)
class Invite:
    player_id: str
    player_name: str
    status: str
    sent_at: str

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    def to_record(self) -> dict:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "status": self.status,
            "sentAt": self.sent_at,
        }

    @classmethod
    def from_record(cls, rec: dict) -> "Invite":
        status = rec["status"]
        if status not in INVITE_STATUSES:
            raise ValueError(f"unknown invite status {status!r}")
        return cls(
            player_id=rec["playerId"],
            player_name=rec["playerName"],
            status=status,
            sent_at=rec["sentAt"],
        )


@dataclass(frozen=True)
class Confirmation:
    player_id: str
    player_name: str
    confirmed_at: str

    def to_record(self) -> dict:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "confirmedAt": self.confirmed_at,
        }

    @classmethod
    def from_record(cls, rec: dict) -> "Confirmation":
        return cls(rec["playerId"], rec["playerName"], rec["confirmedAt"])


@dataclass(frozen=True)
class Decline:
    player_id: str
    player_name: str
    declined_at: str

    def to_record(self) -> dict:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "declinedAt": self.declined_at,
        }

    @classmethod
    def from_record(cls, rec: dict) -> "Decline":
        return cls(rec["playerId"], rec["playerName"], rec["declinedAt"])


@dataclass(frozen=True)
class Event:
    id: str
    organizer_id: str
    date: str
    time: str
    location: str
    players_needed: int
    priority_list: Tuple[str, ...]
    invites: Tuple[Invite, ...] = field(default_factory=tuple)
    confirmed: Tuple[Confirmation, ...] = field(default_factory=tuple)
    declined: Tuple[Decline, ...] = field(default_factory=tuple)

    @property
    def is_full(self) -> bool:
        return len(self.confirmed) >= self.players_needed

    @property
    def open_slots(self) -> int:
        return max(self.players_needed - len(self.confirmed), 0)

    @property
    def invited_ids(self) -> Tuple[str, ...]:
        return tuple(inv.player_id for inv in self.invites)

    def pending_invites(self) -> Tuple[Invite, ...]:
        return tuple(inv for inv in self.invites if inv.is_pending)

    def invite_for(self, candidate_id: str) -> Optional[Invite]:
        for inv in self.invites:
            if inv.player_id == candidate_id:
                return inv
        return None

    def has_pending_invite(self, candidate_id: str) -> bool:
        inv = self.invite_for(candidate_id)
        return bool(inv and inv.is_pending)

    def evolve(self, **changes) -> "Event":
        return replace(self, **changes)

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "organizerId": self.organizer_id,
            "date": self.date,
            "time": self.time,
            "location": self.location,
            "playersNeeded": self.players_needed,
            "priorityList": list(self.priority_list),
            "invites": [inv.to_record() for inv in self.invites],
            "confirmed": [c.to_record() for c in self.confirmed],
            "declined": [d.to_record() for d in self.declined],
        }

    @classmethod
    def from_record(cls, rec: dict) -> "Event":
        missing = [k for k in RECORD_FIELDS if k not in rec]
        if missing:
            raise ValueError(f"event record missing fields: {', '.join(missing)}")

        return cls(
            id=rec["id"],
            organizer_id=rec["organizerId"],
            date=rec["date"],
            time=rec["time"],
            location=rec["location"],
            players_needed=int(rec["playersNeeded"]),
            priority_list=tuple(rec["priorityList"]),
            invites=tuple(Invite.from_record(r) for r in rec["invites"]),
            confirmed=tuple(Confirmation.from_record(r) for r in rec["confirmed"]),
            declined=tuple(Decline.from_record(r) for r in rec["declined"]),
        )
