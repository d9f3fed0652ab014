import secrets
import threading
import uuid
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.helpers.errors import ValidationError
from app.helpers.events import Candidate
from app.models import CandidateRecord

# The pickup regulars the app ships with on first start
SAMPLE_PLAYERS = [
    ("p1", "Mike Johnson", "555-0101"),
    ("p2", "Chris Lee", "555-0102"),
    ("p3", "Jordan Smith", "555-0103"),
    ("p4", "Alex Davis", "555-0104"),
    ("p5", "Sam Wilson", "555-0105"),
    ("p6", "Taylor Brown", "555-0106"),
    ("p7", "Casey Martinez", "555-0107"),
    ("p8", "Drew Anderson", "555-0108"),
    ("p9", "Jamie White", "555-0109"),
    ("p10", "Morgan Garcia", "555-0110"),
    ("p11", "Riley Thompson", "555-0111"),
    ("p12", "Avery Moore", "555-0112"),
    ("p13", "Quinn Jackson", "555-0113"),
    ("p14", "Reese Harris", "555-0114"),
    ("p15", "Dakota Clark", "555-0115"),
]


def make_candidate_id() -> str:
    return f"p{uuid.uuid4().hex[:12]}"


def make_contact() -> str:
    """Placeholder phone number for players added without one."""
    return f"555-{1000 + secrets.randbelow(9000)}"


def build_candidate(name: str, contact: Optional[str] = None, candidate_id: Optional[str] = None) -> Candidate:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Player name is required.")

    candidate_id = (candidate_id or "").strip() or make_candidate_id()
    contact = (contact or "").strip() or make_contact()
    return Candidate(id=candidate_id, name=name, contact=contact)


class InMemoryRosterStore:
    """Roster kept in a dict. Used by tests and scripts that run without a DB."""

    def __init__(self, candidates=None):
        self._lock = threading.Lock()
        self._by_id: Dict[str, Candidate] = {}
        for c in candidates or []:
            self._by_id[c.id] = c

    def get(self, candidate_id: str) -> Optional[Candidate]:
        return self._by_id.get(candidate_id)

    def list(self) -> List[Candidate]:
        return list(self._by_id.values())

    def add(self, name: str, contact: Optional[str] = None, candidate_id: Optional[str] = None) -> Candidate:
        candidate = build_candidate(name, contact, candidate_id)
        with self._lock:
            if candidate.id in self._by_id:
                raise ValidationError(f"Player {candidate.id} already exists.")
            self._by_id[candidate.id] = candidate
        return candidate


class SqlRosterStore:
    """Roster backed by the candidate table."""

    def get(self, candidate_id: str) -> Optional[Candidate]:
        if not candidate_id:
            return None
        row = db.session.get(CandidateRecord, candidate_id)
        return row.to_candidate() if row else None

    def list(self) -> List[Candidate]:
        rows = (
            CandidateRecord.query
            .order_by(CandidateRecord.created_at.asc(), CandidateRecord.id.asc())
            .all()
        )
        return [r.to_candidate() for r in rows]

    def add(self, name: str, contact: Optional[str] = None, candidate_id: Optional[str] = None) -> Candidate:
        candidate = build_candidate(name, contact, candidate_id)

        if db.session.get(CandidateRecord, candidate.id):
            raise ValidationError(f"Player {candidate.id} already exists.")

        db.session.add(CandidateRecord(id=candidate.id, name=candidate.name, contact=candidate.contact))
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

        current_app.logger.info("Roster add id=%s name=%r", candidate.id, candidate.name)
        return candidate


def ensure_candidate(roster, candidate_id: str, name: str, contact: Optional[str] = None) -> Candidate:
    """Return the candidate, registering them first if the roster lacks them."""
    existing = roster.get(candidate_id)
    if existing:
        return existing
    return roster.add(name, contact=contact, candidate_id=candidate_id)


def seed_sample_roster(roster) -> int:
    """Add any missing sample players. Returns how many were added."""
    added = 0
    for candidate_id, name, contact in SAMPLE_PLAYERS:
        if roster.get(candidate_id) is None:
            roster.add(name, contact=contact, candidate_id=candidate_id)
            added += 1
    return added
