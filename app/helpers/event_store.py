import json
import threading
from typing import Dict, List, Optional, Tuple

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.helpers.errors import ConcurrentUpdate
from app.helpers.events import Event
from app.models import EventRecord


def dump_event(event: Event) -> str:
    return json.dumps(event.to_record(), separators=(",", ":"))


def load_event(payload: str) -> Event:
    return Event.from_record(json.loads(payload))


class InMemoryEventStore:
    """
    Event store kept in a dict of serialized records.

    Records go through the same JSON dump/load as the SQL store so tests
    see exactly what a real round trip would give them.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._rows: Dict[str, Tuple[str, int]] = {}
        self._order: List[str] = []

    def get(self, event_id: str) -> Optional[Event]:
        found = self.get_versioned(event_id)
        return found[0] if found else None

    def get_versioned(self, event_id: str) -> Optional[Tuple[Event, int]]:
        with self._lock:
            row = self._rows.get(event_id)
        if row is None:
            return None
        payload, version = row
        return load_event(payload), version

    def put(self, event: Event, expected_version: Optional[int] = None) -> int:
        payload = dump_event(event)
        with self._lock:
            current = self._rows.get(event.id)
            current_version = current[1] if current else 0

            if expected_version is not None and expected_version != current_version:
                raise ConcurrentUpdate(f"Game {event.id} changed while you were responding.")

            version = current_version + 1
            self._rows[event.id] = (payload, version)
            if current is None:
                self._order.append(event.id)
        return version

    def list(self) -> List[Event]:
        with self._lock:
            payloads = [self._rows[eid][0] for eid in self._order]
        return [load_event(p) for p in payloads]


class SqlEventStore:
    """
    Event store backed by the game_event table.

    put() with expected_version is a compare-and-swap: the UPDATE only
    matches the row if nobody else wrote it since it was read. Any
    failure rolls the session back so the stored event is never left
    half-written.
    """

    def get(self, event_id: str) -> Optional[Event]:
        found = self.get_versioned(event_id)
        return found[0] if found else None

    def get_versioned(self, event_id: str) -> Optional[Tuple[Event, int]]:
        if not event_id:
            return None
        row = db.session.get(EventRecord, event_id)
        if not row:
            return None
        return load_event(row.payload), row.version

    def put(self, event: Event, expected_version: Optional[int] = None) -> int:
        payload = dump_event(event)

        try:
            if expected_version is None:
                row = db.session.get(EventRecord, event.id)
                if row is None:
                    row = EventRecord(
                        id=event.id,
                        organizer_id=event.organizer_id,
                        version=1,
                        payload=payload,
                    )
                    db.session.add(row)
                else:
                    row.payload = payload
                    row.organizer_id = event.organizer_id
                    row.version = row.version + 1
                db.session.commit()
                return row.version

            result = db.session.execute(
                update(EventRecord)
                .where(
                    EventRecord.id == event.id,
                    EventRecord.version == expected_version,
                )
                .values(
                    payload=payload,
                    organizer_id=event.organizer_id,
                    version=expected_version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                db.session.rollback()
                current_app.logger.warning(
                    "Event CAS miss id=%s expected_version=%s", event.id, expected_version
                )
                raise ConcurrentUpdate(f"Game {event.id} changed while you were responding.")

            db.session.commit()
            # identity map may still hold the old payload
            db.session.expire_all()
            return expected_version + 1

        except SQLAlchemyError:
            db.session.rollback()
            raise

    def list(self) -> List[Event]:
        rows = (
            EventRecord.query
            .order_by(EventRecord.created_at.asc(), EventRecord.id.asc())
            .all()
        )
        return [load_event(r.payload) for r in rows]

    def list_for_organizer(self, organizer_id: str) -> List[Event]:
        rows = (
            EventRecord.query
            .filter(EventRecord.organizer_id == organizer_id)
            .order_by(EventRecord.created_at.asc(), EventRecord.id.asc())
            .all()
        )
        return [load_event(r.payload) for r in rows]
