from datetime import datetime, timezone

import pytest

from app import create_app
from app.config import TestConfig
from app.extensions import db
from app.helpers.event_store import InMemoryEventStore
from app.helpers.events import Candidate
from app.helpers.lifecycle import EventManager
from app.helpers.roster import InMemoryRosterStore, SqlRosterStore, seed_sample_roster

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def roster():
    return InMemoryRosterStore([
        Candidate("org", "Organizer", "555-0100"),
        Candidate("A", "Avery", "555-0001"),
        Candidate("B", "Blake", "555-0002"),
        Candidate("C", "Casey", "555-0003"),
        Candidate("D", "Drew", "555-0004"),
        Candidate("E", "Emery", "555-0005"),
    ])


@pytest.fixture
def events():
    return InMemoryEventStore()


@pytest.fixture
def manager(roster, events):
    return EventManager(roster, events)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seeded_app(app):
    seed_sample_roster(SqlRosterStore())
    return app


@pytest.fixture
def client(seeded_app):
    return seeded_app.test_client()
