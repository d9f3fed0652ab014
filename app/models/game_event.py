from datetime import datetime
from app.extensions import db

class EventRecord(db.Model):
    __tablename__ = "game_event"

    id = db.Column(db.String(64), primary_key=True)

    # Copied out of the payload so "my games" doesn't have to scan JSON
    organizer_id = db.Column(db.String(64), nullable=False, index=True)

    # Bumped on every write; the store compares it before swapping payloads
    version = db.Column(db.Integer, nullable=False, default=1)

    # Full event record as JSON (see Event.to_record)
    payload = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
