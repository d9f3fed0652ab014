from datetime import datetime
from app.extensions import db
from app.helpers.events import Candidate

class CandidateRecord(db.Model):
    __tablename__ = "candidate"

    # Opaque string id, e.g. "p1" for seeded players or "p<hex>" for new ones
    id = db.Column(db.String(64), primary_key=True)

    name = db.Column(db.String(120), nullable=False)
    contact = db.Column(db.String(120), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_candidate(self) -> Candidate:
        return Candidate(id=self.id, name=self.name, contact=self.contact)
