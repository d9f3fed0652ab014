from .candidate import CandidateRecord
from .game_event import EventRecord

__all__ = ["CandidateRecord", "EventRecord"]
