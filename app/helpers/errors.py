class WaterfallError(Exception):
    """Base for every error the invite engine surfaces to callers."""

    status_code = 400


class ValidationError(WaterfallError):
    status_code = 400


class NotFound(WaterfallError):
    status_code = 404


class NoActiveInvite(WaterfallError):
    """Response for a candidate with no pending invite on that event."""

    status_code = 409

    def __init__(self, event_id: str, candidate_id: str):
        super().__init__(f"No pending invite for {candidate_id} on {event_id}")
        self.event_id = event_id
        self.candidate_id = candidate_id


class EventFull(WaterfallError):
    status_code = 409


class ConcurrentUpdate(WaterfallError):
    """The stored event changed between read and write."""

    status_code = 409
