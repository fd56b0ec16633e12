"""Error kinds raised by the Ratings domain.

Field-level problems (missing values, rating out of range, comment too long)
are reported with Protean's ``ValidationError``. The exceptions below cover
the remaining failure kinds. Each carries a machine-readable ``kind`` and a
human-readable ``message``; the API layer renders both.
"""


class RatingsError(Exception):
    kind = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class NotEligible(RatingsError):
    """A booking-based precondition for posting a review does not hold."""

    kind = "not_eligible"
    status_code = 422

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason

    def to_dict(self) -> dict:
        return {**super().to_dict(), "reason": self.reason}


class DuplicateReview(RatingsError):
    kind = "duplicate"
    status_code = 409


class NotFound(RatingsError):
    kind = "not_found"
    status_code = 404


class Forbidden(RatingsError):
    kind = "forbidden"
    status_code = 403


class AggregationFailure(RatingsError):
    """The rating summary could not be recomputed; the whole mutation fails."""

    kind = "aggregation_failure"
    status_code = 500
