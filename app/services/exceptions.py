class ServiceError(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class DownstreamServiceError(ServiceError):
    """Raised when an external service returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class StoreUnavailableError(DownstreamServiceError):
    """Raised when the record store call itself failed."""


class NotFoundError(ServiceError):
    """Raised when the targeted record does not exist."""

    def __init__(self, table: str, record_id: str):
        super().__init__(f"Record {record_id!r} not found in {table}")
        self.table = table
        self.record_id = record_id


class ReviewSubmissionError(ServiceError):
    """Client input error raised while accepting a review submission."""

    code = "invalid_submission"


class MissingFieldError(ReviewSubmissionError):
    code = "missing_field"

    def __init__(self, field: str):
        super().__init__(f"Field '{field}' is required")
        self.field = field


class RatingOutOfRangeError(ReviewSubmissionError):
    code = "rating_out_of_range"

    def __init__(self, rating: object):
        super().__init__("Rating must be a whole number between 1 and 5")
        self.rating = rating


class InvalidEmailError(ReviewSubmissionError):
    code = "invalid_email"

    def __init__(self, email: str):
        super().__init__("Invalid email format")
        self.email = email


class DuplicateSubmissionError(ReviewSubmissionError):
    code = "duplicate_submission"

    def __init__(self) -> None:
        super().__init__("You have already submitted this testimonial. Thank you!")


class InvalidSlotError(ServiceError):
    """Raised when a calendar slot update describes an impossible time range."""
