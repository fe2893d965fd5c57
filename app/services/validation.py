"""Submission well-formedness checks run before any store mutation."""

from __future__ import annotations

import re

from app.schemas.review import ReviewSubmitRequest
from app.services.exceptions import (
    InvalidEmailError,
    MissingFieldError,
    RatingOutOfRangeError,
)

MIN_RATING = 1
MAX_RATING = 5

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(value: str) -> bool:
    """Return True for ASCII ``local@domain.tld`` addresses without whitespace."""

    if not value.isascii():
        return False
    return _EMAIL_PATTERN.fullmatch(value) is not None


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def coerce_rating(value: object) -> int:
    """Return ``value`` as a rating, or raise ``RatingOutOfRangeError``.

    Whole numbers and digit strings are accepted. Booleans and fractions are not.
    """

    if isinstance(value, bool):
        raise RatingOutOfRangeError(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise RatingOutOfRangeError(value)
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise RatingOutOfRangeError(value) from None
    if not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise RatingOutOfRangeError(value)
    return value


def validate_submission(submission: ReviewSubmitRequest) -> int:
    """Raise the first failure found in ``submission``.

    Checks run in order: required fields, rating bounds, email shape.
    Returns the rating as an int.
    """

    for field in ("name", "email", "rating", "review"):
        if _is_blank(getattr(submission, field)):
            raise MissingFieldError(field)

    rating = coerce_rating(submission.rating)

    if not is_valid_email(submission.email):
        raise InvalidEmailError(submission.email)
    return rating
