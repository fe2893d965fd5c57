import pytest

from app.schemas.review import ReviewSubmitRequest
from app.services.exceptions import (
    InvalidEmailError,
    MissingFieldError,
    RatingOutOfRangeError,
)
from app.services.validation import coerce_rating, is_valid_email, validate_submission


def _submission(**overrides) -> ReviewSubmitRequest:
    payload = {
        "name": "Jordan Blake",
        "email": "jordan@example.com",
        "rating": 5,
        "review": "The coaching sessions doubled my close rate.",
    }
    payload.update(overrides)
    return ReviewSubmitRequest(**payload)


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_ratings_within_bounds_are_accepted(rating: int) -> None:
    validate_submission(_submission(rating=rating))


@pytest.mark.parametrize("rating", [-3, 0, 6, 100])
def test_ratings_outside_bounds_are_rejected(rating: int) -> None:
    with pytest.raises(RatingOutOfRangeError):
        validate_submission(_submission(rating=rating))


@pytest.mark.parametrize("field", ["name", "email", "rating", "review"])
def test_missing_fields_are_reported_by_name(field: str) -> None:
    with pytest.raises(MissingFieldError) as excinfo:
        validate_submission(_submission(**{field: None}))
    assert excinfo.value.field == field
    assert excinfo.value.code == "missing_field"


def test_whitespace_only_text_counts_as_missing() -> None:
    with pytest.raises(MissingFieldError) as excinfo:
        validate_submission(_submission(review="   "))
    assert excinfo.value.field == "review"


def test_missing_field_is_reported_before_other_failures() -> None:
    with pytest.raises(MissingFieldError):
        validate_submission(_submission(name="", rating=9, email="broken"))


def test_rating_is_checked_before_email() -> None:
    with pytest.raises(RatingOutOfRangeError):
        validate_submission(_submission(rating=6, email="broken"))


@pytest.mark.parametrize(
    "email",
    [
        "jordan.example.com",
        "jordan@example",
        "jordan@@example.com",
        "jor dan@example.com",
        "jordan@exa mple.com",
        " jordan@example.com",
        "jordan@example.com\n",
        "jörg@example.com",
        "@example.com",
        "jordan@.",
    ],
)
def test_malformed_emails_are_rejected(email: str) -> None:
    with pytest.raises(InvalidEmailError):
        validate_submission(_submission(email=email))


@pytest.mark.parametrize(
    "email",
    ["a@b.co", "first.last+tag@sub.example.org", "x_y@domain.io"],
)
def test_well_formed_emails_are_accepted(email: str) -> None:
    assert is_valid_email(email)
    validate_submission(_submission(email=email))


@pytest.mark.parametrize("rating, expected", [(3, 3), ("4", 4), (" 5 ", 5), (2.0, 2)])
def test_whole_number_ratings_are_normalized(rating, expected: int) -> None:
    assert validate_submission(_submission(rating=rating)) == expected


@pytest.mark.parametrize("rating", [True, False, 4.5, "abc", "4.5", "6"])
def test_non_integer_ratings_are_out_of_range(rating) -> None:
    with pytest.raises(RatingOutOfRangeError):
        coerce_rating(rating)


@pytest.mark.parametrize("rating", ["", "   "])
def test_blank_rating_counts_as_missing(rating: str) -> None:
    with pytest.raises(MissingFieldError) as excinfo:
        validate_submission(_submission(rating=rating))
    assert excinfo.value.field == "rating"
