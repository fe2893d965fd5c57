import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.main import app
from app.services.mock_store import reset_mock_store


@pytest.fixture(autouse=True)
def _reset_store() -> None:
    reset_mock_store()
    yield
    reset_mock_store()
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _submit(client: TestClient, **overrides):
    payload = {
        "name": "Jordan Blake",
        "email": "jordan@example.com",
        "rating": 5,
        "review": "The coaching sessions doubled my close rate.",
    }
    payload.update(overrides)
    return client.post("/api/reviews/submit", json=payload)


def _act(client: TestClient, review_id: str, action: str, **extra):
    return client.post(
        "/api/admin/reviews/action",
        json={"review_id": review_id, "action": action, **extra},
    )


def test_submit_returns_new_review_id(client: TestClient) -> None:
    response = _submit(client)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Testimonial submitted successfully"
    assert body["review_id"].startswith("REV-")

    pending = client.get("/api/admin/reviews", params={"status": "pending"}).json()
    assert pending["total"] == 1
    assert pending["reviews"][0]["status"] == "pending"


@pytest.mark.parametrize(
    "overrides, code",
    [
        ({"rating": 6}, "rating_out_of_range"),
        ({"rating": 0}, "rating_out_of_range"),
        ({"rating": ""}, "missing_field"),
        ({"rating": "  "}, "missing_field"),
        ({"rating": True}, "rating_out_of_range"),
        ({"rating": "abc"}, "rating_out_of_range"),
        ({"rating": 4.5}, "rating_out_of_range"),
        ({"email": "not-an-email"}, "invalid_email"),
        ({"email": None}, "missing_field"),
        ({"name": ""}, "missing_field"),
    ],
)
def test_invalid_submissions_return_400_and_store_nothing(
    client: TestClient, overrides, code: str
) -> None:
    response = _submit(client, **overrides)

    assert response.status_code == 400
    assert response.json()["error"] == code
    assert client.get("/api/admin/reviews").json()["total"] == 0


def test_numeric_string_rating_is_stored_as_int(client: TestClient) -> None:
    assert _submit(client, rating="4").status_code == 200

    pending = client.get("/api/admin/reviews").json()
    assert pending["reviews"][0]["rating"] == 4


def test_duplicate_submission_is_rejected(client: TestClient) -> None:
    assert _submit(client, name="A", review="B").status_code == 200

    response = _submit(client, name="A", review="B")

    assert response.status_code == 400
    assert response.json()["error"] == "duplicate_submission"


def test_approve_makes_review_public_without_private_fields(client: TestClient) -> None:
    review_id = _submit(client).json()["review_id"]
    assert client.get("/api/reviews/approved").json()["total"] == 0

    response = _act(client, review_id, "approve")

    assert response.status_code == 200
    assert response.json()["message"] == "Review approved successfully"
    assert response.json()["review"]["status"] == "approved"

    public = client.get("/api/reviews/approved").json()
    assert public["total"] == 1
    assert public["limit"] == 10
    assert public["offset"] == 0
    assert set(public["reviews"][0]) == {"submitter_name", "rating", "review_text", "created_at"}


def test_reject_accepts_camel_case_keys(client: TestClient) -> None:
    review_id = _submit(client).json()["review_id"]
    _act(client, review_id, "approve")

    response = client.post(
        "/api/admin/reviews/action",
        json={"reviewId": review_id, "action": "reject", "adminNotes": "Off topic"},
    )

    assert response.status_code == 200
    assert response.json()["review"]["admin_notes"] == "Off topic"
    assert client.get("/api/reviews/approved").json()["total"] == 0
    rejected = client.get("/api/admin/reviews", params={"status": "rejected"}).json()
    assert [review["id"] for review in rejected["reviews"]] == [review_id]


def test_delete_then_any_action_is_not_found(client: TestClient) -> None:
    review_id = _submit(client).json()["review_id"]

    deleted = _act(client, review_id, "delete")

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Review deleted successfully", "review": None}
    for action in ("approve", "reject", "delete"):
        assert _act(client, review_id, action).status_code == 404


def test_unknown_action_is_a_validation_error(client: TestClient) -> None:
    review_id = _submit(client).json()["review_id"]

    assert _act(client, review_id, "archive").status_code == 422


def test_approved_listing_pages_through_results(client: TestClient) -> None:
    for index in range(15):
        review_id = _submit(client, name=f"Client {index}", review=f"Review {index}").json()["review_id"]
        _act(client, review_id, "approve")

    page = client.get("/api/reviews/approved", params={"limit": 10, "offset": 10}).json()

    assert len(page["reviews"]) == 5
    assert page["total"] == 15


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}])
def test_approved_listing_validates_paging(client: TestClient, params) -> None:
    assert client.get("/api/reviews/approved", params=params).status_code == 422


def test_moderation_list_rejects_unknown_status(client: TestClient) -> None:
    assert client.get("/api/admin/reviews", params={"status": "archived"}).status_code == 422


def test_admin_routes_require_key_when_configured(client: TestClient) -> None:
    app.dependency_overrides[get_settings] = lambda: Settings(admin_api_key="secret")

    assert client.get("/api/admin/reviews").status_code == 401
    assert client.get("/api/admin/reviews", headers={"X-API-Key": "wrong"}).status_code == 401
    assert client.get("/api/admin/reviews", headers={"X-API-Key": "secret"}).status_code == 200
    # Public routes stay open.
    assert client.get("/api/reviews/approved").status_code == 200


def test_calendar_slot_routes(client: TestClient) -> None:
    slots = client.get("/api/admin/calendar-slots").json()
    assert slots["total"] == 2
    slot_id = slots["items"][0]["id"]

    updated = client.put(
        f"/api/admin/calendar-slots/{slot_id}",
        json={"date": "2025-03-10", "startTime": "09:00", "endTime": "12:00", "awayStatus": True},
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "Away - Not Available"
    assert updated.json()["data"]["start_time"] == "2025-03-10T09:00:00+00:00"

    invalid = client.put(
        f"/api/admin/calendar-slots/{slot_id}",
        json={"date": "2025-03-10", "start_time": "12:00", "end_time": "09:00"},
    )
    assert invalid.status_code == 400

    assert client.delete(f"/api/admin/calendar-slots/{slot_id}").status_code == 200
    assert client.delete(f"/api/admin/calendar-slots/{slot_id}").status_code == 404
    missing = client.put(
        "/api/admin/calendar-slots/CAL-99999",
        json={"date": "2025-03-10", "start_time": "09:00", "end_time": "10:00"},
    )
    assert missing.status_code == 404


def test_health_reports_store_mode(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "store": "memory"}
