from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from Subscriber_module.Subscriber_crud import count_subscribers_by_email, get_subscriber_by_email
from Subscriber_module.Subscriber_model import Subscriber

SUBSCRIBE_URL = "/api/subscribe"


def test_subscribe_creates_subscriber(client, db):
    response = client.post(SUBSCRIBE_URL, json={"email": "user@example.com"})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Subscription successful"
    assert body["subscriber"]["email"] == "user@example.com"
    assert body["subscriber"]["createdAt"]

    subscriber = get_subscriber_by_email(db, "user@example.com")
    assert subscriber is not None
    assert subscriber.source == "subscribe"
    assert subscriber.first_name is None


def test_subscribe_twice_is_rejected_and_store_unchanged(client, db):
    first = client.post(SUBSCRIBE_URL, json={"email": "user@example.com"})
    second = client.post(SUBSCRIBE_URL, json={"email": "user@example.com"})

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {
        "success": False,
        "message": "This email is already subscribed",
        "error": "Duplicate email",
    }
    assert count_subscribers_by_email(db, "user@example.com") == 1


def test_email_is_normalized_before_uniqueness_check(client, db):
    first = client.post(SUBSCRIBE_URL, json={"email": "  User@Example.COM "})
    second = client.post(SUBSCRIBE_URL, json={"email": "user@example.com"})

    assert first.status_code == 201
    assert first.json()["subscriber"]["email"] == "user@example.com"
    assert second.status_code == 409
    assert db.query(Subscriber).count() == 1


@pytest.mark.parametrize("payload", [
    {},
    {"email": ""},
    {"email": "   "},
    {"email": None},
    {"name": "user@example.com"},
])
def test_missing_email_is_rejected_without_write(client, db, payload):
    response = client.post(SUBSCRIBE_URL, json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Field required"
    assert body["message"] == "Email is required"
    assert db.query(Subscriber).count() == 0


@pytest.mark.parametrize("email", [
    "not-an-email",
    "user@domain",
    "user@ example.com",
    "user@example.",
    "@example.com",
    12345,
])
def test_invalid_email_format_is_rejected_without_write(client, db, email):
    response = client.post(SUBSCRIBE_URL, json={"email": email})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid email format"
    assert db.query(Subscriber).count() == 0


@pytest.mark.parametrize("raw_body", ['{"email": ', "email=user@example.com", "[]", '"user@example.com"'])
def test_malformed_body_is_a_client_error(client, db, raw_body):
    response = client.post(
        SUBSCRIBE_URL,
        content=raw_body,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Invalid JSON"
    assert body["message"] == "Invalid request format"
    assert db.query(Subscriber).count() == 0


@pytest.mark.parametrize("method", ["get", "put", "delete", "patch"])
def test_non_post_methods_are_not_allowed(client, method):
    response = getattr(client, method)(SUBSCRIBE_URL)

    assert response.status_code == 405
    assert response.json() == {
        "success": False,
        "message": "Method not allowed",
        "error": "Method not allowed",
    }


def test_persistence_failure_is_generic_server_error(client):
    db_down = OperationalError("INSERT INTO email_subscribers", {}, Exception("connection refused"))
    with patch("Subscriber_module.Subscriber_router.create_subscriber", side_effect=db_down):
        response = client.post(SUBSCRIBE_URL, json={"email": "user@example.com"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "An unexpected error occurred",
        "error": "Internal server error",
    }
