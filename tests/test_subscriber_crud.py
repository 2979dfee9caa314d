import pytest

from Subscriber_module.Subscriber_crud import (
    DuplicateSubscriberError,
    count_subscribers_by_email,
    create_subscriber,
    get_subscriber_by_email,
)


def test_create_subscriber_normalizes_and_sets_timestamp(db):
    subscriber = create_subscriber(db, " Learner@Example.com ", first_name=" Ana ", last_name="Silva", source="early_access")

    assert subscriber.id is not None
    assert subscriber.email == "learner@example.com"
    assert subscriber.first_name == "Ana"
    assert subscriber.created_at is not None


def test_duplicate_insert_raises_and_leaves_one_row(db):
    create_subscriber(db, "learner@example.com")

    with pytest.raises(DuplicateSubscriberError) as exc_info:
        create_subscriber(db, "LEARNER@example.com")

    assert exc_info.value.email == "learner@example.com"
    assert count_subscribers_by_email(db, "learner@example.com") == 1
    # Session is usable again after the rollback
    create_subscriber(db, "other@example.com")
    assert get_subscriber_by_email(db, "other@example.com") is not None


def test_get_subscriber_by_email_missing(db):
    assert get_subscriber_by_email(db, "nobody@example.com") is None
