# capital_marketplace/tests/test_notification_service.py
import uuid
from datetime import timedelta

import pytest

from capital_marketplace.models import Notification
from capital_marketplace.services.notification_service import NotificationService, serialize_notification
from capital_marketplace.utils.datetime_utils import days_ago, get_utc_now
from capital_marketplace.utils.exceptions import NotFoundError, ValidationError


@pytest.fixture
def notifications(db_session):
    return NotificationService(db_session)


@pytest.fixture
def user_id(make_company):
    return make_company().user_id


class TestCreate:

    def test_create_and_list_newest_first(self, notifications, user_id, db_session):
        first = notifications.create(user_id, "info", "first")
        second = notifications.create(user_id, "warning", "second", title="Heads up")
        first.created_at = get_utc_now() - timedelta(minutes=5)
        db_session.commit()

        listed = notifications.get_for_user(user_id)
        assert [n.id for n in listed] == [second.id, first.id]

    def test_invalid_type(self, notifications, user_id):
        with pytest.raises(ValidationError):
            notifications.create(user_id, "urgent", "message")

    def test_empty_message(self, notifications, user_id):
        with pytest.raises(ValidationError):
            notifications.create(user_id, "info", "   ")

    def test_get_user_unknown(self, notifications):
        with pytest.raises(NotFoundError):
            notifications.get_user(uuid.uuid4())


class TestReadState:

    def test_unread_count_and_mark_as_read(self, notifications, user_id):
        n1 = notifications.create(user_id, "info", "one")
        notifications.create(user_id, "info", "two")
        assert notifications.get_unread_count(user_id) == 2

        notifications.mark_as_read(n1.id, user_id)

        assert notifications.get_unread_count(user_id) == 1
        assert notifications.count_for_user(user_id) == 2
        assert [n.message for n in notifications.get_for_user(user_id, unread_only=True)] == ["two"]

    def test_mark_as_read_scoped_to_owner(self, notifications, user_id, make_company):
        other_user = make_company().user_id
        n = notifications.create(user_id, "info", "mine")
        with pytest.raises(NotFoundError):
            notifications.mark_as_read(n.id, other_user)

    def test_mark_all_as_read(self, notifications, user_id):
        for i in range(3):
            notifications.create(user_id, "info", f"message {i}")

        assert notifications.mark_all_as_read(user_id) == 3
        assert notifications.get_unread_count(user_id) == 0
        assert notifications.mark_all_as_read(user_id) == 0

    def test_delete_scoped_to_owner(self, notifications, user_id, make_company):
        other_user = make_company().user_id
        n = notifications.create(user_id, "info", "mine")

        with pytest.raises(NotFoundError):
            notifications.delete(n.id, other_user)

        notifications.delete(n.id, user_id)
        assert notifications.count_for_user(user_id) == 0


class TestCleanup:

    def test_only_old_read_notifications_removed(self, notifications, user_id, db_session):
        old_read = notifications.create(user_id, "info", "old read")
        old_unread = notifications.create(user_id, "info", "old unread")
        recent_read = notifications.create(user_id, "info", "recent read")

        old_read.created_at = days_ago(45)
        old_read.read_at = days_ago(44)
        old_unread.created_at = days_ago(45)
        recent_read.read_at = get_utc_now()
        db_session.commit()

        assert notifications.cleanup(older_than_days=30) == 1

        remaining = {n.message for n in db_session.query(Notification).all()}
        assert remaining == {"old unread", "recent read"}

    def test_cleanup_scoped_to_user(self, notifications, user_id, make_company, db_session):
        other_user = make_company().user_id
        for owner in (user_id, other_user):
            n = notifications.create(owner, "info", "old")
            n.created_at = days_ago(60)
            n.read_at = days_ago(59)
        db_session.commit()

        assert notifications.cleanup(older_than_days=30, user_id=user_id) == 1
        assert notifications.count_for_user(other_user) == 1


class TestCatalog:

    def test_onboarding(self, notifications, user_id):
        n = notifications.notify_onboarding_complete(user_id, "Acme")
        assert n.type == "success"
        assert n.title == "Onboarding Complete"
        assert n.message == 'Welcome to Capital Marketplace! Your company "Acme" has been successfully onboarded.'
        assert n.data == {"event": "onboarding_complete", "companyName": "Acme"}

    def test_document_uploaded(self, notifications, user_id):
        n = notifications.notify_document_uploaded(user_id, "deck.pdf")
        assert n.type == "info"
        assert n.message == 'Document "deck.pdf" has been uploaded successfully to your data room.'

    def test_score_improved(self, notifications, user_id):
        n = notifications.notify_score_improved(user_id, 30, 55)
        assert n.title == "Score Improved"
        assert "improved by 25 points (30 → 55)" in n.message
        assert n.data == {"event": "score_improved", "oldScore": 30, "newScore": 55, "improvement": 25}

    def test_serialize(self, notifications, user_id):
        n = notifications.notify_financials_linked(user_id)
        data = serialize_notification(n)
        assert data["read"] is False
        assert data["readAt"] is None
        assert data["createdAt"].endswith("Z")
        assert data["data"]["pointsEarned"] == 20
