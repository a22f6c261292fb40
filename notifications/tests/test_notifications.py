from datetime import timedelta
from unittest import mock

import pytest
import requests
from django.utils import timezone

from borrowings.models import Loan
from notifications.models import Notification
from notifications.services import notify_overdue
from notifications.tasks import send_overdue_notification
from notifications.telegram import loan_alert, post_staff_alert

pytestmark = pytest.mark.django_db


class TestStaffAlerts:
    def test_disabled(self, settings):
        settings.TELEGRAM_NOTIFICATIONS_ENABLED = False

        with mock.patch("notifications.telegram.requests.post") as post:
            assert post_staff_alert("hello") is False
        post.assert_not_called()

    def test_sends_when_configured(self, settings):
        settings.TELEGRAM_NOTIFICATIONS_ENABLED = True
        settings.TELEGRAM_BOT_TOKEN = "bot-token"
        settings.TELEGRAM_CHAT_ID = "42"

        with mock.patch("notifications.telegram.requests.post") as post:
            post.return_value.json.return_value = {"ok": True}
            assert post_staff_alert("hello") is True

        url = post.call_args.args[0]
        assert url == "https://api.telegram.org/botbot-token/sendMessage"
        assert post.call_args.kwargs["json"]["chat_id"] == "42"

    def test_transport_errors_are_swallowed(self, settings):
        settings.TELEGRAM_NOTIFICATIONS_ENABLED = True
        settings.TELEGRAM_BOT_TOKEN = "bot-token"
        settings.TELEGRAM_CHAT_ID = "42"

        with mock.patch(
            "notifications.telegram.requests.post",
            side_effect=requests.ConnectionError("down"),
        ):
            assert post_staff_alert("hello") is False

    def test_loan_alert_escapes_user_text(self, make_user, make_book):
        loan = Loan(
            id=7,
            user=make_user(name="<Ram>", email="ram@booknest.test"),
            book=make_book(title="Tom & Jerry"),
        )

        text = loan_alert("📚 New Loan", loan, ("📦 Copies left", 1))

        assert text.splitlines() == [
            "<b>📚 New Loan</b>",
            "👤 <b>User</b>: &lt;Ram&gt; (ram@booknest.test)",
            "📖 <b>Book</b>: Tom &amp; Jerry by Ruskin Bond",
            "<b>📦 Copies left</b>: 1",
            "🧾 <b>Loan ID</b>: 7",
        ]


def test_notify_overdue_stores_notice(reader, book):
    notice = notify_overdue(reader.id, book.id, "Return it please.")

    assert notice.type == Notification.Type.OVERDUE
    assert notice.user == reader
    assert notice.book == book


class TestOverdueTask:
    def make_loan(self, user, book, due_in):
        now = timezone.now()
        return Loan.objects.create(
            user=user,
            book=book,
            created_at=now - timedelta(days=10),
            due_date=now + due_in,
            price=book.price,
        )

    def test_overdue_loan_is_notified_once(self, reader, book):
        loan = self.make_loan(reader, book, due_in=-timedelta(hours=2, minutes=10))

        result = send_overdue_notification(loan.id)
        again = send_overdue_notification(loan.id)

        assert result["status"] == "success"
        assert result["fine"] == "0.30"
        assert again["status"] == "skipped"
        loan.refresh_from_db()
        assert loan.notified is True
        notice = Notification.objects.get(user=reader)
        assert "Current fine: Nrs. 0.30" in notice.message

    def test_loan_not_yet_due_is_skipped(self, reader, book):
        loan = self.make_loan(reader, book, due_in=timedelta(days=1))

        assert send_overdue_notification(loan.id)["reason"] == "Not overdue yet"
        assert not Notification.objects.exists()

    def test_missing_loan(self):
        assert send_overdue_notification(31337)["status"] == "error"


def test_user_lists_and_deletes_own_notifications(api_client, reader, make_user, book):
    mine = Notification.objects.create(user=reader, book=book, message="Back in stock", type="availability")
    theirs = Notification.objects.create(user=make_user(), message="Overdue", type="overdue")
    api_client.force_authenticate(reader)

    listing = api_client.get("/api/v1/notification/my-notifications/")
    assert [n["id"] for n in listing.data["notifications"]] == [mine.id]
    assert listing.data["notifications"][0]["book_title"] == book.title

    assert api_client.delete(f"/api/v1/notification/{theirs.id}/").status_code == 404
    assert api_client.delete(f"/api/v1/notification/{mine.id}/").status_code == 200
    assert not Notification.objects.filter(pk=mine.pk).exists()
