"""Unit tests for email notifiers."""

from unittest.mock import patch

import pytest

from enroll.adapter.email import ConsoleEmailNotifier, RecordingEmailNotifier
from enroll.domain.error import NotificationFailure
from enroll.domain.service import verification_link


class TestVerificationLink:
    def test_builds_link_with_encoded_token(self):
        link = verification_link("https://accounts.example.com/", "abc_-123")

        assert link == "https://accounts.example.com/verify?token=abc_-123"


class TestConsoleEmailNotifier:
    """Tests for ConsoleEmailNotifier."""

    @pytest.mark.asyncio
    async def test_never_logs_the_token(self):
        notifier = ConsoleEmailNotifier(
            base_url="https://accounts.example.com", email_from="no-reply@example.com"
        )

        with patch("enroll.adapter.email.console.logfire") as mock_logfire:
            await notifier.send_verification_email(
                "jo@example.com", "Jo", "secret-token-value"
            )

        mock_logfire.info.assert_called_once()
        args, kwargs = mock_logfire.info.call_args
        logged = " ".join(str(v) for v in (*args, *kwargs.values()))
        assert "secret-token-value" not in logged
        assert kwargs["to_email"] == "jo@example.com"

    @pytest.mark.asyncio
    async def test_welcome_email(self):
        notifier = ConsoleEmailNotifier(
            base_url="https://accounts.example.com", email_from="no-reply@example.com"
        )

        with patch("enroll.adapter.email.console.logfire") as mock_logfire:
            await notifier.send_welcome_email("jo@example.com", "Jo")

        assert mock_logfire.info.call_args.args[0] == "Welcome email dispatched"


class TestRecordingEmailNotifier:
    """Tests for the recording notifier used in tests."""

    @pytest.mark.asyncio
    async def test_records_messages_in_order(self):
        notifier = RecordingEmailNotifier()

        await notifier.send_verification_email("a@b.com", "A", "tok-1")
        await notifier.send_welcome_email("a@b.com", "A")

        assert [e.kind for e in notifier.sent] == ["verification", "welcome"]
        assert notifier.last_token == "tok-1"

    @pytest.mark.asyncio
    async def test_simulated_failures(self):
        notifier = RecordingEmailNotifier(fail_verification=True, fail_welcome=True)

        with pytest.raises(NotificationFailure):
            await notifier.send_verification_email("a@b.com", "A", "tok")
        with pytest.raises(NotificationFailure):
            await notifier.send_welcome_email("a@b.com", "A")

        assert notifier.sent == []
        assert notifier.last_token is None

    def test_link_for_uses_base_url(self):
        notifier = RecordingEmailNotifier(base_url="https://accounts.example.com")

        assert notifier.link_for("tok") == "https://accounts.example.com/verify?token=tok"
