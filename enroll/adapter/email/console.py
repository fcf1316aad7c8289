"""Email notifier implementations.

Real template rendering and SMTP/SES transport live outside this service.
"""

from dataclasses import dataclass, field

import logfire

from enroll.domain.error import NotificationFailure
from enroll.domain.service.notification_service import EmailNotifier, verification_link


class ConsoleEmailNotifier(EmailNotifier):
    """Notifier that writes outgoing messages to the log stream.

    Used in development. The verification link is rendered but never logged
    because it embeds the plaintext token.
    """

    def __init__(self, base_url: str, email_from: str) -> None:
        self.base_url = base_url
        self.email_from = email_from

    async def send_verification_email(
        self, to_email: str, first_name: str, token: str
    ) -> None:
        link = verification_link(self.base_url, token)
        logfire.info(
            "Verification email dispatched",
            to_email=to_email,
            email_from=self.email_from,
            link_length=len(link),
        )

    async def send_welcome_email(self, to_email: str, first_name: str) -> None:
        logfire.info(
            "Welcome email dispatched",
            to_email=to_email,
            email_from=self.email_from,
        )


@dataclass
class SentEmail:
    kind: str
    to_email: str
    first_name: str
    token: str | None = None


@dataclass
class RecordingEmailNotifier(EmailNotifier):
    """Mock notifier that records every message for assertions.

    Set `fail_verification` or `fail_welcome` to simulate a transport failure.
    """

    base_url: str = "http://localhost:8000"
    sent: list[SentEmail] = field(default_factory=list)
    fail_verification: bool = False
    fail_welcome: bool = False

    async def send_verification_email(
        self, to_email: str, first_name: str, token: str
    ) -> None:
        if self.fail_verification:
            raise NotificationFailure("Failed to send verification email")
        self.sent.append(SentEmail("verification", to_email, first_name, token))

    async def send_welcome_email(self, to_email: str, first_name: str) -> None:
        if self.fail_welcome:
            raise NotificationFailure("Failed to send welcome email")
        self.sent.append(SentEmail("welcome", to_email, first_name))

    @property
    def last_token(self) -> str | None:
        """Plaintext token from the most recent verification email."""
        for email in reversed(self.sent):
            if email.kind == "verification":
                return email.token
        return None

    def link_for(self, token: str) -> str:
        return verification_link(self.base_url, token)
