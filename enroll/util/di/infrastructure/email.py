"""Email infrastructure providers."""

from dishka import Scope, provide

from enroll.adapter.email import ConsoleEmailNotifier
from enroll.config import RegistrationSettings
from enroll.domain.service import EmailNotifier
from enroll.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_notifier(self, settings: RegistrationSettings) -> EmailNotifier:
        """Provide email notifier."""
        return ConsoleEmailNotifier(
            base_url=settings.base_url, email_from=settings.email_from
        )
