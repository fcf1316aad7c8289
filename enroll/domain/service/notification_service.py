"""Email notification interface."""

from urllib.parse import urlencode


def verification_link(base_url: str, token: str) -> str:
    """Link the user follows to verify their address."""
    return f"{base_url.rstrip('/')}/verify?{urlencode({'token': token})}"


class EmailNotifier:
    """Outbound email collaborator.

    Implementations raise NotificationFailure when a message cannot be
    dispatched. Template rendering and transport are up to them.
    """

    async def send_verification_email(
        self, to_email: str, first_name: str, token: str
    ) -> None:
        """Send the verification link containing the plaintext token.

        Args:
            to_email: Recipient address
            first_name: Recipient first name for the greeting
            token: Plaintext verification token
        """
        raise NotImplementedError

    async def send_welcome_email(self, to_email: str, first_name: str) -> None:
        """Send the welcome message after enrollment completes.

        Args:
            to_email: Recipient address
            first_name: Recipient first name for the greeting
        """
        raise NotImplementedError
