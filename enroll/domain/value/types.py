"""Domain value objects for identity registration.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from enroll.domain.value.common import ValueObject


class RegistrationMethod(str, Enum):
    """How an identity was enrolled. Immutable after creation."""

    EMAIL = "email"
    OAUTH = "oauth"


class OAuthProvider(str, Enum):
    """Supported OAuth 2.0 providers."""

    GOOGLE = "google"
    AMAZON = "amazon"


class ProviderProfile(ValueObject):
    """User profile returned by an OAuth provider, normalized across providers."""

    provider: OAuthProvider
    provider_id: str  # Stable subject identifier at the provider
    email: str
    first_name: str = ""
    last_name: str = ""


class AuthorizationRequest(ValueObject):
    """Where to send the user to start an OAuth authorization."""

    authorization_url: str
    state: str
