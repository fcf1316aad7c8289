"""Infrastructure layer errors."""

from enroll.domain.error import DomainError
from enroll.domain.value.results import ErrorKind


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError, DomainError):
    """OAuth provider request failed, timed out, or returned an unusable body."""

    kind = ErrorKind.PROVIDER_ERROR
