"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Missing or malformed deployment setting.

    Raised while the container builds the component that needs the setting
    (the token cipher, an OAuth client), so `check_configuration` can surface
    it before any registration is attempted.
    """

    pass
