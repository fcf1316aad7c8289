"""Infrastructure providers."""

# Import bases
from .email import EmailProvider
from .oauth import OAuthClientProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .email import ProdEmailProvider  # noqa: F401
from .oauth import ProdOAuthClientProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "EmailProvider",
    "OAuthClientProvider",
    "PersistenceProvider",
    "ProdEmailProvider",
    "ProdOAuthClientProvider",
    "ProdPersistenceProvider",
]
