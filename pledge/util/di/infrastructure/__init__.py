"""Infrastructure providers."""

# Import bases
from .api import ApiProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .api import ProdApiProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "ApiProvider",
    "ProdApiProvider",
    "ProdStorageProvider",
    "StorageProvider",
]
