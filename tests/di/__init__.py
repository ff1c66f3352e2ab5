"""Mock providers for testing."""

from .api import MockApiProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockApiProvider",
    "MockStorageProvider",
    "build_test_container",
]
