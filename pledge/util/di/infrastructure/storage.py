"""Local storage infrastructure providers."""

from dishka import Scope, provide

from pledge.adapter.storage import RecentSearchStore
from pledge.config import Settings
from pledge.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Local storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider persisting to the user's home directory."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_recent_search_store(self, settings: Settings) -> RecentSearchStore:
        """Provide the recent search store, loaded from disk."""
        store = RecentSearchStore(
            settings.search.recent_path, limit=settings.search.recent_limit
        )
        store.load()
        return store
