"""Media storage infrastructure providers."""

from dishka import Scope, provide

from diary.adapter.storage.local import LocalMediaStorage
from diary.config import StorageSettings
from diary.domain.service import MediaStorage
from diary.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider writing to the local filesystem."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_media_storage(self, storage_settings: StorageSettings) -> MediaStorage:
        return LocalMediaStorage(
            media_root=storage_settings.media_root,
            public_base_url=storage_settings.public_base_url,
        )
