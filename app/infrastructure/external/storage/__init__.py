"""Storage: local filesystem and Firebase Storage backends.

Factory creates the backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_storage_service(). Both implement
StorageProtocol (upload, download, delete, exists).
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "StorageFactory",
    "StorageProtocol",
]
