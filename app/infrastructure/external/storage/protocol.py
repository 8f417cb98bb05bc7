"""Storage service protocol (DIP). Implementations: LocalStorageService, FirebaseStorageService."""

from typing import Protocol

from app.application.interfaces.services import StoredObject


class StorageProtocol(Protocol):
    """Protocol for object storage backends (local filesystem, Firebase Storage)."""

    async def upload(self, data: bytes, path: str, content_type: str) -> StoredObject:
        """Store bytes at path (overwriting) and return where they landed."""
        ...

    async def download(self, path: str) -> bytes:
        """Return the object's content. Raises StorageNotFoundError if missing."""
        ...

    async def delete(self, path: str) -> bool:
        """Delete object. Returns True if deleted, False if not found."""
        ...

    async def exists(self, path: str) -> bool:
        """Return True if the object exists."""
        ...
