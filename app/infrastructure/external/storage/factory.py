"""Storage service factory: creates local or Firebase Storage backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from app.infrastructure.external.storage.protocol import StorageProtocol

if TYPE_CHECKING:
    from app.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(
        settings: "Settings | None" = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> StorageProtocol:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().
            http_client: Shared client for the Firebase backend.

        Returns:
            LocalStorageService or FirebaseStorageService.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from app.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalStorageService(
                storage_root=s.storage_root,
                base_url=s.storage_base_url,
                max_size=s.max_upload_size,
            )
        if backend == "firebase":
            from app.infrastructure.external.storage.firebase_storage import (
                FirebaseStorageService,
                _STORAGE_SCOPE,
            )
            from app.infrastructure.firebase._rest_client import _get_credentials
            from app.infrastructure.firebase.client import get_service_account_info

            key_dict = get_service_account_info()
            if not key_dict:
                raise ValueError("Firebase credentials required for firebase storage backend")
            bucket = s.firebase_storage_bucket or f"{key_dict['project_id']}.appspot.com"
            if http_client is None:
                raise ValueError("firebase storage backend needs the shared HTTP client")
            return FirebaseStorageService(
                bucket=bucket,
                credentials=_get_credentials(key_dict, scopes=[_STORAGE_SCOPE]),
                http_client=http_client,
                max_size=s.max_upload_size,
            )
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'local', 'firebase'"
        )
