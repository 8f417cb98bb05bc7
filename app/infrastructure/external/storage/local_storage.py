"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from urllib.parse import quote

import aiofiles
import aiofiles.os

from app.application.interfaces.services import StoredObject
from app.infrastructure.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageQuotaExceededError,
    StorageUploadError,
)


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    URLs are ``{base_url}/{path}`` (served by whatever fronts the directory).
    """

    def __init__(
        self,
        storage_root: str,
        base_url: str | None = None,
        max_size: int | None = None,
    ) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Public base URL of storage_root (e.g. https://files.example.com).
            max_size: Optional upload size limit in bytes.
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.max_size = max_size
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, path: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / path).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(path, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(path, "path_validation")
        return full_path

    def _url_for(self, path: str) -> str:
        quoted = quote(path)
        return f"{self.base_url}/{quoted}" if self.base_url else f"file://{self.storage_root / path}"

    async def upload(self, data: bytes, path: str, content_type: str) -> StoredObject:
        """Write atomically (temp file + rename); an existing object is replaced."""
        target_path = self._get_full_path(path)
        if self.max_size is not None and len(data) > self.max_size:
            raise StorageQuotaExceededError(len(data), self.max_size)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except Exception as e:
            raise StorageUploadError(path, str(e)) from e
        return StoredObject(
            path=path,
            url=self._url_for(path),
            size=len(data),
            content_type=content_type,
        )

    async def download(self, path: str) -> bytes:
        file_path = self._get_full_path(path)
        if not file_path.exists():
            raise StorageNotFoundError(path)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                return await f.read()
        except Exception as e:
            raise StorageDownloadError(path, str(e)) from e

    async def delete(self, path: str) -> bool:
        """Delete file and prune empty parent directories. Returns True if deleted."""
        file_path = self._get_full_path(path)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except Exception as e:
            raise StorageDeleteError(path, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                if any(parent.iterdir()):
                    break
                parent.rmdir()
                parent = parent.parent
            except OSError:
                break
        return True

    async def exists(self, path: str) -> bool:
        try:
            return self._get_full_path(path).is_file()
        except StoragePermissionError:
            return False
