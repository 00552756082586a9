"""Supabase Storage wrapper for uploaded lecture material.

Files are stored in the ``materials`` bucket (``settings.STORAGE_BUCKET``)
under ``{prefix}/{random name}.{ext}`` so uploads never collide.
"""

import uuid
from pathlib import PurePath

from pydantic import BaseModel

from config import settings
from lecturedeck.exceptions import StorageError
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)


class StoredFile(BaseModel):
    """Where an uploaded file ended up"""
    path: str
    url: str
    type: str
    name: str


def _bucket():
    from lecturedeck.db.supabase_client import get_supabase_client

    return get_supabase_client().storage.from_(settings.STORAGE_BUCKET)


def _storage_name(filename: str) -> str:
    ext = PurePath(filename).suffix.lstrip(".")
    stem = uuid.uuid4().hex[:12]
    return f"{stem}.{ext}" if ext else stem


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def upload_file(content: bytes, filename: str, content_type: str, prefix: str) -> StoredFile:
    """Upload a file to ``{prefix}/{random}.{ext}`` and return its public URL."""
    path = f"{prefix.strip('/')}/{_storage_name(filename)}"

    logger.info(f"Uploading {filename} to {settings.STORAGE_BUCKET}/{path}")
    try:
        bucket = _bucket()
        bucket.upload(
            path,
            content,
            file_options={"content-type": content_type, "upsert": "false"},
        )
        url = bucket.get_public_url(path)
    except Exception as exc:
        logger.error(f"Failed to upload {filename} to {settings.STORAGE_BUCKET}/{path}: {exc}")
        raise StorageError(f"Failed to upload {filename}: {exc}") from exc

    logger.info(f"Uploaded {filename} to {settings.STORAGE_BUCKET}/{path}")
    return StoredFile(path=path, url=url, type=content_type, name=filename)


def get_file_url(path: str) -> str:
    """Return the public URL of a stored file."""
    try:
        return _bucket().get_public_url(path)
    except Exception as exc:
        logger.error(f"Failed to get URL for {settings.STORAGE_BUCKET}/{path}: {exc}")
        raise StorageError(f"Failed to get URL for {path}: {exc}") from exc


def delete_file(path: str) -> None:
    """Delete a stored file."""
    logger.info(f"Deleting {settings.STORAGE_BUCKET}/{path}")
    try:
        _bucket().remove([path])
    except Exception as exc:
        logger.error(f"Failed to delete {settings.STORAGE_BUCKET}/{path}: {exc}")
        raise StorageError(f"Failed to delete {path}: {exc}") from exc
