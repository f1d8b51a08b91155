"""
Document storage

Filesystem-backed object storage with a single "documents" bucket.
Uploaded files are stored under a generated key of the form

    <org_id>/<epoch_ms>-<random>.<ext>

so every object sits under its organization's prefix. Ingest uses the
prefix to refuse keys that belong to another organization.
"""
import re
import secrets
import string
import time
from pathlib import Path
from typing import Optional, Union

from rfpkb.config import get_settings
from rfpkb.core.exceptions import InvalidInputError, RecordNotFoundError, UpstreamError
from rfpkb.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
_SAFE_EXT = re.compile(r"[^A-Za-z0-9]")
CONTENT_TYPE_SUFFIX = ".content-type"


def generate_object_key(org_id: str, file_name: str) -> str:
    """Unique storage key for an upload, keeping the original extension."""
    ext = _SAFE_EXT.sub("", file_name.rsplit(".", 1)[-1])[:16] or "bin"
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{org_id}/{int(time.time() * 1000)}-{suffix}.{ext}"


class DocumentStorage:
    """
    One storage bucket on the local filesystem.

    The content type declared at upload, if any, is kept in a sidecar
    file next to the object.
    """

    def __init__(self, root: Union[str, Path], bucket: str = "documents"):
        self.bucket = bucket
        self.base_dir = (Path(root) / bucket).resolve()

    def _resolve(self, key: str) -> Path:
        if "\x00" in key:
            raise InvalidInputError("Invalid file path")
        try:
            path = (self.base_dir / key).resolve()
        except (ValueError, OSError):
            # Over-long or otherwise unrepresentable names
            raise InvalidInputError("Invalid file path")
        if self.base_dir not in path.parents:
            raise InvalidInputError("Invalid file path")
        return path

    def _owned(self, org_id: str, key: str) -> Path:
        """Resolve a key, refusing any that sits outside org_id's prefix."""
        path = self._resolve(key)
        org_dir = (self.base_dir / org_id).resolve()
        if org_dir not in path.parents:
            log_security_event(
                "cross_tenant_access",
                {"org_id": org_id, "reason": "foreign_storage_key"},
                logger
            )
            raise RecordNotFoundError("file", key)
        return path

    @staticmethod
    def _type_path(path: Path) -> Path:
        return path.with_name(path.name + CONTENT_TYPE_SUFFIX)

    def upload(
        self,
        org_id: str,
        file_name: str,
        content: Union[str, bytes],
        content_type: Optional[str] = None,
    ) -> str:
        """
        Store content under a new key and return the key.

        Raises UpstreamError if the write fails.
        """
        data = content.encode("utf-8") if isinstance(content, str) else content
        key = generate_object_key(org_id, file_name)
        path = self._resolve(key)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            if content_type:
                self._type_path(path).write_text(content_type, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write {self.bucket}/{key}: {e}")
            raise UpstreamError("Failed to upload file")

        logger.info(
            f"Stored {len(data)} bytes at {self.bucket}/{key} ({content_type or 'no content type'})",
            extra={"org_id": org_id}
        )
        return key

    def download(self, org_id: str, key: str) -> bytes:
        """
        Read an object owned by org_id.

        Keys outside the caller's prefix are reported as missing.
        """
        path = self._owned(org_id, key)

        try:
            if not path.is_file():
                raise RecordNotFoundError("file", key)
            return path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read {self.bucket}/{key}: {e}")
            raise UpstreamError("Failed to download file")

    def content_type(self, org_id: str, key: str) -> Optional[str]:
        """Content type declared when the object was uploaded, or None."""
        type_path = self._type_path(self._owned(org_id, key))
        try:
            return type_path.read_text(encoding="utf-8").strip() or None
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read content type of {self.bucket}/{key}: {e}")
            return None


_storage: Optional[DocumentStorage] = None


def get_storage() -> DocumentStorage:
    """Dependency returning the configured documents bucket."""
    global _storage
    if _storage is None:
        settings = get_settings()
        _storage = DocumentStorage(settings.STORAGE_ROOT, settings.STORAGE_BUCKET)
    return _storage
