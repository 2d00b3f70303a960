"""
Blob storage for uploaded KYC documents and product images
"""
import logging
from pathlib import Path, PurePosixPath
from typing import Optional
from app.config import settings
from app.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def allowed_extensions() -> set:
    return {f".{ext.strip().lower()}" for ext in settings.ALLOWED_EXTENSIONS.split(",") if ext.strip()}


def validate_upload(filename: Optional[str], content: bytes) -> str:
    """Check extension and size of an upload, returning the safe base filename"""
    if not filename:
        raise ValidationError("File name is required")
    
    # Strip any client-supplied directories
    safe_name = PurePosixPath(filename.replace("\\", "/")).name
    file_ext = PurePosixPath(safe_name).suffix.lower()
    allowed = allowed_extensions()
    if file_ext not in allowed:
        raise ValidationError(f"Invalid file type. Allowed: {', '.join(sorted(allowed))}")
    
    if not content:
        raise ValidationError("Uploaded file is empty")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(
            f"File size exceeds maximum allowed size of {settings.MAX_UPLOAD_SIZE / 1024 / 1024:.0f}MB"
        )
    
    return safe_name


class BlobStore:
    """Path-addressed object storage"""
    
    def put(self, path: str, data: bytes) -> str:
        """Store ``data`` under ``path`` and return a retrievable URL"""
        raise NotImplementedError
    
    def delete(self, path: str) -> None:
        """Remove the object under ``path``; missing objects are ignored"""
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Stores objects on the local filesystem, served under /uploads"""
    
    def __init__(self, root: str, base_url: str = ""):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
    
    def _resolve(self, path: str) -> PurePosixPath:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise ValidationError(f"Invalid storage path: {path}")
        return relative
    
    def put(self, path: str, data: bytes) -> str:
        relative = self._resolve(path)
        target = self.root.joinpath(*relative.parts)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store blob {relative}: {e}")
            raise StoreError("Failed to store file") from e
        
        logger.info(f"Stored blob {relative} ({len(data)} bytes)")
        return f"{self.base_url}/uploads/{relative}"
    
    def delete(self, path: str) -> None:
        relative = self._resolve(path)
        try:
            self.root.joinpath(*relative.parts).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to delete blob {relative}, left orphaned: {e}")
            return
        logger.info(f"Deleted blob {relative}")


def get_blob_store() -> BlobStore:
    """Dependency for getting the configured blob store"""
    return LocalBlobStore(settings.UPLOAD_DIR, settings.CDN_BASE_URL)
