"""Local storage for uploaded product images."""

from pathlib import Path
from uuid import uuid4

import structlog

from catalog_api.infrastructure.config import settings

logger = structlog.get_logger()

ALLOWED_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


class ImageStorage:
    """Writes image uploads to a directory served under a URL prefix.

    Files are renamed to random identifiers, keeping only a known image
    suffix, so client-supplied names never reach the filesystem.
    """

    def __init__(self, media_dir: str | Path, url_prefix: str) -> None:
        """Initialize storage.

        Args:
            media_dir: Directory to write files into.
            url_prefix: URL path the directory is mounted at.
        """
        self.media_dir = Path(media_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, filename: str | None, content: bytes) -> str:
        """Persist an image and return its public URI.

        Args:
            filename: Original upload filename, used for its suffix only.
            content: Raw file bytes.

        Returns:
            URI under the configured prefix.
        """
        suffix = Path(filename or "").suffix.lower()
        if suffix not in ALLOWED_SUFFIXES:
            suffix = ""

        self.media_dir.mkdir(parents=True, exist_ok=True)
        stored_name = f"{uuid4().hex}{suffix}"
        (self.media_dir / stored_name).write_bytes(content)

        logger.info(
            "Stored product image",
            stored_name=stored_name,
            size_bytes=len(content),
        )
        return f"{self.url_prefix}/{stored_name}"

    def delete(self, uri: str) -> None:
        """Remove a previously saved image.

        URIs outside the configured prefix are ignored, as are files that
        no longer exist.

        Args:
            uri: URI returned by ``save``.
        """
        prefix = f"{self.url_prefix}/"
        if not uri.startswith(prefix):
            return
        stored_name = Path(uri[len(prefix):]).name
        (self.media_dir / stored_name).unlink(missing_ok=True)
        logger.info("Removed product image", stored_name=stored_name)


_image_storage: ImageStorage | None = None


def get_image_storage() -> ImageStorage:
    """Get the image storage singleton."""
    global _image_storage
    if _image_storage is None:
        _image_storage = ImageStorage(settings.media_dir, settings.media_url_prefix)
    return _image_storage
