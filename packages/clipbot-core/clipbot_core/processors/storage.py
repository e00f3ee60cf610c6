"""Durable, URL-addressable storage for large artifacts."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from clipbot_core.errors import StorageFailed

logger = logging.getLogger(__name__)


class ArtifactStorage:
    """
    Flat directory of persisted artifacts served under a base URL.

    Files are addressed by bare filename only; anything that would resolve
    outside the media directory is rejected.
    """

    def __init__(self, media_dir: Path, base_url: str = "/media"):
        self.media_dir = Path(media_dir)
        self.base_url = base_url

    def persist(self, source: Path, filename: str) -> Path:
        """
        Copy ``source`` into durable storage under ``filename``.

        Raises:
            StorageFailed: the media directory or the copy failed; a partial
                target is removed first
        """
        target = self.media_dir / Path(filename).name
        try:
            self.media_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            size = target.stat().st_size
        except OSError as e:
            self._discard(target)
            logger.error(
                "storage.persist_failed",
                extra={"path": str(target), "error": str(e)},
            )
            raise StorageFailed(f"Could not store {target.name}", details=str(e)) from e

        logger.info("storage.persisted", extra={"path": str(target), "size": size})
        return target

    def _discard(self, path: Path) -> None:
        """Remove a partially written file; failures are logged only."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("storage.discard_failed", extra={"path": str(path), "error": str(e)})

    def url_for(self, filename: str) -> str:
        """Public URL of a stored file."""
        return f"{self.base_url.rstrip('/')}/{Path(filename).name}"

    def resolve(self, filename: str) -> Optional[Path]:
        """Find a stored file by name, or None if it does not exist."""
        if not filename or Path(filename).name != filename:
            return None
        path = self.media_dir / filename
        if not path.is_file():
            return None
        return path
