"""
Cover Storage - Uploaded cover image persistence

Writes uploaded files into the covers directory under a generated
"<epoch ms>_<sanitised name>" filename. The same directory is mounted
for static serving at /covers.
"""

import logging
import re
import time
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional

from .protocols import CoverUploadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
_WHITESPACE = re.compile(r"\s+")


def sanitize_filename(original: str) -> str:
    """Drop directory components and replace whitespace runs with "_"."""
    name = PurePosixPath(PureWindowsPath(original).name).name
    name = _WHITESPACE.sub("_", name)
    return name or "cover"


def generate_cover_filename(original: str, timestamp_ms: Optional[int] = None) -> str:
    """Build the stored name: millisecond timestamp prefix plus sanitised name."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{timestamp_ms}_{sanitize_filename(original)}"


class CoverStorage:
    """Stores cover uploads on the local filesystem"""

    def __init__(self, covers_dir, max_bytes: int):
        """
        Args:
            covers_dir: Directory that holds stored covers
            max_bytes: Largest accepted upload in bytes
        """
        self.covers_dir = Path(covers_dir)
        self.max_bytes = max_bytes

    def ensure_dir(self) -> Path:
        self.covers_dir.mkdir(parents=True, exist_ok=True)
        return self.covers_dir

    def path_for(self, filename: str) -> Path:
        return self.covers_dir / filename

    async def save(self, upload) -> str:
        """
        Stream an upload to disk

        Args:
            upload: Object with a ``filename`` and an async ``read(size)``
                (FastAPI UploadFile)

        Returns:
            Stored filename

        Raises:
            CoverUploadError: If no file was supplied or it exceeds max_bytes
        """
        if upload is None or not getattr(upload, "filename", None):
            raise CoverUploadError("No file supplied")

        self.ensure_dir()
        filename = generate_cover_filename(upload.filename)
        target = self.path_for(filename)

        written = 0
        try:
            with target.open("wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise CoverUploadError(
                            f"File too large. Maximum size: {self.max_bytes / (1024 * 1024):.1f}MB"
                        )
                    out.write(chunk)
        except CoverUploadError:
            target.unlink(missing_ok=True)
            raise

        logger.info(f"Stored cover {filename} ({written} bytes)")
        return filename
