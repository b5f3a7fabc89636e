"""Audio artifact storage on the local filesystem."""

import logging
import re
import secrets
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r"^podcast_[a-z0-9-]+_[a-z0-9-]+_\d{8}_\d{6}_[0-9a-f]{8}\.mp3$")
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def _slug(value: str) -> str:
    return _SLUG_RE.sub("-", value.lower()).strip("-") or "any"


@dataclass(frozen=True)
class AudioDetails:
    filename: str
    size_bytes: int
    created_at: datetime


class AudioStore:
    """
    Writes podcast audio into a shared directory.

    Filenames embed options, a timestamp and a random suffix so concurrent
    jobs never collide. Only names this store could have produced are served.
    """

    def __init__(self, directory: Path):
        self.directory = directory

    def new_filename(self, category: str, location: str, now: Optional[datetime] = None) -> str:
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        return f"podcast_{_slug(category)}_{_slug(location)}_{stamp}_{secrets.token_hex(4)}.mp3"

    def write(self, filename: str, audio: bytes) -> Path:
        if not _FILENAME_RE.match(filename):
            raise ValueError(f"Invalid audio filename: {filename}")
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        tmp = path.with_suffix(".part")
        tmp.write_bytes(audio)
        tmp.replace(path)
        logger.info("[AUDIO] Wrote %s (%d bytes)", path, len(audio))
        return path

    def resolve(self, filename: str) -> Optional[Path]:
        """Return the path of a stored file, or None if the name is invalid or unknown."""
        if not _FILENAME_RE.match(filename):
            return None
        path = self.directory / filename
        return path if path.is_file() else None

    def details(self, filename: str) -> Optional[AudioDetails]:
        path = self.resolve(filename)
        if path is None:
            return None
        stat = path.stat()
        return AudioDetails(
            filename=filename,
            size_bytes=stat.st_size,
            created_at=datetime.fromtimestamp(stat.st_mtime),
        )
