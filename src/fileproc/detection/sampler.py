"""Bounded content sampling for heuristic inspection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOGGER = logging.getLogger(__name__)

MAX_SAMPLE_SIZE = 8192


@dataclass(frozen=True)
class ContentSample:
    """Prefix of a file's content.

    Attributes:
        raw: Bytes read from the start of the file.
        text: UTF-8 decoding of ``raw`` with undecodable bytes replaced.
        error: Description of a read failure, if any.
    """

    raw: bytes = b""
    text: str = ""
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.raw


def read_sample(path: Path, limit: int = MAX_SAMPLE_SIZE) -> ContentSample:
    """Return up to ``limit`` bytes from the start of ``path``.

    Read failures are reported on the returned sample instead of raised.
    """
    try:
        size = path.stat().st_size
        with path.open("rb") as fh:
            raw = fh.read(min(limit, size))
    except OSError as exc:
        LOGGER.debug("Unable to sample %s: %s", path, exc)
        return ContentSample(error=exc.strerror or str(exc))
    return ContentSample(raw=raw, text=raw.decode("utf-8", errors="replace"))


__all__ = ["MAX_SAMPLE_SIZE", "ContentSample", "read_sample"]
