from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import ParserSettings
from .errors import MetadataIOError, MetadataOutOfMemory

logger = logging.getLogger(__name__)


def load_metadata_bytes(path: Path | str, settings: Optional[ParserSettings] = None) -> bytes:
    """Read the whole metadata file into memory."""
    settings = settings or ParserSettings()
    path = Path(path)
    try:
        fh = path.open("rb")
    except OSError as exc:
        raise MetadataIOError("error opening metadata file") from exc
    with fh:
        try:
            size = os.fstat(fh.fileno()).st_size
        except OSError as exc:
            raise MetadataIOError("error getting metadata file size") from exc
        if settings.max_file_bytes is not None and size > settings.max_file_bytes:
            raise MetadataIOError(f"metadata file exceeds {settings.max_file_bytes} bytes")
        try:
            data = fh.read(size)
        except MemoryError as exc:
            raise MetadataOutOfMemory() from exc
        except OSError as exc:
            raise MetadataIOError("failed to load metadata file to memory") from exc
    if len(data) != size:
        raise MetadataIOError("failed to load metadata file to memory")
    logger.debug("Loaded %d bytes from %s", size, path)
    return data
