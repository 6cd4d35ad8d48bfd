# File: site_cache/storage.py
"""site_cache.storage: чтение и запись UTF-8 текстовых файлов кэша."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

from site_cache.errors import DecodeError
from site_cache.logger import trace

__all__ = ("read", "write")

PathT = Union[str, Path]


def read(path: PathT) -> str:
    """Reads the whole file at *path* and decodes it as UTF-8.

    Raises :class:`OSError` if the file is missing or unreadable and
    :class:`~site_cache.errors.DecodeError` if the bytes are not UTF-8.
    """
    p = Path(path)
    buf = p.read_bytes()
    try:
        data = buf.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{p} is not valid UTF-8: {exc}") from exc
    trace("storage: read %s len=%d", p, len(buf))
    return data


def write(path: PathT, data: str) -> None:
    """Writes *data* as UTF-8 to *path*, replacing any existing file.

    Parent directories are created as needed. The text is written to a
    temporary file in the same directory and renamed over *path*.
    """
    p = Path(path)
    raw = data.encode("utf-8")
    trace("storage: write %s len=%d", p, len(raw))
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(raw)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
