"""
files.py

Responsibility: UTF-8 text reads and whole-file writes.

Line endings are passed through untouched in both directions.

Writes go to a temp file next to the real target (symlinks are followed) and
are renamed over it, so a failed write leaves the previous file untouched.
There is no locking: two overlapping read-modify-write cycles on the same file
can still lose one of the writes.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from app_versioner.errors import NotFoundError

log = logging.getLogger(__name__)


def read_text(path: str | Path, *, kind: str = "File") -> str:
    p = Path(path)
    try:
        with open(p, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise NotFoundError(f"{kind} does not exist: {p}") from e


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_text(path: str | Path, text: str) -> None:
    """
    Replace `path` with `text`, creating parent directories as needed.

    An existing file keeps its mode; a new one gets 0o666 minus the umask.
    """
    p = Path(os.path.realpath(path))
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path: Path | None = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        if p.exists():
            shutil.copymode(p, tmp_path)
        else:
            os.chmod(tmp_path, _default_mode())
        os.replace(tmp_path, p)
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()

    log.debug("Wrote %s (%d chars)", p, len(text))
