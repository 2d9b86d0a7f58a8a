"""
copier.py

Responsibility: Copy a file or directory into the versioned build directory.

Destination layout: `<output_root><build path><leaf>` where `<leaf>` is
- the file name, when `src` is a file,
- the directory name, when `src` is a directory and `include_src_dir` is set,
- empty otherwise (the directory's contents land directly in the build path).

Existing files at the destination are overwritten.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from app_versioner.errors import NotFoundError

if TYPE_CHECKING:
    from app_versioner.session import BuildSession

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyOptions:
    include_src_dir: bool = False
    include_versioning: bool = True
    output_root: str = ""


def to_slash(path: str | Path) -> str:
    """
    Convert Windows separators to forward slashes.

    Extended-length paths (`\\\\?\\C:\\...`) are returned unchanged.
    """
    s = str(path)
    if s.startswith("\\\\?\\"):
        return s
    return s.replace("\\", "/")


def remove_trailing_slash(path: str) -> str:
    return path[:-1] if path.endswith("/") else path


def _leaf(path: str) -> str:
    return path[path.rfind("/") + 1 :]


def resolve_copy_target(
    session: BuildSession,
    src: str | Path,
    options: CopyOptions = CopyOptions(),
    descriptor_path: str | Path | None = None,
) -> tuple[str, str]:
    """
    Return (normalized source, destination) for copying `src` into the build path.
    """
    source = to_slash(src)
    p = Path(source)

    if p.is_file():
        leaf = _leaf(source)
    elif p.is_dir():
        source = remove_trailing_slash(source)
        leaf = _leaf(source) if options.include_src_dir else ""
    else:
        raise NotFoundError(f"Copy source does not exist: {source}")

    build_path = session.get_build_path(options.include_versioning, False, descriptor_path)
    return source, options.output_root + build_path + leaf


def copy_recursive(src: str | Path, dst: str | Path) -> None:
    s = Path(src)
    d = Path(dst)
    if s.is_dir():
        shutil.copytree(s, d, dirs_exist_ok=True)
    elif s.is_file():
        d.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(s, d)
    else:
        raise NotFoundError(f"Copy source does not exist: {s}")


def copy_to_build_path(
    session: BuildSession,
    src: str | Path,
    options: CopyOptions = CopyOptions(),
    descriptor_path: str | Path | None = None,
) -> str:
    """
    Copy `src` into the session's build path. Returns the destination path.
    """
    source, destination = resolve_copy_target(session, src, options, descriptor_path)
    copy_recursive(source, destination)
    log.info("Copied %s -> %s", source, destination)
    return destination
