from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from app_versioner.descriptor import bump_version, get_version
from app_versioner.errors import NotFoundError
from app_versioner.files import read_text, write_text

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions and symlinks")


@pytest.fixture()
def umask_022() -> Iterator[None]:
    old = os.umask(0o022)
    yield
    os.umask(old)


def test_read_text_keeps_line_endings(tmp_path: Path) -> None:
    p = tmp_path / "mixed.scss"
    p.write_bytes(b"a\r\nb\nc\r\n")
    assert read_text(p) == "a\r\nb\nc\r\n"


def test_read_text_missing(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        read_text(tmp_path / "missing.scss")


def test_write_text_creates_parents(tmp_path: Path) -> None:
    p = tmp_path / "a" / "b" / "out.scss"
    write_text(p, "x\r\n")
    assert p.read_bytes() == b"x\r\n"
    assert [c.name for c in p.parent.iterdir()] == ["out.scss"]


@posix_only
def test_new_file_mode_follows_umask(res: Path, tmp_path: Path, umask_022: None) -> None:
    out = tmp_path / "out" / "package.json"
    bump_version("patch", res / "fake-package-1.json", out)
    assert stat.S_IMODE(out.stat().st_mode) == 0o644


@posix_only
def test_existing_file_keeps_mode(tmp_path: Path) -> None:
    p = tmp_path / "vars.scss"
    p.write_text("old", encoding="utf-8")
    p.chmod(0o640)
    write_text(p, "new")
    assert stat.S_IMODE(p.stat().st_mode) == 0o640


@posix_only
def test_write_through_symlink(res: Path, tmp_path: Path) -> None:
    real = res / "fake-package-2.json"
    link = tmp_path / "package.json"
    link.symlink_to(real)

    bump_version("patch", link)

    assert link.is_symlink()
    assert get_version(real) == "2.0.1"
