"""
descriptor.py

Responsibility: Read the project descriptor (`package.json`) and bump its version.

- `load_descriptor` parses strict JSON.
- `load_json_with_comments` accepts `//` and `/* */` comments (annotated config files).
- `bump_version` rewrites the whole descriptor with only `version` changed.

Version arithmetic is delegated to the `semver` package; prerelease handling
follows the npm convention where bumping a prerelease releases it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import json5
import semver

from app_versioner.errors import (
    InvalidBumpKindError,
    MissingFieldError,
    ParseError,
    VersionFormatError,
)
from app_versioner.files import read_text, write_text

log = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR_PATH = "./package.json"
BUMP_KINDS = ("major", "minor", "patch")


def _parse_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {path}: {e}") from e


def load_descriptor(path: str | Path = DEFAULT_DESCRIPTOR_PATH) -> dict[str, Any]:
    """
    Load the descriptor at `path` as a dict. Key order is preserved.
    """
    p = Path(path)
    data = _parse_json(read_text(p, kind="Descriptor"), p)
    if not isinstance(data, dict):
        raise ParseError(f"Descriptor must be a JSON object at the top level: {p}")
    return data


def load_json_with_comments(path: str | Path) -> Any:
    """
    Load a JSON file that may carry `//` and `/* */` comments.
    """
    p = Path(path)
    try:
        return json5.loads(read_text(p, kind="JSON file"))
    except ValueError as e:
        raise ParseError(f"Invalid JSON in {p}: {e}") from e


def _require_version(pkg: dict[str, Any], path: str | Path) -> str:
    version = pkg.get("version")
    if not isinstance(version, str) or not version.strip():
        raise MissingFieldError(f"Descriptor has no `version` string: {path}")
    return version


def get_version(path: str | Path = DEFAULT_DESCRIPTOR_PATH) -> str:
    return _require_version(load_descriptor(path), path)


def increment(version: str, bump_kind: str = "patch") -> str:
    """
    Return `version` bumped by `bump_kind` ("major", "minor" or "patch").

    A prerelease of the target release is released rather than bumped past it:
    `1.0.0-beta` patch -> `1.0.0`, `1.1.0-rc.1` minor -> `1.1.0`,
    `2.0.0-rc` major -> `2.0.0`. Build metadata is always dropped.
    """
    if bump_kind not in BUMP_KINDS:
        raise InvalidBumpKindError(f"Unknown bump kind {bump_kind!r} (expected one of {', '.join(BUMP_KINDS)})")

    raw = version.strip()
    if raw.startswith("v"):
        raw = raw[1:]
    try:
        current = semver.Version.parse(raw)
    except (ValueError, TypeError) as e:
        raise VersionFormatError(f"Not a semantic version: {version!r}") from e

    releases_prerelease = current.prerelease is not None and (
        bump_kind == "patch"
        or (bump_kind == "minor" and current.patch == 0)
        or (bump_kind == "major" and current.minor == 0 and current.patch == 0)
    )
    if releases_prerelease:
        bumped = current.replace(prerelease=None, build=None)
    elif bump_kind == "major":
        bumped = current.bump_major()
    elif bump_kind == "minor":
        bumped = current.bump_minor()
    else:
        bumped = current.bump_patch()

    return str(bumped)


def bump_version(
    bump_kind: str = "patch",
    path: str | Path = DEFAULT_DESCRIPTOR_PATH,
    output_path: str | Path | None = None,
) -> str:
    """
    Bump the descriptor's version and write the descriptor back.

    `output_path` redirects the write (the source descriptor is left alone).
    Returns the new version.
    """
    pkg = load_descriptor(path)
    old = _require_version(pkg, path)

    pkg["version"] = increment(old, bump_kind)

    target = Path(output_path or path)
    write_text(target, json.dumps(pkg, indent=2, ensure_ascii=False))
    log.info("Bumped version %s -> %s (%s) in %s", old, pkg["version"], bump_kind, target)
    return pkg["version"]
