"""
config.py

Responsibility: Load the pipeline config (`versioner.yaml`) into a typed model.

Example:

    descriptor: package.json
    dev_path: /dist/
    prod_path: /production-location/
    production: false
    output_root: build
    bump: patch
    scss:
      build_path: [src/styles/_vars.scss]
      environment: [src/styles/_env.scss]
      include_versioning: true
    copy:
      - src: assets/
        include_src_dir: true

File paths (`descriptor`, `scss.*`, `copy[].src`, `output_root`) are resolved
against the directory holding the config file. `dev_path` / `prod_path` are
build path prefixes and are used verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from app_versioner.descriptor import BUMP_KINDS
from app_versioner.errors import ConfigError

DEFAULT_CONFIG_PATH = "versioner.yaml"


@dataclass(frozen=True)
class ScssTargets:
    build_path: tuple[str, ...] = ()
    environment: tuple[str, ...] = ()
    include_versioning: bool = True


@dataclass(frozen=True)
class CopyEntry:
    src: str
    include_src_dir: bool = False
    include_versioning: bool = True


@dataclass(frozen=True)
class VersionerConfig:
    """Everything `app-versioner run` needs for one build."""

    dev_path: str
    prod_path: str
    descriptor: str = "package.json"
    production: bool = False
    output_root: str = ""
    bump: str | None = None
    scss: ScssTargets = field(default_factory=ScssTargets)
    copy: tuple[CopyEntry, ...] = ()


def _mapping(raw: Any, name: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"`{name}` must be a mapping when provided.")
    return raw


def _bool(raw: Any, name: str, default: bool) -> bool:
    if raw is None:
        return default
    if not isinstance(raw, bool):
        raise ConfigError(f"`{name}` must be true or false, got {raw!r}.")
    return raw


def _path_list(raw: Any, name: str, base: Path) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not all(isinstance(x, str) for x in raw):
        raise ConfigError(f"`{name}` must be a path or a list of paths.")
    return tuple(_resolve(x, base) for x in raw)


def _resolve(path: str, base: Path) -> str:
    p = Path(path)
    return (p if p.is_absolute() else base / p).as_posix()


def _copy_entries(raw: Any, base: Path) -> tuple[CopyEntry, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("`copy` must be a list.")

    entries: list[CopyEntry] = []
    for i, item in enumerate(raw):
        if isinstance(item, str):
            item = {"src": item}
        if not isinstance(item, dict):
            raise ConfigError(f"`copy[{i}]` must be a path or a mapping.")
        src = item.get("src")
        if not isinstance(src, str) or not src.strip():
            raise ConfigError(f"`copy[{i}].src` is required.")
        entries.append(
            CopyEntry(
                src=_resolve(src.strip(), base),
                include_src_dir=_bool(item.get("include_src_dir"), f"copy[{i}].include_src_dir", False),
                include_versioning=_bool(item.get("include_versioning"), f"copy[{i}].include_versioning", True),
            )
        )
    return tuple(entries)


def parse_config(data: dict[str, Any], base_dir: str | Path = ".") -> VersionerConfig:
    base = Path(base_dir)

    dev_path = data.get("dev_path")
    prod_path = data.get("prod_path")
    if not isinstance(dev_path, str) or not isinstance(prod_path, str):
        raise ConfigError("Config must define `dev_path` and `prod_path` strings.")

    bump = data.get("bump")
    if bump is not None:
        bump = str(bump).strip()
        if bump not in BUMP_KINDS:
            raise ConfigError(f"`bump` must be one of {', '.join(BUMP_KINDS)}, got {bump!r}.")

    output_root = data.get("output_root") or ""
    if not isinstance(output_root, str):
        raise ConfigError("`output_root` must be a string.")
    if output_root:
        # Build paths are appended by string concatenation, so the root keeps its trailing "/".
        output_root = _resolve(output_root, base)
        if not output_root.endswith("/"):
            output_root += "/"

    scss_raw = _mapping(data.get("scss"), "scss")
    scss = ScssTargets(
        build_path=_path_list(scss_raw.get("build_path"), "scss.build_path", base),
        environment=_path_list(scss_raw.get("environment"), "scss.environment", base),
        include_versioning=_bool(scss_raw.get("include_versioning"), "scss.include_versioning", True),
    )

    return VersionerConfig(
        dev_path=dev_path,
        prod_path=prod_path,
        descriptor=_resolve(str(data.get("descriptor") or "package.json"), base),
        production=_bool(data.get("production"), "production", False),
        output_root=output_root,
        bump=bump,
        scss=scss,
        copy=_copy_entries(data.get("copy"), base),
    )


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> VersionerConfig:
    """
    Parse a YAML config file into a `VersionerConfig`.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file does not exist: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping/object at the top level.")

    return parse_config(data, base_dir=path.parent)
