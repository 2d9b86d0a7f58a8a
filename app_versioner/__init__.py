"""
app_versioner package

Keeps a front-end bundle's on-disk build path and its SCSS environment/version
variables in step with the version declared in the project's `package.json`.

Key responsibilities are split across modules:
- `descriptor.py`: read the version descriptor and bump it (semver)
- `session.py`: per-build state and versioned build path derivation
- `regions.py`: upsert a variable line between marker comments in a text file
- `copier.py`: copy files/directories into the versioned build directory
- `config.py`: YAML pipeline config for the CLI
- `cli.py`: CLI entrypoint and orchestration (bump -> scss -> copy)
"""

from __future__ import annotations

from app_versioner.copier import CopyOptions, copy_to_build_path
from app_versioner.descriptor import (
    DEFAULT_DESCRIPTOR_PATH,
    bump_version,
    get_version,
    increment,
    load_descriptor,
    load_json_with_comments,
)
from app_versioner.errors import (
    ConfigError,
    InvalidBumpKindError,
    MarkerError,
    MissingFieldError,
    NotFoundError,
    ParseError,
    VersionerError,
    VersionFormatError,
)
from app_versioner.regions import (
    BUILD_PATH_REGION,
    ENVIRONMENT_REGION,
    RegionMarkers,
    VariableRegion,
    splice_variable,
)
from app_versioner.session import BuildSession, to_hyphen_token

__all__ = [
    "__version__",
    "BUILD_PATH_REGION",
    "BuildSession",
    "ConfigError",
    "CopyOptions",
    "DEFAULT_DESCRIPTOR_PATH",
    "ENVIRONMENT_REGION",
    "InvalidBumpKindError",
    "MarkerError",
    "MissingFieldError",
    "NotFoundError",
    "ParseError",
    "RegionMarkers",
    "VariableRegion",
    "VersionFormatError",
    "VersionerError",
    "bump_version",
    "copy_to_build_path",
    "get_version",
    "increment",
    "load_descriptor",
    "load_json_with_comments",
    "splice_variable",
    "to_hyphen_token",
]

__version__ = "0.1.0"
