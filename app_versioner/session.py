"""
session.py

Responsibility: Per-build state and build path derivation.

A `BuildSession` remembers the two base paths, whether the build targets
production, and the version the descriptor held when the session was created.
That original version never changes, even after `bump_version` rewrites the
descriptor; the current version is re-read from disk on every call.
"""

from __future__ import annotations

import logging
from pathlib import Path

from app_versioner import copier, regions
from app_versioner.descriptor import DEFAULT_DESCRIPTOR_PATH, get_version
from app_versioner.regions import BUILD_PATH_REGION, ENVIRONMENT_REGION, VariableRegion

log = logging.getLogger(__name__)


def to_hyphen_token(version: str) -> str:
    """
    `1.2.3` -> `1-2-3`. Prerelease/build suffixes are kept as they are.
    """
    return version.replace(".", "-")


class BuildSession:
    def __init__(
        self,
        dev_base_path: str,
        prod_base_path: str,
        is_production: bool = False,
        descriptor_path: str | Path = DEFAULT_DESCRIPTOR_PATH,
    ) -> None:
        self.dev_base_path = dev_base_path
        self.prod_base_path = prod_base_path
        self._is_production = bool(is_production)
        self.descriptor_path = descriptor_path
        self._original_version = get_version(descriptor_path)

    def __repr__(self) -> str:
        return (
            f"BuildSession(dev_base_path={self.dev_base_path!r}, prod_base_path={self.prod_base_path!r}, "
            f"is_production={self._is_production!r}, original_version={self._original_version!r})"
        )

    @property
    def original_version(self) -> str:
        return self._original_version

    @property
    def is_production(self) -> bool:
        return self._is_production

    @property
    def environment_name(self) -> str:
        return "prod" if self._is_production else "dev"

    def set_environment(self, is_production: bool) -> None:
        """
        Retarget later path computations. Strings already returned are unaffected.
        """
        self._is_production = bool(is_production)
        log.debug("Environment set to %s", self.environment_name)

    def _descriptor(self, descriptor_path: str | Path | None) -> str | Path:
        return self.descriptor_path if descriptor_path is None else descriptor_path

    def get_hyphened_version(self, use_original: bool = False, descriptor_path: str | Path | None = None) -> str:
        version = self._original_version if use_original else get_version(self._descriptor(descriptor_path))
        return to_hyphen_token(version)

    def get_build_path(
        self,
        include_versioning: bool = True,
        use_original: bool = False,
        descriptor_path: str | Path | None = None,
    ) -> str:
        """
        Base path for the current environment, plus `<hyphened-version>/` when
        `include_versioning` is set. e.g. "/dist/" -> "/dist/0-6-25/".

        Separators are not normalized; base paths are expected to end in "/".
        """
        path = self.prod_base_path if self._is_production else self.dev_base_path
        if include_versioning:
            path += self.get_hyphened_version(use_original, descriptor_path) + "/"
        return path

    def append_to_build_path(self, suffix: str | None = None) -> str:
        return self.get_build_path() + (suffix or "")

    def set_build_path_variable(
        self,
        scss_path: str | Path,
        include_versioning: bool = True,
        output_path: str | Path | None = None,
        descriptor_path: str | Path | None = None,
        region: VariableRegion = BUILD_PATH_REGION,
    ) -> Path:
        """
        Write the build path into the `$build-path` region of an SCSS file.

        `output_path` is for writing somewhere other than `scss_path` (tests, dry runs).
        """
        value = self.get_build_path(include_versioning, False, descriptor_path)
        return regions.splice_file(scss_path, region.variable_name, value, region.markers, output_path)

    def set_environment_variable(
        self,
        scss_path: str | Path,
        output_path: str | Path | None = None,
        descriptor_path: str | Path | None = None,
        region: VariableRegion = ENVIRONMENT_REGION,
    ) -> Path:
        """
        Write "prod" or "dev" into the `$environment` region of an SCSS file.

        `descriptor_path` is unused; the value depends only on the environment.
        """
        return regions.splice_file(scss_path, region.variable_name, self.environment_name, region.markers, output_path)

    def copy_to_build_path(
        self,
        src: str | Path,
        include_src_dir: bool = False,
        include_versioning: bool = True,
        output_root: str = "",
        descriptor_path: str | Path | None = None,
    ) -> str:
        options = copier.CopyOptions(
            include_src_dir=include_src_dir,
            include_versioning=include_versioning,
            output_root=output_root,
        )
        return copier.copy_to_build_path(self, src, options, descriptor_path)
