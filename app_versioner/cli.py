"""
cli.py

Responsibility: CLI entrypoint for app-versioner.

Single-purpose commands map onto the library (`version`, `bump`, `build-path`,
`scss-build-path`, `scss-env`, `copy`). `run` drives a whole build from a
YAML config:
1) Open a `BuildSession` (captures the pre-bump version)
2) (Optional) Bump the descriptor version
3) Write `$build-path` / `$environment` into the configured SCSS files
4) Copy artifacts into the versioned build directory

Library concerns stay in their modules:
- Descriptor + semver: `descriptor.py`
- Build paths: `session.py`
- SCSS regions: `regions.py`
- Copies: `copier.py`
- Config file: `config.py`
"""

from __future__ import annotations

import argparse
import logging
import sys

from app_versioner import __version__
from app_versioner.config import DEFAULT_CONFIG_PATH, load_config
from app_versioner.descriptor import BUMP_KINDS, DEFAULT_DESCRIPTOR_PATH, bump_version, get_version
from app_versioner.errors import VersionerError
from app_versioner.regions import BUILD_PATH_REGION, ENVIRONMENT_REGION, RegionMarkers, VariableRegion
from app_versioner.session import BuildSession, to_hyphen_token

log = logging.getLogger("app_versioner")


def _session(args: argparse.Namespace) -> BuildSession:
    return BuildSession(args.dev, args.prod, is_production=bool(args.production), descriptor_path=args.package)


def _region(args: argparse.Namespace, default: VariableRegion) -> VariableRegion:
    # CLI overrides
    return VariableRegion(
        variable_name=args.var or default.variable_name,
        markers=RegionMarkers(args.start or default.markers.start, args.end or default.markers.end),
    )


def version_cmd(args: argparse.Namespace) -> int:
    version = get_version(args.package)
    print(to_hyphen_token(version) if args.hyphen else version)
    return 0


def bump_cmd(args: argparse.Namespace) -> int:
    print(bump_version(args.kind, args.package, args.output))
    return 0


def build_path_cmd(args: argparse.Namespace) -> int:
    session = _session(args)
    print(session.get_build_path(not args.no_versioning, bool(args.original)))
    return 0


def scss_build_path_cmd(args: argparse.Namespace) -> int:
    session = _session(args)
    session.set_build_path_variable(
        args.scss_path,
        include_versioning=not args.no_versioning,
        output_path=args.output,
        region=_region(args, BUILD_PATH_REGION),
    )
    return 0


def scss_env_cmd(args: argparse.Namespace) -> int:
    session = _session(args)
    session.set_environment_variable(args.scss_path, output_path=args.output, region=_region(args, ENVIRONMENT_REGION))
    return 0


def copy_cmd(args: argparse.Namespace) -> int:
    session = _session(args)
    print(
        session.copy_to_build_path(
            args.src,
            include_src_dir=bool(args.include_src_dir),
            include_versioning=not args.no_versioning,
            output_root=args.output_root,
        )
    )
    return 0


def run_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    # CLI overrides
    production = config.production if args.production is None else bool(args.production)
    bump = None if args.no_bump else (args.bump or config.bump)

    session = BuildSession(config.dev_path, config.prod_path, production, config.descriptor)
    log.info("Building %s (%s)", session.original_version, session.environment_name)

    if bump:
        bump_version(bump, config.descriptor)

    for scss_path in config.scss.build_path:
        session.set_build_path_variable(scss_path, include_versioning=config.scss.include_versioning)
    for scss_path in config.scss.environment:
        session.set_environment_variable(scss_path)

    for entry in config.copy:
        session.copy_to_build_path(
            entry.src,
            include_src_dir=entry.include_src_dir,
            include_versioning=entry.include_versioning,
            output_root=config.output_root,
        )

    print(config.output_root + session.get_build_path())
    return 0


def _session_args() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--dev", required=True, help="Development build base path (e.g. /dist/)")
    p.add_argument("--prod", required=True, help="Production build base path")
    p.add_argument("--production", action="store_true", help="Target the production base path")
    p.add_argument("--package", default=DEFAULT_DESCRIPTOR_PATH, help=f"Descriptor path (default: {DEFAULT_DESCRIPTOR_PATH})")
    return p


def _region_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--output", default=None, help="Write here instead of overwriting the SCSS file")
    p.add_argument("--var", default=None, help="SCSS variable name")
    p.add_argument("--start", default=None, help="Start marker comment")
    p.add_argument("--end", default=None, help="End marker comment")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="app-versioner", description="Versioned build paths and SCSS variables from package.json")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    sub = p.add_subparsers(dest="command", required=True)
    session_args = _session_args()

    v = sub.add_parser("version", help="Print the descriptor version")
    v.add_argument("--package", default=DEFAULT_DESCRIPTOR_PATH, help=f"Descriptor path (default: {DEFAULT_DESCRIPTOR_PATH})")
    v.add_argument("--hyphen", action="store_true", help="Print the hyphenated form (1-2-3)")
    v.set_defaults(func=version_cmd)

    b = sub.add_parser("bump", help="Increment the descriptor version and write it back")
    b.add_argument("kind", nargs="?", default="patch", choices=BUMP_KINDS, help="Bump kind (default: patch)")
    b.add_argument("--package", default=DEFAULT_DESCRIPTOR_PATH, help=f"Descriptor path (default: {DEFAULT_DESCRIPTOR_PATH})")
    b.add_argument("--output", default=None, help="Write the bumped descriptor here instead")
    b.set_defaults(func=bump_cmd)

    bp = sub.add_parser("build-path", parents=[session_args], help="Print the build path")
    bp.add_argument("--no-versioning", action="store_true", help="Omit the versioned directory")
    bp.add_argument("--original", action="store_true", help="Use the version read at startup")
    bp.set_defaults(func=build_path_cmd)

    sb = sub.add_parser("scss-build-path", parents=[session_args], help="Write $build-path into an SCSS file")
    sb.add_argument("scss_path", help="SCSS file to update")
    sb.add_argument("--no-versioning", action="store_true", help="Omit the versioned directory")
    _region_args(sb)
    sb.set_defaults(func=scss_build_path_cmd)

    se = sub.add_parser("scss-env", parents=[session_args], help="Write $environment into an SCSS file")
    se.add_argument("scss_path", help="SCSS file to update")
    _region_args(se)
    se.set_defaults(func=scss_env_cmd)

    c = sub.add_parser("copy", parents=[session_args], help="Copy a file or directory into the build path")
    c.add_argument("src", help="File or directory to copy")
    c.add_argument("--include-src-dir", action="store_true", help="Keep the source directory's own name in the output")
    c.add_argument("--no-versioning", action="store_true", help="Omit the versioned directory")
    c.add_argument("--output-root", default="", help="Prefix for the destination path")
    c.set_defaults(func=copy_cmd)

    r = sub.add_parser("run", help="Bump, update SCSS files and copy artifacts from a config file")
    r.add_argument("--config", default=DEFAULT_CONFIG_PATH, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    r.add_argument("--production", dest="production", action="store_true", default=None, help="Override: production build")
    r.add_argument("--development", dest="production", action="store_false", default=None, help="Override: development build")
    r.add_argument("--bump", default=None, choices=BUMP_KINDS, help="Override the config's bump kind")
    r.add_argument("--no-bump", action="store_true", help="Skip the version bump")
    r.set_defaults(func=run_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        return int(args.func(args))
    except VersionerError as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
