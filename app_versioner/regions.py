"""
regions.py

Responsibility: Keep one generated variable line between two marker comments.

A region looks like this in an SCSS file:

    //APP_VERSIONER_BUILD_PATH_START
    $build-path: "/dist/1-4-2/";
    //APP_VERSIONER_BUILD_PATH_END

Rules:
- Markers are literal text. Only `?` and `*` are escaped when the search
  pattern is built, so markers containing other regex metacharacters may
  misbehave.
- If neither marker occurs, an empty region is added at the top of the text.
- The first region found has its whole interior replaced, so repeated splices
  with the same value give the same text.
- If only one of the two markers occurs, the text is returned unchanged.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from app_versioner.errors import MarkerError
from app_versioner.files import read_text, write_text

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionMarkers:
    start: str
    end: str


@dataclass(frozen=True)
class VariableRegion:
    """An SCSS variable name and the markers that delimit its generated line."""

    variable_name: str
    markers: RegionMarkers


BUILD_PATH_REGION = VariableRegion(
    variable_name="$build-path",
    markers=RegionMarkers("//APP_VERSIONER_BUILD_PATH_START", "//APP_VERSIONER_BUILD_PATH_END"),
)

ENVIRONMENT_REGION = VariableRegion(
    variable_name="$environment",
    markers=RegionMarkers("//APP_VERSIONER_ENVIRONMENT_START", "//APP_VERSIONER_ENVIRONMENT_END"),
)


def escape_marker(marker: str) -> str:
    return marker.replace("?", "\\?").replace("*", "\\*")


def format_assignment(variable_name: str, value: object) -> str:
    return f'{variable_name}: "{value}";'


def _region_pattern(markers: RegionMarkers) -> re.Pattern[str]:
    try:
        return re.compile(escape_marker(markers.start) + r"[\s\S]*?" + escape_marker(markers.end))
    except re.error as e:
        raise MarkerError(f"Markers do not form a valid search pattern: {markers.start!r} / {markers.end!r}") from e


def find_region(text: str, markers: RegionMarkers) -> tuple[int, int] | None:
    """
    Return the (start, end) span of the first region, markers included.
    """
    m = _region_pattern(markers).search(text)
    return m.span() if m else None


def upsert_region(text: str, markers: RegionMarkers, body: str) -> str:
    if markers.start not in text and markers.end not in text:
        text = f"{markers.start}\n{markers.end}\n\n{text}"

    span = find_region(text, markers)
    if span is None:
        log.debug("Incomplete region for %r/%r; text left unchanged", markers.start, markers.end)
        return text

    begin, end = span
    return f"{text[:begin]}{markers.start}\n{body}\n{markers.end}{text[end:]}"


def splice_variable(text: str, variable_name: str, value: object, start_marker: str, end_marker: str) -> str:
    return upsert_region(text, RegionMarkers(start_marker, end_marker), format_assignment(variable_name, value))


def splice_file(
    source_path: str | Path,
    variable_name: str,
    value: object,
    markers: RegionMarkers,
    output_path: str | Path | None = None,
) -> Path:
    """
    Splice `variable_name: "value";` into the file at `source_path`.

    The result is written to `output_path` when given, otherwise back to
    `source_path`. Returns the path written.
    """
    text = read_text(source_path, kind="Stylesheet")
    result = splice_variable(text, variable_name, value, markers.start, markers.end)

    target = Path(output_path or source_path)
    write_text(target, result)
    log.info("Set %s = %r in %s", variable_name, value, target)
    return target
