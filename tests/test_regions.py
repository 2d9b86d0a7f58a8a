from __future__ import annotations

from pathlib import Path

import pytest

from app_versioner.errors import MarkerError, NotFoundError
from app_versioner.regions import (
    BUILD_PATH_REGION,
    RegionMarkers,
    escape_marker,
    find_region,
    format_assignment,
    splice_file,
    splice_variable,
    upsert_region,
)

START = "//APP_VERSIONER_BUILD_PATH_START"
END = "//APP_VERSIONER_BUILD_PATH_END"


def test_escape_marker() -> None:
    assert escape_marker("a?b") == "a\\?b"
    assert escape_marker("a*b") == "a\\*b"
    assert escape_marker("/*x?*/") == "/\\*x\\?\\*/"
    # Only ? and * are escaped.
    assert escape_marker("a.b") == "a.b"


def test_format_assignment() -> None:
    assert format_assignment("$build-path", "/dist/1-0-0/") == '$build-path: "/dist/1-0-0/";'


def test_splice_creates_region_at_top() -> None:
    text = "body {\n  color: red;\n}\n"
    out = splice_variable(text, "$build-path", "/dist/2-0-0/", START, END)
    assert out == f'{START}\n$build-path: "/dist/2-0-0/";\n{END}\n\n' + text


def test_splice_replaces_existing_region_only() -> None:
    before = "// header\n"
    after = "\n\n$other: 1;\n"
    text = f'{before}{START}\n$build-path: "/dist/1-0-0/";\n$stale: 2;\n{END}{after}'

    out = splice_variable(text, "$build-path", "/dist/2-0-0/", START, END)

    assert out == f'{before}{START}\n$build-path: "/dist/2-0-0/";\n{END}{after}'


def test_splice_is_idempotent() -> None:
    text = "$a: 1;\n"
    once = splice_variable(text, "$environment", "dev", START, END)
    twice = splice_variable(once, "$environment", "dev", START, END)
    assert once == twice
    assert once.count(START) == 1


def test_splice_only_first_region_is_replaced() -> None:
    text = f"{START}\nold\n{END}\n{START}\nold\n{END}\n"
    out = splice_variable(text, "$x", "new", START, END)
    assert out == f'{START}\n$x: "new";\n{END}\n{START}\nold\n{END}\n'


@pytest.mark.parametrize("text", [f"{START}\n$x: 1;\n", f"$x: 1;\n{END}\n"])
def test_splice_with_one_marker_is_a_no_op(text: str) -> None:
    assert splice_variable(text, "$x", "v", START, END) == text


def test_splice_with_literal_star_and_question_markers() -> None:
    markers = RegionMarkers("/* vars? start */", "/* vars? end */")
    text = "a {}\n"
    once = upsert_region(text, markers, '$x: "1";')
    twice = upsert_region(once, markers, '$x: "2";')
    assert twice == '/* vars? start */\n$x: "2";\n/* vars? end */\n\na {}\n'


def test_splice_keeps_backslashes_in_value() -> None:
    out = splice_variable("", "$path", "C:\\build\\1-0-0\\", START, END)
    assert '$path: "C:\\build\\1-0-0\\";' in out


def test_find_region() -> None:
    text = f"x\n{START}\nbody\n{END}\ny"
    span = find_region(text, RegionMarkers(START, END))
    assert span is not None
    assert text[span[0] : span[1]] == f"{START}\nbody\n{END}"
    assert find_region("nothing here", RegionMarkers(START, END)) is None


def test_unbalanced_marker_raises_marker_error() -> None:
    with pytest.raises(MarkerError):
        splice_variable("", "$x", "v", "//(START", "//END")


def test_splice_file_writes_output(res: Path, temp_out: Path) -> None:
    out = temp_out / "out.scss"
    written = splice_file(res / "dev.scss", "$build-path", "/dist/", BUILD_PATH_REGION.markers, out)

    assert written == out
    text = out.read_text(encoding="utf-8")
    assert text.startswith(f'{START}\n$build-path: "/dist/";\n{END}\n\n@import "mixins";')
    # Source is untouched when an output path is given.
    assert START not in (res / "dev.scss").read_text(encoding="utf-8")


def test_splice_file_in_place(res: Path) -> None:
    scss = res / "dev.scss"
    splice_file(scss, "$environment", "prod", RegionMarkers("//ENV_START", "//ENV_END"))
    splice_file(scss, "$environment", "dev", RegionMarkers("//ENV_START", "//ENV_END"))
    text = scss.read_text(encoding="utf-8")
    assert '$environment: "dev";' in text
    assert "prod" not in text


def test_splice_file_missing_source(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        splice_file(tmp_path / "missing.scss", "$x", "v", BUILD_PATH_REGION.markers)


def test_splice_file_keeps_crlf_line_endings(tmp_path: Path) -> None:
    scss = tmp_path / "crlf.scss"
    scss.write_bytes(b"body {\r\n  color: red;\r\n}\r\n")

    splice_file(scss, "$build-path", "/dist/", BUILD_PATH_REGION.markers)
    once = scss.read_bytes()
    splice_file(scss, "$build-path", "/dist/", BUILD_PATH_REGION.markers)

    assert once.endswith(b"\n\nbody {\r\n  color: red;\r\n}\r\n")
    assert scss.read_bytes() == once
