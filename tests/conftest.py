from __future__ import annotations

import json
from pathlib import Path

import pytest

SAMPLE_JSON_WITH_COMMENTS = """\
{
  // a line comment
  "name": "sample",
  /* a block
     comment */
  "description": "Sample config // not a comment",
  "homepage": "https://example.invalid/*also-not-a-comment*/"
}
"""

DEV_SCSS = """\
@import "mixins";

body {
  color: #333;
}
"""


@pytest.fixture()
def res(tmp_path: Path) -> Path:
    """
    Test resources laid out like a small front-end project.
    """
    root = tmp_path / "test-resources"
    root.mkdir()

    (root / "fake-package-1.json").write_text(
        json.dumps({"name": "fake-package-1", "version": "1.0.0", "private": True}, indent=2), encoding="utf-8"
    )
    (root / "fake-package-2.json").write_text(
        json.dumps({"name": "fake-package-2", "version": "2.0.0", "scripts": {"build": "gulp"}}, indent=2),
        encoding="utf-8",
    )
    (root / "sample.json").write_text(SAMPLE_JSON_WITH_COMMENTS, encoding="utf-8")
    (root / "dev.scss").write_text(DEV_SCSS, encoding="utf-8")

    (root / "stuff1").mkdir()
    (root / "stuff1" / "file1.css").write_text("a { color: red; }\n", encoding="utf-8")
    (root / "stuff2" / "nested").mkdir(parents=True)
    (root / "stuff2" / "file2.css").write_text("b { color: blue; }\n", encoding="utf-8")
    (root / "stuff2" / "nested" / "file3.css").write_text("i { color: green; }\n", encoding="utf-8")

    return root


@pytest.fixture()
def temp_out(res: Path) -> Path:
    out = res / "temp"
    out.mkdir()
    return out
