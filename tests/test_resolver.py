"""Tests for pattern resolution"""

from pathlib import Path

import pytest

from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.models import Pattern
from copy_with_hash.services.resolver import GlobMatcher, resolve_tasks


class StubMatcher:
    """Returns canned matches and remembers the globs it was asked for."""

    def __init__(self, matches):
        self.matches = matches
        self.calls = []

    def match(self, pattern):
        self.calls.append(pattern)
        return self.matches.get(pattern, [])


def test_glob_matcher_returns_sorted_files_only(write_source):
    write_source("assets/b.js", "b")
    write_source("assets/a.js", "a")
    write_source("assets/nested/c.js", "c")
    Path("assets/dir.js").mkdir()

    matcher = GlobMatcher()

    assert matcher.match("assets/*.js") == [
        str(Path("assets/a.js")),
        str(Path("assets/b.js")),
    ]
    assert str(Path("assets/nested/c.js")) in matcher.match("assets/**/*.js")
    assert matcher.match("") == []


def test_resolve_string_pattern(write_source):
    write_source("assets/js/app.js", "app")

    tasks = resolve_tasks([Pattern.parse("assets/js/*.js")], "", "out")

    task = tasks[str(Path("assets/js/app.js"))]
    assert task.logical_path == "assets/js/app.js"
    assert task.output_dir == Path("out/assets/js")
    assert task.output_dir.is_dir()


def test_resolve_with_contexts_and_to(write_source):
    write_source("src/vendor/lib/x.css", "x")

    tasks = resolve_tasks(
        [Pattern.parse({"context": "vendor", "from": "lib/*.css", "to": "static"})],
        "src",
        "out",
    )

    task = tasks[str(Path("src/vendor/lib/x.css"))]
    assert task.logical_path == "lib/x.css"
    assert task.output_dir == Path("out/static/lib")
    assert task.output_dir.is_dir()


def test_resolve_fails_on_empty_match(workspace):
    with pytest.raises(ConfigurationError, match="No files found! from:missing/\\*.js"):
        resolve_tasks([Pattern.parse("missing/*.js")], "", "out")


def test_resolve_stops_at_first_empty_pattern(write_source):
    write_source("a/one.txt", "1")

    with pytest.raises(ConfigurationError):
        resolve_tasks(
            [Pattern.parse("a/*.txt"), Pattern.parse("b/*.txt")],
            "",
            "out",
        )
    # Directories for the first pattern were already created
    assert Path("out/a").is_dir()


def test_later_pattern_overwrites_task(workspace):
    matcher = StubMatcher({
        "a/*.txt": ["a/x.txt"],
        "a/x.txt": ["a/x.txt"],
    })

    tasks = resolve_tasks(
        [
            Pattern.parse("a/*.txt"),
            Pattern.parse({"context": "a", "from": "x.txt", "to": "other"}),
        ],
        "",
        Path("out"),
        matcher,
    )

    assert len(tasks) == 1
    assert tasks["a/x.txt"].logical_path == "x.txt"
    assert tasks["a/x.txt"].output_dir == Path("out/other")
    assert matcher.calls == ["a/*.txt", str(Path("a/x.txt"))]


def test_pattern_parse_normalizes_shapes():
    assert Pattern.parse("*.js") == Pattern(**{"from": "*.js"})
    parsed = Pattern.parse({"from": "*.css", "context": None, "to": "css"})
    assert parsed.context == ""
    assert parsed.from_ == "*.css"
    assert parsed.to == "css"
    assert Pattern.parse(parsed) is parsed

    with pytest.raises(TypeError):
        Pattern.parse(42)
