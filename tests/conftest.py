"""Shared fixtures: an isolated working directory with dated source files."""

import os
from pathlib import Path

import pytest

from copy_with_hash.models import BuildContext
from copy_with_hash.services.report import CollectingReportSink

# Fixed, clearly past timestamp for source files (2020-09-13)
SOURCE_MTIME = 1_600_000_000


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Run the test from inside a fresh temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_source(workspace):
    """Create a source file with a fixed mtime; returns its relative path."""

    def _write(rel_path: str, content: str | bytes, mtime: int = SOURCE_MTIME) -> Path:
        path = Path(rel_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        os.utime(path, (mtime, mtime))
        return path

    return _write


@pytest.fixture
def build():
    """Successful build writing to ./out."""
    return BuildContext(outdir=Path("out"))


@pytest.fixture
def sink():
    return CollectingReportSink()
