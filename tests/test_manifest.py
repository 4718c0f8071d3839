"""Tests for the manifest synchronizer"""

import json
from pathlib import Path

import pytest

from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.models import BuildContext, PublishedArtifact
from copy_with_hash.services.manifest import Manifest, resolve_manifest_path


def artifact(logical: str, published: str) -> PublishedArtifact:
    return PublishedArtifact(
        source_path=Path(logical),
        output_path=Path("out") / published,
        logical_path=logical,
        output_logical_path=published,
        size_bytes=1,
        was_written=True,
    )


def test_resolve_manifest_path_from_string():
    build = BuildContext(outdir=Path("out"))

    assert resolve_manifest_path("assets.json", build, Path("out")) == Path("out/assets.json")


def test_resolve_manifest_path_from_function():
    build = BuildContext(outdir=Path("out"), define={"TSUP_FORMAT": '"esm"'})

    path = resolve_manifest_path(
        lambda b: f"manifest.{b.format_label.lower()}.json", build, "out"
    )

    assert path == Path("out/manifest.esm.json")


@pytest.mark.parametrize("option", ["", lambda build: ""])
def test_resolve_manifest_path_rejects_empty(option):
    with pytest.raises(ConfigurationError, match="manifest option malformed!"):
        resolve_manifest_path(option, BuildContext(outdir=Path("out")), "out")


def test_load_missing_manifest_is_empty(tmp_path):
    manifest = Manifest.load(tmp_path / "manifest.json")

    assert manifest.entries == {}
    assert manifest.changed is False
    assert manifest.save() is False
    assert not (tmp_path / "manifest.json").exists()


def test_save_writes_pretty_json_on_change(tmp_path):
    path = tmp_path / "nested" / "manifest.json"
    manifest = Manifest.load(path)

    manifest.record(artifact("a.txt", "a-H1.txt"))

    assert manifest.changed is True
    assert manifest.save() is True
    assert path.read_text(encoding="utf-8") == '{\n  "a.txt": "a-H1.txt"\n}'
    assert manifest.changed is False


def test_save_is_idempotent(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps({"a.txt": "a-H1.txt", "b.txt": "b-H2.txt"}, indent=2))
    before = path.stat().st_mtime_ns
    content = path.read_bytes()

    manifest = Manifest.load(path)
    manifest.record(artifact("a.txt", "a-H1.txt"))

    assert manifest.changed is False
    assert manifest.save() is False
    assert path.stat().st_mtime_ns == before
    assert path.read_bytes() == content


def test_record_merges_into_existing_entries(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps({"old.txt": "old-H0.txt", "a.txt": "a-H1.txt"}))

    manifest = Manifest.load(path)
    manifest.record(artifact("a.txt", "a-H2.txt"))
    manifest.save()

    assert json.loads(path.read_text()) == {"old.txt": "old-H0.txt", "a.txt": "a-H2.txt"}
    assert manifest.get("a.txt") == "a-H2.txt"
    assert "old.txt" in manifest
    assert manifest.get("missing.txt") is None
    assert len(manifest) == 2


def test_load_rejects_non_object(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text("[1, 2]")

    with pytest.raises(ConfigurationError):
        Manifest.load(path)
