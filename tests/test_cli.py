"""Tests for the command line interface"""

import json
import logging
from pathlib import Path

from click.testing import CliRunner
from rich.logging import RichHandler

from copy_with_hash.main import cli
from copy_with_hash.services.fingerprint import xxh64_fingerprint


def write_config(text: str) -> Path:
    path = Path("copy.yaml")
    path.write_text(text, encoding="utf-8")
    return path


def test_publish_command(write_source):
    write_source("assets/app.js", "app")
    write_config("context: assets\npatterns: ['*.js']\n")

    result = CliRunner().invoke(cli, ["publish", "-c", "copy.yaml", "--outdir", "out"])

    assert result.exit_code == 0, result.output
    assert "Published 1 of 1" in result.output
    manifest = json.loads(Path("out/manifest.json").read_text())
    assert manifest == {"app.js": f"app-{xxh64_fingerprint(b'app')}.js"}


def test_publish_command_overrides(write_source):
    write_source("assets/app.js", "app")
    write_config("context: assets\npatterns: ['*.js']\n")

    result = CliRunner().invoke(
        cli,
        [
            "publish", "-c", "copy.yaml", "--outdir", "out",
            "--no-hash", "--manifest", "manifest.{format}.json", "--format", "esm",
            "--silent",
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(Path("out/manifest.esm.json").read_text()) == {"app.js": "app.js"}
    assert "Published" not in result.output


def test_publish_command_reports_configuration_errors(workspace):
    write_config("patterns: ['missing/*.js']\n")

    result = CliRunner().invoke(cli, ["publish", "-c", "copy.yaml", "--outdir", "out"])

    assert result.exit_code == 1
    assert "No files found!" in result.output
    assert not Path("out/manifest.json").exists()


def test_publish_command_needs_output(workspace):
    write_config("patterns: ['*.js']\n")

    result = CliRunner().invoke(cli, ["publish", "-c", "copy.yaml"])

    assert result.exit_code == 2


def test_fingerprint_command(write_source):
    write_source("a.txt", "hello")

    result = CliRunner().invoke(cli, ["fingerprint", "a.txt"])

    assert result.exit_code == 0
    assert result.output == f"{xxh64_fingerprint(b'hello')}  a.txt\n"


def test_show_manifest_command(workspace):
    Path("manifest.json").write_text(json.dumps({"a.txt": "a-H1.txt"}))

    result = CliRunner().invoke(cli, ["show-manifest", "manifest.json"])

    assert result.exit_code == 0
    assert "a-H1.txt" in result.output


def test_verbose_installs_single_console_handler(write_source):
    write_source("a.txt", "hello")

    result = CliRunner().invoke(cli, ["-v", "fingerprint", "a.txt"])

    assert result.exit_code == 0
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], RichHandler)
