"""
Asset manifest: logical path -> published path.

The manifest is loaded at the start of every pass, updated in memory and
written back only when its content actually changed, so repeated passes over
unchanged sources leave the file (and its mtime) alone.
"""

import json
import logging
from pathlib import Path

from copy_with_hash.constants import MANIFEST_INDENT
from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.models import BuildContext, ManifestPathResolver, PublishedArtifact

logger = logging.getLogger(__name__)


def resolve_manifest_path(
    manifest: str | ManifestPathResolver,
    build: BuildContext,
    output_root: str | Path,
) -> Path:
    """
    Resolve the manifest option to a file path under the output root.

    Args:
        manifest: File name, or a function of the build context returning one
        build: Current build context
        output_root: Directory the manifest lives in

    Returns:
        Manifest file path

    Raises:
        ConfigurationError: If the option resolves to an empty path
    """
    name = manifest(build) if callable(manifest) else manifest
    if not name:
        raise ConfigurationError("manifest option malformed!")
    return Path(output_root) / name


def _serialize(entries: dict[str, str]) -> str:
    return json.dumps(entries, ensure_ascii=False, separators=(",", ":"))


class Manifest:
    """In-memory manifest tied to a file on disk."""

    def __init__(self, path: Path, entries: dict[str, str] | None = None):
        """
        Initialize manifest.

        Args:
            path: Manifest file location
            entries: Entries as loaded from disk
        """
        self.path = Path(path)
        self.entries: dict[str, str] = dict(entries or {})
        self._snapshot = _serialize(self.entries)

    @classmethod
    def load(cls, path: Path) -> "Manifest":
        """
        Load a manifest, or start an empty one if the file does not exist.

        Raises:
            ConfigurationError: If the file is not a JSON object
        """
        path = Path(path)
        if not path.exists():
            logger.debug(f"No manifest at {path}, starting empty")
            return cls(path)

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Manifest {path} must contain a JSON object, got {type(data).__name__}"
            )
        return cls(path, data)

    def record(self, artifact: PublishedArtifact) -> None:
        """Point the artifact's logical path at its published path."""
        self.entries[artifact.logical_path] = artifact.output_logical_path

    def get(self, logical_path: str, default: str | None = None) -> str | None:
        """Published path for a logical path."""
        return self.entries.get(logical_path, default)

    def __contains__(self, logical_path: object) -> bool:
        return logical_path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def changed(self) -> bool:
        """True when the entries differ from what was loaded."""
        return _serialize(self.entries) != self._snapshot

    def save(self) -> bool:
        """
        Write the manifest if it changed.

        Returns:
            True if the file was written
        """
        if not self.changed:
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.entries, f, indent=MANIFEST_INDENT, ensure_ascii=False)

        self._snapshot = _serialize(self.entries)
        logger.debug(f"Wrote manifest {self.path} ({len(self.entries)} entries)")
        return True


__all__ = ["Manifest", "resolve_manifest_path"]
