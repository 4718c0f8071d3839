"""
Publisher for fingerprinted assets.

Decides, per task, whether the published copy is current and copies the
source when it is not. Staleness is judged by modification time: a copy is
current when it exists and carries the source's mtime.
"""

import logging
import shutil
from collections.abc import Container, Iterable
from pathlib import Path, PurePosixPath

from copy_with_hash.constants import SOURCEMAP_SEPARATE_FILE_MODES, SOURCEMAP_SUFFIX
from copy_with_hash.models import (
    FingerprintFunction,
    PublishedArtifact,
    SourcemapMode,
    Task,
)
from copy_with_hash.services.fingerprint import xxh64_fingerprint

logger = logging.getLogger(__name__)


class Publisher:
    """
    Copies task sources to content-addressed output paths.

    Supports:
    - Fingerprinted or plain output names
    - Skipping copies whose timestamp already matches the source
    - Sourcemap twins published under the asset's fingerprint
    """

    def __init__(
        self,
        hash_function: FingerprintFunction | None = None,
        add_hashes_to_file_names: bool = True,
        sourcemap: SourcemapMode = False,
    ):
        """
        Initialize publisher.

        Args:
            hash_function: Fingerprint function (defaults to base-36 XXH64)
            add_hashes_to_file_names: Embed the fingerprint in output names
            sourcemap: Build sourcemap mode (decides whether .map files are copied)
        """
        self.hash_function = hash_function or xxh64_fingerprint
        self.add_hashes_to_file_names = add_hashes_to_file_names
        self.sourcemap = sourcemap

    @property
    def copies_sourcemaps(self) -> bool:
        """True when separate .map files exist and should travel with assets."""
        return self.sourcemap in SOURCEMAP_SEPARATE_FILE_MODES

    def output_file_name(self, source_path: Path, fingerprint: str) -> str:
        """``<basename>-<fingerprint><ext>``, or ``<basename><ext>`` when hashing is off."""
        source_path = Path(source_path)
        if not self.add_hashes_to_file_names:
            return source_path.name
        return f"{source_path.stem}-{fingerprint}{source_path.suffix}"

    @staticmethod
    def copy_if_stale(source: Path, destination: Path) -> bool:
        """
        Copy source over destination unless their mtimes already match.

        The source mtime is preserved on the copy.

        Returns:
            True if the destination was written
        """
        if destination.exists():
            if source.stat().st_mtime_ns == destination.stat().st_mtime_ns:
                return False
            logger.debug(f"Timestamp drift on {destination}, re-copying")

        shutil.copy2(source, destination)
        return True

    def publish(
        self, task: Task, known_sources: Container[str] = ()
    ) -> list[PublishedArtifact]:
        """
        Publish one task (and its sourcemap twin, when applicable).

        Args:
            task: Task to publish
            known_sources: Source paths of every task in the pass; a .map
                file whose asset is among them is left to that asset

        Returns:
            Published artifacts (empty when the task is skipped)

        Raises:
            OSError: If the source cannot be read or copied
        """
        source = task.source_path
        is_map = source.suffix == SOURCEMAP_SUFFIX

        primary = None
        if is_map:
            if not self.copies_sourcemaps:
                logger.debug(f"Skipping sourcemap {source} (mode={self.sourcemap!r})")
                return []
            if str(source)[: -len(SOURCEMAP_SUFFIX)] in known_sources:
                return []
            primary = Path(str(source)[: -len(SOURCEMAP_SUFFIX)])
            if not primary.is_file():
                primary = None

        if primary is not None:
            # Named after the asset so the map sits next to its published copy
            fingerprint = self.hash_function(primary.read_bytes())
            file_name = f"{self.output_file_name(primary, fingerprint)}{SOURCEMAP_SUFFIX}"
        else:
            fingerprint = self.hash_function(source.read_bytes())
            file_name = self.output_file_name(source, fingerprint)
        output_logical_path = str(
            PurePosixPath(task.logical_path).parent / file_name
        )

        artifacts = [
            self._publish_file(
                source,
                task.output_dir / file_name,
                task.logical_path,
                output_logical_path,
                is_twin=primary is not None,
            )
        ]

        if not is_map and self.copies_sourcemaps:
            twin = self._publish_twin(task, file_name, output_logical_path)
            if twin is not None:
                artifacts.append(twin)

        return artifacts

    def publish_all(self, tasks: Iterable[Task]) -> list[PublishedArtifact]:
        """Publish every task, in order."""
        tasks = list(tasks)
        known_sources = {str(task.source_path) for task in tasks}
        artifacts: list[PublishedArtifact] = []
        for task in tasks:
            artifacts.extend(self.publish(task, known_sources))
        return artifacts

    def _publish_twin(
        self, task: Task, file_name: str, output_logical_path: str
    ) -> PublishedArtifact | None:
        twin_source = Path(f"{task.source_path}{SOURCEMAP_SUFFIX}")
        try:
            return self._publish_file(
                twin_source,
                task.output_dir / f"{file_name}{SOURCEMAP_SUFFIX}",
                f"{task.logical_path}{SOURCEMAP_SUFFIX}",
                f"{output_logical_path}{SOURCEMAP_SUFFIX}",
                is_twin=True,
            )
        except OSError as e:
            logger.debug(f"No sourcemap published for {task.source_path}: {e}")
            return None

    def _publish_file(
        self,
        source: Path,
        output_path: Path,
        logical_path: str,
        output_logical_path: str,
        is_twin: bool = False,
    ) -> PublishedArtifact:
        was_written = self.copy_if_stale(source, output_path)
        if was_written:
            logger.debug(f"Published {source} -> {output_path}")

        return PublishedArtifact(
            source_path=source,
            output_path=output_path,
            logical_path=logical_path,
            output_logical_path=output_logical_path,
            size_bytes=output_path.stat().st_size,
            was_written=was_written,
            is_twin=is_twin,
        )


__all__ = ["Publisher"]
