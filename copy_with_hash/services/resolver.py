"""Turn copy patterns into per-file publishing tasks."""

import glob
import logging
import os
from pathlib import Path
from typing import Iterable, Protocol

from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.models import Pattern, Task

logger = logging.getLogger(__name__)


class Matcher(Protocol):
    """Expands a glob into the files it matches."""

    def match(self, pattern: str) -> list[str]:
        ...


class GlobMatcher:
    """Matcher backed by the standard library ``glob`` module.

    ``**`` matches across directories. Only regular files are returned,
    sorted so that task order is stable between runs.
    """

    def match(self, pattern: str) -> list[str]:
        if not pattern:
            return []
        return sorted(
            path for path in glob.glob(pattern, recursive=True)
            if os.path.isfile(path)
        )


def _join(*parts: str) -> str:
    """Join non-empty path segments (empty segments are dropped)."""
    parts = tuple(part for part in parts if part)
    return os.path.join(*parts) if parts else ""


def resolve_tasks(
    patterns: Iterable[Pattern],
    root_context: str | Path,
    destination: str | Path,
    matcher: Matcher | None = None,
) -> dict[str, Task]:
    """
    Resolve patterns into tasks keyed by source path.

    Output directories are created as a side effect. A later pattern that
    matches an already seen file replaces its task.

    Args:
        patterns: Copy rules, in order
        root_context: Directory prefixed to every pattern
        destination: Output root (including the global ``to``)
        matcher: Glob expander (defaults to GlobMatcher)

    Returns:
        Dict of source path -> Task

    Raises:
        ConfigurationError: If a pattern matches no files
    """
    matcher = matcher or GlobMatcher()
    root_context = str(root_context) if root_context else ""
    destination = Path(destination)
    tasks: dict[str, Task] = {}

    for pattern in patterns:
        base = _join(root_context, pattern.context)
        from_glob = _join(base, pattern.from_)
        logger.debug(f"Matching {from_glob!r}")

        files = matcher.match(from_glob)
        if not files:
            raise ConfigurationError(f"No files found! from:{pattern.from_}")
        logger.debug(f"Matched {len(files)} file(s) for {from_glob!r}")

        for file in files:
            logical_path = Path(os.path.relpath(file, base or os.curdir)).as_posix()
            output_dir = destination / pattern.to / os.path.dirname(logical_path)
            if not output_dir.is_dir():
                output_dir.mkdir(parents=True, exist_ok=True)

            tasks[str(file)] = Task(
                source_path=Path(file),
                logical_path=logical_path,
                output_dir=output_dir,
            )

    return tasks


__all__ = ["Matcher", "GlobMatcher", "resolve_tasks"]
