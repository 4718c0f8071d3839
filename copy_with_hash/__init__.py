"""
copy-with-hash: publish build assets under content-fingerprinted names.

Provides:
- Base-36 XXH64 fingerprints (pluggable)
- Timestamp-based staleness checks with self-healing copies
- A JSON manifest mapping logical asset paths to published paths
"""

from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.models import (
    BuildContext,
    BuildResult,
    PassReport,
    Pattern,
    PublishedArtifact,
    PublishOptions,
    Task,
)
from copy_with_hash.plugin import CopyWithHashPlugin, run_pass
from copy_with_hash.services.fingerprint import int_to_base, xxh64_fingerprint
from copy_with_hash.services.manifest import Manifest

__version__ = "0.1.0"

__all__ = [
    "BuildContext",
    "BuildResult",
    "ConfigurationError",
    "CopyWithHashPlugin",
    "Manifest",
    "PassReport",
    "Pattern",
    "PublishOptions",
    "PublishedArtifact",
    "Task",
    "int_to_base",
    "run_pass",
    "xxh64_fingerprint",
]
