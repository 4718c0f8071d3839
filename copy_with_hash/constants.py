"""Package-wide constants.

Centralizes names and defaults shared by the engine, the CLI and the tests.
"""

PLUGIN_NAME = "copy-files-with-hash"

# Manifest
MANIFEST_DEFAULT = "manifest.json"
MANIFEST_INDENT = 2

# Fingerprint alphabet (base-36, upper case)
BASE_36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
XXH64_SEED = 0

# Size report
UNCHANGED_MARKER = "(unchanged)"

# Sourcemaps
SOURCEMAP_SUFFIX = ".map"
# Modes in which the bundler writes a separate .map file next to the asset
SOURCEMAP_SEPARATE_FILE_MODES = (True, "external", "linked", "both")

# Build define that carries the output format label (tsup convention)
FORMAT_DEFINE_KEY = "TSUP_FORMAT"

# Log level reported by the host that mutes the engine
SILENT_LOG_LEVEL = "silent"

__all__ = [
    "PLUGIN_NAME",
    "MANIFEST_DEFAULT",
    "MANIFEST_INDENT",
    "BASE_36",
    "XXH64_SEED",
    "UNCHANGED_MARKER",
    "SOURCEMAP_SUFFIX",
    "SOURCEMAP_SEPARATE_FILE_MODES",
    "FORMAT_DEFINE_KEY",
    "SILENT_LOG_LEVEL",
]
