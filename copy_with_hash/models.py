"""Data models for a publishing pass."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from copy_with_hash.config import settings
from copy_with_hash.constants import (
    FORMAT_DEFINE_KEY,
    SOURCEMAP_SEPARATE_FILE_MODES,
    UNCHANGED_MARKER,
)
from copy_with_hash.exceptions import ConfigurationError

SourcemapMode = bool | Literal["inline", "external", "linked", "both"] | None


class BuildContext(BaseModel):
    """What the host build reports about itself before bundling starts."""

    outdir: Path | None = Field(default=None, description="Build output directory")
    outfile: Path | None = Field(default=None, description="Single output file (used when outdir is unset)")
    sourcemap: SourcemapMode = Field(default=False, description="Sourcemap emission mode")
    define: dict[str, str] = Field(default_factory=dict, description="Compile-time defines")
    log_level: str | None = Field(default=None, description="Host log level ('silent' mutes output)")

    @property
    def output_root(self) -> Path:
        """Directory everything is published under."""
        if self.outdir is not None:
            return self.outdir
        if self.outfile is not None:
            return self.outfile.parent
        raise ConfigurationError("Build has neither outdir nor outfile")

    @property
    def format_label(self) -> str:
        """Output format label used for reporting, e.g. ``ESM``."""
        return self.define.get(FORMAT_DEFINE_KEY, "").replace('"', "").upper()

    @property
    def emits_separate_sourcemaps(self) -> bool:
        """True when the build writes ``.map`` files next to its assets."""
        return self.sourcemap in SOURCEMAP_SEPARATE_FILE_MODES


class BuildResult(BaseModel):
    """Outcome reported by the host once the build completes."""

    errors: list[str] = Field(default_factory=list, description="Build error messages")
    warnings: list[str] = Field(default_factory=list, description="Build warning messages")


FingerprintFunction = Callable[[bytes], str]
ManifestPathResolver = Callable[[BuildContext], str]


class Pattern(BaseModel):
    """One copy rule: a glob, its base directory and its destination."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    context: str = Field(default="", description="Directory the glob is relative to")
    from_: str = Field(..., alias="from", description="Glob matching source files")
    to: str = Field(default="", description="Sub-directory of the output root")

    @field_validator("context", "to", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def parse(cls, value: "str | Mapping[str, Any] | Pattern") -> "Pattern":
        """Normalize a bare glob string or a mapping into a Pattern."""
        if isinstance(value, Pattern):
            return value
        if isinstance(value, str):
            return cls(**{"from": value})
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(f"Unsupported pattern type: {type(value).__name__}")


class PublishOptions(BaseModel):
    """User configuration for the publishing engine."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    patterns: list[Pattern] = Field(..., description="Copy rules, applied in order")
    context: str = Field(default="", description="Root directory prefixed to every pattern")
    to: str = Field(default="", description="Sub-directory of the output root for all patterns")
    hash_function: FingerprintFunction | None = Field(
        default=None,
        alias="hash",
        description="Fingerprint function override (defaults to base-36 XXH64)",
    )
    manifest: str | ManifestPathResolver = Field(
        default_factory=lambda: settings.manifest_name,
        description="Manifest path or a function of the build context",
    )
    add_hashes_to_file_names: bool = Field(
        default_factory=lambda: settings.add_hashes_to_file_names,
        alias="addHashesToFileNames",
        description="Embed the fingerprint in published file names",
    )

    @field_validator("patterns", mode="before")
    @classmethod
    def _normalize_patterns(cls, value: Any) -> Any:
        if isinstance(value, (str, Mapping)):
            value = [value]
        return [Pattern.parse(item) for item in value]

    @field_validator("context", "to", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Task(BaseModel):
    """A matched source file and where it will be published."""

    model_config = ConfigDict(frozen=True)

    source_path: Path = Field(..., description="Matched source file")
    logical_path: str = Field(..., description="Path relative to the pattern context (POSIX)")
    output_dir: Path = Field(..., description="Directory the file is published into")


class PublishedArtifact(BaseModel):
    """Result of publishing one file during a pass."""

    source_path: Path = Field(..., description="File that was read")
    output_path: Path = Field(..., description="Published file on disk")
    logical_path: str = Field(..., description="Manifest key")
    output_logical_path: str = Field(..., description="Manifest value")
    size_bytes: int = Field(..., description="Size of the published file")
    was_written: bool = Field(..., description="False when the existing copy was kept")
    is_twin: bool = Field(default=False, description="Sourcemap copied alongside its asset")

    @property
    def report_key(self) -> str:
        """Size report key: the output path, marked when nothing was written."""
        if self.was_written:
            return str(self.output_path)
        return f"{UNCHANGED_MARKER} {self.output_path}"


class PassReport(BaseModel):
    """Summary of a completed pass."""

    artifacts: list[PublishedArtifact] = Field(default_factory=list)
    files: dict[str, int] = Field(default_factory=dict, description="Report key -> size in bytes")
    manifest_path: Path = Field(..., description="Manifest location")
    manifest_written: bool = Field(default=False, description="True when the manifest file changed")

    @property
    def written(self) -> list[PublishedArtifact]:
        return [artifact for artifact in self.artifacts if artifact.was_written]
