"""Publish configuration loaded from YAML files."""

import importlib
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.models import BuildContext, FingerprintFunction, PublishOptions

logger = logging.getLogger(__name__)

FORMAT_PLACEHOLDER = "{format}"


def import_hash_function(spec: str) -> FingerprintFunction:
    """
    Import a fingerprint function from a ``module:function`` string.

    Raises:
        ConfigurationError: If the string is malformed or the target is not callable
    """
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"hash must look like 'module:function', got {spec!r}")

    try:
        target = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import hash function {spec!r}: {e}") from e

    if not callable(target):
        raise ConfigurationError(f"hash function {spec!r} is not callable")
    return target


def format_manifest_resolver(template: str):
    """Manifest resolver that fills ``{format}`` with the build's format label."""

    def resolve(build: BuildContext) -> str:
        return template.replace(FORMAT_PLACEHOLDER, build.format_label.lower())

    return resolve


class PublishConfig:
    """Publish configuration loader."""

    def __init__(self, config_path: str | Path):
        """
        Load publish configuration.

        Args:
            config_path: Path to the YAML config file
        """
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        self.options = self._load_options()
        logger.info(
            f"Loaded {len(self.options.patterns)} pattern(s) from {self.config_path}"
        )

    def _load_options(self) -> PublishOptions:
        """Load and validate publish options from YAML."""
        with open(self.config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config {self.config_path} must be a mapping, got {type(data).__name__}"
            )

        try:
            return PublishOptions.model_validate(self._prepare(data))
        except ValidationError as e:
            logger.error(f"Invalid publish configuration: {e}")
            raise ConfigurationError(f"Invalid publish configuration in {self.config_path}: {e}") from e

    @staticmethod
    def _prepare(data: dict[str, Any]) -> dict[str, Any]:
        """Turn YAML-only shorthands into option values."""
        data = dict(data)

        hash_spec = data.get("hash")
        if isinstance(hash_spec, str):
            data["hash"] = import_hash_function(hash_spec)

        manifest = data.get("manifest")
        if isinstance(manifest, str) and FORMAT_PLACEHOLDER in manifest:
            data["manifest"] = format_manifest_resolver(manifest)
        elif manifest is None:
            data.pop("manifest", None)

        return data

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"PublishConfig(path='{self.config_path}', "
            f"patterns={len(self.options.patterns)})"
        )


def load_options(config_path: str | Path) -> PublishOptions:
    """Load PublishOptions from a YAML file."""
    return PublishConfig(config_path).options


__all__ = ["PublishConfig", "load_options", "import_hash_function", "format_manifest_resolver"]
