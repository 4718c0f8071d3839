"""
Build plugin that publishes fingerprinted copies of matched files.

The plugin follows the bundler lifecycle: ``setup`` runs while the build is
configured (patterns are resolved and output directories created), ``on_end``
runs once the build has finished (files are copied and the manifest synced).
Nothing is copied and the manifest is left untouched when the build failed.
"""

import logging
from collections.abc import Mapping
from typing import Any

from copy_with_hash.constants import PLUGIN_NAME, SILENT_LOG_LEVEL, UNCHANGED_MARKER
from copy_with_hash.models import (
    BuildContext,
    BuildResult,
    PassReport,
    PublishOptions,
    Task,
)
from copy_with_hash.services.logger_service import colorize, log_performance, set_silent
from copy_with_hash.services.manifest import Manifest, resolve_manifest_path
from copy_with_hash.services.publisher import Publisher
from copy_with_hash.services.report import ReportSink, RichReportSink
from copy_with_hash.services.resolver import Matcher, resolve_tasks

logger = logging.getLogger(__name__)


class CopyWithHashPlugin:
    """Copies files under content-hashed names and maintains a manifest."""

    name = PLUGIN_NAME

    def __init__(
        self,
        options: PublishOptions | Mapping[str, Any],
        matcher: Matcher | None = None,
        report_sink: ReportSink | None = None,
    ):
        """
        Initialize plugin.

        Args:
            options: Publish options (a mapping is validated into PublishOptions)
            matcher: Glob expander (defaults to GlobMatcher)
            report_sink: Receives the size report (defaults to RichReportSink)
        """
        if not isinstance(options, PublishOptions):
            options = PublishOptions.model_validate(dict(options))
        self.options = options
        self.matcher = matcher
        self.report_sink = report_sink or RichReportSink()

        self.build: BuildContext | None = None
        self.tasks: dict[str, Task] = {}
        self.manifest_path = None

    def setup(self, build: BuildContext) -> None:
        """
        Configuration phase: resolve the manifest path and the tasks.

        Raises:
            ConfigurationError: If the manifest option is empty or a pattern
                matches nothing
        """
        set_silent(build.log_level == SILENT_LOG_LEVEL)

        output_dir = build.output_root / self.options.to
        self.manifest_path = resolve_manifest_path(self.options.manifest, build, output_dir)
        self.tasks = resolve_tasks(
            self.options.patterns,
            self.options.context,
            output_dir,
            self.matcher,
        )
        self.build = build
        logger.info(f"Resolved {len(self.tasks)} file(s) to publish into {output_dir}")

    def on_end(self, result: BuildResult) -> PassReport | None:
        """
        Mutation phase: publish every task and sync the manifest.

        Returns:
            Pass report, or None when the build reported errors

        Raises:
            OSError: If an asset cannot be read or copied
        """
        if self.build is None:
            raise RuntimeError("setup() must run before on_end()")

        if result.errors:
            logger.warning(
                colorize("warn", f"Build reported {len(result.errors)} error(s), skipping asset publishing")
            )
            return None

        with log_performance("Publish assets", logger):
            manifest = Manifest.load(self.manifest_path)
            publisher = Publisher(
                hash_function=self.options.hash_function,
                add_hashes_to_file_names=self.options.add_hashes_to_file_names,
                sourcemap=self.build.sourcemap,
            )

            artifacts = publisher.publish_all(self.tasks.values())
            files: dict[str, int] = {}
            for artifact in artifacts:
                manifest.record(artifact)
                files[artifact.report_key] = artifact.size_bytes

            manifest_written = manifest.save()
            if manifest_written:
                files[str(manifest.path)] = manifest.path.stat().st_size
            elif manifest.path.exists():
                files[f"{UNCHANGED_MARKER} {manifest.path}"] = manifest.path.stat().st_size

        written = sum(1 for artifact in artifacts if artifact.was_written)
        logger.info(
            colorize(
                "success",
                f"Published {written} of {len(artifacts)} file(s), "
                f"manifest {'updated' if manifest_written else 'unchanged'}",
            )
        )

        if self.build.log_level != SILENT_LOG_LEVEL:
            self.report_sink.report(self.build.format_label, files)

        return PassReport(
            artifacts=artifacts,
            files=files,
            manifest_path=manifest.path,
            manifest_written=manifest_written,
        )


def run_pass(
    options: PublishOptions | Mapping[str, Any],
    build: BuildContext,
    result: BuildResult | None = None,
    matcher: Matcher | None = None,
    report_sink: ReportSink | None = None,
) -> PassReport | None:
    """
    Run one complete pass: setup followed by on_end.

    Args:
        options: Publish options
        build: Build context
        result: Build outcome (defaults to a successful build)
        matcher: Glob expander
        report_sink: Size report receiver

    Returns:
        Pass report, or None when the build reported errors
    """
    plugin = CopyWithHashPlugin(options, matcher=matcher, report_sink=report_sink)
    plugin.setup(build)
    return plugin.on_end(result or BuildResult())


__all__ = ["CopyWithHashPlugin", "run_pass"]
