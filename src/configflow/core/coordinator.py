"""Discovery pipeline: detect, load frameworks, scan, parse, aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from configflow.core.detector import FrameworkDetector
from configflow.core.scanner import DEFAULT_MAX_FILE_SIZE, ScanOptions, Scanner
from configflow.frameworks.config import parse_framework_config
from configflow.frameworks.embedded import get_embedded
from configflow.frameworks.parser import FrameworkParser
from configflow.matchers.languages import language_for_path
from configflow.matchers.registry import MatcherRegistry, default_registry
from configflow.models.discovery import (
    AggregatedEnvVar,
    DiscoveryResult,
    DiscoveryWarning,
    EnvVarUsage,
    Location,
    ParseResult,
)
from configflow.models.framework import DetectedFramework
from configflow.models.types import Confidence, ConfigType, Language
from configflow.utils.errors import (
    FrameworkConfigError,
    ParseFailedError,
    QueryCompileError,
    UnsupportedLanguageError,
)
from configflow.utils.logging import get_logger, get_logger_with_context

logger = get_logger(__name__)


class DiscoveryCoordinator:
    """Runs environment variable discovery over a source tree.

    Per-file and per-framework failures are logged and skipped; only a
    broken built-in matcher (``MatcherInitError``) propagates.

    Example:
        coordinator = DiscoveryCoordinator("/srv/app")
        result = coordinator.discover()

        for var in result.env_vars:
            print(var.name, var.inferred_type.value, len(var.locations))
    """

    def __init__(
        self,
        root: Path | str,
        scan_options: ScanOptions | None = None,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        enable_frameworks: bool = True,
        disabled_frameworks: Iterable[str] = (),
        registry: MatcherRegistry | None = None,
    ) -> None:
        self.root = Path(root)
        self.scan_options = scan_options or ScanOptions()
        self.max_file_size = max_file_size
        self.enable_frameworks = enable_frameworks
        self.disabled_frameworks = set(disabled_frameworks)
        self.registry = registry if registry is not None else default_registry()
        self.frameworks: list[DetectedFramework] = []
        self.framework_parsers: list[FrameworkParser] = []

    def discover(self) -> DiscoveryResult:
        """Run the full pipeline and return the aggregated report."""
        if self.enable_frameworks:
            self.frameworks = FrameworkDetector(self.root).detect()
            self.framework_parsers = self._load_frameworks(self.frameworks)

        files = Scanner(self.scan_options).scan(self.root)
        logger.debug("Scanning %d files under %s", len(files), self.root)

        usages: list[EnvVarUsage] = []
        warnings: list[DiscoveryWarning] = []
        for path in files:
            language = language_for_path(path.name)
            if language is None:
                continue
            try:
                result = self.parse_file(path, language)
            except ParseFailedError as e:
                logger.warning("%s", e.message)
                continue
            if result is None:
                continue
            usages.extend(result.usages)
            warnings.extend(result.warnings)

        return DiscoveryResult(
            env_vars=aggregate_usages(usages),
            warnings=warnings,
            files_scanned=len(files),
            frameworks=self.frameworks,
        )

    def _load_frameworks(self, frameworks: list[DetectedFramework]) -> list[FrameworkParser]:
        parsers: list[FrameworkParser] = []
        for framework in frameworks:
            log = get_logger_with_context(__name__, framework=framework.name)
            if framework.name in self.disabled_frameworks:
                log.debug("Framework disabled by configuration")
                continue

            source = get_embedded(framework.config_path)
            if source is None:
                log.warning("No framework definition at %s", framework.config_path)
                continue

            try:
                parsers.append(FrameworkParser(parse_framework_config(source)))
            except FrameworkConfigError as e:
                log.warning("Skipping framework, invalid definition: %s", e.message)
            except UnsupportedLanguageError as e:
                log.warning("Skipping framework: %s", e.message)
            except QueryCompileError as e:
                log.warning("Skipping framework: %s", e.message)
        return parsers

    def parse_file(self, path: Path | str, language: Language) -> ParseResult | None:
        """Run the static matcher and matching framework queries over a file.

        Returns:
            The file's combined results, or None if the file was skipped

        Raises:
            ParseFailedError: If the static matcher could not parse the file
        """
        path = Path(path)
        source = self._read(path)
        if source is None:
            return None

        matcher = self.registry.get(language)
        if matcher is None:
            return None

        file_path = str(path)
        result = matcher.discover(file_path, source)

        for framework in self.framework_parsers:
            if framework.language != language:
                continue
            try:
                extra = framework.parse(source, file_path)
            except ParseFailedError as e:
                logger.debug("Framework %s could not parse %s", framework.name, e.message)
                continue
            usages = [usage.model_copy(update={"file_path": file_path}) for usage in extra.usages]
            result = result.merge(ParseResult(usages=usages, warnings=extra.warnings))

        return result

    def _read(self, path: Path) -> bytes | None:
        try:
            if path.stat().st_size > self.max_file_size:
                logger.debug("Skipping %s: larger than %d bytes", path, self.max_file_size)
                return None
            return path.read_bytes()
        except OSError as e:
            logger.debug("Skipping unreadable file %s: %s", path, e)
            return None


@dataclass
class _RunningVar:
    inferred_type: ConfigType
    confidence: Confidence
    locations: list[Location] = field(default_factory=list)
    defaults: list[str] = field(default_factory=list)

    def add(self, usage: EnvVarUsage) -> None:
        if usage.confidence.beats(self.confidence):
            self.inferred_type = usage.inferred_type
            self.confidence = usage.confidence
        self.locations.append(
            Location(
                file_path=usage.file_path,
                line_number=usage.line_number,
                context=usage.context,
                default_value=usage.default_value,
            )
        )
        if usage.default_value is not None and usage.default_value not in self.defaults:
            self.defaults.append(usage.default_value)


def aggregate_usages(usages: Iterable[EnvVarUsage]) -> list[AggregatedEnvVar]:
    """Fold usages into one record per variable name.

    The type and confidence come from the first usage with the highest
    confidence. Every usage contributes a location; default values are
    collected without duplicates. Output follows first-seen name order.
    """
    grouped: dict[str, _RunningVar] = {}
    for usage in usages:
        entry = grouped.get(usage.name)
        if entry is None:
            entry = grouped[usage.name] = _RunningVar(usage.inferred_type, usage.confidence)
        entry.add(usage)

    return [
        AggregatedEnvVar(
            name=name,
            inferred_type=entry.inferred_type,
            confidence=entry.confidence,
            locations=entry.locations,
            default_values=entry.defaults,
        )
        for name, entry in grouped.items()
    ]


def discover(root: Path | str, **kwargs) -> DiscoveryResult:
    """Convenience wrapper around :class:`DiscoveryCoordinator`."""
    return DiscoveryCoordinator(root, **kwargs).discover()
