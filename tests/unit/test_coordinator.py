"""Unit tests for the discovery coordinator and aggregation."""

from pathlib import Path

import pytest

from configflow.core.coordinator import DiscoveryCoordinator, aggregate_usages, discover
from configflow.core.scanner import ScanOptions
from configflow.matchers.javascript import JavaScriptMatcher
from configflow.matchers.registry import MatcherRegistry
from configflow.models.discovery import ParseResult
from configflow.models.types import Confidence, ConfigType, Language
from configflow.utils.errors import MatcherInitError, ParseFailedError


class TestAggregateUsages:
    """Tests for aggregate_usages."""

    def test_one_record_per_name(self, make_usage):
        """Test usages fold by exact name, in first-seen order."""
        usages = [
            make_usage("PORT", line_number=1),
            make_usage("HOST", line_number=2),
            make_usage("PORT", file_path="b.js", line_number=7),
        ]

        env_vars = aggregate_usages(usages)

        assert [v.name for v in env_vars] == ["PORT", "HOST"]
        port = env_vars[0]
        assert [(loc.file_path, loc.line_number) for loc in port.locations] == [
            ("app.js", 1),
            ("b.js", 7),
        ]

    def test_higher_confidence_wins(self, make_usage):
        """Test a later high-confidence usage replaces a low one."""
        usages = [
            make_usage("PORT", ConfigType.STRING, Confidence.LOW),
            make_usage("PORT", ConfigType.INTEGER, Confidence.HIGH),
        ]

        port = aggregate_usages(usages)[0]

        assert port.inferred_type == ConfigType.INTEGER
        assert port.confidence == Confidence.HIGH

    def test_higher_confidence_kept(self, make_usage):
        """Test a later low-confidence usage does not replace a high one."""
        usages = [
            make_usage("PORT", ConfigType.INTEGER, Confidence.HIGH),
            make_usage("PORT", ConfigType.STRING, Confidence.LOW),
        ]

        port = aggregate_usages(usages)[0]

        assert port.inferred_type == ConfigType.INTEGER
        assert port.confidence == Confidence.HIGH

    def test_tie_keeps_first(self, make_usage):
        """Test equal confidence keeps the first-seen type."""
        usages = [
            make_usage("API", ConfigType.URL, Confidence.MEDIUM),
            make_usage("API", ConfigType.SECRET, Confidence.MEDIUM),
        ]

        assert aggregate_usages(usages)[0].inferred_type == ConfigType.URL

    def test_defaults_deduplicated(self, make_usage):
        """Test distinct non-null defaults are collected once."""
        usages = [
            make_usage("HOST", default_value="localhost"),
            make_usage("HOST"),
            make_usage("HOST", default_value="localhost"),
            make_usage("HOST", default_value="0.0.0.0"),
        ]

        host = aggregate_usages(usages)[0]

        assert host.default_values == ["localhost", "0.0.0.0"]
        assert [loc.default_value for loc in host.locations] == [
            "localhost",
            None,
            "localhost",
            "0.0.0.0",
        ]

    def test_empty(self):
        """Test no usages gives no variables."""
        assert aggregate_usages([]) == []


class FailingMatcher:
    """Matcher that cannot parse files named broken*."""

    language = Language.JAVASCRIPT

    def __init__(self):
        self._delegate = JavaScriptMatcher()

    def discover(self, file_path: str, source) -> ParseResult:
        if Path(file_path).name.startswith("broken"):
            raise ParseFailedError(file_path)
        return self._delegate.discover(file_path, source)


class TestDiscoveryCoordinator:
    """Tests for DiscoveryCoordinator."""

    def test_single_access(self, write_files):
        """Test one static access gives one variable with one location."""
        root = write_files({"index.js": "const port = parseInt(process.env.PORT);\n"})

        result = discover(root)

        assert result.files_scanned == 1
        assert result.names == ["PORT"]
        port = result.get("PORT")
        assert port.inferred_type == ConfigType.INTEGER
        assert port.confidence == Confidence.HIGH
        assert len(port.locations) == 1
        assert port.locations[0].file_path.endswith("index.js")

    def test_same_variable_across_files(self, write_files):
        """Test N files reading one variable give N locations."""
        root = write_files(
            {
                "a.js": "const a = process.env.SHARED;\n",
                "b.py": "import os\nb = os.getenv('SHARED')\n",
                "c.rb": "c = ENV['SHARED']\n",
            }
        )

        result = discover(root)

        assert result.files_scanned == 3
        assert len(result.env_vars) == 1
        assert len(result.env_vars[0].locations) == 3

    def test_duplicate_port_across_languages(self, write_files):
        """Test the high-confidence occurrence decides the type."""
        root = write_files(
            {
                "a.py": "import os\nport = os.getenv('PORT')\n",
                "b.js": "const port = parseInt(process.env.PORT);\n",
            }
        )

        port = discover(root).get("PORT")

        assert port.inferred_type == ConfigType.INTEGER
        assert port.confidence == Confidence.HIGH
        assert len(port.locations) == 2

    def test_warnings_collected(self, write_files):
        """Test warnings are reported but never become variables."""
        root = write_files({"index.js": "const v = process.env[name];\n"})

        result = discover(root)

        assert result.env_vars == []
        assert len(result.warnings) == 1
        assert result.warnings[0].file_path.endswith("index.js")

    def test_oversize_file_skipped(self, write_files):
        """Test files above the size cap contribute nothing."""
        root = write_files({"index.js": "const a = process.env.PORT;\n"})

        result = discover(root, max_file_size=10)

        assert result.env_vars == []

    def test_scan_options_respected(self, write_files):
        """Test extension filters flow through to the scanner."""
        root = write_files({"a.js": "process.env.A;\n", "b.py": "os.getenv('B')\n"})

        result = discover(root, scan_options=ScanOptions(extensions=(".py",)))

        assert result.names == ["B"]
        assert result.files_scanned == 1

    def test_framework_usages_get_file_path(self, write_files):
        """Test framework matches are attributed to the real file."""
        root = write_files(
            {
                "package.json": '{"dependencies": {"@nestjs/core": "10.0.0"}}',
                "src/app.service.ts": "const p = this.configService.get('PORT');\n",
            }
        )

        result = discover(root)

        assert [f.name for f in result.frameworks] == ["nestjs"]
        port = result.get("PORT")
        assert port.confidence == Confidence.HIGH
        assert port.locations[0].file_path.endswith("app.service.ts")

    def test_frameworks_disabled(self, write_files):
        """Test enable_frameworks=False skips detection and queries."""
        root = write_files(
            {
                "package.json": '{"dependencies": {"@nestjs/core": "10.0.0"}}',
                "app.js": "const p = configService.get('PORT');\n",
            }
        )

        result = discover(root, enable_frameworks=False)

        assert result.frameworks == []
        assert result.env_vars == []

    def test_framework_disabled_by_name(self, write_files):
        """Test a named framework is detected but not run."""
        root = write_files(
            {
                "package.json": '{"dependencies": {"@nestjs/core": "10.0.0"}}',
                "app.js": "const p = configService.get('PORT');\n",
            }
        )

        coordinator = DiscoveryCoordinator(root, disabled_frameworks=["nestjs"])
        result = coordinator.discover()

        assert [f.name for f in result.frameworks] == ["nestjs"]
        assert coordinator.framework_parsers == []
        assert result.env_vars == []

    def test_broken_framework_is_skipped(self, write_files, monkeypatch):
        """Test a framework whose query fails to compile does not stop the run."""
        broken = """
name: nestjs
language: javascript
version: "1.0"
description: Broken
detection: {files: [], patterns: {}}
queries:
  - name: bad
    description: bad
    pattern: (call_expression (no_such_node) @key)
    key_capture: key
    confidence: high
type_inference: {}
"""
        monkeypatch.setattr("configflow.core.coordinator.get_embedded", lambda path: broken)
        root = write_files(
            {
                "package.json": '{"dependencies": {"@nestjs/core": "10.0.0"}}',
                "app.js": "const p = process.env.PORT;\n",
            }
        )

        coordinator = DiscoveryCoordinator(root)
        result = coordinator.discover()

        assert coordinator.framework_parsers == []
        assert result.names == ["PORT"]

    def test_parse_failure_skips_file_only(self, write_files):
        """Test a file that cannot be parsed keeps results from other files."""
        registry = MatcherRegistry()
        registry.register(Language.JAVASCRIPT, FailingMatcher)
        root = write_files(
            {
                "a.js": "process.env.FIRST;\n",
                "broken.js": "process.env.LOST;\n",
                "c.js": "process.env.THIRD;\n",
            }
        )

        result = discover(root, registry=registry, enable_frameworks=False)

        assert result.names == ["FIRST", "THIRD"]
        assert result.files_scanned == 3

    def test_matcher_init_failure_propagates(self, write_files):
        """Test a broken built-in matcher aborts the run."""

        def broken_factory():
            raise MatcherInitError("javascript", "bad query")

        registry = MatcherRegistry()
        registry.register(Language.JAVASCRIPT, broken_factory)
        root = write_files({"a.js": "process.env.A;\n"})

        with pytest.raises(MatcherInitError):
            discover(root, registry=registry)

    def test_unregistered_language_ignored(self, write_files):
        """Test files without a registered matcher are skipped."""
        registry = MatcherRegistry()
        root = write_files({"a.go": 'package main\nimport "os"\nvar p = os.Getenv("P")\n'})

        result = discover(root, registry=registry)

        assert result.env_vars == []
        assert result.files_scanned == 1

    def test_empty_registry_is_kept(self, tmp_path):
        """Test an explicitly empty registry is not replaced by the default one."""
        registry = MatcherRegistry()

        coordinator = DiscoveryCoordinator(tmp_path, registry=registry)

        assert coordinator.registry is registry
        assert len(coordinator.registry) == 0
