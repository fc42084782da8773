"""Shared test fixtures for configflow tests."""

from pathlib import Path
from typing import Callable

import pytest

from configflow.matchers.go import GoMatcher
from configflow.matchers.java import JavaMatcher
from configflow.matchers.javascript import JavaScriptMatcher
from configflow.matchers.python import PythonMatcher
from configflow.matchers.ruby import RubyMatcher
from configflow.models.discovery import EnvVarUsage
from configflow.models.types import Confidence, ConfigType


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a mapping of relative path to content under tmp_path."""

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _write


@pytest.fixture(scope="session")
def js_matcher() -> JavaScriptMatcher:
    return JavaScriptMatcher()


@pytest.fixture(scope="session")
def python_matcher() -> PythonMatcher:
    return PythonMatcher()


@pytest.fixture(scope="session")
def ruby_matcher() -> RubyMatcher:
    return RubyMatcher()


@pytest.fixture(scope="session")
def java_matcher() -> JavaMatcher:
    return JavaMatcher()


@pytest.fixture(scope="session")
def go_matcher() -> GoMatcher:
    return GoMatcher()


@pytest.fixture
def make_usage() -> Callable[..., EnvVarUsage]:
    """Factory for EnvVarUsage records with sensible defaults."""

    def _make(
        name: str,
        inferred_type: ConfigType = ConfigType.STRING,
        confidence: Confidence = Confidence.LOW,
        file_path: str = "app.js",
        line_number: int = 1,
        default_value: str | None = None,
    ) -> EnvVarUsage:
        return EnvVarUsage(
            name=name,
            inferred_type=inferred_type,
            confidence=confidence,
            file_path=file_path,
            line_number=line_number,
            context=None,
            default_value=default_value,
        )

    return _make
