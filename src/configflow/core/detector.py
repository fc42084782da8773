"""Framework detection from dependency manifests."""

from __future__ import annotations

from pathlib import Path

from configflow.models.framework import DetectedFramework
from configflow.models.types import Confidence, Language
from configflow.utils.logging import get_logger

logger = get_logger(__name__)

PYTHON_MANIFESTS = ("requirements.txt", "pyproject.toml", "Pipfile")
JAVA_MANIFESTS = ("pom.xml", "build.gradle", "build.gradle.kts")
NEXT_CONFIG_FILES = ("next.config.js", "next.config.mjs", "next.config.ts")


class FrameworkDetector:
    """Detects frameworks by inspecting manifests under a project root.

    A framework found through an explicit dependency is ``high``
    confidence; one found only through a marker file is ``medium``. The
    first detection of a framework wins, so a later, weaker signal never
    replaces or duplicates it.

    Example:
        detector = FrameworkDetector("/srv/app")
        for framework in detector.detect():
            print(framework.name, framework.confidence)
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self._detected: dict[str, DetectedFramework] = {}

    def detect(self) -> list[DetectedFramework]:
        """Run every language's checks and return the frameworks found."""
        self._detected = {}
        self._detect_javascript()
        self._detect_python()
        self._detect_java()
        self._detect_ruby()
        return list(self._detected.values())

    def _add(self, name: str, language: Language, confidence: Confidence) -> None:
        if name in self._detected:
            return
        logger.debug("Detected framework %s (%s)", name, confidence.value)
        self._detected[name] = DetectedFramework(
            name=name,
            language=language,
            config_path=f"{language.value}/{name}.yml",
            confidence=confidence,
        )

    def _read(self, relative: str) -> str | None:
        path = self.root / relative
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None
        except OSError as e:
            logger.debug("Cannot read manifest %s: %s", path, e)
            return None

    def _exists(self, relative: str) -> bool:
        return (self.root / relative).is_file()

    def _detect_javascript(self) -> None:
        package_json = self._read("package.json")
        if package_json is not None:
            if '"@nestjs/core"' in package_json or '"@nestjs/common"' in package_json:
                self._add("nestjs", Language.JAVASCRIPT, Confidence.HIGH)
            if '"next"' in package_json:
                self._add("nextjs", Language.JAVASCRIPT, Confidence.HIGH)
            if '"vite"' in package_json:
                self._add("vite", Language.JAVASCRIPT, Confidence.HIGH)

        if any(self._exists(name) for name in NEXT_CONFIG_FILES):
            self._add("nextjs", Language.JAVASCRIPT, Confidence.MEDIUM)

    def _detect_python(self) -> None:
        for manifest in PYTHON_MANIFESTS:
            content = self._read(manifest)
            if content is None:
                continue
            lowered = content.lower()
            if "django-environ" in lowered or "django" in lowered:
                self._add("django", Language.PYTHON, Confidence.HIGH)
            if "pydantic" in lowered:
                self._add("pydantic", Language.PYTHON, Confidence.HIGH)

        if self._exists("manage.py"):
            self._add("django", Language.PYTHON, Confidence.MEDIUM)

    def _detect_java(self) -> None:
        for manifest in JAVA_MANIFESTS:
            content = self._read(manifest)
            if content is None:
                continue
            if "spring-boot-starter" in content or "org.springframework.boot" in content:
                self._add("spring", Language.JAVA, Confidence.HIGH)

    def _detect_ruby(self) -> None:
        gemfile = self._read("Gemfile")
        if gemfile is not None and ("gem 'rails'" in gemfile or 'gem "rails"' in gemfile):
            self._add("rails", Language.RUBY, Confidence.HIGH)

        if self._exists("config/application.rb"):
            self._add("rails", Language.RUBY, Confidence.MEDIUM)


def detect_frameworks(root: Path | str) -> list[DetectedFramework]:
    """Detect frameworks used by the project at ``root``."""
    return FrameworkDetector(root).detect()
