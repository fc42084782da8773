"""configflow: discover the environment variables a codebase depends on.

configflow parses source files with tree-sitter and reports every
environment variable read, with an inferred type, a confidence level and
the locations and defaults seen for it:

- **Scanner**: Walk a source tree, honoring ignore lists, depth and symlink options
- **Matchers**: Per-language pattern matchers for JavaScript/TypeScript, Python,
  Ruby, Java and Go
- **Frameworks**: Declarative YAML query packs for NestJS, Next.js, Vite, Django,
  Pydantic Settings, Spring and Rails
- **Coordinator**: Detect frameworks, parse every file and aggregate the results

Usage:
    # Library API
    from configflow import discover

    result = discover("./services/api")
    for var in result.env_vars:
        print(var.name, var.inferred_type.value, var.confidence.value)

CLI:
    configflow discover ./services/api
    configflow discover . --format json --output env.json
"""

__version__ = "0.1.0"

# Core classes
from configflow.core.coordinator import DiscoveryCoordinator, aggregate_usages, discover
from configflow.core.detector import FrameworkDetector, detect_frameworks
from configflow.core.scanner import ScanOptions, Scanner, scan_directory

# Models (commonly used)
from configflow.models.discovery import (
    AggregatedEnvVar,
    DiscoveryResult,
    DiscoveryWarning,
    EnvVarUsage,
    Location,
    ParseResult,
)
from configflow.models.framework import DetectedFramework, FrameworkConfig
from configflow.models.types import Confidence, ConfigType, Language, WarningType

# Matchers
from configflow.matchers.registry import MatcherRegistry, default_registry

# Renderers
from configflow.renderers.base import OutputFormat, RenderContext, Renderer

__all__ = [
    # Version
    "__version__",
    # Core
    "DiscoveryCoordinator",
    "aggregate_usages",
    "discover",
    "FrameworkDetector",
    "detect_frameworks",
    "ScanOptions",
    "Scanner",
    "scan_directory",
    # Models
    "AggregatedEnvVar",
    "DiscoveryResult",
    "DiscoveryWarning",
    "EnvVarUsage",
    "Location",
    "ParseResult",
    "DetectedFramework",
    "FrameworkConfig",
    "Confidence",
    "ConfigType",
    "Language",
    "WarningType",
    # Matchers
    "MatcherRegistry",
    "default_registry",
    # Renderers
    "Renderer",
    "RenderContext",
    "OutputFormat",
]
