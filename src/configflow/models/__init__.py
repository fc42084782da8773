"""Data models for configflow.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from configflow.models.common import ErrorRecord
from configflow.models.types import Confidence, ConfigType, Language, WarningType
from configflow.models.framework import (
    DetectedFramework,
    Detection,
    FrameworkConfig,
    NamePatternRule,
    Query,
    TypeInference,
)
from configflow.models.discovery import (
    AggregatedEnvVar,
    DiscoveryResult,
    DiscoveryWarning,
    EnvVarUsage,
    Location,
    ParseResult,
)

__all__ = [
    # Common
    "ErrorRecord",
    # Types
    "Confidence",
    "ConfigType",
    "Language",
    "WarningType",
    # Framework
    "DetectedFramework",
    "Detection",
    "FrameworkConfig",
    "NamePatternRule",
    "Query",
    "TypeInference",
    # Discovery
    "AggregatedEnvVar",
    "DiscoveryResult",
    "DiscoveryWarning",
    "EnvVarUsage",
    "Location",
    "ParseResult",
]
