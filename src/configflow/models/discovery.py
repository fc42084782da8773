"""Environment variable discovery data models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from configflow.models.framework import DetectedFramework
from configflow.models.types import Confidence, ConfigType, WarningType


class EnvVarUsage(BaseModel):
    """One observed environment variable access site."""

    model_config = {"frozen": True}

    name: str = Field(description="Variable name")
    inferred_type: ConfigType = Field(description="Inferred value type")
    confidence: Confidence = Field(description="Confidence in the inferred type")
    file_path: str = Field(default="", description="File containing the access")
    line_number: int = Field(description="1-based line number")
    context: str | None = Field(default=None, description="Trimmed source line")
    default_value: str | None = Field(default=None, description="Detected default value")


class DiscoveryWarning(BaseModel):
    """An access site whose key could not be resolved."""

    model_config = {"frozen": True}

    file_path: str = Field(description="File containing the access")
    line_number: int = Field(description="1-based line number")
    message: str = Field(description="Human-readable message")
    warning_type: WarningType = Field(description="Kind of unresolved access")


class ParseResult(BaseModel):
    """Output of parsing a single file."""

    model_config = {"frozen": True}

    usages: list[EnvVarUsage] = Field(default_factory=list, description="Resolved usages")
    warnings: list[DiscoveryWarning] = Field(
        default_factory=list, description="Unresolved accesses"
    )

    def merge(self, other: ParseResult) -> ParseResult:
        """Combine two results, keeping order."""
        return ParseResult(
            usages=[*self.usages, *other.usages],
            warnings=[*self.warnings, *other.warnings],
        )


class Location(BaseModel):
    """Where an aggregated variable was seen."""

    model_config = {"frozen": True}

    file_path: str = Field(description="File path")
    line_number: int = Field(description="1-based line number")
    context: str | None = Field(default=None, description="Trimmed source line")
    default_value: str | None = Field(default=None, description="Default at this site")


class AggregatedEnvVar(BaseModel):
    """A variable folded across every site it was observed at."""

    model_config = {"frozen": True}

    name: str = Field(description="Variable name")
    inferred_type: ConfigType = Field(description="Type of the best usage")
    confidence: Confidence = Field(description="Confidence of the best usage")
    locations: list[Location] = Field(default_factory=list, description="Every occurrence")
    default_values: list[str] = Field(
        default_factory=list, description="Distinct non-null defaults"
    )


class DiscoveryResult(BaseModel):
    """Result of a discovery run."""

    model_config = {"frozen": True}

    env_vars: list[AggregatedEnvVar] = Field(default_factory=list, description="Variables found")
    warnings: list[DiscoveryWarning] = Field(
        default_factory=list, description="Unresolved accesses"
    )
    files_scanned: int = Field(default=0, description="Number of files scanned")
    frameworks: list[DetectedFramework] = Field(
        default_factory=list, description="Frameworks detected in the project"
    )

    @property
    def names(self) -> list[str]:
        """Names of all discovered variables."""
        return [var.name for var in self.env_vars]

    def get(self, name: str) -> AggregatedEnvVar | None:
        """Look up a variable by name."""
        for var in self.env_vars:
            if var.name == name:
                return var
        return None

    def by_type(self, config_type: ConfigType) -> list[AggregatedEnvVar]:
        """Variables whose aggregated type is ``config_type``."""
        return [var for var in self.env_vars if var.inferred_type == config_type]
