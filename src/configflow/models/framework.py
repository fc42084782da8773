"""Framework detection and declarative framework definition models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from configflow.models.types import Confidence, ConfigType, Language


class DetectedFramework(BaseModel):
    """A framework found in a project's manifests."""

    model_config = {"frozen": True}

    name: str = Field(description="Framework name (nestjs, django, ...)")
    language: Language = Field(description="Implementation language")
    config_path: str = Field(description="Embedded definition path, e.g. python/django.yml")
    confidence: Confidence = Field(description="Detection confidence")


class Detection(BaseModel):
    """How a framework definition says it should be recognised."""

    model_config = {"frozen": True}

    files: list[str] = Field(default_factory=list, description="Manifest files to inspect")
    patterns: dict[str, str] = Field(
        default_factory=dict, description="Substring signatures keyed by manifest"
    )


class Query(BaseModel):
    """A structural query pattern from a framework definition."""

    model_config = {"frozen": True}

    name: str = Field(description="Query name")
    description: str = Field(description="What the query matches")
    pattern: str = Field(description="Tree-sitter query source")
    key_capture: str = Field(description="Capture holding the variable key")
    confidence: Confidence = Field(description="Confidence assigned to matches")


class NamePatternRule(BaseModel):
    """Type rule keyed by a variable-name regex."""

    model_config = {"frozen": True}

    pattern: str = Field(description="Regex matched against variable names")
    type: ConfigType = Field(description="Type assigned on match")
    confidence: Confidence = Field(description="Confidence override")
    note: str | None = Field(default=None, description="Free-form note")


class TypeInference(BaseModel):
    """Type-inference rules declared by a framework."""

    model_config = {"frozen": True}

    by_language_type: dict[str, ConfigType] = Field(
        default_factory=dict, description="Type keyed by a language value-type name"
    )
    by_name_pattern: list[NamePatternRule] = Field(
        default_factory=list, description="Type keyed by variable-name regex"
    )


class FrameworkConfig(BaseModel):
    """A loaded declarative framework definition."""

    model_config = {"frozen": True}

    name: str = Field(description="Framework name")
    language: str = Field(description="Target grammar name")
    version: str = Field(description="Definition version")
    description: str = Field(description="Human-readable description")
    detection: Detection = Field(description="Detection rules")
    queries: list[Query] = Field(default_factory=list, description="Structural queries")
    type_inference: TypeInference = Field(
        default_factory=TypeInference, description="Type-inference rules"
    )
