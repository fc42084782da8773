"""JSON report renderer."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from configflow.models.discovery import DiscoveryResult
from configflow.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renders reports as JSON.

    A :class:`DiscoveryResult` gains a ``summary`` object ahead of the
    model fields so consumers can read counts without walking the lists.

    Example:
        renderer = JSONRenderer()
        text = renderer.render(result, RenderContext(format=OutputFormat.JSON))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, DiscoveryResult):
            payload: Any = {"summary": summarize(data), **data.model_dump(mode="json")}
        elif isinstance(data, BaseModel):
            payload = data.model_dump(mode="json")
        else:
            payload = data

        return json.dumps(
            payload,
            indent=context.indent or None,
            default=_encode,
            ensure_ascii=False,
        )


def summarize(result: DiscoveryResult) -> dict[str, Any]:
    """Counts for a report, with variables tallied per type."""
    by_type: dict[str, int] = {}
    for var in result.env_vars:
        by_type[var.inferred_type.value] = by_type.get(var.inferred_type.value, 0) + 1
    return {
        "files_scanned": result.files_scanned,
        "variables": len(result.env_vars),
        "warnings": len(result.warnings),
        "frameworks": [fw.name for fw in result.frameworks],
        "by_type": by_type,
    }


def _encode(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
