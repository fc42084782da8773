"""Models shared by the error layer and the CLI."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorRecord(BaseModel):
    """Serializable form of a :class:`ConfigFlowError`."""

    model_config = {"frozen": True}

    code: str = Field(description="Stable error code, e.g. PARSE_FAILED")
    message: str = Field(description="What went wrong")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Offending path, field or language"
    )

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
