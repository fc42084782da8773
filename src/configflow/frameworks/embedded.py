"""Framework definitions shipped with the package."""

from __future__ import annotations

from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"

EMBEDDED_FRAMEWORKS = (
    "javascript/nestjs.yml",
    "javascript/nextjs.yml",
    "javascript/vite.yml",
    "python/django.yml",
    "python/pydantic.yml",
    "java/spring.yml",
    "ruby/rails.yml",
)


def get_embedded(config_path: str) -> str | None:
    """Return the text of an embedded definition, or None if unknown."""
    if config_path not in EMBEDDED_FRAMEWORKS:
        return None
    path = DATA_DIR / config_path
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")
