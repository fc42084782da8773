"""YAML settings for scans and output, with a file search path."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from configflow.core.scanner import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_DIRS,
    DEFAULT_MAX_FILE_SIZE,
    ScanOptions,
)
from configflow.utils.errors import ConfigurationError


class ScanConfig(BaseModel):
    """`scan:` section, mirrored onto :class:`ScanOptions`."""

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File suffixes to scan",
    )
    ignore_dirs: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_IGNORE_DIRS),
        description="Directory names skipped at any depth",
    )
    follow_symlinks: bool = Field(default=False, description="Follow symbolic links")
    max_depth: int | None = Field(default=None, description="Maximum directory depth")
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE, description="Files larger than this are skipped"
    )

    def to_scan_options(self) -> ScanOptions:
        """Build scanner options from this section."""
        return ScanOptions(
            extensions=tuple(self.extensions),
            ignore_dirs=frozenset(self.ignore_dirs),
            follow_symlinks=self.follow_symlinks,
            max_depth=self.max_depth,
        )


class OutputConfig(BaseModel):
    """`output:` section."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")


class ConfigFlowConfig(BaseModel):
    """Top-level settings document."""

    scan: ScanConfig = Field(default_factory=ScanConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    disabled_frameworks: list[str] = Field(
        default_factory=list, description="Framework names never loaded"
    )


CONFIG_ENV_VAR = "CONFIGFLOW_CONFIG"
PROJECT_CONFIG_NAMES = (".configflow.yaml", ".configflow.yml", ".configflow/config.yaml")


def get_config_paths() -> list[Path]:
    """Candidate config files, first match wins.

    ``$CONFIGFLOW_CONFIG`` leads when set, then project files in the
    working directory, then the user's home and XDG config directories.
    """
    paths: list[Path] = []
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        paths.append(Path(override))

    cwd = Path.cwd()
    paths.extend(cwd / name for name in PROJECT_CONFIG_NAMES)
    paths.append(Path.home() / ".configflow" / "config.yaml")

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_home:
        paths.append(Path(xdg_home) / "configflow" / "config.yaml")
    return paths


def load_config(config_path: Path | str | None = None) -> ConfigFlowConfig:
    """Read settings from ``config_path`` or the first file found on the search path.

    Raises:
        ConfigurationError: If an explicit file is missing, or a file is
            not valid YAML or fails validation
    """
    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigurationError(
                f"Config file not found: {config_path}", path=path
            )
        return _parse_config_file(path)

    found = next((path for path in get_config_paths() if path.is_file()), None)
    return _parse_config_file(found) if found else ConfigFlowConfig()


def _parse_config_file(path: Path) -> ConfigFlowConfig:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {path}: {e}", path=path
        ) from e

    if data is None:
        return ConfigFlowConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping", path=path
        )

    try:
        return ConfigFlowConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid config file {path}: {e}", path=path
        ) from e


def save_config(config: ConfigFlowConfig, config_path: Path | str | None = None) -> Path:
    """Write non-default settings as YAML, to ./.configflow/config.yaml unless told otherwise."""
    path = Path(config_path) if config_path is not None else Path.cwd() / PROJECT_CONFIG_NAMES[2]
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", exclude_defaults=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


_active: ConfigFlowConfig | None = None


def get_config() -> ConfigFlowConfig:
    """Process-wide settings, loaded from the search path on first use."""
    global _active
    if _active is None:
        _active = load_config()
    return _active


def set_config(config: ConfigFlowConfig | None) -> None:
    """Replace the process-wide settings; None forces a reload on next use."""
    global _active
    _active = config
