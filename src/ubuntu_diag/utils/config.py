"""Configuration file support for ubuntu-diag."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ubuntu_diag.utils.errors import ConfigurationError, ValidationError, validate_service_name

DEFAULT_SERVICES = ["pipewire", "pipewire-pulse", "wireplumber"]


class CommandConfig(BaseModel):
    """Settings for running external tools."""

    timeout: float = Field(default=5.0, gt=0, description="Per-command timeout in seconds")
    locale: str = Field(default="C", description="Locale forced on the tools that are run")
    parallel: bool = Field(default=True, description="Run collectors concurrently")


class ServicesConfig(BaseModel):
    """systemd units to check."""

    units: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SERVICES),
        description="Unit names passed to systemctl is-active",
    )
    user: bool = Field(default=False, description="Query the user service manager")

    @field_validator("units")
    @classmethod
    def _valid_units(cls, units: list[str]) -> list[str]:
        for unit in units:
            try:
                validate_service_name(unit)
            except ValidationError as e:
                raise ValueError(e.message) from e
        return units


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="text", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")


class UbuntuDiagConfig(BaseModel):
    """Main configuration for ubuntu-diag."""

    commands: CommandConfig = Field(default_factory=CommandConfig)
    services: ServicesConfig = Field(default_factory=ServicesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files, in priority order
    """
    paths = []

    paths.append(Path.cwd() / ".ubuntu-diag.yaml")
    paths.append(Path.cwd() / ".ubuntu-diag.yml")

    home = Path.home()
    paths.append(home / ".ubuntu-diag.yaml")
    paths.append(home / ".config" / "ubuntu-diag" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "ubuntu-diag" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> UbuntuDiagConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If an explicit path is missing or any file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return UbuntuDiagConfig()


def _load_config_file(path: Path) -> UbuntuDiagConfig:
    """Load configuration from a specific file."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}")

    if data is None:
        return UbuntuDiagConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return UbuntuDiagConfig.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(f"Invalid config value for {key}: {first['msg']}", config_key=key)


def save_config(config: UbuntuDiagConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.config/ubuntu-diag/config.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.home() / ".config" / "ubuntu-diag" / "config.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> UbuntuDiagConfig:
    """Get the default configuration."""
    return UbuntuDiagConfig()
