"""Utility modules for ubuntu-diag."""

from ubuntu_diag.utils.config import (
    DEFAULT_SERVICES,
    OutputConfig,
    CommandConfig,
    ServicesConfig,
    UbuntuDiagConfig,
    get_config_paths,
    get_default_config,
    load_config,
    save_config,
)
from ubuntu_diag.utils.errors import (
    ConfigurationError,
    ToolMissingError,
    ToolTimeoutError,
    UbuntuDiagError,
    ValidationError,
    validate_service_name,
    validate_timeout,
)
from ubuntu_diag.utils.logging import (
    ContextAdapter,
    ContextFormatter,
    configure_logging,
    get_logger,
    get_logger_with_context,
)

__all__ = [
    # Config
    "DEFAULT_SERVICES",
    "OutputConfig",
    "CommandConfig",
    "ServicesConfig",
    "UbuntuDiagConfig",
    "get_config_paths",
    "get_default_config",
    "load_config",
    "save_config",
    # Errors
    "ConfigurationError",
    "ToolMissingError",
    "ToolTimeoutError",
    "UbuntuDiagError",
    "ValidationError",
    "validate_service_name",
    "validate_timeout",
    # Logging
    "ContextAdapter",
    "ContextFormatter",
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
]
