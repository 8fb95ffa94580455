"""Service layer: bootstrap, configuration, asset materialization and process supervision."""

from .assets import ResourceMaterializer, load_bundled_assets
from .bootstrap import EnvironmentBootstrapper
from .config import ConfigurationService, ValidationResult, default_config
from .errors import (
    AppError,
    ConfigParseError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    FileSystemError,
    LaunchError,
    NoSelectionError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .filesystem import FileSystemService
from .supervisor import ProcessSupervisor

__all__ = [
    "AppError",
    "ConfigParseError",
    "ConfigurationError",
    "ConfigurationService",
    "EnvironmentBootstrapper",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileSystemError",
    "FileSystemService",
    "LaunchError",
    "NoSelectionError",
    "ProcessSupervisor",
    "ResourceMaterializer",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "default_config",
    "get_error_service",
    "handle_error",
    "load_bundled_assets",
]
