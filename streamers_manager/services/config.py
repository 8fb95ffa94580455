"""Configuration service for loading, saving and editing the streamers configuration."""

import dataclasses
import json
import threading
from pathlib import Path
from typing import Any

import structlog

from ..models import StreamersConfig
from .errors import (
    ConfigParseError,
    ConfigurationError,
    FileSystemError,
    NoSelectionError,
    ValidationError as AppValidationError,
)

log = structlog.stdlib.get_logger()

CONFIG_DIRECTORY = "configs"
CONFIG_FILENAME = "config.json"

# Field name -> wire key, in the order they are written to disk
WIRE_KEYS: dict[str, str] = {
    "downloader_command": "youtube-dl_cmd",
    "downloader_config_path": "youtube-dl_config",
    "auto_reload_config": "auto_reload_config",
    "rate_limit_enabled": "rate_limit",
    "rate_limit_seconds": "rate_limit_time",
    "default_export_location": "default_export_location",
    "streamers": "streamers",
}


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


def default_config() -> StreamersConfig:
    """Get the configuration written on first run."""
    return StreamersConfig()


def config_to_dict(config: StreamersConfig) -> dict[str, Any]:
    """Convert a StreamersConfig to its on-disk dictionary form."""
    return {
        wire_key: list(getattr(config, name)) if name == "streamers" else getattr(config, name)
        for name, wire_key in WIRE_KEYS.items()
    }


def serialize_config(config: StreamersConfig) -> str:
    """Render a configuration as pretty-printed JSON."""
    return json.dumps(config_to_dict(config), indent=2, ensure_ascii=False) + "\n"


class ConfigurationService:
    """Owner of the in-memory configuration and its file on disk.

    Every mutation goes through this service and is written to disk before
    it becomes visible in memory. A failed write leaves the in-memory
    configuration unchanged.
    """

    def __init__(self, config_path: Path | None = None, base_path: Path | None = None) -> None:
        self.base_path: Path = base_path or Path.cwd()
        self.config_path: Path = config_path or self.base_path / CONFIG_DIRECTORY / CONFIG_FILENAME
        self._config: StreamersConfig | None = None
        self._lock = threading.RLock()
        log.info("Configuration service initialized", config_path=str(self.config_path))

    @property
    def config(self) -> StreamersConfig:
        """The current in-memory configuration."""
        with self._lock:
            if self._config is None:
                raise ConfigurationError(
                    "Configuration has not been loaded",
                    expected="load_config() called at startup",
                )
            return self._snapshot(self._config)

    @property
    def is_loaded(self) -> bool:
        """Whether a configuration has been loaded or saved."""
        return self._config is not None

    def load_config(self) -> StreamersConfig:
        """Load the configuration file and make it the in-memory configuration.

        Raises:
            FileSystemError: If the file is missing or unreadable
            ConfigParseError: If the file content is malformed
        """
        try:
            with open(self.config_path, "rb") as f:
                raw = f.read()
        except OSError as e:
            log.error("Failed to read configuration", path=str(self.config_path), error=str(e))
            raise FileSystemError(
                "Configuration file could not be read",
                original_error=e,
                path=str(self.config_path),
                operation="load_config",
            ) from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            log.error("Invalid JSON in configuration", path=str(self.config_path), error=str(e))
            raise ConfigParseError(
                "Configuration file is not valid JSON",
                path=str(self.config_path),
                original_error=e,
            ) from e

        config = self._dict_to_config(data)

        with self._lock:
            self._config = self._snapshot(config)
        log.info("Configuration loaded successfully", streamers=len(config.streamers))
        return config

    def save_config(self, config: StreamersConfig) -> None:
        """Write the configuration to disk, replacing the previous contents.

        Raises:
            ValidationError: If the configuration is invalid
            FileSystemError: If the file cannot be written
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise AppValidationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                constraints=validation_result.errors,
            )

        with self._lock:
            temp_path = self.config_path.with_suffix(self.config_path.suffix + ".tmp")
            try:
                self.config_path.parent.mkdir(parents=True, exist_ok=True)
                with open(temp_path, "w", encoding="utf-8") as f:
                    f.write(serialize_config(config))
                temp_path.replace(self.config_path)
            except OSError as e:
                log.error("Failed to save configuration", path=str(self.config_path), error=str(e))
                if temp_path.exists():
                    temp_path.unlink(missing_ok=True)
                raise FileSystemError(
                    "Configuration could not be saved",
                    original_error=e,
                    path=str(self.config_path),
                    operation="save_config",
                ) from e

            self._config = self._snapshot(config)
        log.info("Configuration saved successfully", streamers=len(config.streamers))

    def validate_config(self, config: StreamersConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        for name in ("downloader_command", "downloader_config_path", "default_export_location"):
            if not isinstance(getattr(config, name), str):
                errors.append(f"{name} must be a string")

        for name in ("auto_reload_config", "rate_limit_enabled"):
            if not isinstance(getattr(config, name), bool):
                errors.append(f"{name} must be a boolean")

        seconds = config.rate_limit_seconds
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            errors.append("rate_limit_seconds must be a non-negative integer")

        if not isinstance(config.streamers, list):
            errors.append("streamers must be a list")
        elif not all(isinstance(name, str) for name in config.streamers):
            errors.append("streamers must contain only strings")

        return ValidationResult(len(errors) == 0, errors)

    def add_streamer(self, name: str) -> StreamersConfig:
        """Append a streamer and persist.

        Raises:
            ValidationError: If the name is blank
            FileSystemError: If the configuration cannot be saved
        """
        if not name or not name.strip():
            raise AppValidationError("Streamer name cannot be empty", field="streamers", value=name)

        with self._lock:
            current = self.config
            updated = dataclasses.replace(current, streamers=[*current.streamers, name])
            self.save_config(updated)
        log.info("Streamer added", streamer=name, count=len(updated.streamers))
        return updated

    def remove_streamer(self, index: int | None) -> StreamersConfig:
        """Remove the streamer at ``index`` and persist.

        Raises:
            NoSelectionError: If ``index`` is None or out of range
            FileSystemError: If the configuration cannot be saved
        """
        with self._lock:
            current = self.config
            if index is None or not 0 <= index < len(current.streamers):
                log.info("Remove requested without a valid selection", index=index)
                raise NoSelectionError(index=index)

            removed = current.streamers[index]
            streamers = current.streamers[:index] + current.streamers[index + 1:]
            updated = dataclasses.replace(current, streamers=streamers)
            self.save_config(updated)
        log.info("Streamer removed", streamer=removed, index=index, count=len(updated.streamers))
        return updated

    def set_export_location(self, location: str) -> StreamersConfig:
        """Change the default export location and persist."""
        return self.update_config(default_export_location=location)

    def update_config(self, **changes: Any) -> StreamersConfig:
        """Replace any configuration fields and persist.

        Raises:
            ValidationError: If a field is unknown or the result is invalid
            FileSystemError: If the configuration cannot be saved
        """
        unknown = sorted(set(changes) - set(WIRE_KEYS))
        if unknown:
            raise AppValidationError(f"Unknown configuration fields: {', '.join(unknown)}", value=unknown)

        with self._lock:
            updated = dataclasses.replace(self.config, **changes)
            self.save_config(updated)
        log.info("Configuration updated", fields=sorted(changes))
        return updated

    def resolve_path(self, location: str | Path) -> Path:
        """Resolve a user-supplied path against the working directory."""
        path = Path(location).expanduser()
        return path if path.is_absolute() else self.base_path / path

    def export_streamers(self, location: str | Path | None = None) -> Path:
        """Write the streamer list, one per line, to ``location`` or the default export location.

        Raises:
            FileSystemError: If the list cannot be written
        """
        with self._lock:
            config = self.config
        target = self.resolve_path(location if location is not None else config.default_export_location)

        try:
            with open(target, "w", encoding="utf-8") as f:
                f.writelines(f"{name}\n" for name in config.streamers)
        except OSError as e:
            log.error("Failed to export streamers", path=str(target), error=str(e))
            raise FileSystemError(
                "Streamer list could not be exported",
                original_error=e,
                path=str(target),
                operation="export_streamers",
            ) from e

        log.info("Streamers exported", path=str(target), count=len(config.streamers))
        return target

    def import_streamers(self, location: str | Path) -> list[str]:
        """Append the streamers listed in a file (one per line) and persist.

        Blank lines and lines starting with ``#`` are skipped.

        Returns:
            The names that were appended

        Raises:
            FileSystemError: If the list cannot be read or the configuration cannot be saved
        """
        source = self.resolve_path(location)
        try:
            with open(source, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            log.error("Failed to import streamers", path=str(source), error=str(e))
            raise FileSystemError(
                "Streamer list could not be read",
                original_error=e,
                path=str(source),
                operation="import_streamers",
            ) from e

        names = [line.strip() for line in lines if line.strip() and not line.strip().startswith("#")]
        if names:
            with self._lock:
                current = self.config
                self.save_config(dataclasses.replace(current, streamers=[*current.streamers, *names]))
        log.info("Streamers imported", path=str(source), count=len(names))
        return names

    @staticmethod
    def _snapshot(config: StreamersConfig) -> StreamersConfig:
        """Copy the streamer list so callers cannot edit the stored one in place."""
        return dataclasses.replace(config, streamers=list(config.streamers))

    def _dict_to_config(self, data: Any) -> StreamersConfig:
        """Convert the on-disk dictionary to a StreamersConfig.

        Missing keys take their default value; unknown keys are ignored.
        """
        if not isinstance(data, dict):
            raise ConfigParseError(
                f"Expected a JSON object, got {type(data).__name__}",
                path=str(self.config_path),
            )

        defaults = default_config()
        values: dict[str, Any] = {}
        for name, wire_key in WIRE_KEYS.items():
            values[name] = data.get(wire_key, getattr(defaults, name))

        for name in ("downloader_command", "downloader_config_path", "default_export_location"):
            if not isinstance(values[name], str):
                raise self._type_error(name, values[name], "a string")

        for name in ("auto_reload_config", "rate_limit_enabled"):
            if not isinstance(values[name], bool):
                raise self._type_error(name, values[name], "true or false")

        seconds = values["rate_limit_seconds"]
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            raise self._type_error("rate_limit_seconds", seconds, "a non-negative integer")

        streamers = values["streamers"]
        if streamers is None:
            streamers = []
        if not isinstance(streamers, list) or not all(isinstance(name, str) for name in streamers):
            raise self._type_error("streamers", streamers, "a list of strings")
        values["streamers"] = list(streamers)

        return StreamersConfig(**values)

    def _type_error(self, name: str, value: Any, expected: str) -> ConfigParseError:
        log.error("Invalid configuration value", setting=WIRE_KEYS[name], value=repr(value)[:100])
        return ConfigParseError(
            f"Configuration value '{WIRE_KEYS[name]}' must be {expected}",
            path=str(self.config_path),
            setting=WIRE_KEYS[name],
        )
