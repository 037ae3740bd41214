"""Configuration management for Suitcase."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .formats import FormatType

try:
    import tomllib as _toml  # Python 3.11+

    TOMLDecodeError = _toml.TOMLDecodeError
except ModuleNotFoundError:
    import tomli as _toml  # type: ignore[no-redef]
    from tomli import TOMLDecodeError  # type: ignore

CONFIG_FILENAME = "suitcase.toml"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config:
    """Configuration manager for Suitcase."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration from TOML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        self.config_path = config_path
        self._config: dict[str, Any] = {}

        if config_path.exists():
            self._load_config()

    def _load_config(self) -> None:
        """Load configuration from TOML file."""
        try:
            with open(self.config_path, "rb") as f:
                self._config = _toml.load(f)
        except TOMLDecodeError as e:
            raise ValueError(
                f"Invalid TOML configuration in {self.config_path}: {e}"
            ) from e
        except OSError as e:
            raise ValueError(
                f"Failed to load configuration from {self.config_path}: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key, e.g. ``store.format``."""
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def root_path(self) -> Path:
        """Get the directory collections are stored in."""
        root = Path(self.get("store.root_path", "data"))

        # Relative paths are relative to the config file's directory
        if not root.is_absolute():
            root = self.config_path.parent / root

        return root

    @property
    def format_type(self) -> FormatType:
        """Get the serialization format."""
        value = str(self.get("store.format", FormatType.JSON.value)).lower()
        try:
            return FormatType(value)
        except ValueError as e:
            supported = ", ".join(f.value for f in FormatType)
            raise ValueError(
                f"Unknown store.format '{value}' in {self.config_path}. "
                f"Supported formats: {supported}"
            ) from e

    @property
    def log_level(self) -> str:
        """Get the log level name."""
        value = self.get("logging.level", "WARNING")
        return str(value).upper() if value is not None else "WARNING"

    @property
    def log_format(self) -> str:
        """Get the log record format."""
        value = self.get("logging.format", DEFAULT_LOG_FORMAT)
        return str(value) if value is not None else DEFAULT_LOG_FORMAT
