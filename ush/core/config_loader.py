"""
ush Configuration Loader

Configuration management for the interpreter:
- Typed defaults for every setting
- Optional JSON loading for embedders
- Dot-notation access and runtime updates

The interactive entry point uses the defaults and never reads a file.

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Optional
import threading

from ush.exceptions import ConfigValidationError


@dataclass
class ShellConfig:
    """Interpreter settings."""
    name: str = "ush"
    banner: str = "Uday's Shell (ush)"
    prompt: str = "--> "
    line_bufsize: int = 1024
    token_bufsize: int = 64
    delimiters: str = " \t\r\n\a"


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the interpreter.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_POSITIVE_INTS = ('shell.line_bufsize', 'shell.token_bufsize')


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('ush.json')
        >>> print(config.shell.prompt)
        -->
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Sections and keys absent from the file keep their defaults.

        Raises:
            ConfigValidationError: If the file cannot be read, parsed or validated
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in configuration file: {e}")
        except OSError as e:
            raise ConfigValidationError(f"Cannot read configuration file: {e}")

        self._config = self._parse_config(data)
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into a Config object."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        config = Config()

        for section in fields(Config):
            if section.name not in data:
                continue
            section_data = data[section.name]
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Section must be an object: {section.name}",
                    key=section.name
                )
            current = getattr(config, section.name)
            known = {f.name for f in fields(current)}
            for key in section_data:
                if key not in known:
                    raise ConfigValidationError(
                        f"Invalid configuration key: {section.name}.{key}",
                        key=f"{section.name}.{key}"
                    )
            values = {**asdict(current), **section_data}
            setattr(config, section.name, type(current)(**values))

        self._validate(config)
        return config

    @staticmethod
    def _validate(config: Config) -> None:
        for key in _POSITIVE_INTS:
            section, name = key.split('.')
            value = getattr(getattr(config, section), name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigValidationError(
                    f"{key} must be a positive integer, got {value!r}",
                    key=key
                )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'shell.prompt')
            default: Default value if key not found
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Args:
            key: Dot-notation key (e.g., 'shell.prompt')
            value: Value to set
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self._validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> Config:
        """Drop any loaded or updated values and return to the defaults."""
        self._config = Config()
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
