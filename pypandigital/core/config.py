"""Configuration for pypandigital.

This module holds two layers of configuration:

*   `Config`, the immutable rule set a `Validator` is built from (base,
    uniqueness, and whether the zero digit is required).
*   `Settings`, the layered defaults used by the command-line interface. They
    are aggregated from default values, TOML files and environment variables
    and turned into a `Config` on demand.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

import tomli_w

# Bases a pandigital rule set can be built for.
VALID_BASES = frozenset(list(range(1, 11)) + [16])

# The default path for the user-specific configuration file.
USER_CONFIG_PATH = Path.home() / ".config" / "pandigital" / "config.toml"

# The project-level configuration file looked up in the working directory.
PROJECT_CONFIG_NAME = "pandigital.toml"


class ConfigError(ValueError):
    """Raised when a pandigital rule set cannot be constructed."""


@dataclass(frozen=True)
class Config:
    """An immutable pandigital rule set.

    Attributes:
        base (int): The numbering base, 1 through 10 or 16.
        unique (bool): If True, no digit may repeat and the value must be
            exactly as long as the number of required digits.
        require_zero (bool): If True, the zero digit must appear. If False,
            zero is left out of the alphabet (for bases up to 10).

    Raises:
        ConfigError: If `base` is not one of the supported bases.
    """

    base: int = 10
    unique: bool = False
    require_zero: bool = True

    def __post_init__(self) -> None:
        # bool is an int subclass, but True is not a base.
        if isinstance(self.base, bool) or not isinstance(self.base, int) or self.base not in VALID_BASES:
            raise ConfigError(f"Base must be 1 .. 10, or 16 (got {self.base!r})")
        object.__setattr__(self, "unique", bool(self.unique))
        object.__setattr__(self, "require_zero", bool(self.require_zero))

    def describe(self) -> str:
        """Returns a short human-readable summary of the rule set."""
        repeats = "unique digits" if self.unique else "repeats allowed"
        zero = "zero required" if self.require_zero else "zeroless"
        return f"base {self.base}, {zero}, {repeats}"


class Settings:
    """Handles the command-line defaults for pypandigital.

    Settings are loaded from multiple sources with a defined precedence:
    1.  Default values (lowest precedence).
    2.  Project-specific `pandigital.toml` file.
    3.  User-level `~/.config/pandigital/config.toml` file.
    4.  A custom configuration file specified at runtime (replaces 2 and 3).
    5.  Environment variables (highest precedence).

    Attributes:
        DEFAULT_SETTINGS (Dict[str, Any]): The default settings values.
    """

    DEFAULT_SETTINGS = {
        "base": 10,
        "unique": False,
        "require_zero": True,
        "colors": True,
        "verbose": False,
    }

    ENV_MAPPING = {
        "PANDIGITAL_BASE": "base",
        "PANDIGITAL_UNIQUE": "unique",
        "PANDIGITAL_REQUIRE_ZERO": "require_zero",
        "PANDIGITAL_COLORS": "colors",
        "PANDIGITAL_VERBOSE": "verbose",
    }

    BOOLEAN_KEYS = ("unique", "require_zero", "colors", "verbose")

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initializes the settings manager.

        Args:
            config_path (Optional[Path]): An optional path to a specific
                settings file. If provided, the project and user files are
                not read.
        """
        self.settings: Dict[str, Any] = dict(self.DEFAULT_SETTINGS)
        if config_path:
            self._load_file(Path(config_path))
        else:
            self._load_default_files()
        self._load_env()

    def _load_default_files(self) -> None:
        """Loads settings from the standard locations if they exist."""
        project_config = Path.cwd() / PROJECT_CONFIG_NAME
        if project_config.exists():
            self._load_file(project_config)

        if USER_CONFIG_PATH.exists():
            self._load_file(USER_CONFIG_PATH)

    def _load_file(self, config_path: Path) -> None:
        """Loads and merges settings from a TOML file.

        Args:
            config_path (Path): The path to the TOML settings file.
        """
        try:
            with open(config_path, "rb") as f:
                file_settings = tomllib.load(f)
        except (OSError, ValueError) as e:
            # TOMLDecodeError and UnicodeDecodeError are both ValueErrors.
            print(f"Warning: Could not load config from {config_path}: {e}", file=sys.stderr)
            return

        for key, value in file_settings.items():
            self.set(key, value)

    def _load_env(self) -> None:
        """Loads and merges settings from environment variables."""
        for env_var, key in self.ENV_MAPPING.items():
            value = os.getenv(env_var)
            if value is not None:
                self._set_from_string(key, value)

    def _set_from_string(self, key: str, value: str) -> None:
        """Casts a string value (from a file, the environment or the CLI) and stores it.

        Args:
            key (str): The settings key.
            value (str): The raw string value.
        """
        if key in self.BOOLEAN_KEYS:
            self.settings[key] = value.strip().lower() in ("true", "1", "yes", "on")
        elif key == "base":
            try:
                self.settings[key] = int(value)
            except ValueError:
                print(f"Warning: Invalid integer value for {key}: {value}", file=sys.stderr)
        else:
            self.settings[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieves a settings value.

        Args:
            key (str): The settings key.
            default (Any): Returned if the key is not set.

        Returns:
            Any: The settings value or the default.
        """
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Sets a settings value in memory. String values are cast."""
        if isinstance(value, str):
            self._set_from_string(key, value)
        else:
            self.settings[key] = value

    def to_config(self, base: Optional[int] = None, unique: Optional[bool] = None,
                  require_zero: Optional[bool] = None) -> Config:
        """Builds a validated rule set from these settings.

        Arguments that are not None take precedence over the stored settings.

        Returns:
            Config: The rule set.

        Raises:
            ConfigError: If the resulting base is not supported.
        """
        return Config(
            base=self.get("base") if base is None else base,
            unique=self.get("unique") if unique is None else unique,
            require_zero=self.get("require_zero") if require_zero is None else require_zero,
        )

    def _get_user_settings(self) -> Dict[str, Any]:
        """Returns the contents of the user settings file, or an empty dict."""
        if not USER_CONFIG_PATH.exists():
            return {}
        try:
            with open(USER_CONFIG_PATH, "rb") as f:
                return tomllib.load(f)
        except (OSError, ValueError):
            return {}

    def save_user_config(self) -> None:
        """Saves settings that differ from the defaults to the user file.

        Raises:
            IOError: If the settings file cannot be written.
        """
        user_settings = self._get_user_settings()
        for key, value in self.settings.items():
            if key not in self.DEFAULT_SETTINGS or value != self.DEFAULT_SETTINGS[key]:
                user_settings[key] = value

        try:
            USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
            with open(USER_CONFIG_PATH, "wb") as f:
                tomli_w.dump(user_settings, f)
        except OSError as e:
            raise IOError(f"Failed to save configuration to {USER_CONFIG_PATH}: {e}") from e

    @staticmethod
    def reset_user_config() -> bool:
        """Removes the user settings file.

        Returns:
            bool: True if a file was removed, False if there was none.
        """
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
            return True
        return False

    def __str__(self) -> str:
        return f"Settings({self.settings})"
