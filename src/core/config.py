"""
Launcher Configuration Module.
Defines the launcher settings and loads overrides from the bundle.

Sources, lowest to highest precedence: dataclass defaults, launcher.toml
next to the executable, a .env file next to the executable, then the
process environment.

The bundle layout (interpreter, script and resources suffix) is fixed in
src.app.constants and cannot be overridden from any of these sources.
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from src.app.constants import (
    CONFIG_FILENAME,
    CONFIG_TABLE,
    DEFAULT_CHUNK_SIZE,
    DOTENV_FILENAME,
    ENV_PREFIX,
    EXIT_POLICIES,
    EXIT_POLICY_REPLICATE,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}

# Environment variable suffix -> config field
_ENV_FIELDS = {
    "EXIT_POLICY": "exit_policy",
    "CHUNK_SIZE": "chunk_size",
    "DEBUG": "debug",
}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class LauncherConfig:
    """
    Configuration settings for the launcher.

    Attributes:
        exit_policy: "replicate" always exits 0 once the child ran,
            "propagate" exits with the child's status.
        chunk_size: Maximum bytes read from the child per relay step.
        debug: Enables DEBUG logging and console log output.
    """

    exit_policy: str = EXIT_POLICY_REPLICATE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    debug: bool = False

    def __post_init__(self) -> None:
        if self.exit_policy not in EXIT_POLICIES:
            raise ValueError(
                f"exit_policy must be one of {', '.join(EXIT_POLICIES)}, "
                f"got {self.exit_policy!r}"
            )
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    def to_dict(self) -> dict:
        """
        Converts the config to a dictionary for JSON serialization.

        Returns:
            dict: Dictionary representation of the configuration.
        """
        return {
            "exit_policy": self.exit_policy,
            "chunk_size": self.chunk_size,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LauncherConfig":
        """
        Creates a LauncherConfig from a dictionary.

        Args:
            data: Dictionary containing configuration values. Missing keys
                keep their defaults; values may be strings. Keys other
                than exit_policy, chunk_size and debug are ignored.

        Returns:
            LauncherConfig: A new LauncherConfig instance.

        Raises:
            ValueError: If a value is out of range or not convertible.
        """
        try:
            chunk_size = int(data.get("chunk_size", DEFAULT_CHUNK_SIZE))
        except TypeError as e:
            raise ValueError(f"chunk_size must be an integer: {e}") from e

        return cls(
            exit_policy=str(data.get("exit_policy", EXIT_POLICY_REPLICATE))
            .strip()
            .lower(),
            chunk_size=chunk_size,
            debug=_as_bool(data.get("debug", False)),
        )


def _read_toml(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        return {}
    with open(path, "rb") as f:
        document = tomllib.load(f)
    table = document.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ValueError(f"[{CONFIG_TABLE}] in {path} must be a table")
    logger.debug(f"Loaded {len(table)} setting(s) from {path}")
    return table


def _read_prefixed(values: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    settings: Dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = values.get(ENV_PREFIX + suffix)
        if value is not None and value != "":
            settings[field_name] = value
    return settings


def load_config(
    executable_dir: str, environ: Optional[Mapping[str, str]] = None
) -> LauncherConfig:
    """
    Builds the launcher configuration for a bundle.

    The .env file is read with dotenv_values and never exported, so the
    child inherits exactly the launcher's own environment.

    Args:
        executable_dir: Directory containing the launcher executable.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        LauncherConfig: The merged configuration.

    Raises:
        ValueError: If a source holds an invalid value.
        tomllib.TOMLDecodeError: If launcher.toml is malformed.
    """
    if environ is None:
        environ = os.environ

    merged: Dict[str, Any] = {}
    merged.update(_read_toml(os.path.join(executable_dir, CONFIG_FILENAME)))

    dotenv_path = os.path.join(executable_dir, DOTENV_FILENAME)
    if os.path.isfile(dotenv_path):
        merged.update(_read_prefixed(dotenv_values(dotenv_path)))

    merged.update(_read_prefixed(environ))
    return LauncherConfig.from_dict(merged)
