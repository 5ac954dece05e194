"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of VendorTraceConfig to/from
TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from vendortrace.domain.config import VendorTraceConfig

# Per-project config file, looked up in the working directory
LOCAL_CONFIG_NAME = ".vendortrace.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/vendortrace/config.toml or ~/.config/vendortrace/config.toml
    - Windows: %APPDATA%/vendortrace/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "vendortrace" / "config.toml"
        return Path.home() / ".config" / "vendortrace" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "vendortrace" / "config.toml"
        return Path.home() / ".config" / "vendortrace" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to a TOML config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_to_data(config: VendorTraceConfig) -> dict[str, Any]:
    """Convert a VendorTraceConfig into TOML-serializable sections."""
    return {
        "process": {
            "timeout": config.process.timeout,
            "diff_command": config.process.diff_command,
        },
        "normalize": {
            "enabled": config.normalize.enabled,
            "extensions": list(config.normalize.extensions),
        },
        "match": {
            "try_revisions": config.match.try_revisions,
            "max_revisions": config.match.max_revisions,
        },
    }


def load_config(path: Path) -> VendorTraceConfig:
    """Load configuration from a TOML file on top of the defaults.

    Args:
        path: Path to a TOML config file

    Returns:
        Parsed VendorTraceConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or has invalid values
    """
    data = load_config_data(path)
    return VendorTraceConfig.from_partial(VendorTraceConfig.default(), data)


def save_config(config: VendorTraceConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: VendorTraceConfig to save
        path: Destination path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)
