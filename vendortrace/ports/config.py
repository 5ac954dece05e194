"""Configuration provider port.

Defines the interface for loading application configuration.
"""

from pathlib import Path
from typing import Protocol

from vendortrace.domain.config import VendorTraceConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, project_dir: Path) -> VendorTraceConfig:
        """Load configuration for a project directory.

        Args:
            project_dir: Directory that may contain .vendortrace.toml

        Returns:
            VendorTraceConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
