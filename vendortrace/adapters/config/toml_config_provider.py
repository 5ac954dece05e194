"""TOML-based configuration provider.

Config loading priority (highest to lowest):
1. Local: .vendortrace.toml in the project directory
2. Global: ~/.config/vendortrace/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from vendortrace.domain.config import VendorTraceConfig
from vendortrace.shared.config_io import (
    LOCAL_CONFIG_NAME,
    get_global_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Local values override global values key by key within each section.
    Missing or invalid files are ignored with a warning.
    """

    def load(self, project_dir: Path) -> VendorTraceConfig:
        """Load configuration with global fallback.

        Args:
            project_dir: Directory that may contain .vendortrace.toml

        Returns:
            VendorTraceConfig with merged global/local values or defaults
        """
        config = VendorTraceConfig.default()

        for label, path in (
            ("global", get_global_config_path()),
            ("local", project_dir / LOCAL_CONFIG_NAME),
        ):
            if not path.exists():
                continue
            try:
                config = VendorTraceConfig.from_partial(config, load_config_data(path))
                logger.debug(f"Loaded {label} config from {path}")
            except (FileNotFoundError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {label} config at {path}: {e}. Ignoring it.")

        return config
