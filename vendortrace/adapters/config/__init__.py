"""Configuration adapters."""

from vendortrace.adapters.config.toml_config_provider import TomlConfigProvider

__all__ = ["TomlConfigProvider"]
