"""Config domain models for vendortrace.

Configuration is stored in TOML files (a global one and an optional
.vendortrace.toml in the working directory). This module defines the domain
models that represent validated configuration state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any


@dataclass(frozen=True)
class ProcessConfig:
    """Configuration for external command execution.

    Attributes:
        timeout: Seconds to wait for any single command (default: 300)
        diff_command: Executable used for unified diffs (default: "diff")

    Raises:
        ValueError: If timeout is not positive or diff_command is empty.
    """

    timeout: float = 300
    diff_command: str = "diff"

    def __post_init__(self) -> None:
        """Validate process config after initialization."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.diff_command:
            raise ValueError("diff_command cannot be empty")


@dataclass(frozen=True)
class NormalizeConfig:
    """Configuration for import-annotation stripping.

    Attributes:
        enabled: Strip import annotations before hashing (default: True)
        extensions: File suffixes treated as source files (default: [".go"])

    Raises:
        ValueError: If an extension does not start with ".".
    """

    enabled: bool = True
    extensions: list[str] = field(default_factory=lambda: [".go"])

    def __post_init__(self) -> None:
        """Validate normalize config after initialization."""
        for ext in self.extensions:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"extension must start with '.', got {ext!r}")


@dataclass(frozen=True)
class MatchConfig:
    """Configuration for matching vendored trees against upstream history.

    Attributes:
        try_revisions: Fall back to individual revisions when no tag matches
        max_revisions: Upper bound on revisions compared (0 means unlimited)

    Raises:
        ValueError: If max_revisions is negative.
    """

    try_revisions: bool = True
    max_revisions: int = 0

    def __post_init__(self) -> None:
        """Validate match config after initialization."""
        if self.max_revisions < 0:
            raise ValueError(
                f"max_revisions cannot be negative, got {self.max_revisions}"
            )


@dataclass(frozen=True)
class VendorTraceConfig:
    """Complete vendortrace configuration.

    Attributes:
        process: External command configuration
        normalize: Import-annotation stripping configuration
        match: Matching configuration
    """

    process: ProcessConfig = field(default_factory=ProcessConfig)
    normalize: NormalizeConfig = field(default_factory=NormalizeConfig)
    match: MatchConfig = field(default_factory=MatchConfig)

    @staticmethod
    def default() -> VendorTraceConfig:
        """Create a config with all default values."""
        return VendorTraceConfig(
            process=ProcessConfig(),
            normalize=NormalizeConfig(),
            match=MatchConfig(),
        )

    @staticmethod
    def from_partial(base: VendorTraceConfig, data: dict[str, Any]) -> VendorTraceConfig:
        """Overlay raw config data onto an existing config.

        Each section present in data replaces only the keys it names; the
        resulting section is re-validated.

        Args:
            base: Config providing the values not present in data
            data: Parsed TOML data keyed by section name

        Returns:
            New VendorTraceConfig with data applied

        Raises:
            ValueError: If a section is not a table, a key is unknown, or a
                value fails validation.
        """
        updates: dict[str, Any] = {}
        for section in fields(base):
            section_data = data.get(section.name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ValueError(f"[{section.name}] must be a table")
            current = getattr(base, section.name)
            known = {f.name for f in fields(current)}
            unknown = set(section_data) - known
            if unknown:
                raise ValueError(
                    f"Unknown keys in [{section.name}]: {', '.join(sorted(unknown))}"
                )
            updates[section.name] = replace(current, **section_data)
        return replace(base, **updates)
