"""Tests for domain config classes validation."""

import pytest

from vendortrace.domain.config import (
    MatchConfig,
    NormalizeConfig,
    ProcessConfig,
    VendorTraceConfig,
)

# =============================================================================
# Section validation tests
# =============================================================================


class TestProcessConfigValidation:
    """Tests for ProcessConfig validation."""

    def test_defaults(self):
        config = ProcessConfig()
        assert config.timeout == 300
        assert config.diff_command == "diff"

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_non_positive_timeout_raises_error(self, timeout):
        """Test that timeout must be positive."""
        with pytest.raises(ValueError, match="timeout must be positive"):
            ProcessConfig(timeout=timeout)

    def test_empty_diff_command_raises_error(self):
        with pytest.raises(ValueError, match="diff_command cannot be empty"):
            ProcessConfig(diff_command="")


class TestNormalizeConfigValidation:
    """Tests for NormalizeConfig validation."""

    def test_defaults(self):
        config = NormalizeConfig()
        assert config.enabled is True
        assert config.extensions == [".go"]

    @pytest.mark.parametrize("ext", ["go", ".", ""])
    def test_invalid_extension_raises_error(self, ext):
        """Test that extensions must look like '.suffix'."""
        with pytest.raises(ValueError, match="extension must start with"):
            NormalizeConfig(extensions=[ext])


class TestMatchConfigValidation:
    """Tests for MatchConfig validation."""

    def test_defaults(self):
        config = MatchConfig()
        assert config.try_revisions is True
        assert config.max_revisions == 0

    def test_negative_max_revisions_raises_error(self):
        with pytest.raises(ValueError, match="max_revisions cannot be negative"):
            MatchConfig(max_revisions=-1)


# =============================================================================
# VendorTraceConfig tests
# =============================================================================


class TestVendorTraceConfig:
    """Tests for the complete config and partial overlays."""

    def test_default_equals_constructor_defaults(self):
        assert VendorTraceConfig.default() == VendorTraceConfig()

    def test_from_partial_overrides_only_named_keys(self):
        """Test that keys not present in data keep their base values."""
        base = VendorTraceConfig(process=ProcessConfig(timeout=60, diff_command="gdiff"))
        config = VendorTraceConfig.from_partial(base, {"process": {"timeout": 10}})
        assert config.process.timeout == 10
        assert config.process.diff_command == "gdiff"
        assert config.normalize == base.normalize

    def test_from_partial_multiple_sections(self):
        config = VendorTraceConfig.from_partial(
            VendorTraceConfig.default(),
            {
                "normalize": {"enabled": False},
                "match": {"try_revisions": False, "max_revisions": 50},
            },
        )
        assert config.normalize.enabled is False
        assert config.match.try_revisions is False
        assert config.match.max_revisions == 50

    def test_from_partial_ignores_unknown_sections(self):
        """Test that unrelated top-level sections are left alone."""
        base = VendorTraceConfig.default()
        assert VendorTraceConfig.from_partial(base, {"other": {"x": 1}}) == base

    def test_from_partial_unknown_key_raises_error(self):
        with pytest.raises(ValueError, match=r"Unknown keys in \[process\]: retries"):
            VendorTraceConfig.from_partial(
                VendorTraceConfig.default(), {"process": {"retries": 3}}
            )

    def test_from_partial_non_table_raises_error(self):
        with pytest.raises(ValueError, match=r"\[match\] must be a table"):
            VendorTraceConfig.from_partial(VendorTraceConfig.default(), {"match": 5})

    def test_from_partial_revalidates(self):
        """Test that overlaid values go through section validation."""
        with pytest.raises(ValueError, match="timeout must be positive"):
            VendorTraceConfig.from_partial(
                VendorTraceConfig.default(), {"process": {"timeout": 0}}
            )
