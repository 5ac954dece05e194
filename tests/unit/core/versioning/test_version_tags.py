"""Unit tests for semantic version tag ordering."""

import pytest

from vendortrace.core.versioning import parse_version, preferred_tag, version_tags


class TestParseVersion:
    """Tests for parse_version."""

    @pytest.mark.parametrize(
        "tag",
        ["v1.2.3", "1.2.3", "v1.2.3-rc.1", "v1.2.3+build.7", "v1.2", "v1"],
    )
    def test_valid_tags(self, tag: str):
        """Test that semantic version tags parse."""
        assert parse_version(tag) is not None

    @pytest.mark.parametrize("tag", ["legacy-tag-1", "release-2019", "v", "", "latest", "V1.2.3"])
    def test_invalid_tags(self, tag: str):
        """Test that other tags are rejected without raising."""
        assert parse_version(tag) is None

    def test_prerelease_is_kept(self):
        """Test that the prerelease component is available after parsing."""
        version = parse_version("v1.2.3-beta")
        assert version is not None
        assert version.prerelease == "beta"


class TestVersionTags:
    """Tests for version_tags."""

    def test_descending_order(self):
        """Test full semver precedence ordering."""
        tags = ["v1.0.0", "v1.10.0", "v1.2.0", "v1.2.0-rc.1", "v1.2.0-alpha", "v2.0.0"]
        assert version_tags(tags) == [
            "v2.0.0",
            "v1.10.0",
            "v1.2.0",
            "v1.2.0-rc.1",
            "v1.2.0-alpha",
            "v1.0.0",
        ]

    def test_unparseable_tags_dropped(self):
        """Test that non-semver tags are silently discarded."""
        assert version_tags(["latest", "v0.1.0", "release-2019"]) == ["v0.1.0"]

    def test_no_parseable_tags(self):
        """Test that a tag set without versions yields an empty list."""
        assert version_tags(["latest", "stable"]) == []

    def test_empty(self):
        """Test that no tags yields an empty list."""
        assert version_tags([]) == []

    def test_strictly_descending_for_distinct_versions(self):
        """Test that output has no ascending neighbours."""
        result = version_tags(["v0.3.0", "v0.1.0", "v0.2.0", "v0.10.0"])
        parsed = [parse_version(t) for t in result]
        assert all(a > b for a, b in zip(parsed, parsed[1:]))

    def test_equal_versions_keep_input_order(self):
        """Test that spellings of the same version keep a stable order."""
        assert version_tags(["1.0.0", "v1.0.0+build", "v1.0.0"]) == [
            "1.0.0",
            "v1.0.0+build",
            "v1.0.0",
        ]

    def test_reversing_twice_is_identity(self):
        """Test that the result reversed twice is unchanged."""
        result = version_tags(["v1.0.0", "v3.0.0", "v2.0.0"])
        assert list(reversed(list(reversed(result)))) == result


class TestPreferredTag:
    """Tests for choosing among tags on the same revision."""

    def test_semver_beats_other_tags(self):
        """Test that a semantic version is preferred over a legacy tag."""
        assert preferred_tag(["release-2019", "v1.1.0"]) == "v1.1.0"

    def test_highest_semver_wins(self):
        """Test that the highest of several versions is chosen."""
        assert preferred_tag(["v1.1.0", "v1.1.0-rc.1", "v1.0.9"]) == "v1.1.0"

    def test_lexical_fallback(self):
        """Test that the lexically smallest tag is used when none parse."""
        assert preferred_tag(["stable", "latest"]) == "latest"

    def test_empty(self):
        """Test that no tags yields None."""
        assert preferred_tag([]) is None
