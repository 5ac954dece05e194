"""Semantic version tag discovery and ordering.

Tags are parsed with the semver library. A leading lowercase "v" is allowed, and
missing minor/patch components default to zero, so "v1" and "v1.0.0" parse
to the same version. Tags that do not parse are valid VCS tags but take no
part in version reconciliation.
"""

from collections.abc import Iterable

from semver import Version


def parse_version(tag: str) -> Version | None:
    """Parse a tag as a semantic version.

    Args:
        tag: Tag text, e.g. "v1.2.3-rc.1+build.5".

    Returns:
        The parsed version, or None if the tag is not a semantic version.
    """
    text = tag[1:] if tag.startswith("v") else tag
    try:
        return Version.parse(text, optional_minor_and_patch=True)
    except ValueError:
        return None


def version_tags(tags: Iterable[str]) -> list[str]:
    """Filter tags to semantic versions and order them highest first.

    Precedence follows semantic versioning (build metadata is ignored).
    Tags with equal precedence keep their input order.

    Args:
        tags: Tag names as listed by the backend.

    Returns:
        The original tag spellings, in descending version order.
    """
    parsed = [(version, tag) for tag in tags if (version := parse_version(tag)) is not None]
    parsed.sort(key=lambda item: item[0], reverse=True)
    return [tag for _, tag in parsed]


def preferred_tag(tags: Iterable[str]) -> str | None:
    """Choose one tag among tags attached to the same revision.

    The highest semantic version wins; when none of the tags parse, the
    lexically smallest tag is used so the choice is stable.

    Args:
        tags: Tags on a single revision.

    Returns:
        The chosen tag, or None if tags is empty.
    """
    candidates = list(tags)
    versions = version_tags(candidates)
    if versions:
        return versions[0]
    return min(candidates, default=None)
