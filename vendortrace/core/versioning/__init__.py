"""Semantic version tags and pseudo-versions."""

from vendortrace.core.versioning.pseudo import pseudo_version
from vendortrace.core.versioning.tags import parse_version, preferred_tag, version_tags

__all__ = ["parse_version", "preferred_tag", "pseudo_version", "version_tags"]
