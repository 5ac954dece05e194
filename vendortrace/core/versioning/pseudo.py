"""Pseudo-version computation.

A pseudo-version is a sortable, semantic-version-like string describing a
revision relative to the nearest reachable tag:

    v0.0.0-0.<timestamp>-<rev>      no tag is reachable
    <tag>-1.<timestamp>-<rev>       the tag is not a semantic version
    vX.Y.(Z+1)-0.<timestamp>-<rev>  the tag vX.Y.Z is a release
    vX.Y.Z-pre.0.<timestamp>-<rev>  the tag vX.Y.Z-pre is a prerelease

The timestamp is the revision's commit time in UTC, formatted as
YYYYmmddHHMMSS, and <rev> is the first 12 characters of the revision.
"""

import logging
from datetime import UTC

from vendortrace.core.versioning.tags import parse_version
from vendortrace.domain.entities import REVISION_PREFIX_LEN
from vendortrace.domain.exceptions import VersionNotFoundError
from vendortrace.ports.vcs import Describable

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def pseudo_version(describable: Describable, rev: str) -> str:
    """Compute the pseudo-version for a revision.

    Args:
        describable: Source of reachable tags and commit times.
        rev: Revision identifier.

    Returns:
        Pseudo-version string.

    Raises:
        Any error from reachable_tag() other than VersionNotFoundError,
        and any error from time_from_revision().
    """
    suffix = "-0."  # this commit precedes some future release
    try:
        reachable = describable.reachable_tag(rev)
    except VersionNotFoundError:
        logger.debug(f"No tag reachable from {rev[:REVISION_PREFIX_LEN]}")
        version = "v0.0.0"
    else:
        parsed = parse_version(reachable)
        if parsed is None:
            # Ordering against a non-semver tag is lexical only
            version = reachable
            suffix = "-1."
        elif parsed.prerelease:
            version = f"v{parsed}"
            suffix = ".0."
        else:
            version = f"v{parsed.bump_patch()}"

    commit_time = describable.time_from_revision(rev)
    if commit_time.tzinfo is not None:
        commit_time = commit_time.astimezone(UTC)
    timestamp = commit_time.strftime(TIMESTAMP_FORMAT)
    return f"{version}{suffix}{timestamp}-{rev[:REVISION_PREFIX_LEN]}"
