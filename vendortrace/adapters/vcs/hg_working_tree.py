"""Mercurial working tree implemented with hg CLI commands."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from vendortrace.core.versioning.tags import preferred_tag
from vendortrace.core.working_tree import BaseWorkingTree, format_command_error
from vendortrace.domain.entities import FileHash, FileHashes
from vendortrace.domain.exceptions import (
    CheckoutError,
    NotFoundError,
    VersionNotFoundError,
)
from vendortrace.ports.process import ProcessRunner

logger = logging.getLogger(__name__)

# Mercurial's moving pointer to the newest revision, not a release tag
TIP = "tip"


def parse_hg_tags(output: str) -> dict[str, str]:
    """Parse 'hg tags --debug' output into a tag -> node mapping.

    Each line is '<name> <rev>:<node>', padded with spaces. The tip
    pseudo-tag is dropped.

    Args:
        output: Raw command output.

    Returns:
        Mapping of tag name to full revision node, in listing order.
    """
    tags: dict[str, str] = {}
    for line in output.splitlines():
        name, _, revnode = line.rstrip().rpartition(" ")
        name = name.rstrip()
        if not name or ":" not in revnode:
            continue
        if name == TIP:
            continue
        tags[name] = revnode.partition(":")[2]
    return tags


def revset_string(value: str) -> str:
    """Quote a value as a revset string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class HgWorkingTree(BaseWorkingTree):
    """Working tree for Mercurial repositories.

    Mercurial has no content-addressed file IDs usable here, so files are
    hashed from the checkout after syncing to the requested ref.
    """

    command = "hg"

    @classmethod
    def clone(cls, runner: ProcessRunner, repo: str, directory: Path) -> None:
        result = runner.run(["hg", "clone", "-q", "-U", "--", repo, str(directory)])
        if not result.ok:
            raise CheckoutError(format_command_error(result, f"Failed to clone {repo}"))

    def _checkout(self, ref: str) -> None:
        result = self._run(["update", "-q", "-C", "-r", ref])
        if not result.ok:
            raise CheckoutError(format_command_error(result, f"Failed to update to '{ref}'"))

    def _tag_nodes(self) -> dict[str, str]:
        result = self._run(["tags", "--debug"])
        if not result.ok:
            raise CheckoutError(format_command_error(result, "Failed to list tags"))
        return parse_hg_tags(result.stdout_text())

    def _tags(self) -> list[str]:
        return list(self._tag_nodes())

    def revision_from_tag(self, tag: str) -> str:
        node = self._tag_nodes().get(tag)
        if node is None:
            raise NotFoundError(f"Tag '{tag}' not found")
        return node

    def revisions(self) -> list[str]:
        result = self._run(["log", "--template", "{node}\\n"])
        if not result.ok:
            raise CheckoutError(format_command_error(result, "Failed to list revisions"))
        return [line for line in result.stdout_text().splitlines() if line]

    def reachable_tag(self, rev: str) -> str:
        """Get the most recent tag reachable from rev.

        Tagged ancestors are visited newest first; the first one with any
        tag decides, preferring its highest semantic version tag.

        Raises:
            NotFoundError: If rev is not a known revision.
            VersionNotFoundError: If no tag is reachable.
        """
        revset = f"reverse(ancestors({revset_string(rev)}) and tag())"
        result = self._run(["log", "-r", revset, "--template", "{tags}\\n"])
        if not result.ok:
            raise NotFoundError(format_command_error(result, f"Unknown revision '{rev}'"))
        for line in result.stdout_text().splitlines():
            tags = [tag for tag in line.split() if tag != TIP]
            tag = preferred_tag(tags)
            if tag is not None:
                return tag
        raise VersionNotFoundError(f"No tag reachable from '{rev}'")

    def time_from_revision(self, rev: str) -> datetime:
        result = self._run(["log", "-r", rev, "--template", "{date|hgdate}"])
        if not result.ok:
            raise NotFoundError(format_command_error(result, f"Unknown revision '{rev}'"))
        # hgdate is "<unix time> <offset>"; the unix time is already UTC
        fields = result.stdout_text().split()
        try:
            timestamp = float(fields[0])
        except (IndexError, ValueError) as e:
            raise NotFoundError(f"No commit time for revision '{rev}'") from e
        return datetime.fromtimestamp(timestamp, tz=UTC)

    def _list_file_hashes(self, ref: str, sub_path: str) -> FileHashes:
        self._ensure_synced(ref)
        sub_path = sub_path.strip("/")
        args = ["files", "-r", ref, "-0"]
        if sub_path:
            args += ["--", f"path:{sub_path}"]
        result = self._run(args)
        # hg files exits 1 when nothing matches
        if result.returncode == 1 and not result.stdout:
            return FileHashes()
        if not result.ok:
            raise NotFoundError(format_command_error(result, f"Failed to list files at '{ref}'"))

        prefix = f"{sub_path}/" if sub_path else ""
        hashes: list[FileHash] = []
        for path in result.stdout.decode("utf-8", errors="surrogateescape").split("\0"):
            if not path or not path.startswith(prefix):
                continue
            abs_path = self._dir / path
            if abs_path.is_symlink() or not abs_path.is_file():
                continue
            relative = path[len(prefix) :]
            hashes.append(self._hasher.hash(relative, abs_path))
        logger.debug(f"Hashed {len(hashes)} file(s) under {sub_path!r} at {ref}")
        return FileHashes.from_iterable(hashes)
