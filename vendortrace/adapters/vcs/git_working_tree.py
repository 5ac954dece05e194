"""Git working tree implemented with git CLI commands."""

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

# ls-tree modes of regular files; symlinks (120000) and submodules (160000)
# are not file content
REGULAR_FILE_MODES = frozenset({"100644", "100755"})

_TAG_DECORATION_PREFIX = "tag: "


def parse_ls_tree(output: bytes, sub_path: str) -> list[tuple[str, str]]:
    """Parse 'git ls-tree -r -z' output into (relative path, blob id) pairs.

    Args:
        output: Raw NUL-separated ls-tree output.
        sub_path: Directory the listing was restricted to; stripped from
            each path.

    Returns:
        Pairs for regular files only, paths relative to sub_path.
    """
    prefix = f"{sub_path.strip('/')}/" if sub_path.strip("/") else ""
    entries: list[tuple[str, str]] = []
    for record in output.decode("utf-8", errors="surrogateescape").split("\0"):
        if not record:
            continue
        meta, _, path = record.partition("\t")
        parts = meta.split()
        if len(parts) != 3:
            logger.warning(f"Unexpected ls-tree record '{record}'. Skipping.")
            continue
        mode, obj_type, obj_id = parts
        if obj_type != "blob" or mode not in REGULAR_FILE_MODES:
            continue
        if prefix:
            if not path.startswith(prefix):
                continue
            path = path[len(prefix) :]
        entries.append((path, obj_id))
    return entries


def parse_tag_decorations(output: str) -> list[list[str]]:
    """Parse '%D' decorations from git log into per-commit tag lists.

    Args:
        output: git log output with one '%D' line per commit.

    Returns:
        Tag lists for decorated commits, in log order. Commits without
        tags are omitted.
    """
    commits: list[list[str]] = []
    for line in output.splitlines():
        tags = [
            item[len(_TAG_DECORATION_PREFIX) :]
            for item in (part.strip() for part in line.split(","))
            if item.startswith(_TAG_DECORATION_PREFIX)
        ]
        if tags:
            commits.append(tags)
    return commits


class GitWorkingTree(BaseWorkingTree):
    """Working tree for git repositories.

    File hashes come straight from 'git ls-tree', so they are git blob IDs;
    the paired hasher computes the same IDs for local files.
    """

    command = "git"

    @classmethod
    def clone(cls, runner: ProcessRunner, repo: str, directory: Path) -> None:
        result = runner.run(["git", "clone", "-q", "--", repo, str(directory)])
        if not result.ok:
            raise CheckoutError(format_command_error(result, f"Failed to clone {repo}"))

    def _checkout(self, ref: str) -> None:
        result = self._run(
            ["-c", "advice.detachedHead=false", "checkout", "-q", "--force", "--detach", ref]
        )
        if not result.ok:
            raise CheckoutError(format_command_error(result, f"Failed to check out '{ref}'"))

    def _tags(self) -> list[str]:
        result = self._run(["tag", "--list"])
        if not result.ok:
            raise CheckoutError(format_command_error(result, "Failed to list tags"))
        return [line for line in result.stdout_text().splitlines() if line]

    def revision_from_tag(self, tag: str) -> str:
        result = self._run(["rev-parse", "--verify", "-q", f"refs/tags/{tag}^{{commit}}"])
        if not result.ok:
            raise NotFoundError(f"Tag '{tag}' not found")
        return result.stdout_text().strip()

    def revisions(self) -> list[str]:
        result = self._run(["rev-list", "--all"])
        if not result.ok:
            raise CheckoutError(format_command_error(result, "Failed to list revisions"))
        return [line for line in result.stdout_text().splitlines() if line]

    def reachable_tag(self, rev: str) -> str:
        """Get the most recent tag reachable from rev.

        Tagged ancestors are visited newest first; the first one with any
        tag decides. When that commit has several tags, the highest
        semantic version wins, then the lexically smallest tag.

        Raises:
            NotFoundError: If rev is not a known revision.
            VersionNotFoundError: If no tag is reachable.
        """
        result = self._run(
            [
                "log",
                "--simplify-by-decoration",
                "--decorate=short",
                "--decorate-refs=refs/tags/",
                "--format=%D",
                rev,
                "--",
            ]
        )
        if not result.ok:
            raise NotFoundError(format_command_error(result, f"Unknown revision '{rev}'"))
        for tags in parse_tag_decorations(result.stdout_text()):
            tag = preferred_tag(tags)
            if tag is not None:
                return tag
        raise VersionNotFoundError(f"No tag reachable from '{rev}'")

    def time_from_revision(self, rev: str) -> datetime:
        result = self._run(["log", "-1", "--format=%ct", rev, "--"])
        if not result.ok:
            raise NotFoundError(format_command_error(result, f"Unknown revision '{rev}'"))
        try:
            timestamp = int(result.stdout_text().strip())
        except ValueError as e:
            raise NotFoundError(f"No commit time for revision '{rev}'") from e
        return datetime.fromtimestamp(timestamp, tz=UTC)

    def _list_file_hashes(self, ref: str, sub_path: str) -> FileHashes:
        args = ["ls-tree", "-r", "-z", "--full-tree", ref]
        if sub_path.strip("/"):
            args += ["--", f"{sub_path.strip('/')}/"]
        result = self._run(args)
        if not result.ok:
            raise NotFoundError(format_command_error(result, f"Failed to list files at '{ref}'"))
        return FileHashes.from_iterable(
            FileHash(path=path, digest=blob_id)
            for path, blob_id in parse_ls_tree(result.stdout, sub_path)
        )
