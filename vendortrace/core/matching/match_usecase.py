"""Match use case: find the upstream tag or revision a vendored tree came from."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from vendortrace.core.use_case_errors import format_error_message, log_use_case_error
from vendortrace.core.versioning.pseudo import pseudo_version
from vendortrace.domain.entities import FileHashes, Reference
from vendortrace.domain.exceptions import NoMatchError
from vendortrace.ports.vcs import WorkingTree

logger = logging.getLogger(__name__)


@dataclass
class MatchRequest:
    """Request to match a vendored directory against upstream history.

    Attributes:
        vendor_dir: Local directory holding the vendored copy.
        sub_path: Directory within the upstream repository that was vendored.
        try_revisions: Compare individual revisions when no tag matches.
        max_revisions: Limit on revisions compared (0 means unlimited).
    """

    vendor_dir: Path
    sub_path: str = ""
    try_revisions: bool = True
    max_revisions: int = 0


@dataclass
class MatchResponse:
    """Result of matching a vendored directory.

    Attributes:
        reference: The matching tag/revision, or None on failure.
        files_compared: Number of vendored files compared.
        refs_compared: Number of tags and revisions tried.
        closest_ref: Ref with the fewest mismatching files, when nothing matched.
        mismatched_paths: Files that differ at closest_ref.
        success: Whether a match was found.
        error: Error message if matching failed.
    """

    reference: Reference | None = None
    files_compared: int = 0
    refs_compared: int = 0
    closest_ref: str | None = None
    mismatched_paths: list[str] = field(default_factory=list)
    success: bool = True
    error: str | None = None

    @classmethod
    def create_success(
        cls, reference: Reference, *, files_compared: int, refs_compared: int
    ) -> "MatchResponse":
        return cls(
            reference=reference,
            files_compared=files_compared,
            refs_compared=refs_compared,
        )

    @classmethod
    def create_error(
        cls,
        message: str,
        *,
        files_compared: int = 0,
        refs_compared: int = 0,
        closest_ref: str | None = None,
        mismatched_paths: list[str] | None = None,
    ) -> "MatchResponse":
        return cls(
            files_compared=files_compared,
            refs_compared=refs_compared,
            closest_ref=closest_ref,
            mismatched_paths=mismatched_paths or [],
            success=False,
            error=message,
        )


class _Closest:
    """Tracks the ref with the fewest mismatching files."""

    def __init__(self) -> None:
        self.ref: str | None = None
        self.mismatches: list[str] = []

    def offer(self, ref: str, mismatches: list[str]) -> None:
        if self.ref is None or len(mismatches) < len(self.mismatches):
            self.ref = ref
            self.mismatches = mismatches


class MatchUseCase:
    """Find the upstream reference whose files match a vendored tree.

    Version tags are tried highest first, then (optionally) revisions newest
    first. A ref matches when every vendored file exists upstream with the
    same digest; upstream may contain additional files.
    """

    def __init__(self, working_tree: WorkingTree) -> None:
        """Initialize the use case.

        Args:
            working_tree: Checkout of the upstream repository.
        """
        self.working_tree = working_tree

    def execute(self, request: MatchRequest) -> MatchResponse:
        """Match request.vendor_dir against upstream tags and revisions.

        Args:
            request: Match request.

        Returns:
            MatchResponse with the matching reference or an error.
        """
        closest = _Closest()
        local: FileHashes | None = None
        refs_compared = 0
        try:
            local = self.working_tree.file_hashes_from_dir(request.vendor_dir)
            if not local:
                raise NoMatchError(f"No files found in {request.vendor_dir}")
            logger.info(f"Matching {len(local)} file(s) from {request.vendor_dir}")

            for tag in self.working_tree.version_tags():
                refs_compared += 1
                if self._matches(tag, local, request.sub_path, closest):
                    reference = Reference(
                        tag=tag,
                        revision=self.working_tree.revision_from_tag(tag),
                        version=tag,
                    )
                    return MatchResponse.create_success(
                        reference, files_compared=len(local), refs_compared=refs_compared
                    )

            if request.try_revisions:
                revisions = self.working_tree.revisions()
                if request.max_revisions:
                    revisions = revisions[: request.max_revisions]
                for rev in revisions:
                    refs_compared += 1
                    if self._matches(rev, local, request.sub_path, closest):
                        reference = Reference(
                            tag=None,
                            revision=rev,
                            version=pseudo_version(self.working_tree, rev),
                        )
                        return MatchResponse.create_success(
                            reference,
                            files_compared=len(local),
                            refs_compared=refs_compared,
                        )

            raise NoMatchError(
                f"No upstream tag or revision matches {request.vendor_dir}",
                hint="Run 'vendortrace diff' against the closest ref to inspect changes",
            )

        except (KeyboardInterrupt, SystemExit):
            raise
        except NoMatchError as e:
            logger.info(e.message)
            return MatchResponse.create_error(
                e.message,
                files_compared=len(local) if local else 0,
                refs_compared=refs_compared,
                closest_ref=closest.ref,
                mismatched_paths=closest.mismatches,
            )
        except Exception as e:
            log_use_case_error(e, "matching")
            return MatchResponse.create_error(
                format_error_message(e, "matching"), refs_compared=refs_compared
            )

    def _matches(
        self, ref: str, local: FileHashes, sub_path: str, closest: _Closest
    ) -> bool:
        upstream = self.working_tree.file_hashes_from_ref(ref, sub_path)
        mismatches = local.mismatches(upstream)
        logger.debug(f"{ref}: {len(mismatches)} mismatching file(s)")
        if mismatches:
            closest.offer(ref, mismatches)
            return False
        return True
