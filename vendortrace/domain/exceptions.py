"""Domain exceptions for vendortrace.

These exceptions represent failures of the reconciliation core. They should
be caught at the application boundary (CLI) and converted to user-facing
error messages. None of them are retried automatically.
"""


class VendorTraceError(Exception):
    """Base exception for all vendortrace errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class CheckoutError(VendorTraceError):
    """Raised when a backend command fails while creating or syncing a checkout.

    The checkout may be left in an indeterminate state.
    """

    pass


class NotFoundError(VendorTraceError):
    """Raised when a requested tag or revision does not exist."""

    pass


class VersionNotFoundError(VendorTraceError):
    """Raised when no tag is reachable from a revision.

    This is an expected condition handled by the pseudo-version algorithm.
    """

    pass


class UnknownBackendError(VendorTraceError):
    """Raised when a repository uses an unsupported version control system."""

    def __init__(self, vcs: str) -> None:
        super().__init__(
            f"Unknown version control system: {vcs!r}",
            hint="Supported backends are 'git' and 'hg'",
        )
        self.vcs = vcs


class DiffToolError(VendorTraceError):
    """Raised when the external diff tool exits with an unexpected status."""

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode


class CommandTimeoutError(VendorTraceError):
    """Raised when an external command does not finish within its timeout."""

    pass


class FileAccessError(VendorTraceError):
    """Raised when a file cannot be opened, read or written."""

    pass


class WorkingTreeClosedError(VendorTraceError):
    """Raised when a working tree is used after close()."""

    pass


class NoMatchError(VendorTraceError):
    """Raised when no tag or revision matches a vendored tree."""

    pass
