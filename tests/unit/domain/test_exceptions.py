"""Tests for domain exceptions."""

import pytest

from vendortrace.domain.exceptions import (
    CheckoutError,
    DiffToolError,
    NoMatchError,
    UnknownBackendError,
    VendorTraceError,
    VersionNotFoundError,
)


def test_message_and_hint_stored():
    error = CheckoutError("Failed to clone", hint="Check the URL")
    assert error.message == "Failed to clone"
    assert error.hint == "Check the URL"
    assert str(error) == "Failed to clone"


def test_hint_defaults_to_none():
    assert NoMatchError("nothing").hint is None


@pytest.mark.parametrize("cls", [CheckoutError, NoMatchError, VersionNotFoundError])
def test_subclasses_share_base(cls):
    """All domain errors can be caught as VendorTraceError."""
    with pytest.raises(VendorTraceError):
        raise cls("boom")


def test_unknown_backend_names_backend():
    error = UnknownBackendError("svn")
    assert error.vcs == "svn"
    assert "'svn'" in error.message
    assert "git" in error.hint and "hg" in error.hint


def test_diff_tool_error_carries_returncode():
    error = DiffToolError("diff exited with status 2", returncode=2)
    assert error.returncode == 2
    assert error.message == "diff exited with status 2"
