"""Unit tests for CLI error handling."""

import click
import pytest
from click.testing import CliRunner

from vendortrace.core.errors import VendorTraceCliError
from vendortrace.domain.exceptions import NotFoundError
from vendortrace.entrypoints.cli import handle_cli_errors


class TestVendorTraceCliError:
    """Tests for VendorTraceCliError exception class."""

    def test_error_without_hint(self) -> None:
        error = VendorTraceCliError("Test error message")
        assert error.hint is None
        assert error.format_message() == "Test error message"

    def test_error_with_hint(self) -> None:
        error = VendorTraceCliError("Test error message", hint="Try this instead")
        assert error.format_message() == "Test error message\nHint: Try this instead"

    def test_is_click_exception(self) -> None:
        assert isinstance(VendorTraceCliError("Test"), click.ClickException)


def _command(exc: BaseException) -> click.Command:
    @click.command()
    @click.pass_context
    @handle_cli_errors("probe")
    def probe(ctx: click.Context) -> None:
        raise exc

    return probe


class TestHandleCliErrors:
    """Tests for the handle_cli_errors decorator."""

    def test_domain_error_keeps_hint(self) -> None:
        result = CliRunner().invoke(
            _command(NotFoundError("Tag 'v9' not found", hint="List tags first")), obj={}
        )
        assert result.exit_code == 1
        assert "Error: Tag 'v9' not found" in result.output
        assert "Hint: List tags first" in result.output

    def test_runtime_error_gets_generic_hint(self) -> None:
        result = CliRunner().invoke(_command(RuntimeError("boom")), obj={})
        assert result.exit_code == 1
        assert "--verbose" in result.output

    def test_unexpected_error_names_command(self) -> None:
        result = CliRunner().invoke(_command(KeyError("x")), obj={})
        assert result.exit_code == 1
        assert "Unexpected error in probe" in result.output

    @pytest.mark.parametrize("code", [0, 1])
    def test_exit_passes_through(self, code: int) -> None:
        """Test that deliberate exits are not turned into errors."""
        result = CliRunner().invoke(_command(click.exceptions.Exit(code)), obj={})
        assert result.exit_code == code
        assert "Error" not in result.output
