"""Vendortrace CLI entrypoint.

Command-line interface for reconciling vendored packages with upstream
repositories.
"""

from __future__ import annotations

import functools
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from vendortrace.core.working_tree import BaseWorkingTree
    from vendortrace.domain.config import VendorTraceConfig

from vendortrace.core.errors import VendorTraceCliError
from vendortrace.domain.exceptions import VendorTraceError
from vendortrace.version import __version__

logger = logging.getLogger(__name__)


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    VendorTraceError exceptions become CLI errors carrying their hint;
    other failures are reported with a generic hint, with a traceback in
    verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (VendorTraceCliError, click.exceptions.Exit):
                raise
            except VendorTraceError as e:
                raise VendorTraceCliError(e.message, hint=e.hint) from e
            except RuntimeError as e:
                raise VendorTraceCliError(
                    str(e),
                    hint="Run with --verbose for more details",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise VendorTraceCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _load_config() -> VendorTraceConfig:
    """Load configuration for the current directory."""
    from vendortrace.adapters.config import TomlConfigProvider

    return TomlConfigProvider().load(Path.cwd())


@contextmanager
def _working_tree(
    repo: str, vcs: str, config: VendorTraceConfig | None = None
) -> Iterator[BaseWorkingTree]:
    """Clone repo into a temporary working tree, removed on exit."""
    from vendortrace.adapters.factory import create_working_tree
    from vendortrace.domain.entities import RepoRoot

    config = config or _load_config()
    with create_working_tree(RepoRoot(repo=repo, vcs=vcs), config=config) as wt:
        yield wt


def vcs_option(func):
    """Add the shared --vcs option to a command."""
    return click.option(
        "--vcs",
        default="git",
        show_default=True,
        help="Version control system of the upstream repository (git or hg).",
    )(func)


@click.group()
@click.version_option(version=__version__, prog_name="vendortrace")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """Vendortrace - match vendored code to upstream versions.

    Finds which upstream tag or revision a vendored package corresponds to,
    and shows how it has drifted.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("repo", type=str)
@vcs_option
@click.pass_context
@handle_cli_errors("tags")
def tags(ctx: click.Context, repo: str, vcs: str) -> None:
    """List semantic version tags of REPO, highest first."""
    with _working_tree(repo, vcs) as wt:
        for tag in wt.version_tags():
            click.echo(tag)


@cli.command("pseudo-version")
@click.argument("repo", type=str)
@click.argument("rev", type=str)
@vcs_option
@click.pass_context
@handle_cli_errors("pseudo-version")
def pseudo_version_cmd(ctx: click.Context, repo: str, rev: str, vcs: str) -> None:
    """Print the pseudo-version of revision REV in REPO."""
    from vendortrace.core.versioning import pseudo_version

    with _working_tree(repo, vcs) as wt:
        click.echo(pseudo_version(wt, rev))


@cli.command()
@click.argument("repo", type=str)
@click.argument("ref", type=str)
@click.option("--sub-path", default="", help="Directory within the repository.")
@click.option(
    "--fingerprint",
    is_flag=True,
    help="Print a single digest for the whole tree instead of per-file hashes.",
)
@vcs_option
@click.pass_context
@handle_cli_errors("hashes")
def hashes(
    ctx: click.Context,
    repo: str,
    ref: str,
    sub_path: str,
    fingerprint: bool,
    vcs: str,
) -> None:
    """Print file hashes of REPO at tag or revision REF."""
    with _working_tree(repo, vcs) as wt:
        file_hashes = wt.file_hashes_from_ref(ref, sub_path)
        if fingerprint:
            click.echo(file_hashes.fingerprint())
            return
        for fh in file_hashes:
            click.echo(f"{fh.digest}  {fh.path}")


@cli.command()
@click.argument("repo", type=str)
@click.argument("ref", type=str)
@click.argument("path", type=str)
@click.argument(
    "local_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@vcs_option
@click.pass_context
@handle_cli_errors("diff")
def diff(
    ctx: click.Context,
    repo: str,
    ref: str,
    path: str,
    local_file: Path,
    vcs: str,
) -> None:
    """Show a unified diff of PATH in REPO at REF against LOCAL_FILE.

    Exits with status 1 when the files differ.
    """
    with _working_tree(repo, vcs) as wt:
        wt.rev_sync(ref)
        upstream = path if (wt.path / path).is_file() else None
        if upstream is None:
            logger.info(f"{path} does not exist at {ref}")
        sys.stdout.flush()
        differs = wt.diff(sys.stdout.buffer, upstream, local_file)
    if differs:
        ctx.exit(1)


@cli.command()
@click.argument("repo", type=str)
@click.argument(
    "vendor_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--sub-path", default="", help="Directory within the repository.")
@click.option(
    "--revisions/--no-revisions",
    "try_revisions",
    default=None,
    help="Fall back to individual revisions when no tag matches.",
)
@vcs_option
@click.pass_context
@handle_cli_errors("match")
def match(
    ctx: click.Context,
    repo: str,
    vendor_dir: Path,
    sub_path: str,
    try_revisions: bool | None,
    vcs: str,
) -> None:
    """Find the tag or revision of REPO that VENDOR_DIR was copied from."""
    from vendortrace.core.matching import MatchRequest, MatchUseCase

    config = _load_config()
    if try_revisions is None:
        try_revisions = config.match.try_revisions

    with _working_tree(repo, vcs, config) as wt:
        response = MatchUseCase(wt).execute(
            MatchRequest(
                vendor_dir=vendor_dir,
                sub_path=sub_path,
                try_revisions=try_revisions,
                max_revisions=config.match.max_revisions,
            )
        )

    if not response.success or response.reference is None:
        hint = None
        if response.closest_ref:
            hint = (
                f"Closest ref is {response.closest_ref} with "
                f"{len(response.mismatched_paths)} differing file(s)"
            )
        raise VendorTraceCliError(response.error or "No match found", hint=hint)

    reference = response.reference
    if reference.tag:
        click.echo(f"tag:      {reference.tag}")
    click.echo(f"revision: {reference.revision}")
    click.echo(f"version:  {reference.version}")
    if not ctx.obj.get("quiet"):
        click.echo(
            f"Compared {response.files_compared} file(s) against "
            f"{response.refs_compared} ref(s)",
            err=True,
        )


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
