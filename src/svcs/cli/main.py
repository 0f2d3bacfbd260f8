"""Main CLI interface for SVCS."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from svcs.core.repository import SvcsRepository
from svcs.errors import (
    CommitNotFoundError,
    NothingToCommitError,
    PathNotFoundError,
    StorageError,
)

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True)

MENU = """These are SVCS commands:
config     Get and set a username.
add        Add a file to the index.
log        Show commit logs.
commit     Save changes.
checkout   Restore a file."""

# Commands take at most one positional argument; anything after it is ignored.
COMMAND_SETTINGS = {"ignore_unknown_options": True, "allow_extra_args": True}
COMMAND_OPTIONS = {"context_settings": COMMAND_SETTINGS, "add_help_option": False}


class SvcsGroup(click.Group):
    """Command group that reports unknown commands instead of failing."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        return _unknown_command(cmd_name)


def _unknown_command(name: str) -> click.Command:
    def callback(args):
        console.print(f"'{escape(_show(name))}' is not a SVCS command.")

    return click.Command(
        name,
        callback=callback,
        params=[click.Argument(["args"], nargs=-1, type=click.UNPROCESSED)],
        context_settings=COMMAND_SETTINGS,
        add_help_option=False,
    )


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    package_logger = logging.getLogger("svcs")
    package_logger.setLevel(logging.DEBUG)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    package_logger.addHandler(RichHandler(console=err_console, show_path=False))


def _show(value: str) -> str:
    """Make user text safe to print: undecodable bytes become U+FFFD."""
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _get_repo(ctx: click.Context) -> SvcsRepository:
    return ctx.find_object(SvcsRepository)


def _report_storage_error(e: StorageError) -> None:
    console.print(f"[red]Error: {escape(_show(str(e)))}[/red]")
    raise click.Abort() from e


@click.group(
    cls=SvcsGroup,
    invoke_without_command=True,
    add_help_option=False,
    context_settings={"ignore_unknown_options": True},
)
@click.option("--help", "show_help", is_flag=True, help="Show the command summary.")
@click.option(
    "--project-path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Path to project directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Log filesystem activity")
@click.version_option(package_name="svcs")
@click.pass_context
def main(ctx: click.Context, show_help: bool, project_path: str, verbose: bool):
    """SVCS - track files, commit snapshots and check them out."""
    _setup_logging(verbose)

    repo = SvcsRepository(Path(project_path))
    try:
        repo.init()
    except OSError:
        console.print(f"Failed to create directory: {escape(repo.settings.root_name)}")
    ctx.obj = repo

    if show_help or ctx.invoked_subcommand is None:
        console.print(MENU)
        ctx.exit()


@main.command(**COMMAND_OPTIONS)
@click.argument("username", required=False)
@click.pass_context
def config(ctx: click.Context, username: Optional[str]):
    """Get and set a username."""
    repo = _get_repo(ctx)

    if username is None:
        stored = repo.get_username()
        if stored is None:
            console.print("Please, tell me who you are.")
        else:
            console.print(f"The username is {escape(_show(stored))}.")
        return

    try:
        repo.set_username(username)
    except StorageError as e:
        _report_storage_error(e)
    console.print(f"The username is {escape(_show(username))}.")


@main.command(**COMMAND_OPTIONS)
@click.argument("filename", required=False)
@click.pass_context
def add(ctx: click.Context, filename: Optional[str]):
    """Add a file to the index."""
    repo = _get_repo(ctx)

    if filename is None:
        if not repo.tracked_files():
            console.print("Add a file to the index.")
        else:
            console.print(_show(repo.index_text()), markup=False)
        return

    try:
        repo.track(filename)
    except PathNotFoundError:
        console.print(f"Can't find '{escape(_show(filename))}'.")
        return
    except StorageError as e:
        _report_storage_error(e)
    console.print(f"The file '{escape(_show(filename))}' is tracked.")


@main.command(**COMMAND_OPTIONS)
@click.option(
    "--by-commit", is_flag=True, help="Show whole records, newest first"
)
@click.pass_context
def log(ctx: click.Context, by_commit: bool):
    """Show commit logs."""
    repo = _get_repo(ctx)

    lines = repo.log_lines()
    if not lines:
        console.print("No commits yet.")
        return

    if by_commit:
        for commit in reversed(repo.commits()):
            for line in commit.to_lines():
                console.print(_show(line), markup=False)
        return

    for line in reversed(lines):
        console.print(_show(line), markup=False)


@main.command(**COMMAND_OPTIONS)
@click.argument("message", required=False)
@click.pass_context
def commit(ctx: click.Context, message: Optional[str]):
    """Save changes."""
    if message is None:
        console.print("Message was not passed.")
        return

    repo = _get_repo(ctx)
    try:
        repo.commit(message)
    except NothingToCommitError:
        console.print("Nothing to commit.")
        return
    except StorageError as e:
        _report_storage_error(e)
    console.print("Changes are committed.")


@main.command(**COMMAND_OPTIONS)
@click.argument("commit_id", required=False)
@click.pass_context
def checkout(ctx: click.Context, commit_id: Optional[str]):
    """Restore a file."""
    if commit_id is None:
        console.print("Commit id was not passed.")
        return

    repo = _get_repo(ctx)
    try:
        repo.checkout(commit_id)
    except CommitNotFoundError:
        console.print("Commit does not exist.")
        return
    except StorageError as e:
        _report_storage_error(e)
    console.print(f"Switched to commit {escape(_show(commit_id))}.")


if __name__ == "__main__":
    main()
