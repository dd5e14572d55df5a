#!/usr/bin/env python3
"""
fsutils - Bash-like filesystem commands

Main entry point for the fsutils CLI.
"""

import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

import fsutils
from fsutils import FsError, JsonlSink, load_settings


console = Console()


def fail(error: FsError) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error ({error.kind.value}):[/red] {escape(str(error))}")
    sys.exit(1)


@click.group()
@click.version_option(version=fsutils.__version__, prog_name="fsutils")
def cli():
    """
    fsutils - filesystem operations with uniform errors

    Set FSUTILS_LOG=info (or debug) to see diagnostics.
    """
    fsutils.init_logging()


@cli.command()
@click.argument("path")
def exists(path: str):
    """Check whether PATH exists (exit status 1 if not)."""
    if fsutils.exists(path):
        kind = "directory" if fsutils.is_dir(path) else "file" if fsutils.is_file(path) else "other"
        console.print(f"✅ {escape(path)} [dim]({kind})[/dim]")
    else:
        console.print(f"❌ {escape(path)} [dim]does not exist[/dim]")
        sys.exit(1)


@cli.command()
@click.argument("path", default=".")
def ls(path: str):
    """List directory contents."""
    try:
        names = fsutils.list_dir(path)
    except FsError as e:
        fail(e)

    for name in sorted(names):
        if fsutils.is_dir(os.path.join(path, name)):
            console.print(f"[bold blue]{escape(name)}/[/bold blue]")
        else:
            console.print(escape(name))


@cli.command()
@click.argument("src")
@click.argument("dst")
def cp(src: str, dst: str):
    """Copy file SRC to DST."""
    try:
        fsutils.copy(src, dst)
    except FsError as e:
        fail(e)


@cli.command()
@click.argument("src")
@click.argument("dst")
def mv(src: str, dst: str):
    """Move SRC to DST."""
    try:
        fsutils.move(src, dst)
    except FsError as e:
        fail(e)


@cli.command()
@click.option("-r", "--recursive", is_flag=True, help="Remove directories and their contents.")
@click.argument("paths", nargs=-1, required=True)
def rm(recursive: bool, paths):
    """Remove files (or trees with -r)."""
    for path in paths:
        try:
            if recursive:
                fsutils.remove_all(path)
            else:
                fsutils.remove(path)
        except FsError as e:
            fail(e)


@cli.command()
@click.option("-p", "--parents", is_flag=True, help="Create missing parent directories.")
@click.argument("path")
def mkdir(parents: bool, path: str):
    """Create a directory."""
    try:
        fsutils.mkdir(path, parents=parents)
    except FsError as e:
        fail(e)


@cli.command()
@click.argument("path")
def rmdir(path: str):
    """Remove an empty directory."""
    try:
        fsutils.rmdir(path)
    except FsError as e:
        fail(e)


@cli.command()
@click.option("-n", "--number", is_flag=True, help="Number the output lines.")
@click.argument("path")
def cat(number: bool, path: str):
    """Print a text file."""
    try:
        for i, line in enumerate(fsutils.read_lines(path), start=1):
            if number:
                click.echo(f"{i:6}\t{line}")
            else:
                click.echo(line)
    except FsError as e:
        fail(e)


@cli.command()
@click.argument("path")
def size(path: str):
    """Print the size of PATH in bytes."""
    try:
        click.echo(fsutils.size(path))
    except FsError as e:
        fail(e)


@cli.command()
@click.option("--limit", default=20, show_default=True, help="Number of entries to show.")
@click.option("--file", "log_file", default=None, help="JSONL log file (defaults to $FSUTILS_LOG_FILE).")
def log(limit: int, log_file):
    """View recent diagnostics from a JSONL log file."""
    log_file = log_file or load_settings().log_file
    if not log_file:
        console.print("[dim]No log file configured. Set FSUTILS_LOG_FILE or pass --file.[/dim]")
        return

    try:
        entries = JsonlSink(log_file, create_dirs=False).get_recent(limit=limit)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] cannot read {escape(log_file)}: {escape(str(e))}")
        sys.exit(1)

    if not entries:
        console.print("[dim]No log entries found.[/dim]")
        return

    table = Table(title="Recent Diagnostics")
    table.add_column("Time", style="dim")
    table.add_column("Level")
    table.add_column("Operation")
    table.add_column("Message")
    table.add_column("Error")

    for entry in entries:
        time_str = entry.timestamp.split("T")[1].split(".")[0] if "T" in entry.timestamp else entry.timestamp

        level_str = entry.level
        if entry.level == "INFO":
            level_str = f"[cyan]{entry.level}[/cyan]"
        elif entry.level in ("WARN", "ERROR"):
            level_str = f"[red]{entry.level}[/red]"

        message = entry.message[:50] + "..." if len(entry.message) > 50 else entry.message

        table.add_row(
            time_str,
            level_str,
            entry.operation,
            escape(message),
            escape(entry.error or "—")
        )

    console.print(table)


if __name__ == "__main__":
    cli()
