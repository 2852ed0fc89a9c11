"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging

import click

from ..config import SyncConfig, split_patterns
from ..exceptions import ConfigurationError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _echo_line(line: str) -> None:
    """Reporter that writes one progress line to stdout."""
    click.echo(line)


def _split_all(values) -> list[str]:
    """Flatten repeated ``--xf a;b --xf c`` values into one pattern list."""
    result: list[str] = []
    for v in values or ():
        result.extend(split_patterns(v))
    return result


def _build_config(ctx, source, destination, *, exclude_files, exclude_folders,
                  exclude_from, mirror, workers) -> SyncConfig:
    """Assemble and validate a SyncConfig from command-line values."""
    config = SyncConfig(
        source=source,
        destination=destination,
        exclude_files=_split_all(exclude_files),
        exclude_folders=_split_all(exclude_folders),
        exclude_from=exclude_from,
        mirror=mirror,
        verbose=ctx.obj.get("verbose", False),
        workers=workers,
    )
    try:
        config.compile()
        config.validate()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    return config


def _print_errors(report) -> None:
    for e in report.errors:
        click.echo(f"ERROR: {e.path}: {e.error}", err=True)


def _format_summary(report) -> str:
    """One-line +N =N -N summary from a SyncReport."""
    parts = []
    if report.created:
        parts.append(f"+{len(report.created)}")
    if report.copied:
        parts.append(f"={len(report.copied)}")
    if report.deleted:
        parts.append(f"-{len(report.deleted)}")
    return " ".join(parts) if parts else "no changes"


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

def _exclude_options(f):
    """Shared --xf / --xd / --exclude-from options."""
    f = click.option("--exclude-from", "exclude_from", type=click.Path(exists=True, dir_okay=False),
                     help="Read exclude patterns from file (folder patterns end in '/').")(f)
    f = click.option("--xd", "exclude_folders", multiple=True, metavar="PATTERNS",
                     help="Exclude folders matching glob patterns (';'-separated, repeatable).")(f)
    f = click.option("--xf", "exclude_files", multiple=True, metavar="PATTERNS",
                     help="Exclude files matching glob patterns (';'-separated, repeatable).")(f)
    return f


def _dry_run_option(f):
    return click.option("-n", "--dry-run", is_flag=True, default=False,
                        help="Show what would change without writing.")(f)


def _workers_option(f):
    return click.option("--workers", "-j", type=int, default=None,
                        help="Worker threads (default: thread pool default).")(f)


def _watch_options(f):
    f = click.option("--debounce", type=int, default=2000,
                     help="Debounce delay in ms for --watch (default: 2000).")(f)
    f = click.option("--watch", "watch", is_flag=True, default=False,
                     help="Watch the source and sync continuously.")(f)
    return f


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True,
              help="Report every folder and file compared.")
@click.option("--debug", is_flag=True, help="Debug logging on stderr.")
@click.pass_context
def main(ctx, verbose, debug):
    """foldersync: mirror one directory tree into another.

    Copies new and modified files (newer timestamp wins) and, with
    --mirror, deletes destination entries missing from the source.

    \b
    Quick start:
      foldersync sync src/ out/
      foldersync sync src/ out/ --xf "*.tmp;*.log" --xd obj --xd bin
      foldersync mirror src/ out/

    \b
    Output lines:
      +PATH           folder created
      =SRC -> DEST    file copied
      -PATH           file or folder deleted
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
