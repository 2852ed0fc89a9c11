"""The sync and mirror commands."""

from __future__ import annotations

import click

from ..exceptions import SyncFailedError
from ..sync import sync_folders, sync_folders_dry_run
from ._helpers import (
    main,
    _build_config,
    _dry_run_option,
    _echo_line,
    _exclude_options,
    _print_errors,
    _status,
    _watch_options,
    _workers_option,
)


def _run(ctx, config, *, dry_run, watch, debounce):
    """Run one sync (or a watch loop) for *config* and set the exit code."""
    if watch:
        if dry_run:
            raise click.ClickException("--watch and --dry-run are incompatible")
        if debounce < 100:
            raise click.ClickException("--debounce must be at least 100 ms")
        from ._watch import watch_and_sync
        watch_and_sync(config, debounce=debounce)
        return

    if dry_run:
        report = sync_folders_dry_run(config, reporter=_echo_line)
    else:
        try:
            report = sync_folders(config, reporter=_echo_line)
        except SyncFailedError as exc:
            report = exc.report
    _print_errors(report)
    _status(ctx, f"Synced -> {config.destination}")
    if report.errors:
        ctx.exit(1)


@main.command()
@click.argument("source", type=click.Path())
@click.argument("destination", type=click.Path())
@_exclude_options
@click.option("--mirror", is_flag=True, default=False,
              help="Also delete destination entries missing from the source.")
@_dry_run_option
@_workers_option
@_watch_options
@click.pass_context
def sync(ctx, source, destination, exclude_files, exclude_folders, exclude_from,
         mirror, dry_run, workers, watch, debounce):
    """Copy new and modified files from SOURCE into DESTINATION.

    A file is copied when DESTINATION has no file of that name or when
    the source copy has a strictly newer modification time.

    \b
    Patterns are case-insensitive globs matched against bare names:
        --xf "*.pyc;*.log"   skip files
        --xd "obj;.git"      skip folders
    """
    config = _build_config(ctx, source, destination,
                           exclude_files=exclude_files,
                           exclude_folders=exclude_folders,
                           exclude_from=exclude_from,
                           mirror=mirror, workers=workers)
    _run(ctx, config, dry_run=dry_run, watch=watch, debounce=debounce)


@main.command()
@click.argument("source", type=click.Path())
@click.argument("destination", type=click.Path())
@_exclude_options
@_dry_run_option
@_workers_option
@_watch_options
@click.pass_context
def mirror(ctx, source, destination, exclude_files, exclude_folders, exclude_from,
           dry_run, workers, watch, debounce):
    """Make DESTINATION an exact copy of SOURCE (sync --mirror).

    Files and folders in DESTINATION that are not in SOURCE are deleted,
    unless their names match an exclude pattern.
    """
    config = _build_config(ctx, source, destination,
                           exclude_files=exclude_files,
                           exclude_folders=exclude_folders,
                           exclude_from=exclude_from,
                           mirror=True, workers=workers)
    _run(ctx, config, dry_run=dry_run, watch=watch, debounce=debounce)
