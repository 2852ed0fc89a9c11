"""Watch mode for the sync command."""

from __future__ import annotations

import datetime

import click

from ..exceptions import SyncFailedError
from ..sync import sync_folders
from ._helpers import _echo_line, _format_summary, _print_errors


def _import_watchfiles():
    """Lazy-import watchfiles, raising a friendly error if missing."""
    try:
        import watchfiles
        return watchfiles
    except ImportError:
        raise click.ClickException(
            "watchfiles is required for --watch mode.\n"
            "Install it with: pip install foldersync[watch]"
        )


def _run_sync_cycle(config):
    """Run one sync cycle; the differ re-reads both trees every time."""
    try:
        report = sync_folders(config, reporter=_echo_line)
    except SyncFailedError as exc:
        report = exc.report
    now = datetime.datetime.now().strftime("%H:%M:%S")
    click.echo(f"[{now}] Sync: {_format_summary(report)}")
    _print_errors(report)
    return report


def watch_and_sync(config, *, debounce):
    """Watch ``config.source`` and sync on every change batch."""
    watchfiles = _import_watchfiles()

    # Initial sync to catch up with any pending changes
    click.echo(f"Watching {config.source} -> {config.destination} (debounce {debounce}ms)")
    try:
        _run_sync_cycle(config)
    except OSError as exc:
        click.echo(f"ERROR: Initial sync failed: {exc}", err=True)

    # Watch loop
    try:
        for _changes in watchfiles.watch(config.source, debounce=debounce):
            try:
                _run_sync_cycle(config)
            except OSError as exc:
                click.echo(f"ERROR: Sync failed: {exc}", err=True)
    except KeyboardInterrupt:
        click.echo("\nStopped watching.")
