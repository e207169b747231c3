"""CLI entrypoint for walks."""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path

import click
from pydantic import ValidationError

from walks.config.models import WalkSettings
from walks.config.store import SettingsStore
from walks.errors import WalkError
from walks.fs.context import Walker
from walks.paths import settings_path
from walks.runtime_logging import configure_runtime_logging
from walks.version import __version__


def _walk_options(func):
    options = [
        click.argument("root", required=False, default="."),
        click.option("--depth", type=click.IntRange(min=-1), default=None, help="Depth bound, -1 for unlimited [default: from settings]"),
        click.option("--ignore", "ignore_file", default=None, help="Ignore file; pass '' to disable"),
        click.option("--linear", is_flag=True, help="Walk on a single thread"),
        click.option("--workers", "max_workers", type=click.IntRange(min=1), default=None, help="Bounded thread pool size"),
        click.option("--log-level", default=None, help="off|error|warning|info|debug"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_settings(ctx: click.Context) -> WalkSettings:
    store: SettingsStore = ctx.obj["store"]
    return store.load()


def _run_walk(
    settings: WalkSettings,
    root: str,
    depth: int | None,
    ignore_file: str | None,
    linear: bool,
    max_workers: int | None,
    log_level: str | None,
    on_file,
    on_dir,
) -> None:
    configure_runtime_logging(level=log_level or settings.logging.level, log_file=settings.logging.file)
    effective_depth = settings.depth if depth is None else depth
    workers = max_workers if max_workers is not None else settings.max_workers
    use_linear = linear or settings.strategy == "linear"

    walker = Walker(max_workers=workers)
    try:
        walker.configure_ignore(settings.ignore_file if ignore_file is None else ignore_file)
        if use_linear:
            walker.walk_linear(root, on_file, on_dir, effective_depth)
        else:
            walker.walk(root, on_file, on_dir, effective_depth)
    except WalkError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_path(path: str, suffix: str = "") -> None:
    # Undecodable names arrive surrogate-escaped; emit the original bytes.
    click.echo(os.fsencode(path + suffix))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--settings",
    "settings_file",
    envvar="WALKS_SETTINGS",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file [default: platform config dir]",
)
@click.pass_context
def main(ctx: click.Context, settings_file: Path | None) -> None:
    """walks: walk directory trees concurrently, honouring an ignore file."""
    ctx.ensure_object(dict)
    ctx.obj["store"] = SettingsStore(settings_file)


@main.command()
@_walk_options
@click.option("--files-only", is_flag=True, help="Only print files")
@click.option("--dirs-only", is_flag=True, help="Only print directories")
@click.pass_context
def tree(
    ctx: click.Context,
    root: str,
    depth: int | None,
    ignore_file: str | None,
    linear: bool,
    max_workers: int | None,
    log_level: str | None,
    files_only: bool,
    dirs_only: bool,
) -> None:
    """Print every file and directory under ROOT."""
    if files_only and dirs_only:
        raise click.UsageError("--files-only and --dirs-only are mutually exclusive")
    lock = threading.Lock()

    def on_file(path: str) -> None:
        if dirs_only:
            return
        with lock:
            _echo_path(path)

    def on_dir(path: str) -> None:
        if files_only:
            return
        with lock:
            _echo_path(path, "/")

    settings = _load_settings(ctx)
    _run_walk(settings, root, depth, ignore_file, linear, max_workers, log_level, on_file, on_dir)


@main.command()
@_walk_options
@click.pass_context
def count(
    ctx: click.Context,
    root: str,
    depth: int | None,
    ignore_file: str | None,
    linear: bool,
    max_workers: int | None,
    log_level: str | None,
) -> None:
    """Print file and directory totals under ROOT as JSON."""
    totals = {"files": 0, "dirs": 0}
    lock = threading.Lock()

    def on_file(path: str) -> None:  # noqa: ARG001
        with lock:
            totals["files"] += 1

    def on_dir(path: str) -> None:  # noqa: ARG001
        with lock:
            totals["dirs"] += 1

    settings = _load_settings(ctx)
    _run_walk(settings, root, depth, ignore_file, linear, max_workers, log_level, on_file, on_dir)
    click.echo(json.dumps({"root": root, **totals}, sort_keys=True))


@main.group("settings", invoke_without_command=True)
@click.pass_context
def settings_group(ctx: click.Context) -> None:
    """Show or change stored settings."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(show_settings)


@settings_group.command("show")
@click.pass_context
def show_settings(ctx: click.Context) -> None:
    """Show effective settings."""
    for key, value in _load_settings(ctx).setting_items():
        click.echo(f"{key} = {value}")


@settings_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_setting(ctx: click.Context, key: str, value: str) -> None:
    """Set KEY (dotted, e.g. logging.level) to VALUE; JSON values are decoded."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    store: SettingsStore = ctx.obj["store"]
    try:
        updated = store.update(key, parsed)
    except KeyError as exc:
        raise click.BadParameter(exc.args[0], param_hint="KEY") from exc
    except ValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUE") from exc
    click.echo(f"{key} = {dict(updated.setting_items())[key]}")


@main.command("settings-path")
@click.pass_context
def settings_path_command(ctx: click.Context) -> None:
    """Print settings file path."""
    store: SettingsStore = ctx.obj["store"]
    click.echo(str(store.path))


@main.command()
def about() -> None:
    """Show version and project summary."""
    payload = {
        "name": "walks",
        "version": __version__,
        "description": "Concurrent and linear directory walking with ignore files",
        "default_settings": str(settings_path()),
    }
    click.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
