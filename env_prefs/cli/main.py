"""env-prefs CLI interface."""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from env_prefs.core.di_container import Container, configure_container
from env_prefs.core.exceptions import PreferenceError
from env_prefs.core.settings import get_settings

console = Console(stderr=False)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Enable debug level logging, overriding the configured level
    """
    config = get_settings()
    log_level = logging.DEBUG if verbose else config.log_level
    log_format = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=log_level, format=log_format, datefmt=date_format, stream=sys.stderr, force=True
    )

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)


def _container(ctx: click.Context) -> Container:
    return ctx.ensure_object(dict)["container"]


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    sys.exit(1)


def _parse_param(raw: str) -> tuple[str, Any]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="--param")
    try:
        return name, json.loads(value)
    except ValueError:
        return name, value


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--storage-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding preferences.json (default: from settings)",
)
@click.option(
    "--backend",
    type=click.Choice(["file", "memory", "none"]),
    help="Storage backend (default: from settings)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, storage_dir: Path | None, backend: str | None) -> None:
    """env-prefs - environment-scoped preferences and history"""
    setup_logging(verbose)
    ctx.ensure_object(dict)["container"] = configure_container(
        storage_path=storage_dir, storage_backend=backend
    )


@cli.command()
@click.argument("environment_id")
@click.pass_context
def keys(ctx: click.Context, environment_id: str) -> None:
    """List stored keys for an environment"""
    prefs = _container(ctx).preferences()
    for key in sorted(prefs.list_environment_keys(environment_id)):
        console.print(key, markup=False, soft_wrap=True)


@cli.command("get")
@click.argument("environment_id")
@click.argument("key")
@click.pass_context
def get_pref(ctx: click.Context, environment_id: str, key: str) -> None:
    """Print a preference as JSON"""
    value = _container(ctx).preferences().get(environment_id, key)
    if value is None:
        console.print("[dim]not set[/dim]")
        return
    console.print_json(json.dumps(value))


@cli.command("set")
@click.argument("environment_id")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_pref(ctx: click.Context, environment_id: str, key: str, value: str) -> None:
    """Store a JSON VALUE under KEY"""
    try:
        decoded = json.loads(value)
    except ValueError as e:
        _fail(f"VALUE is not valid JSON: {e}")
    try:
        _container(ctx).preferences().set(environment_id, key, decoded)
    except PreferenceError as e:
        _fail(str(e))


@cli.group()
def recents() -> None:
    """Recently used Kubernetes resources"""


@recents.command("list")
@click.argument("environment_id")
@click.argument("resource_type")
@click.pass_context
def recents_list(ctx: click.Context, environment_id: str, resource_type: str) -> None:
    """List recent values for a resource type, most recent first"""
    values = _container(ctx).preferences().get_k8s_recents(environment_id, resource_type)
    if not values:
        console.print(f"[dim]No recent {resource_type} values[/dim]")
        return
    for value in values:
        console.print(value, markup=False, soft_wrap=True)


@recents.command("add")
@click.argument("environment_id")
@click.argument("resource_type")
@click.argument("value")
@click.pass_context
def recents_add(ctx: click.Context, environment_id: str, resource_type: str, value: str) -> None:
    """Record VALUE as the most recent resource of its type"""
    _container(ctx).preferences().save_k8s_recent(environment_id, resource_type, value)


@recents.command("clear")
@click.argument("environment_id")
@click.argument("resource_type")
@click.pass_context
def recents_clear(ctx: click.Context, environment_id: str, resource_type: str) -> None:
    """Forget recent values for a resource type"""
    _container(ctx).preferences().clear_k8s_recents(environment_id, resource_type)


@cli.group()
def urls() -> None:
    """Recently used gadget URLs"""


@urls.command("list")
@click.argument("environment_id")
@click.pass_context
def urls_list(ctx: click.Context, environment_id: str) -> None:
    """List recent gadget URLs, most recent first"""
    for url in _container(ctx).preferences().get_gadget_url_recents(environment_id):
        console.print(url, markup=False, soft_wrap=True)


@urls.command("add")
@click.argument("environment_id")
@click.argument("url")
@click.pass_context
def urls_add(ctx: click.Context, environment_id: str, url: str) -> None:
    """Record URL as the most recent gadget URL"""
    _container(ctx).preferences().save_gadget_url_recent(environment_id, url)


@cli.group()
def history() -> None:
    """Gadget run history"""


@history.command("list")
@click.argument("environment_id")
@click.pass_context
def history_list(ctx: click.Context, environment_id: str) -> None:
    """Show gadget run history, most recent first"""
    records = _container(ctx).preferences().get_gadget_history(environment_id)
    if not records:
        console.print("[dim]No gadget runs recorded[/dim]")
        return

    table = Table(title=f"Gadget history: {environment_id}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Image", style="cyan")
    table.add_column("Params")
    table.add_column("Timestamp", style="green")
    for index, record in enumerate(records, start=1):
        table.add_row(
            str(index),
            record.image,
            json.dumps(record.params, sort_keys=True),
            "" if record.timestamp is None else str(record.timestamp),
        )
    console.print(table)


@history.command("add")
@click.argument("environment_id")
@click.argument("image")
@click.option("--param", "-p", "params", multiple=True, help="Gadget parameter as NAME=VALUE")
@click.option("--timestamp", type=int, help="Run timestamp in milliseconds (default: now)")
@click.pass_context
def history_add(
    ctx: click.Context,
    environment_id: str,
    image: str,
    params: tuple[str, ...],
    timestamp: int | None,
) -> None:
    """Record a gadget run of IMAGE"""
    request = {
        "image": image,
        "params": dict(_parse_param(raw) for raw in params),
        "timestamp": timestamp if timestamp is not None else int(time.time() * 1000),
    }
    try:
        _container(ctx).preferences().add_gadget_to_history(environment_id, request)
    except PreferenceError as e:
        _fail(str(e))


@cli.command()
@click.argument("environment_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def cleanup(ctx: click.Context, environment_id: str, yes: bool) -> None:
    """Delete every preference stored for an environment"""
    container = _container(ctx)
    prefs = container.preferences()
    removed: list[int] = []

    def _on_resolve(confirmed: bool) -> None:
        if confirmed:
            removed.append(prefs.cleanup_environment(environment_id))

    request = container.confirmations().request(
        message=f"Delete all preferences for environment {environment_id}?",
        title="Delete environment",
        confirm_label="Delete",
        on_resolve=_on_resolve,
    )
    if yes or click.confirm(request.message):
        container.confirmations().confirm(request.token)
    else:
        container.confirmations().cancel(request.token)
        console.print("[yellow]Cleanup cancelled.[/yellow]")
        return

    count = removed[0] if removed else 0
    console.print(f"[green]Removed {count} keys for environment {environment_id}[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
