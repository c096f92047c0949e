"""CLI interface for rediscache (rcache)"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console

from rediscache.cache import RedisCache
from rediscache.config import get_config, load_config, set_config
from rediscache.exceptions import CacheError
from rediscache.factory import create_cache

app = typer.Typer(
    name="rcache",
    help="Inspect and manage a namespaced Redis cache",
    no_args_is_help=True,
)
console = Console()

_MISSING = object()


def parse_value(raw: str) -> Any:
    """Parse a command line value

    Tries JSON first (objects, arrays, numbers, booleans, null) and
    falls back to the raw string.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _config_error(e: Exception) -> typer.Exit:
    console.print(f"[red]✗ Configuration error: {e}[/red]")
    return typer.Exit(1)


def _open_cache() -> RedisCache:
    try:
        return create_cache(get_config())
    except (FileNotFoundError, ValueError, ImportError) as e:
        raise _config_error(e) from e


def _fail(e: CacheError) -> typer.Exit:
    console.print(f"[red]✗ {e.message}[/red]")
    if e.cause is not None:
        console.print(f"  Cause: {e.cause}")
    return typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to .rcache.yaml")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Load environment and global options"""
    load_dotenv()
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    if config is not None:
        try:
            set_config(load_config(config))
        except (FileNotFoundError, ValueError) as e:
            raise _config_error(e) from e


@app.command()
def get(
    key: Annotated[str, typer.Argument(help="Cache key (without prefix)")],
) -> None:
    """Print a cached value

    Example:
        rcache get user:42
    """
    cache = _open_cache()
    try:
        value = cache.get(key, _MISSING)
    except CacheError as e:
        raise _fail(e) from e

    if value is _MISSING:
        console.print(f"[yellow]Cache miss: {cache.make_key(key)}[/yellow]")
        raise typer.Exit(1)
    console.print_json(data=value, default=str)


@app.command(name="set")
def set_(
    key: Annotated[str, typer.Argument(help="Cache key (without prefix)")],
    value: Annotated[str, typer.Argument(help="Value (JSON or plain string)")],
    ttl: Annotated[
        int | None, typer.Option("--ttl", "-t", help="TTL in seconds")
    ] = None,
) -> None:
    """Store a value

    Examples:
        rcache set greeting hello
        rcache set user:42 '{"name": "Ada"}' --ttl 60
    """
    cache = _open_cache()
    try:
        stored = cache.set(key, parse_value(value), ttl)
    except CacheError as e:
        raise _fail(e) from e

    if not stored:
        console.print(f"[red]✗ Store rejected write for {cache.make_key(key)}[/red]")
        raise typer.Exit(1)
    console.print(f"✓ Stored [green]{cache.make_key(key)}[/green]")


@app.command()
def delete(
    key: Annotated[str, typer.Argument(help="Cache key (without prefix)")],
) -> None:
    """Delete a cached value"""
    cache = _open_cache()
    try:
        cache.delete(key)
    except CacheError as e:
        raise _fail(e) from e
    console.print(f"✓ Deleted [green]{cache.make_key(key)}[/green]")


@app.command()
def has(
    key: Annotated[str, typer.Argument(help="Cache key (without prefix)")],
) -> None:
    """Check whether a key is cached (exit code 1 when absent)"""
    cache = _open_cache()
    try:
        present = cache.has(key)
    except CacheError as e:
        raise _fail(e) from e

    if not present:
        console.print(f"[yellow]✗ {cache.make_key(key)} not cached[/yellow]")
        raise typer.Exit(1)
    console.print(f"✓ {cache.make_key(key)} is cached")


@app.command()
def clear() -> None:
    """Remove every entry under the configured prefix"""
    cache = _open_cache()
    try:
        cache.clear()
    except CacheError as e:
        raise _fail(e) from e
    console.print(f"✓ Cleared namespace [green]{cache.prefix}[/green]")


if __name__ == "__main__":
    app()
