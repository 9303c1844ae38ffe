"""CLI for inspecting and maintaining cache files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer

from pond.cache import Cache
from pond.config import load_config
from pond.errors import CacheError

app = typer.Typer(help="Pond cache maintenance CLI")


def _open_cache(path: str, config_path: Optional[str]) -> Cache:
    if config_path is None:
        return Cache(path)
    config = load_config(config_path)
    config.path = path
    return Cache.from_config(config)


def _fail(message: str) -> NoReturn:
    typer.secho(f"❌ {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


@app.command()
def info(
    path: str = typer.Argument(..., help="Path to the cache file"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML cache config"),
) -> None:
    """Show entry count and size of a cache."""
    if not Path(path).exists():
        _fail(f"Cache not found: {path}")
    try:
        with _open_cache(path, config_path) as cache:
            details = cache.info()
    except (CacheError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    typer.echo(f"Path:          {details.path}")
    typer.echo(f"Entries:       {details.entries}")
    typer.echo(f"Payload bytes: {details.payload_bytes}")
    typer.echo(f"File size:     {details.file_size_bytes}")


@app.command()
def keys(
    path: str = typer.Argument(..., help="Path to the cache file"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML cache config"),
) -> None:
    """List all keys in a cache."""
    if not Path(path).exists():
        _fail(f"Cache not found: {path}")
    try:
        with _open_cache(path, config_path) as cache:
            stored_keys = cache.keys()
    except (CacheError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    for key in stored_keys:
        typer.echo(str(key))


@app.command()
def show(
    path: str = typer.Argument(..., help="Path to the cache file"),
    key: str = typer.Argument(..., help="Key (UUID) of the entry"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML cache config"),
) -> None:
    """Print the value stored under a key as JSON."""
    if not Path(path).exists():
        _fail(f"Cache not found: {path}")
    try:
        with _open_cache(path, config_path) as cache:
            found = cache.contains(key)
            value = cache.get(key) if found else None
    except (CacheError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    if not found:
        _fail(f"Key not found: {key}")
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


@app.command()
def delete(
    path: str = typer.Argument(..., help="Path to the cache file"),
    key: str = typer.Argument(..., help="Key (UUID) of the entry"),
    config_path: Optional[str] = typer.Option(None, "--config", help="YAML cache config"),
) -> None:
    """Remove the entry stored under a key."""
    if not Path(path).exists():
        _fail(f"Cache not found: {path}")
    try:
        with _open_cache(path, config_path) as cache:
            deleted = cache.delete(key)
    except (CacheError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    if not deleted:
        _fail(f"Key not found: {key}")
    typer.secho(f"✅ Deleted {key}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
