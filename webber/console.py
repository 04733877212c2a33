"""Colorized status lines for build output."""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager

import click


def success(message: str) -> None:
    click.echo(f"{click.style('SUCCESS!', fg='green')} {message}")


def error(message: str) -> None:
    click.echo(f"{click.style('ERROR!', fg='red')} {message}", err=True)


def warning(message: str) -> None:
    click.echo(f"{click.style('WARNING!', fg='yellow')} {message}", err=True)


@contextmanager
def timer(label: str) -> Iterator[None]:
    """Print `label: <ms>ms` when the block exits, however it exits."""
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        click.echo(f"{label}: {elapsed_ms:.3f}ms")
