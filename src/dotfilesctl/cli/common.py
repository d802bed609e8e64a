"""Shared helpers for CLI commands: config loading and interactive prompts."""

import tomllib
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm

from dotfilesctl.config import Config
from dotfilesctl.core.errors import AbortedError, DotfilesError
from dotfilesctl.core.symlink import RepairAction
from dotfilesctl.dirs import get_config_file_path
from dotfilesctl.logging_setup import setup_logging

ConfigOption = typer.Option(None, "--config", "-c", help="Path to config.toml")
LogLevelOption = typer.Option(None, "--log-level", "-l", help="Console log level (default from config)")


@contextmanager
def report_errors(console: Console, action: str) -> Iterator[None]:
    """Print failures of ``action`` and exit with code 1."""
    try:
        yield
    except DotfilesError as e:
        console.print(f"[red]{action} failed:[/red] {e}")
        raise typer.Exit(code=1)
    except (ValidationError, tomllib.TOMLDecodeError) as e:
        console.print(f"[red]Invalid document:[/red] {e}")
        raise typer.Exit(code=1)
    except OSError as e:
        console.print(f"[red]I/O error:[/red] {e}")
        raise typer.Exit(code=1)


def load_config(config_path: Path | None, log_level: str | None = None) -> Config:
    """Load the configuration and set up logging at the resulting level."""
    config = Config.load(config_path or get_config_file_path())
    setup_logging(log_level=(log_level or config.log_level).upper(), file=config.log_file)
    return config


def ask_on_wrong(path: Path) -> RepairAction:
    """Repair policy: ask before deleting an entry that is in the way."""
    if Confirm.ask(f"Delete {path}?", default=False):
        return RepairAction.DELETE
    return RepairAction.SKIP


def ask_confirm(path: Path) -> None:
    """Untrack policy: ask before each deletion, abort on refusal."""
    if not Confirm.ask(f"Delete {path}?", default=False):
        raise AbortedError(path)
