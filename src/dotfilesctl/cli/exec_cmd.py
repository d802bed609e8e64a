"""Executable flag and listing commands."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dotfilesctl.cli.common import ConfigOption, LogLevelOption, load_config, report_errors
from dotfilesctl.core.perm import Executable
from dotfilesctl.core.persistence import load_manifest, save_manifest
from dotfilesctl.core.symlink import Symlink

console = Console()


def executable(
    file: Path = typer.Argument(..., help="Tracked file in the home directory"),
    off: bool = typer.Option(False, "--off", help="Clear the executable flag instead of setting it"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Set or clear the executable flag of a tracked file."""
    with report_errors(console, "Executable"):
        cfg = load_config(config, log_level)
        dotfiles = load_manifest(cfg)
        mode = Executable.from_bool(not off)
        updated = dotfiles.set_executable(cfg, file, mode)
        if updated is not dotfiles:
            save_manifest(updated, cfg)
        console.print(f"[green]Executable flag:[/green] {mode.value}")


def list_files(
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """List tracked files with their symlink status."""
    with report_errors(console, "List"):
        cfg = load_config(config, log_level)
        dotfiles = load_manifest(cfg)
        home = cfg.get_home()

        table = Table(title=f"Tracked files in {home}")
        table.add_column("File", style="cyan")
        table.add_column("Symlink")
        table.add_column("Executable")
        for dotfile in dotfiles.files:
            symlink = Symlink.get(cfg.contents(), home, dotfile)
            table.add_row(str(dotfile), symlink.status.value, dotfiles.is_executable(dotfile).value)
        console.print(table)

        if dotfiles.deleted:
            console.print(f"[dim]{len(dotfiles.deleted)} deleted file(s)[/dim]")
