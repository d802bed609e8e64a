"""Track and untrack commands.

The manifest is saved after every file, so files handled before a failure
stay recorded.
"""

from pathlib import Path

import typer
from rich.console import Console

from dotfilesctl.cli.common import ConfigOption, LogLevelOption, ask_confirm, load_config, report_errors
from dotfilesctl.core.persistence import load_manifest, save_manifest
from dotfilesctl.core.policies import accept_any, confirm_always, require_dot_prefix

console = Console()


def track(
    files: list[Path] = typer.Argument(..., help="Files or directories in the home directory"),
    any_name: bool = typer.Option(False, "--any-name", help="Allow names without a leading dot"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Move files into the content store and symlink them back."""
    with report_errors(console, "Track"):
        cfg = load_config(config, log_level)
        dotfiles = load_manifest(cfg)
        validate = accept_any if any_name else require_dot_prefix
        for file in files:
            dotfiles = dotfiles.track(cfg, file, validate)
            save_manifest(dotfiles, cfg)
            console.print(f"[green]Tracked[/green] {dotfiles.files[-1]}")


def untrack(
    files: list[Path] = typer.Argument(..., help="Tracked symlinks in the home directory"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete without asking"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Delete tracked files for good and remember them as deleted."""
    with report_errors(console, "Untrack"):
        cfg = load_config(config, log_level)
        dotfiles = load_manifest(cfg)
        confirm = confirm_always if force else ask_confirm
        for file in files:
            dotfiles = dotfiles.untrack(cfg, file, confirm)
            save_manifest(dotfiles, cfg)
            console.print(f"[green]Untracked[/green] {dotfiles.deleted[-1]}")
