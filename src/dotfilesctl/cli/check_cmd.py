"""Check command: verify the manifest against the filesystem, optionally repairing."""

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from dotfilesctl.cli.common import ConfigOption, LogLevelOption, ask_on_wrong, load_config, report_errors
from dotfilesctl.core.errors import DotfilesError, ErrorKind
from dotfilesctl.core.persistence import load_manifest, save_manifest
from dotfilesctl.core.policies import delete_on_wrong
from dotfilesctl.core.symlink import RepairResult

console = Console()

# Only these divergences can be fixed by repairing symlinks
REPAIRABLE = {ErrorKind.SYMLINK_MISMATCH, ErrorKind.PERMISSION_MISMATCH}


def check(
    repair: bool = typer.Option(False, "--repair", "-r", help="Try to repair broken symlinks"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete entries in the way without asking"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Check that every tracked file is correctly linked."""
    with report_errors(console, "Check"):
        cfg = load_config(config, log_level)
        dotfiles = load_manifest(cfg)

        try:
            dotfiles.check(cfg)
        except DotfilesError as err:
            if not repair or err.kind not in REPAIRABLE:
                raise
            logger.warning("Found problems during checking:")
            logger.warning(str(err))
            logger.info("Attempting to repair problems")
            result = dotfiles.repair(cfg, delete_on_wrong if force else ask_on_wrong)
            if result is RepairResult.SKIPPED:
                console.print("[yellow]Some entries were skipped during repair[/yellow]")
            logger.info("Rechecking")
            dotfiles.check(cfg)

        save_manifest(dotfiles, cfg)
        console.print("[green]Checking successful![/green]")
