"""Watch command: log file creations in the target directory."""

from pathlib import Path

from rich.console import Console

from dotfilesctl.cli.common import ConfigOption, LogLevelOption, load_config, report_errors
from dotfilesctl.core.watcher import watch as watch_target

console = Console()


def watch(
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Log files created in the target directory until interrupted."""
    with report_errors(console, "Watch"):
        cfg = load_config(config, log_level)
        console.print("[dim]Press Ctrl-C to stop[/dim]")
        watch_target(cfg.target)
