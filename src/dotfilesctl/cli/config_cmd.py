"""Config subcommand group for configuration management."""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from dotfilesctl.cli.common import ConfigOption
from dotfilesctl.config import Config, init_config
from dotfilesctl.core.errors import DotfilesError
from dotfilesctl.dirs import get_config_file_path

app = typer.Typer(help="Configuration management")
console = Console()


def init(
    target: Path = typer.Argument(..., help="Directory holding the manifest and content store"),
    home: Path | None = typer.Option(None, "--home", help="Home directory override"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    config: Path | None = ConfigOption,
):
    """Initialize a fresh configuration."""
    config_path = config or get_config_file_path()
    try:
        written = init_config(config_path, target, home=home, force=force)
        console.print(f"[green]Configuration initialized:[/green] {written}")
    except FileExistsError as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[dim]Use --force to overwrite[/dim]")
        raise typer.Exit(code=1)
    except OSError as e:
        console.print(f"[red]Configuration initialization failed:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def show(config: Path | None = ConfigOption):
    """Show current configuration."""
    config_path = config or get_config_file_path()

    if not config_path.exists():
        console.print(f"[yellow]Config file not found:[/yellow] {config_path}")
        console.print("[dim]Run 'dotfilesctl init' to create one[/dim]")
        raise typer.Exit(code=1)

    try:
        loaded = Config.load(config_path)
        home = loaded.get_home()
    except ValidationError as e:
        console.print("[red]Configuration validation failed:[/red]")
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            console.print(f"  [yellow]{loc}:[/yellow] {error['msg']}")
        raise typer.Exit(code=1)
    except DotfilesError as e:
        console.print(f"[red]Failed to read config:[/red] {e}")
        raise typer.Exit(code=1)

    document = config_path.read_text(encoding="utf-8")
    console.print(Panel(Syntax(document, "toml"), title=f"Configuration: {config_path}", border_style="cyan"))
    console.print(f"[dim]Home: {home}[/dim]")
    console.print(f"[dim]Manifest: {loaded.manifest_path()}[/dim]")
    console.print(f"[dim]Content store: {loaded.contents()}[/dim]")


@app.command()
def path():
    """Print the default config file location."""
    typer.echo(str(get_config_file_path()))
