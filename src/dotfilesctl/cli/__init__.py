"""CLI package for dotfilesctl."""

import typer

from dotfilesctl.cli import (
    check_cmd,
    config_cmd,
    exec_cmd,
    track_cmd,
    watch_cmd,
)

app = typer.Typer(
    name="dotfilesctl",
    help="Manage dotfiles through a content store and home-directory symlinks",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config", help="Configuration management")

app.command(name="init", help="Initialize a fresh configuration")(config_cmd.init)
app.command(name="check", help="Check and optionally repair tracked files")(check_cmd.check)
app.command(name="track", help="Start tracking files")(track_cmd.track)
app.command(name="untrack", help="Delete tracked files for good")(track_cmd.untrack)
app.command(name="executable", help="Set or clear the executable flag")(exec_cmd.executable)
app.command(name="list", help="List tracked files")(exec_cmd.list_files)
app.command(name="watch", help="Log file creations in the target directory")(watch_cmd.watch)


@app.command()
def version():
    """Show version information."""
    from dotfilesctl import __version__
    typer.echo(f"dotfilesctl {__version__}")


if __name__ == "__main__":
    app()
