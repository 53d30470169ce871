"""Config command for viewing and resetting objekt settings."""

import json

import typer

from ...config import get_config, reset_config
from ...randoms import reset_default
from ..app import app, console, get_json_mode
from ..utils import Output
from ... import config as config_module


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, reset",
    ),
):
    """View or reset objekt settings.

    Settings come from ~/.config/objekt/config.json and OBJEKT_* env vars.

    Examples:
        objekt config show
        objekt config reset
    """
    if action == "show":
        _show_config()
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved settings."""
    settings = get_config()
    config_file = config_module.CONFIG_FILE
    out = Output(console=console, json_mode=get_json_mode())

    if out.json_mode:
        out.set_data("settings", settings.to_dict())
        out.set_data("config_file", str(config_file))
        raise typer.Exit(out.finish())

    console.print()
    console.print("[bold]objekt Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Seed[/bold cyan]")
    seed = settings.seed if settings.seed is not None else "[dim](random)[/dim]"
    console.print(f"  seed = {seed}")

    console.print()
    console.print("[bold cyan]Fixtures[/bold cyan] (object randomizer)")
    for key, value in settings.to_dict()["fixtures"].items():
        console.print(f"  {key:<20} = {value}")

    console.print()
    console.print("[bold cyan]Pools[/bold cyan] (domain overrides)")
    if settings.pools:
        for domain, directives in settings.pools.items():
            console.print(f"  {domain:<20} = {json.dumps(directives, default=str)}")
    else:
        console.print("  [dim](defaults)[/dim]")

    console.print()
    if config_file.exists():
        console.print(f"Config file: {config_file}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({config_file})")
    console.print()


def _reset_config():
    """Delete the settings file and drop cached settings."""
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        config_file.unlink()
        console.print(f"[green]✓[/green] Removed {config_file}")
    else:
        console.print("[dim]No config file to remove[/dim]")
    reset_config()
    reset_default()
