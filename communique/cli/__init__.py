"""Communique CLI — command line interface."""

import click
from communique import __version__
from .shared import console, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="communique")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging to stderr")
@click.pass_context
def cli(ctx, verbose):
    """Communique — recipient expressions for NationStates telegrams"""
    setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands."""
    console.print(f"[bold]Communique v{__version__}[/bold] — recipient expressions for NationStates telegrams\n")

    commands = [
        ("parse", "Parse tokens and show how they are read"),
        ("resolve", "Evaluate tokens into the final send order"),
    ]
    for name, desc in commands:
        console.print(f"    [bold]communique {name:10s}[/bold] {desc}")
    console.print()

    console.print("[bold cyan]Token syntax[/bold cyan]")
    console.print("    region:<name>  tag:wa|delegates|new|all  nation:<name>  flag:<name>")
    console.print("    prefix with + (intersect), - (remove), +regex: / -regex: (pattern filters)")
    console.print()
    console.print("[dim]Run 'communique <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_parse  # noqa: E402, F401
from . import cmd_resolve  # noqa: E402, F401


@cli.command(name="help", hidden=True)
def help_cmd():
    """Show all available commands."""
    _show_help()


def main():
    """CLI entry point."""
    import sys
    try:
        cli(standalone_mode=False)
    except click.UsageError as e:
        if e.ctx:
            click.echo(e.ctx.command.get_usage(e.ctx), err=True)
        click.echo("Try 'communique help' for help.\n", err=True)
        click.echo(f"Error: {e.format_message()}", err=True)
        sys.exit(2)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.exceptions.Exit as e:
        sys.exit(e.code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
