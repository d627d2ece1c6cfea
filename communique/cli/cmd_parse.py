"""Token inspection command."""

from rich.markup import escape
from rich.table import Table

from . import cli
from .shared import console, fail, load_tokens, with_token_source
from communique.errors import CommuniqueError


@cli.command("parse")
@with_token_source
def parse_cmd(tokens, file):
    """Parse tokens and show how each one is read (no API calls)."""
    try:
        parsed = load_tokens(tokens, file)
    except CommuniqueError as e:
        fail(e)

    if not parsed:
        console.print("[yellow]No tokens given.[/yellow]")
        return

    t = Table(title="Recipient tokens")
    t.add_column("#", justify="right")
    t.add_column("Token")
    t.add_column("Filter")
    t.add_column("Recipient")
    t.add_column("Name")
    for i, token in enumerate(parsed, 1):
        t.add_row(
            str(i),
            escape(str(token)),
            token.filter_kind.name.lower(),
            token.recipient_kind.name.lower(),
            escape(token.name),
        )
    console.print(t)
