"""Recipient evaluation command."""

import asyncio
import json
import random

import click
from rich.markup import escape
from rich.table import Table

from . import cli
from .shared import console, estimate_send_time, fail, format_duration, load_tokens, with_token_source
from communique.errors import CommuniqueError
from communique.recipients import (
    FilterKind,
    ProcessingAction,
    StaticClassifier,
    StaticResolver,
    read_token_file,
    run_expression,
)

_ACTIONS = [a.value for a in ProcessingAction]


def _static_sources(path: str):
    """Offline resolver/classifier from a JSON file:

    {"regions": {"name": [...]}, "tags": {"wa": [...]}, "delegates": [...]}
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    resolver = StaticResolver(regions=data.get("regions"), tags=data.get("tags"))
    delegates = data.get("delegates")
    if delegates is None:
        delegates = (data.get("tags") or {}).get("delegates", [])
    return resolver, StaticClassifier(delegates)


def _live_sources():
    from communique.config import load_settings
    from communique.nsapi import DelegateClassifier, NationStatesResolver

    resolver = NationStatesResolver.from_settings(load_settings())
    return resolver, DelegateClassifier(resolver)


def _print_recipients(names: list[str]):
    """Two columns in send order, like the sending client shows before it starts."""
    t = Table(show_header=False, box=None, padding=(0, 4))
    t.add_column()
    t.add_column()
    for i in range(0, len(names), 2):
        pair = names[i:i + 2]
        t.add_row(escape(pair[0]), escape(pair[1]) if len(pair) > 1 else "")
    console.print(t)


@cli.command("resolve")
@with_token_source
@click.option("--action", "-a", type=click.Choice(_ACTIONS), default="none", show_default=True,
              help="Processing applied to the final list")
@click.option("--static", "static_path", type=click.Path(exists=True, dir_okay=False),
              help="Resolve from a JSON file instead of the NationStates API")
@click.option("--sent", "sent_path", type=click.Path(exists=True, dir_okay=False),
              help="Nations already sent to, one per line; removed from the result")
@click.option("--seed", type=int, default=None, help="Seed for randomised actions")
@click.option("--recruitment", is_flag=True, help="Estimate time at the recruitment telegram rate")
@click.option("--plain", is_flag=True, help="One name per line, nothing else")
def resolve_cmd(tokens, file, action, static_path, sent_path, seed, recruitment, plain):
    """Evaluate tokens into the final send order."""
    try:
        parsed = load_tokens(tokens, file)
        if parsed and sent_path:
            # Sent nations are excluded after the whole expression
            parsed.extend(t.with_filter(FilterKind.EXCLUDE) for t in read_token_file(sent_path))
    except CommuniqueError as e:
        fail(e)

    if not parsed:
        console.print("[yellow]No tokens given.[/yellow]")
        return

    try:
        resolver, classifier = _static_sources(static_path) if static_path else _live_sources()
    except (CommuniqueError, ValueError, OSError) as e:
        fail(e)

    processing = ProcessingAction(action)
    rng = random.Random(seed) if seed is not None else None

    try:
        names = asyncio.run(run_expression(parsed, resolver, processing, classifier=classifier, rng=rng))
    except CommuniqueError as e:
        fail(e)

    if plain:
        for name in names:
            click.echo(name)
        return

    if not names:
        console.print("[yellow]Expression resolved to no recipients.[/yellow]")
        return

    console.print()
    _print_recipients(names)
    console.print()
    duration = format_duration(estimate_send_time(len(names), recruitment))
    console.print(
        f"[bold]{len(names)}[/bold] recipients ({processing.label}). "
        f"Sending would take {duration}."
    )
