"""Shared utilities for Communique CLI commands."""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from communique.errors import classify_error
from communique.recipients.tokens import Token, parse_tokens, read_token_file

console = Console()

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Seconds between telegrams under the API's telegram rate limits
TELEGRAM_INTERVAL = 30.05
RECRUITMENT_INTERVAL = 180.05


def setup_logging(verbose: bool = False):
    """Log to stderr; quiet httpx unless verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_log_format,
        handlers=[logging.StreamHandler()],
    )
    if verbose:
        logging.getLogger("communique").setLevel(logging.DEBUG)
    else:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def load_tokens(tokens: tuple[str, ...], file: Optional[str]) -> list[Token]:
    """Collect tokens from a recipients file (first) and command-line arguments."""
    result = []
    if file:
        result.extend(read_token_file(file))
    result.extend(parse_tokens(tokens))
    return result


def fail(e: Exception):
    """Print a classified error and exit with status 1."""
    console.print(f"[red]Error: {escape(classify_error(e))}[/red]")
    logging.getLogger("communique.cli").debug(f"{type(e).__name__}: {e}", exc_info=e)
    sys.exit(1)


def format_duration(seconds: float) -> str:
    """6125 → '1 hour, 42 minutes, 5 seconds'"""
    seconds = int(round(seconds))
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    parts = []
    if hours:
        parts.append(f"{hours} hour{'s' if hours != 1 else ''}")
    if minutes:
        parts.append(f"{minutes} minute{'s' if minutes != 1 else ''}")
    if secs or not parts:
        parts.append(f"{secs} second{'s' if secs != 1 else ''}")
    return ", ".join(parts)


def estimate_send_time(count: int, recruitment: bool = False) -> float:
    return count * (RECRUITMENT_INTERVAL if recruitment else TELEGRAM_INTERVAL)


token_source_options = [
    click.argument("tokens", nargs=-1),
    click.option("--file", "-f", "file", type=click.Path(exists=True, dir_okay=False),
                 help="Recipients file, one token per line ('#' comments allowed)"),
]


def with_token_source(func):
    for option in reversed(token_source_options):
        func = option(func)
    return func
