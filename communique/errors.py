"""Recipient pipeline errors and user-facing error classification."""

import asyncio
import json
from typing import Optional

import httpx


# ════════════════════════════════════════════════════════
# Exception hierarchy — every failure aborts the whole
# expression. The CLI catches these via classify_error().
# ════════════════════════════════════════════════════════

class CommuniqueError(Exception):
    """Base class for all recipient pipeline errors."""
    pass


class MalformedToken(CommuniqueError):
    """Token text could not be parsed."""

    def __init__(self, text: str, reason: str = "cannot parse recipient"):
        self.text = text
        self.reason = reason
        super().__init__(f"Malformed token {text!r}: {reason}")


class UnknownTag(CommuniqueError):
    """tag:<name> where name is not one of wa, delegates, new, all."""

    def __init__(self, name: str, token_text: Optional[str] = None):
        self.name = name
        self.token_text = token_text or f"tag:{name}"
        super().__init__(f"Unknown tag {name!r} in token {self.token_text!r}")


class InvalidPattern(CommuniqueError):
    """Regex filter pattern failed to compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ResolutionFailure(CommuniqueError):
    """Resolver could not expand a region or tag (network or lookup error)."""

    def __init__(
        self,
        kind: str,
        name: str,
        cause: Optional[BaseException] = None,
        token_text: Optional[str] = None,
    ):
        self.kind = kind
        self.name = name
        self.cause = cause
        self.token_text = token_text or f"{kind}:{name}"
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not resolve {self.token_text!r}{detail}")


class EvaluationCancelled(CommuniqueError):
    """Evaluation was cancelled before the expression finished folding."""

    def __init__(self, token_text: Optional[str] = None):
        self.token_text = token_text
        where = f" before {token_text!r}" if token_text else ""
        super().__init__(f"Evaluation cancelled{where}")


def classify_error(e: Exception) -> str:
    """Classify any exception into a short, actionable message.

    Used by the CLI to render failures without a traceback.
    """
    if isinstance(e, MalformedToken):
        return f"Cannot read token {e.text!r} ({e.reason}). Expected e.g. 'region:europe' or '-tag:wa'."
    if isinstance(e, UnknownTag):
        return f"Unknown tag '{e.name}' in {e.token_text!r}. Valid tags are: wa, delegates, new, all."
    if isinstance(e, InvalidPattern):
        return f"Regular expression {e.pattern!r} is invalid: {e.reason}."
    if isinstance(e, EvaluationCancelled):
        return "Recipient evaluation was cancelled. No recipients were produced."

    if isinstance(e, ResolutionFailure):
        cause = e.cause
        if isinstance(cause, httpx.HTTPStatusError):
            code = cause.response.status_code
            if code == 404:
                return f"'{e.kind}:{e.name}' does not exist on NationStates."
            if code == 429:
                return "NationStates API rate limit hit. Please wait 30 seconds and try again."
            if code == 403:
                return "NationStates API refused the request. Check your user agent setting."
            if 500 <= code < 600:
                return "NationStates API is having server issues. Please try again later."
            return f"NationStates API returned HTTP {code} for {e.token_text!r}."
        if isinstance(cause, (httpx.TimeoutException, asyncio.TimeoutError)):
            return f"Request for {e.token_text!r} timed out. Please try again."
        if isinstance(cause, httpx.ConnectError):
            return "Cannot connect to NationStates. Please check connectivity and try again."
        return f"Could not resolve {e.token_text!r}. Check logs for details."

    if isinstance(e, httpx.ConnectError):
        return "Cannot connect to NationStates. Please check connectivity and try again."
    if isinstance(e, httpx.TimeoutException):
        return "Request timed out. Please try again."

    if isinstance(e, json.JSONDecodeError):
        return f"Data file is not valid JSON ({e.msg} at line {e.lineno})."
    if isinstance(e, OSError):
        return f"Cannot read file: {e}."

    type_name = type(e).__name__
    return f"Something went wrong ({type_name}). Check logs for details."
