"""Recipient tokens — parse and format the recipient expression language.

Token text format (one token per entry):

  <filter-prefix><recipient-prefix>:<name>

  filter-prefix:     ""  +  -  +regex  -regex
  recipient-prefix:  nation  region  tag  flag

A bare name with no recipient prefix is a nation. Names are stored in
reference form (trimmed, lower-case, whitespace runs → "_"), except for
regex filters, whose pattern is kept exactly as written.

Examples:
  region:Europe          → NORMAL  REGION  "europe"
  +tag:wa                → INCLUDE TAG     "wa"
  -Testlandia            → EXCLUDE NATION  "testlandia"
  +regex:^[a-c].*$       → REQUIRE_REGEX   "^[a-c].*$"
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Iterable, Union

from ..errors import MalformedToken, UnknownTag

_WHITESPACE = re.compile(r"\s+")

# Kind word, optional whitespace, then either ":<name>" or end of text.
# Group 2 is None when the separator is missing.
_RECIPIENT_PREFIX = re.compile(r"^(nation|region|tag|flag)\s*(?::(.*)|$)", re.IGNORECASE | re.DOTALL)


def reference_name(text: str) -> str:
    """Convert a name to reference form. 'Testlandia  Two ' → 'testlandia_two'"""
    return _WHITESPACE.sub("_", text.strip().lower())


class FilterKind(Enum):
    """How a token's recipients combine with the recipients accumulated so far.

    Member order is parse priority: regex prefixes before the bare +/-,
    and NORMAL (the empty prefix) last since every string starts with it.
    """

    REQUIRE_REGEX = "+regex"
    EXCLUDE_REGEX = "-regex"
    INCLUDE = "+"
    EXCLUDE = "-"
    NORMAL = ""

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def is_regex(self) -> bool:
        return self in (FilterKind.REQUIRE_REGEX, FilterKind.EXCLUDE_REGEX)

    @property
    def case_sensitive(self) -> bool:
        """Regex patterns are case-sensitive; every other name is reference-normalized."""
        return self.is_regex


class RecipientKind(Enum):
    """What a token's name denotes."""

    NATION = "nation"
    REGION = "region"
    TAG = "tag"
    FLAG = "flag"

    @property
    def prefix(self) -> str:
        return self.value


class TagName(Enum):
    """Tags understood by tag:<name>."""

    WA = "wa"
    DELEGATES = "delegates"
    NEW = "new"
    ALL = "all"

    @classmethod
    def from_name(cls, name: str) -> "TagName":
        try:
            return cls(reference_name(name))
        except ValueError:
            raise UnknownTag(name) from None


# Single-token spellings from older recipient files.
LEGACY_TAG_ALIASES = {
    "wa:members": TagName.WA,
    "wa:nations": TagName.WA,
    "wa:delegates": TagName.DELEGATES,
    "world:new": TagName.NEW,
}


@dataclass(frozen=True)
class Token:
    """A single recipient expression entry."""

    filter_kind: FilterKind
    recipient_kind: RecipientKind
    name: str

    def __post_init__(self):
        if self.filter_kind.case_sensitive:
            normalized = self.name.strip()
        else:
            normalized = reference_name(self.name)
        object.__setattr__(self, "name", normalized)

    def __str__(self) -> str:
        return format_token(self)

    @classmethod
    def nation(cls, name: str, filter_kind: FilterKind = FilterKind.NORMAL) -> "Token":
        return cls(filter_kind, RecipientKind.NATION, name)

    def with_filter(self, filter_kind: FilterKind) -> "Token":
        """Same recipient under a different filter, e.g. to exclude an already-sent nation."""
        return replace(self, filter_kind=filter_kind)


def parse_token(text: str) -> Token:
    """Parse one token. Raises MalformedToken on unparseable text."""
    body = text.strip()
    if not body:
        raise MalformedToken(text, "empty token")

    filter_kind = FilterKind.NORMAL
    lowered = body.lower()
    for kind in FilterKind:
        if kind.is_regex:
            if not lowered.startswith(kind.prefix + ":"):
                continue
        elif not lowered.startswith(kind.prefix):
            continue
        filter_kind = kind
        body = body[len(kind.prefix):].strip()
        break

    if filter_kind.is_regex:
        pattern = body[1:].strip()
        if not pattern:
            raise MalformedToken(text, "empty regex pattern")
        return Token(filter_kind, RecipientKind.NATION, pattern)

    alias = LEGACY_TAG_ALIASES.get(reference_name(body))
    if alias is not None:
        return Token(filter_kind, RecipientKind.TAG, alias.value)

    m = _RECIPIENT_PREFIX.match(body)
    if m:
        if m.group(2) is None:
            raise MalformedToken(text, f"missing ':' after '{m.group(1).lower()}'")
        recipient_kind = RecipientKind(m.group(1).lower())
        name = m.group(2)
    else:
        recipient_kind = RecipientKind.NATION
        name = body[1:] if body.startswith(":") else body

    token = Token(filter_kind, recipient_kind, name)
    if not token.name:
        raise MalformedToken(text, "empty name")
    return token


def format_token(token: Token) -> str:
    """Inverse of parse_token: '-region:europe', '+regex:^a.*$', 'nation:testlandia'."""
    if token.filter_kind.is_regex:
        return f"{token.filter_kind.prefix}:{token.name}"
    return f"{token.filter_kind.prefix}{token.recipient_kind.prefix}:{token.name}"


def parse_tokens(lines: Iterable[str]) -> list[Token]:
    """Parse many tokens, skipping blank lines and '#' comments."""
    tokens = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        tokens.append(parse_token(stripped))
    return tokens


def read_token_file(path: Union[str, Path]) -> list[Token]:
    """Read a plain-text recipient file, one token per line."""
    content = Path(path).read_text(encoding="utf-8")
    return parse_tokens(content.splitlines())
