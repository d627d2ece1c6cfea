"""Filter algebra — combine the accumulated recipients with one token's nations.

Each filter kind is a set operation over reference names:

  NORMAL         union           (first-seen order)
  INCLUDE        intersection    (accumulator order)
  EXCLUDE        difference
  REQUIRE_REGEX  keep names fully matching the pattern
  EXCLUDE_REGEX  drop names fully matching the pattern

Equality is by name only; filter and recipient kinds of earlier tokens
play no part once their names are in the set.
"""

import re
from typing import Iterable, Iterator

from ..errors import InvalidPattern
from .tokens import FilterKind, Token


class RecipientSet:
    """Ordered set of nation names. Insertion order kept, duplicates dropped."""

    __slots__ = ("_names",)

    def __init__(self, names: Iterable[str] = ()):
        self._names: dict[str, None] = dict.fromkeys(names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecipientSet):
            return list(self._names) == list(other._names)
        return NotImplemented

    def __repr__(self) -> str:
        return f"RecipientSet({list(self._names)!r})"

    def union(self, names: Iterable[str]) -> "RecipientSet":
        result = RecipientSet(self._names)
        for name in names:
            result._names.setdefault(name, None)
        return result

    def keep(self, predicate) -> "RecipientSet":
        return RecipientSet(n for n in self._names if predicate(n))

    def to_list(self) -> list[str]:
        return list(self._names)


def compile_pattern(token: Token) -> re.Pattern:
    """Compile a regex token's pattern. Raises InvalidPattern."""
    try:
        return re.compile(token.name)
    except re.error as e:
        raise InvalidPattern(token.name, str(e)) from e


def apply(accumulator: RecipientSet, token: Token, decomposed: list[Token]) -> RecipientSet:
    """Apply one token to the accumulator and return the new set.

    Args:
        accumulator: Recipients accumulated from earlier tokens (not mutated)
        token: The token being applied; selects the filter kind
        decomposed: The token's nation tokens (ignored for regex filters)
    """
    kind = token.filter_kind

    if kind is FilterKind.NORMAL:
        return accumulator.union(t.name for t in decomposed)

    if kind is FilterKind.INCLUDE:
        wanted = {t.name for t in decomposed}
        return accumulator.keep(lambda n: n in wanted)

    if kind is FilterKind.EXCLUDE:
        unwanted = {t.name for t in decomposed}
        return accumulator.keep(lambda n: n not in unwanted)

    if kind is FilterKind.REQUIRE_REGEX:
        pattern = compile_pattern(token)
        return accumulator.keep(lambda n: pattern.fullmatch(n) is not None)

    if kind is FilterKind.EXCLUDE_REGEX:
        pattern = compile_pattern(token)
        return accumulator.keep(lambda n: pattern.fullmatch(n) is None)

    raise ValueError(f"Unhandled filter kind: {kind}")
