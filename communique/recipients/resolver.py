"""Resolver and classifier interfaces consumed by the recipient pipeline."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ..errors import ResolutionFailure
from .tokens import RecipientKind, TagName, reference_name


class RecipientResolver(ABC):
    """Expands a region or tag name into the nation names it denotes."""

    @abstractmethod
    async def resolve(self, kind: RecipientKind, name: str) -> list[str]:
        """Return raw nation names for region:<name> or tag:<name>.

        Raises ResolutionFailure when the lookup cannot be completed.
        """
        ...


class Classifier(ABC):
    """Source of the privileged class used by delegate prioritisation."""

    @abstractmethod
    async def snapshot_classified(self) -> set[str]:
        """Return the names currently in the class, as a point-in-time snapshot."""
        ...


class StaticResolver(RecipientResolver):
    """In-memory resolver for offline evaluation and tests.

    Regions and tags are looked up in plain dicts; an unknown region is a
    ResolutionFailure, mirroring a 404 from the live API.
    """

    def __init__(
        self,
        regions: Optional[dict[str, Iterable[str]]] = None,
        tags: Optional[dict[str, Iterable[str]]] = None,
    ):
        self.regions = {reference_name(k): list(v) for k, v in (regions or {}).items()}
        self.tags = {TagName.from_name(k): list(v) for k, v in (tags or {}).items()}
        self.calls: list[tuple[RecipientKind, str]] = []

    async def resolve(self, kind: RecipientKind, name: str) -> list[str]:
        self.calls.append((kind, name))
        if kind is RecipientKind.REGION:
            if name not in self.regions:
                raise ResolutionFailure(kind.prefix, name, LookupError(f"no such region: {name}"))
            return list(self.regions[name])
        if kind is RecipientKind.TAG:
            return list(self.tags.get(TagName.from_name(name), []))
        raise ResolutionFailure(kind.prefix, name, ValueError(f"cannot resolve {kind.prefix} recipients"))


class StaticClassifier(Classifier):
    """Classifier over a fixed set of names."""

    def __init__(self, names: Iterable[str] = ()):
        self.names = {reference_name(n) for n in names}
        self.snapshots = 0

    async def snapshot_classified(self) -> set[str]:
        self.snapshots += 1
        return set(self.names)
