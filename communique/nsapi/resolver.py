"""NationStates-backed resolver and delegate classifier."""

import logging
import xml.etree.ElementTree as ET
from typing import Awaitable, Callable, Optional

import httpx

from ..config import CommuniqueSettings
from ..errors import ResolutionFailure
from ..recipients.resolver import Classifier, RecipientResolver
from ..recipients.tokens import RecipientKind, TagName
from .cache import TTLCache
from .client import NationStatesClient
from .ratelimit import RequestLimiter

logger = logging.getLogger("communique.nsapi.resolver")


class NationStatesResolver(RecipientResolver):
    """Resolves region:<name> and tag:<name> through the NationStates API.

    Results are cached per (kind, name) for the cache TTL. Failures are
    raised as ResolutionFailure with the httpx/XML error as cause; no
    retries are attempted here.
    """

    def __init__(self, client: NationStatesClient, cache: Optional[TTLCache] = None):
        self.client = client
        self.cache = cache if cache is not None else TTLCache()

    @classmethod
    def from_settings(cls, settings: CommuniqueSettings) -> "NationStatesResolver":
        limiter = RequestLimiter(
            max_requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
        client = NationStatesClient(
            user_agent=settings.user_agent,
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            limiter=limiter,
        )
        return cls(client, TTLCache(settings.cache_ttl_seconds))

    async def resolve(self, kind: RecipientKind, name: str) -> list[str]:
        if kind is RecipientKind.REGION:
            fetch = lambda: self.client.region_nations(name)  # noqa: E731
        elif kind is RecipientKind.TAG:
            fetch = self._tag_fetcher(TagName.from_name(name))
        else:
            raise ResolutionFailure(kind.prefix, name, ValueError(f"{kind.prefix} recipients are not resolvable"))

        return await self._load(kind, name, fetch)

    def _tag_fetcher(self, tag: TagName) -> Callable[[], Awaitable[list[str]]]:
        return {
            TagName.WA: self.client.wa_members,
            TagName.DELEGATES: self.client.wa_delegates,
            TagName.NEW: self.client.new_nations,
            TagName.ALL: self.client.all_nations,
        }[tag]

    async def _load(
        self,
        kind: RecipientKind,
        name: str,
        fetch: Callable[[], Awaitable[list[str]]],
    ) -> list[str]:
        try:
            names = await self.cache.get_or_load((kind, name), fetch)
        except (httpx.HTTPError, ET.ParseError, ValueError) as e:
            logger.error(f"Failed to resolve {kind.prefix}:{name}: {e}")
            raise ResolutionFailure(kind.prefix, name, e) from e
        logger.info(f"Resolved {kind.prefix}:{name} to {len(names)} nations")
        return names


class DelegateClassifier(Classifier):
    """Current WA delegates, shared with tag:delegates through the resolver cache."""

    def __init__(self, resolver: NationStatesResolver):
        self.resolver = resolver

    async def snapshot_classified(self) -> set[str]:
        delegates = await self.resolver.resolve(RecipientKind.TAG, TagName.DELEGATES.value)
        return set(delegates)
