"""NationStates API access — resolver, delegate classifier, cache and request limiter."""

from .cache import TTLCache
from .client import NationStatesClient, parse_name_list
from .ratelimit import RequestLimiter
from .resolver import DelegateClassifier, NationStatesResolver

__all__ = [
    "NationStatesClient",
    "NationStatesResolver",
    "DelegateClassifier",
    "RequestLimiter",
    "TTLCache",
    "parse_name_list",
]
