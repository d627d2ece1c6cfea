"""Recipient-kind decomposition — expand region/tag tokens into nation tokens."""

import logging

from ..errors import CommuniqueError, ResolutionFailure, UnknownTag
from .resolver import RecipientResolver
from .tokens import RecipientKind, TagName, Token

logger = logging.getLogger("communique.recipients.decompose")


async def decompose(token: Token, resolver: RecipientResolver) -> list[Token]:
    """Expand a token into NATION tokens carrying the same filter kind.

    Args:
        token: Token to expand
        resolver: Used for REGION and TAG tokens only

    Returns:
        Ordered list of nation tokens (empty for FLAG)

    Raises:
        UnknownTag: tag name is not wa, delegates, new or all
        ResolutionFailure: the resolver failed; never swallowed
    """
    kind = token.recipient_kind

    if kind is RecipientKind.NATION:
        return [token]

    if kind is RecipientKind.FLAG:
        return []

    if kind is RecipientKind.TAG:
        try:
            TagName.from_name(token.name)
        except UnknownTag:
            raise UnknownTag(token.name, str(token)) from None

    try:
        names = await resolver.resolve(kind, token.name)
    except ResolutionFailure as e:
        raise ResolutionFailure(e.kind, e.name, e.cause, str(token)) from e
    except CommuniqueError:
        raise
    except Exception as e:
        raise ResolutionFailure(kind.prefix, token.name, e, str(token)) from e

    logger.debug(f"Decomposed {token} into {len(names)} nations")
    return [Token.nation(n, token.filter_kind) for n in names if n and n.strip()]
