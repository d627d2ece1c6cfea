"""Expression engine — fold a token list into the final recipient list.

Tokens are applied strictly left to right; later tokens see the effect of
earlier ones, so order matters:

  [region:europe, +tag:wa]   → European WA members
  [+tag:wa, region:europe]   → all of Europe (the include saw an empty set)

Any error aborts the whole evaluation. There are no partial results.
"""

import asyncio
import logging
import random
from typing import Iterable, Optional, Union

from ..errors import EvaluationCancelled
from .algebra import RecipientSet, apply
from .decompose import decompose
from .processing import ProcessingAction, process
from .resolver import Classifier, RecipientResolver
from .tokens import Token, parse_token

logger = logging.getLogger("communique.recipients.engine")


class ExpressionEngine:
    """Evaluates recipient expressions against a resolver.

    The engine holds no per-evaluation state; concurrent evaluate() calls
    each build their own accumulator.
    """

    def __init__(self, resolver: RecipientResolver):
        self.resolver = resolver

    async def evaluate(
        self,
        tokens: Iterable[Union[Token, str]],
        cancel: Optional[asyncio.Event] = None,
    ) -> list[str]:
        """Evaluate tokens into an ordered, deduplicated list of nation names.

        Args:
            tokens: Parsed tokens or token text, in application order
            cancel: Optional event; when set, evaluation stops before the
                next resolver call and never folds a decomposition fetched
                after the event was set

        Raises:
            MalformedToken, UnknownTag, InvalidPattern, ResolutionFailure,
            EvaluationCancelled
        """
        parsed = [t if isinstance(t, Token) else parse_token(t) for t in tokens]
        recipients = RecipientSet()

        for token in parsed:
            _check_cancelled(cancel, token)

            if token.filter_kind.is_regex:
                decomposed = []
            else:
                decomposed = await decompose(token, self.resolver)
                _check_cancelled(cancel, token)

            before = len(recipients)
            recipients = apply(recipients, token, decomposed)
            logger.debug(f"Applied {token}: {before} → {len(recipients)} recipients")

        logger.info(f"Evaluated {len(parsed)} tokens into {len(recipients)} recipients")
        return recipients.to_list()


def _check_cancelled(cancel: Optional[asyncio.Event], token: Token):
    if cancel is not None and cancel.is_set():
        logger.info(f"Evaluation cancelled at {token}")
        raise EvaluationCancelled(str(token))


async def run_expression(
    tokens: Iterable[Union[Token, str]],
    resolver: RecipientResolver,
    action: ProcessingAction = ProcessingAction.NONE,
    classifier: Optional[Classifier] = None,
    rng: Optional[random.Random] = None,
    cancel: Optional[asyncio.Event] = None,
) -> list[str]:
    """Evaluate an expression and apply a processing action in one call.

    Returns:
        Final send order
    """
    names = await ExpressionEngine(resolver).evaluate(tokens, cancel=cancel)
    return await process(names, action, classifier=classifier, rng=rng)
