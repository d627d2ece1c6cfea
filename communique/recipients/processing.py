"""Processing actions applied to the final recipient list before sending."""

import logging
import random
from enum import Enum
from typing import Optional

from .resolver import Classifier

logger = logging.getLogger("communique.recipients.processing")

# Shared source for callers that don't inject their own.
RANDOM = random.Random()


class ProcessingAction(Enum):
    """Reordering applied to the whole recipient list."""

    NONE = "none"
    RANDOMISE = "randomise"
    REVERSE = "reverse"
    DELEGATE_PRIORITISE = "delegate_prioritise"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ProcessingAction.NONE: "None",
    ProcessingAction.RANDOMISE: "Randomise order",
    ProcessingAction.REVERSE: "Reverse order",
    ProcessingAction.DELEGATE_PRIORITISE: "Prioritise delegates",
}


async def process(
    names: list[str],
    action: ProcessingAction,
    classifier: Optional[Classifier] = None,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Return a new list reordered per the action. The input is not modified.

    Args:
        names: Recipient names in evaluation order
        action: Processing action
        classifier: Required for DELEGATE_PRIORITISE; snapshotted once
        rng: Random source (defaults to the shared RANDOM)
    """
    rng = rng or RANDOM

    if action is ProcessingAction.NONE:
        return list(names)

    if action is ProcessingAction.RANDOMISE:
        shuffled = list(names)
        rng.shuffle(shuffled)
        return shuffled

    if action is ProcessingAction.REVERSE:
        return list(reversed(names))

    if action is ProcessingAction.DELEGATE_PRIORITISE:
        if classifier is None:
            raise ValueError("Delegate prioritisation needs a classifier")
        delegates = await classifier.snapshot_classified()

        prioritised, rest = [], []
        for name in names:
            (prioritised if name in delegates else rest).append(name)

        rng.shuffle(prioritised)
        rng.shuffle(rest)
        logger.info(f"Prioritised {len(prioritised)} delegates ahead of {len(rest)} other nations")
        return prioritised + rest

    raise ValueError(f"Unhandled processing action: {action}")
