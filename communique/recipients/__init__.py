"""Recipient expression pipeline.

- Tokens: parse/format the recipient language
- Decomposition: region/tag tokens → nation tokens via a resolver
- Algebra: per-filter set operations
- Engine: left-to-right fold into the final recipient list
- Processing: randomise, reverse, prioritise delegates
"""

from .algebra import RecipientSet, apply, compile_pattern
from .decompose import decompose
from .engine import ExpressionEngine, run_expression
from .processing import ProcessingAction, process
from .resolver import Classifier, RecipientResolver, StaticClassifier, StaticResolver
from .tokens import (
    FilterKind,
    RecipientKind,
    TagName,
    Token,
    format_token,
    parse_token,
    parse_tokens,
    read_token_file,
    reference_name,
)

__all__ = [
    # Tokens
    "FilterKind",
    "RecipientKind",
    "TagName",
    "Token",
    "format_token",
    "parse_token",
    "parse_tokens",
    "read_token_file",
    "reference_name",
    # Resolution
    "RecipientResolver",
    "Classifier",
    "StaticResolver",
    "StaticClassifier",
    "decompose",
    # Algebra / engine
    "RecipientSet",
    "apply",
    "compile_pattern",
    "ExpressionEngine",
    "run_expression",
    # Processing
    "ProcessingAction",
    "process",
]
