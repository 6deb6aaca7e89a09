"""Split an input line into whitespace-delimited tokens."""

import logging
import re

log = logging.getLogger(__name__)

PIPE = "|"
REDIRECT_OUT = ">"
REDIRECT_IN = "<"
OPERATORS = {PIPE, REDIRECT_OUT, REDIRECT_IN}

# Historical token cap of the interactive interpreter (MAX_ARGS + 2).
MAX_TOKENS = 66

_SEPARATORS = re.compile(r"[ \t\n]+")


def tokenize(line: str, limit: int | None = None) -> list[str]:
    """Tokenize a shell input line.

    A token is a maximal run of characters other than space, tab and
    newline. There is no quoting or escaping, and operators are only
    recognized when they stand alone ('ls>out' is a single token).

    When *limit* is given, tokens past it are dropped silently.
    """
    tokens = [token for token in _SEPARATORS.split(line) if token]
    if limit is not None and len(tokens) > limit:
        log.debug("dropping %d tokens past limit %d", len(tokens) - limit, limit)
        tokens = tokens[:limit]
    return tokens


def has_operators(tokens: list[str]) -> bool:
    return any(token in OPERATORS for token in tokens)
