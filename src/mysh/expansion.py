"""Wildcard expansion."""

import glob as globmod
import logging

log = logging.getLogger(__name__)

# Only '*' triggers expansion; '?' and '[...]' are honoured inside such a token.
WILDCARD = "*"


def is_pattern(token: str) -> bool:
    return WILDCARD in token


def expand_globs(tokens: list[str]) -> list[str]:
    """Expand wildcard tokens into the paths they match.

    A token is a pattern when it contains '*'. Matches replace the pattern
    in place, in the order the filesystem returns them. Tokens that match
    no files are left unchanged.
    """
    expanded: list[str] = []
    for token in tokens:
        if not is_pattern(token):
            expanded.append(token)
            continue
        matches = globmod.glob(token)
        if matches:
            log.debug("expanded %r to %d paths", token, len(matches))
            expanded.extend(matches)
        else:
            expanded.append(token)
    return expanded
