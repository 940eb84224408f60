"""Resolve user supplied patterns to registered tests."""

import logging
from collections.abc import Callable, Sequence

from cute.errors import UnknownTestError
from cute.models.registry import TestRegistry
from cute.models.selection import RunSelection

log = logging.getLogger(__name__)

WORD_DELIMITERS = frozenset(" \t-_/.,:;")


def contains_word(name: str, pattern: str) -> bool:
    """Check whether ``pattern`` occurs in ``name`` as a delimited word.

    Both ends of an occurrence must be a string edge or one of the word
    delimiters. Every occurrence is tried, not only the first.
    """
    if not pattern:
        return False

    start = name.find(pattern)
    while start != -1:
        end = start + len(pattern)
        starts_on_boundary = start == 0 or name[start - 1] in WORD_DELIMITERS
        ends_on_boundary = end == len(name) or name[end] in WORD_DELIMITERS
        if starts_on_boundary and ends_on_boundary:
            return True
        start = name.find(pattern, start + 1)

    return False


MATCH_TIERS: Sequence[tuple[str, Callable[[str, str], bool]]] = (
    ("word", contains_word),
    ("substring", lambda name, pattern: pattern in name),
)


def resolve(pattern: str, selection: RunSelection) -> int:
    """Mark the tests matched by ``pattern`` and return how many matched.

    Matching goes through progressively looser tiers and stops at the first
    one with a match: exact name, whole-word containment, then plain
    substring containment.
    """
    registry = selection.registry

    for index, test in enumerate(registry):
        if test.name == pattern:
            selection.mark(index)
            return 1

    for tier, matches in MATCH_TIERS:
        matched = [
            index for index, test in enumerate(registry) if matches(test.name, pattern)
        ]
        if matched:
            log.debug("Pattern %r matched %d test(s) by %s", pattern, len(matched), tier)
            for index in matched:
                selection.mark(index)
            return len(matched)

    return 0


def build_selection(registry: TestRegistry, patterns: Sequence[str]) -> RunSelection:
    """Resolve every pattern into one selection.

    Raises:
        UnknownTestError: If a pattern matches no registered test

    """
    selection = RunSelection(registry=registry)
    for pattern in patterns:
        if resolve(pattern, selection) == 0:
            raise UnknownTestError(pattern)
    return selection
