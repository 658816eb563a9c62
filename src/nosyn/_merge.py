"""Merge two tokenizations of one span into a single non-overlapping segmentation."""

from __future__ import annotations

import logging
from typing import Iterable

import ahocorasick

from ._types import Segment

logger = logging.getLogger(__name__)


def _build_automaton(tokens: Iterable[str]) -> ahocorasick.Automaton | None:
    ac = ahocorasick.Automaton()
    for token in tokens:
        # Tokenizers never emit empty strings; drop them if one slips through.
        if not token:
            continue
        ac.add_word(token, token)
    if len(ac) == 0:
        return None
    ac.make_automaton()
    return ac


def find_candidates(
    original: str, tokens_a: Iterable[str], tokens_b: Iterable[str]
) -> list[Segment]:
    """Every occurrence of every token of either input inside ``original``.

    Tokens both tokenizers proposed at the same offset collapse into one
    candidate. A token that does not occur in the text yields nothing.
    """
    ac = _build_automaton([*tokens_a, *tokens_b])
    if ac is None:
        return []

    seen: set[tuple[int, str]] = set()
    candidates: list[Segment] = []
    for end_inclusive, token in ac.iter(original):
        end = end_inclusive + 1
        start = end - len(token)
        if (start, token) in seen:
            continue
        seen.add((start, token))
        candidates.append(Segment(token, start, end))
    return candidates


def merge_segments(
    original: str, tokens_a: Iterable[str], tokens_b: Iterable[str]
) -> list[Segment]:
    """Reconcile two token sequences over ``original``.

    Greedy leftmost-longest interval selection: candidates sorted by start,
    longer first on ties; a candidate is kept when it starts at or after the
    end of the last kept one. The order of the two inputs does not matter.
    """
    candidates = find_candidates(original, tokens_a, tokens_b)
    candidates.sort(key=lambda s: (s.start, -len(s.text)))

    segments: list[Segment] = []
    current_index = 0
    for segment in candidates:
        if segment.start >= current_index:
            segments.append(segment)
            current_index = segment.end

    logger.debug(
        "merged %d candidates into %d segments", len(candidates), len(segments)
    )
    return segments
