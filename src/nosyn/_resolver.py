"""Equivalence policy: decide which used synonyms of a group conflict."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from ._types import Violation

if TYPE_CHECKING:
    from ._types import Options, SynonymGroup, SynonymItem

logger = logging.getLogger(__name__)


def _is_tolerated_variant(item: SynonymItem, options: Options) -> bool:
    if options.allow_alphabet and item.is_alphabet_variant:
        return True
    if options.allow_number and item.is_numeral_variant:
        return True
    return False


def used_items(
    group: SynonymGroup, used: Iterable[SynonymItem], options: Options
) -> list[SynonymItem]:
    """Items of ``group`` present in ``used`` that count as distinct forms.

    ``used`` must be in document order of first occurrence; the result
    keeps that order. Tolerated alphabet/numeral renderings fold into the
    group and are dropped, as are surfaces listed in ``options.allows``.

    ``group`` may be one lexeme of a dictionary group. A used item belongs
    to it when it comes from the same dictionary group and the lexeme lists
    its surface; the variant flags are read from the lexeme's own entry.
    """
    kept = []
    for item in used:
        if item.group_id != group.group_id:
            continue
        own = group.get_item(item.midashi)
        if own is None or _is_tolerated_variant(own, options):
            continue
        if item.midashi not in options.allows:
            kept.append(item)
    return kept


def _resolve_one(
    group: SynonymGroup, used: list[SynonymItem], options: Options
) -> Violation | None:
    items = used_items(group, used, options)

    preferred = next(
        (w for w in options.prefer_words if group.get_item(w) is not None), None
    )
    allowed = any(group.get_item(w) is not None for w in options.allows)
    if preferred is not None and not allowed:
        denied = tuple(item for item in items if item.midashi != preferred)
        if not denied:
            return None
        return Violation(group, denied, preferred, "prefer")

    if len(items) >= 2:
        return Violation(group, tuple(items), items[0].midashi, "synonym")
    return None


def resolve(
    group: SynonymGroup, used: Iterable[SynonymItem], options: Options
) -> list[Violation]:
    """Apply the policy to one touched group.

    Order of evaluation is fixed: variants collapse first, then the
    preferred-word / allows override, then the two-forms threshold. With
    ``allow_lexeme`` each lexeme of the group is judged on its own.

    Returns:
        Zero or more violations (one per conflicting lexeme partition).
    """
    used = list(used)
    parts = group.by_lexeme() if options.allow_lexeme else [group]
    violations: list[Violation] = []
    for part in parts:
        violation = _resolve_one(part, used, options)
        if violation is not None:
            logger.debug(
                "group %d: %s conflict %s", group.group_id, violation.mode,
                [item.midashi for item in violation.items],
            )
            violations.append(violation)
    return violations
