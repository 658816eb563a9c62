"""Read-only surface form -> synonym group index."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterable, Iterator

from ._types import SynonymGroup

logger = logging.getLogger(__name__)


class SynonymIndex(Mapping[str, tuple[SynonymGroup, ...]]):
    """Maps every midashi to the groups that list it.

    Built once and never mutated, so one instance can be shared by any
    number of concurrently analyzed documents.
    """

    __slots__ = ("_groups", "_by_midashi")

    def __init__(self, groups: Iterable[SynonymGroup]) -> None:
        self._groups = tuple(groups)
        by_midashi: dict[str, list[SynonymGroup]] = {}
        for group in self._groups:
            for item in group.items:
                entries = by_midashi.setdefault(item.midashi, [])
                # A group listing one surface twice is indexed once under it.
                if not entries or entries[-1] is not group:
                    entries.append(group)
        self._by_midashi = {k: tuple(v) for k, v in by_midashi.items()}

    def __getitem__(self, midashi: str) -> tuple[SynonymGroup, ...]:
        return self._by_midashi[midashi]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_midashi)

    def __len__(self) -> int:
        return len(self._by_midashi)

    @property
    def groups(self) -> tuple[SynonymGroup, ...]:
        return self._groups


def build_index(groups: Iterable[SynonymGroup]) -> SynonymIndex:
    """Index dictionary groups by surface form.

    Groups are indexed whole, lexemes included; whether lexemes are judged
    apart is decided per check by ``Options.allow_lexeme``, so one index
    serves every option set.
    """
    index = SynonymIndex(groups)
    logger.debug(
        "indexed %d groups under %d surface forms", len(index.groups), len(index)
    )
    return index
