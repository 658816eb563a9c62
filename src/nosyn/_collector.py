"""Per-document collection of used synonym items and their positions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from ._types import Occurrence

if TYPE_CHECKING:
    from ._index import SynonymIndex
    from ._types import Segment, SynonymGroup, SynonymItem

logger = logging.getLogger(__name__)


class OccurrenceCollector:
    """Accumulates matches across every span of one document.

    Not shared between documents; the index it reads from is.
    """

    __slots__ = ("_index", "_positions", "_touched")

    def __init__(self, index: SynonymIndex) -> None:
        self._index = index
        # dicts keep first-use order, which doubles as the canonical order
        self._positions: dict[SynonymItem, list[int]] = {}
        self._touched: dict[SynonymGroup, None] = {}

    def collect(self, segments: Iterable[Segment], base_offset: int = 0) -> None:
        """Match merged segments of one span starting at ``base_offset``."""
        n_matched = 0
        for segment in segments:
            groups = self._index.get(segment.text)
            if not groups:
                continue
            position = base_offset + segment.start
            for group in groups:
                self._touched[group] = None
                # Some groups list the same surface more than once
                # (e.g. アーカイブ); only the first entry counts.
                item = group.get_item(segment.text)
                if item is None:
                    continue
                self._positions.setdefault(item, []).append(position)
                n_matched += 1
        logger.debug("span at %d: %d item matches", base_offset, n_matched)

    @property
    def used_items(self) -> list[SynonymItem]:
        """Used items in document order of first occurrence."""
        return list(self._positions)

    @property
    def touched_groups(self) -> list[SynonymGroup]:
        return list(self._touched)

    @property
    def occurrences(self) -> dict[SynonymItem, list[int]]:
        return {item: list(pos) for item, pos in self._positions.items()}

    def positions(self, item: SynonymItem) -> list[int]:
        return list(self._positions.get(item, ()))

    def iter_occurrences(self) -> Iterator[Occurrence]:
        for item, positions in self._positions.items():
            for position in positions:
                yield Occurrence(item, position)
