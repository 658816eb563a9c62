"""Document-level synonym checking: feed spans, then resolve once at the end."""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Sequence

from ._collector import OccurrenceCollector
from ._errors import NosynError
from ._merge import merge_segments
from ._report import emit
from ._resolver import resolve
from ._types import Options

if TYPE_CHECKING:
    from ._index import SynonymIndex
    from ._types import Diagnostic, Violation

logger = logging.getLogger(__name__)

Tokenize = Callable[[str], Iterable[str]]


class SynonymChecker:
    """Two-phase checker for one document.

    Call :meth:`on_span` for every analyzable span (in any order), then
    :meth:`finish` once. Nothing is resolved before :meth:`finish`, so a
    document whose analysis fails part way emits no diagnostics at all.
    """

    __slots__ = ("_index", "_tokenizers", "_options", "_collector", "_finished")

    def __init__(
        self,
        index: SynonymIndex,
        tokenizers: Sequence[Tokenize] = (),
        options: Options | None = None,
    ) -> None:
        if tokenizers and len(tokenizers) != 2:
            raise ValueError(f"expected two tokenizers, got {len(tokenizers)}")
        self._index = index
        self._tokenizers = tuple(tokenizers)
        self._options = options if options is not None else Options()
        self._collector = OccurrenceCollector(index)
        self._finished = False

    @property
    def options(self) -> Options:
        return self._options

    @property
    def collector(self) -> OccurrenceCollector:
        return self._collector

    def on_span(self, text: str, base_offset: int = 0) -> None:
        """Tokenize ``text`` with both tokenizers and collect its matches."""
        if not self._tokenizers:
            raise NosynError("checker was created without tokenizers")
        tokenize_a, tokenize_b = self._tokenizers
        self.on_tokens(text, base_offset, tokenize_a(text), tokenize_b(text))

    def on_tokens(
        self,
        text: str,
        base_offset: int,
        tokens_a: Iterable[str],
        tokens_b: Iterable[str],
    ) -> None:
        """Collect a span whose two tokenizations were computed elsewhere."""
        if self._finished:
            raise NosynError("span added after finish()")
        segments = merge_segments(text, tokens_a, tokens_b)
        self._collector.collect(segments, base_offset)

    def violations(self) -> list[Violation]:
        used = self._collector.used_items
        return [
            violation
            for group in self._collector.touched_groups
            for violation in resolve(group, used, self._options)
        ]

    def finish(self) -> list[Diagnostic]:
        """Resolve every touched group and return the document's diagnostics."""
        if self._finished:
            raise NosynError("finish() called twice")
        self._finished = True
        diagnostics = emit(self.violations(), self._collector)
        logger.debug(
            "%d groups touched, %d diagnostics",
            len(self._collector.touched_groups), len(diagnostics),
        )
        return diagnostics


def check_spans(
    spans: Iterable[tuple[str, int]],
    index: SynonymIndex,
    tokenizers: Sequence[Tokenize],
    options: Options | None = None,
) -> list[Diagnostic]:
    """Check one document given as ``(text, base_offset)`` spans."""
    checker = SynonymChecker(index, tokenizers, options)
    for text, base_offset in spans:
        checker.on_span(text, base_offset)
    return checker.finish()


def check_text(
    text: str,
    index: SynonymIndex,
    tokenizers: Sequence[Tokenize],
    options: Options | None = None,
) -> list[Diagnostic]:
    """Check ``text`` as a single span at offset 0."""
    return check_spans([(text, 0)], index, tokenizers, options)


async def _surfaces(result: Any) -> list[str]:
    if inspect.isawaitable(result):
        result = await result
    if hasattr(result, "__aiter__"):
        return [token async for token in result]
    return list(result)


async def check_spans_async(
    spans: Iterable[tuple[str, int]],
    index: SynonymIndex | Awaitable[SynonymIndex],
    tokenizers: Sequence[Callable[[str], Any]],
    options: Options | None = None,
) -> list[Diagnostic]:
    """Asynchronous variant of :func:`check_spans`.

    ``index`` may be an awaitable (awaited once, shared by every span);
    tokenizers may return a list, an awaitable of one, or an async
    iterable of surfaces. Collaborator errors propagate unchanged.
    """
    if inspect.isawaitable(index):
        index = await index
    if len(tokenizers) != 2:
        raise ValueError(f"expected two tokenizers, got {len(tokenizers)}")
    checker = SynonymChecker(index, options=options)
    tokenize_a, tokenize_b = tokenizers
    for text, base_offset in spans:
        tokens_a = await _surfaces(tokenize_a(text))
        tokens_b = await _surfaces(tokenize_b(text))
        checker.on_tokens(text, base_offset, tokens_a, tokens_b)
    return checker.finish()
