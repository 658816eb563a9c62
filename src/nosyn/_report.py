"""Diagnostics and autofix edits for resolved violations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ._types import Diagnostic, Fix

if TYPE_CHECKING:
    from ._collector import OccurrenceCollector
    from ._types import Violation


def _message(violation: Violation, denied: str) -> str:
    if violation.mode == "prefer":
        return f"「{violation.replacement}」の同義語である「{denied}」が利用されています"
    names = "」と「".join(item.midashi for item in violation.items)
    return f"同義語である「{names}」が利用されています"


def emit(
    violations: Iterable[Violation], collector: OccurrenceCollector
) -> list[Diagnostic]:
    """One diagnostic per recorded occurrence of every reported item.

    Violations keep their order; occurrences within one violation are
    emitted by ascending position. Canonical occurrences get an identity
    edit so the whole group can be fixed as one edit sequence.
    """
    diagnostics: list[Diagnostic] = []
    for violation in violations:
        located = sorted(
            (
                (position, item)
                for item in violation.items
                for position in collector.positions(item)
            ),
            key=lambda pair: pair[0],
        )
        for position, item in located:
            fix = Fix(position, position + len(item.midashi), violation.replacement)
            diagnostics.append(
                Diagnostic(_message(violation, item.midashi), position, fix)
            )
    return diagnostics


def apply_fixes(text: str, diagnostics: Iterable[Diagnostic]) -> str:
    """Apply the diagnostics' edits to ``text``.

    Edits are selected left to right by (start, end); one overlapping an
    earlier selected edit, or reaching past the end of the text, is dropped.
    Identity edits are selected like any other, so they claim their range,
    but change nothing. Selected edits are applied from the end so earlier
    offsets stay valid.
    """
    fixes = sorted(
        (d.fix for d in diagnostics if d.fix is not None),
        key=lambda f: (f.start, f.end),
    )
    kept: list[Fix] = []
    last_end = 0
    for fix in fixes:
        if fix.start < last_end or fix.end > len(text):
            continue
        kept.append(fix)
        last_end = fix.end

    for fix in reversed(kept):
        text = text[:fix.start] + fix.replacement + text[fix.end:]
    return text
