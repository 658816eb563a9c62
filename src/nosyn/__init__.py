"""nosyn: detect mixed synonyms in Japanese text and normalize them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._document import SynonymChecker, check_spans, check_spans_async, check_text
from ._errors import NosynChecksumError, NosynConfigError, NosynError, NosynVersionError
from ._index import SynonymIndex, build_index
from ._merge import merge_segments
from ._report import apply_fixes
from ._types import (
    Diagnostic,
    Fix,
    Occurrence,
    Options,
    Segment,
    SynonymGroup,
    SynonymItem,
    Violation,
)

if TYPE_CHECKING:
    from pathlib import Path

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "load",
    "apply_fixes",
    "build_index",
    "check_spans",
    "check_spans_async",
    "check_text",
    "merge_segments",
    "Diagnostic",
    "Fix",
    "NosynChecksumError",
    "NosynConfigError",
    "NosynError",
    "NosynVersionError",
    "Occurrence",
    "Options",
    "Segment",
    "SynonymChecker",
    "SynonymGroup",
    "SynonymIndex",
    "SynonymItem",
    "Violation",
]


def load(path: Path | str | None = None) -> SynonymIndex:
    """Load a synonym dictionary and return a ready-to-share index.

    Args:
        path: A Sudachi ``synonyms.txt`` file or a compiled data directory.
            If None, uses the directory named by ``$NOSYN_DATA``.
    """
    from ._loader import load_groups

    return build_index(load_groups(path))
