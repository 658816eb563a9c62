"""Data structures for nosyn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from ._errors import NosynConfigError


@dataclass(slots=True, frozen=True)
class Segment:
    text: str
    start: int   # offset inside the analyzed span
    end: int     # start + len(text)


@dataclass(slots=True, frozen=True, eq=False)
class SynonymItem:
    """One surface form of a dictionary group.

    Items compare by identity: a group may list the same surface twice
    (under different lexemes) and those entries stay distinct.
    """

    midashi: str
    lexeme_id: int
    group_id: int
    is_alphabet_variant: bool = False
    is_numeral_variant: bool = False

    def __repr__(self) -> str:
        return f"SynonymItem({self.midashi!r}, group={self.group_id}, lexeme={self.lexeme_id})"


@dataclass(slots=True, frozen=True, eq=False)
class SynonymGroup:
    group_id: int
    items: tuple[SynonymItem, ...]

    def get_item(self, midashi: str) -> SynonymItem | None:
        """Return the first item whose surface is exactly ``midashi``."""
        for item in self.items:
            if item.midashi == midashi:
                return item
        return None

    def by_lexeme(self) -> list[SynonymGroup]:
        """Split into one group per lexeme, keeping dictionary order."""
        lexemes: dict[int, list[SynonymItem]] = {}
        for item in self.items:
            lexemes.setdefault(item.lexeme_id, []).append(item)
        if len(lexemes) <= 1:
            return [self]
        return [SynonymGroup(self.group_id, tuple(items)) for items in lexemes.values()]


@dataclass(slots=True, frozen=True)
class Occurrence:
    item: SynonymItem
    position: int   # absolute document offset


_OPTION_KEYS = {
    "allows": "allows",
    "preferWords": "prefer_words",
    "prefer_words": "prefer_words",
    "allowAlphabet": "allow_alphabet",
    "allow_alphabet": "allow_alphabet",
    "allowNumber": "allow_number",
    "allow_number": "allow_number",
    "allowLexeme": "allow_lexeme",
    "allow_lexeme": "allow_lexeme",
}


@dataclass(slots=True, frozen=True)
class Options:
    allows: frozenset[str] = frozenset()
    prefer_words: tuple[str, ...] = ()
    allow_alphabet: bool = True
    allow_number: bool = True
    allow_lexeme: bool = True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> Options:
        """Build options from rule-style keys (camelCase or snake_case).

        Raises:
            NosynConfigError: If a key is not a known option.
        """
        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            name = _OPTION_KEYS.get(key)
            if name is None:
                raise NosynConfigError(f"Unknown option {key!r}")
            if name == "allows":
                value = frozenset(value)
            elif name == "prefer_words":
                value = tuple(value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(slots=True, frozen=True)
class Fix:
    start: int
    end: int
    replacement: str

    @property
    def range(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(slots=True, frozen=True)
class Diagnostic:
    message: str
    position: int
    fix: Fix | None = None


@dataclass(slots=True, frozen=True)
class Violation:
    group: SynonymGroup
    items: tuple[SynonymItem, ...]   # reported items, document order
    replacement: str                 # canonical or preferred surface
    mode: Literal["synonym", "prefer"] = "synonym"
