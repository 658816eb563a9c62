"""Tokenizer adapters producing surface-form sequences.

Each adapter is a plain callable ``text -> list[str]`` built explicitly and
passed to the checker; none of them keeps state between calls.
"""

from __future__ import annotations

from typing import Callable

Tokenize = Callable[[str], list[str]]


def tiny_segmenter() -> Tokenize:
    """Compact statistical segmenter, coarse on compounds."""
    import tinysegmenter

    segmenter = tinysegmenter.TinySegmenter()

    def tokenize(text: str) -> list[str]:
        return [token for token in segmenter.tokenize(text) if token]

    return tokenize


def mecab_tokenizer(args: str = "") -> Tokenize:
    """MeCab morphological analysis via fugashi (fine-grained morphemes).

    Args:
        args: Extra MeCab arguments, e.g. ``"-d /path/to/dic"``. With none,
            the installed default dictionary (unidic-lite) is used.
    """
    from fugashi import Tagger

    tagger = Tagger(args)

    def tokenize(text: str) -> list[str]:
        return [word.surface for word in tagger(text) if word.surface]

    return tokenize


def default_tokenizers() -> tuple[Tokenize, Tokenize]:
    return tiny_segmenter(), mecab_tokenizer()
