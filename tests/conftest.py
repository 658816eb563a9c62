"""Shared fixtures for nosyn tests."""

from pathlib import Path

import pytest

from nosyn import Options, build_index, check_text
from nosyn._loader import parse_synonyms

DATA_DIR = Path(__file__).parent / "data"
SYNONYMS_TXT = DATA_DIR / "synonyms.txt"

# Words the compound-favoring test tokenizer knows besides the dictionary.
EXTRA_WORDS = ("です", "数字", "問題", "英語", "違い")


def vocab_segmenter(vocabulary):
    """Longest-match segmenter; unknown characters become single tokens."""
    words = sorted(set(vocabulary), key=len, reverse=True)

    def tokenize(text):
        tokens = []
        i = 0
        while i < len(text):
            if text[i].isspace():
                i += 1
                continue
            for word in words:
                if text.startswith(word, i):
                    tokens.append(word)
                    i += len(word)
                    break
            else:
                tokens.append(text[i])
                i += 1
        return tokens

    return tokenize


def char_segmenter(text):
    """Finest possible segmentation: one token per non-space character."""
    return [c for c in text if not c.isspace()]


@pytest.fixture(scope="session")
def groups():
    return parse_synonyms(SYNONYMS_TXT)


@pytest.fixture(scope="session")
def index(groups):
    return build_index(groups)


@pytest.fixture(scope="session")
def tokenizers(groups):
    vocabulary = [item.midashi for g in groups for item in g.items]
    vocabulary.extend(EXTRA_WORDS)
    return vocab_segmenter(vocabulary), char_segmenter


@pytest.fixture(scope="session")
def lint(index, tokenizers):
    """Check one text with rule-style options, like the rule's host would."""

    def run(text, **raw_options):
        return check_text(text, index, tokenizers, Options.from_mapping(raw_options))

    return run
