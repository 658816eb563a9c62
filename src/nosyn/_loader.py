"""Synonym dictionary parsing, compiled data loading and checksum verification."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import msgpack

from ._errors import NosynChecksumError, NosynError, NosynVersionError
from ._types import SynonymGroup, SynonymItem

logger = logging.getLogger(__name__)

_EXPECTED_VERSION = "1.0"

_DATA_FILES = ("groups.bin",)

_ENV_DATA = "NOSYN_DATA"

# Sudachi synonyms.txt columns
_COL_GROUP = 0
_COL_LEXEME = 3
_COL_ABBREVIATION = 5
_COL_NOTATION = 6
_COL_MIDASHI = 8

_ABBREVIATION_ALPHABET = 1   # 略語・略称 (アルファベット)
_NOTATION_ALPHABET = 1       # アルファベット表記

_NUMERAL_RE = re.compile(r"[0-9０-９]+(?:[.．][0-9０-９]+)?")


def _default_data_dir() -> Path:
    env = os.environ.get(_ENV_DATA)
    if not env:
        raise NosynError(
            f"No dictionary given and ${_ENV_DATA} is not set"
        )
    return Path(env)


def _sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def make_item(
    group_id: int,
    lexeme_id: int,
    midashi: str,
    abbreviation: int = 0,
    notation: int = 0,
) -> SynonymItem:
    """Build an item, deriving the variant flags from dictionary columns."""
    return SynonymItem(
        midashi=midashi,
        lexeme_id=lexeme_id,
        group_id=group_id,
        is_alphabet_variant=(
            abbreviation == _ABBREVIATION_ALPHABET
            or notation == _NOTATION_ALPHABET
        ),
        is_numeral_variant=_NUMERAL_RE.fullmatch(midashi) is not None,
    )


def _parse_row(cols: list[str]) -> tuple[int, int, str, int, int] | None:
    if len(cols) <= _COL_MIDASHI:
        return None
    midashi = cols[_COL_MIDASHI].strip()
    if not midashi:
        return None
    try:
        return (
            int(cols[_COL_GROUP]),
            int(cols[_COL_LEXEME]),
            midashi,
            int(cols[_COL_ABBREVIATION] or 0),
            int(cols[_COL_NOTATION] or 0),
        )
    except ValueError:
        return None


def parse_synonyms(path: Path | str) -> list[SynonymGroup]:
    """Parse a Sudachi-format ``synonyms.txt`` into groups.

    Malformed lines are skipped; a dictionary line that cannot be read is
    simply a surface that never matches.
    """
    path = Path(path)
    rows: dict[int, list[tuple[int, str, int, int]]] = {}
    skipped = 0
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            row = _parse_row(line.split(","))
            if row is None:
                skipped += 1
                continue
            group_id, *rest = row
            rows.setdefault(group_id, []).append(tuple(rest))  # type: ignore[arg-type]

    if skipped:
        logger.warning("Skipped %d malformed lines in %s", skipped, path)

    groups = [
        SynonymGroup(
            group_id,
            tuple(make_item(group_id, *entry) for entry in entries),
        )
        for group_id, entries in rows.items()
    ]
    logger.info("Parsed %d synonym groups from %s", len(groups), path)
    return groups


def _pack_groups(groups: list[SynonymGroup]) -> list[Any]:
    return [
        [g.group_id, [[i.lexeme_id, i.midashi, i.is_alphabet_variant] for i in g.items]]
        for g in groups
    ]


def _unpack_groups(raw: list[Any]) -> list[SynonymGroup]:
    groups: list[SynonymGroup] = []
    for group_id, entries in raw:
        items = tuple(
            make_item(
                group_id, lexeme_id, midashi,
                abbreviation=_ABBREVIATION_ALPHABET if alphabet else 0,
            )
            for lexeme_id, midashi, alphabet in entries
        )
        groups.append(SynonymGroup(group_id, items))
    return groups


def _source_entry(source: Path) -> dict[str, str]:
    return {"name": source.name, "sha256": _sha256(source)}


def _is_current(data_dir: Path, source: Path) -> bool:
    """Whether ``data_dir`` already holds a valid compile of ``source``."""
    if not (data_dir / "manifest.json").exists():
        return False
    manifest = _read_manifest(data_dir)
    if manifest.get("source", {}).get("sha256") != _sha256(source):
        return False
    try:
        _validate_manifest(manifest, data_dir)
    except NosynError:
        return False
    return True


def compile_data(
    source: Path | str, data_dir: Path | str, *, force: bool = False
) -> Path:
    """Compile ``synonyms.txt`` into a validated msgpack data directory.

    The manifest records the source dictionary's checksum; a directory
    already compiled from the same source is left as is unless ``force``.

    Returns:
        Path of the manifest.
    """
    source = Path(source)
    data_dir = Path(data_dir)
    manifest_path = data_dir / "manifest.json"
    if not force and _is_current(data_dir, source):
        logger.info("%s is up to date with %s", data_dir, source)
        return manifest_path

    data_dir.mkdir(parents=True, exist_ok=True)
    groups = parse_synonyms(source)
    with open(data_dir / "groups.bin", "wb") as f:
        f.write(msgpack.packb(_pack_groups(groups), use_bin_type=True))

    manifest = {
        "version": _EXPECTED_VERSION,
        "source": _source_entry(source),
        "groups": len(groups),
        "files": {name: _sha256(data_dir / name) for name in _DATA_FILES},
    }
    with open(manifest_path, "w") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    logger.info("Compiled %d groups into %s", len(groups), data_dir)
    return manifest_path


def _read_manifest(data_dir: Path) -> dict[str, Any]:
    manifest_path = data_dir / "manifest.json"
    if not manifest_path.exists():
        raise NosynError(f"manifest.json not found in {data_dir}")
    with open(manifest_path) as f:
        return json.load(f)


def _validate_manifest(manifest: dict[str, Any], data_dir: Path) -> None:
    version = manifest.get("version")
    if version != _EXPECTED_VERSION:
        raise NosynVersionError(
            f"Expected data version {_EXPECTED_VERSION!r}, got {version!r}"
        )
    checksums = manifest.get("files", {})
    for filename in _DATA_FILES:
        filepath = data_dir / filename
        if not filepath.exists():
            raise NosynError(f"Missing data file: {filepath}")
        expected = checksums.get(filename)
        if expected is None:
            raise NosynError(f"No checksum in manifest for {filename}")
        actual = _sha256(filepath)
        if actual != expected:
            raise NosynChecksumError(
                f"Checksum mismatch for {filename}: "
                f"expected {expected[:16]}..., got {actual[:16]}..."
            )


def load_data(data_dir: Path | str | None = None) -> list[SynonymGroup]:
    """Load and validate a compiled data directory."""
    if data_dir is None:
        data_dir = _default_data_dir()
    else:
        data_dir = Path(data_dir)

    manifest = _read_manifest(data_dir)
    _validate_manifest(manifest, data_dir)

    with open(data_dir / "groups.bin", "rb") as f:
        raw = msgpack.unpackb(f.read(), raw=False)
    groups = _unpack_groups(raw)
    if len(groups) != manifest.get("groups"):
        raise NosynError(
            f"{data_dir} holds {len(groups)} groups, "
            f"manifest says {manifest.get('groups')}"
        )
    source = manifest.get("source", {})
    logger.info(
        "Loaded %d synonym groups from %s (compiled from %s, sha256 %s)",
        len(groups), data_dir, source.get("name"), source.get("sha256", "")[:12],
    )
    return groups


def load_groups(path: Path | str | None = None) -> list[SynonymGroup]:
    """Groups from a ``synonyms.txt`` file or a compiled data directory."""
    if path is not None and Path(path).is_file():
        return parse_synonyms(path)
    return load_data(path)
