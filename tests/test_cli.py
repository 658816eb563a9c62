"""Tests for the command-line interface."""

import json

import pytest

from nosyn import _tokenizers
from nosyn._cli import build_options, build_parser, line_column, main

from conftest import SYNONYMS_TXT


@pytest.fixture
def fake_tokenizers(monkeypatch, tokenizers):
    monkeypatch.setattr(_tokenizers, "default_tokenizers", lambda: tokenizers)


def test_line_column():
    text = "一行目\n二行目のサーバ"
    assert line_column(text, 0) == (1, 1)
    assert line_column(text, 4) == (2, 1)
    assert line_column(text, 8) == (2, 5)


def test_build_options_from_config_and_flags(tmp_path):
    config = tmp_path / "rule.json"
    config.write_text(json.dumps({"allows": ["ウェブアプリ"], "allowNumber": False}))
    args = build_parser().parse_args([
        "check", "doc.md", "--config", str(config),
        "--allow", "ユーザ", "--prefer", "サーバー", "--no-allow-lexeme",
    ])
    options = build_options(args)
    assert options.allows == frozenset({"ウェブアプリ", "ユーザ"})
    assert options.prefer_words == ("サーバー",)
    assert options.allow_number is False
    assert options.allow_lexeme is False
    assert options.allow_alphabet is True


def test_compile_then_check(tmp_path, capsys, fake_tokenizers):
    data_dir = tmp_path / "data"
    assert main(["compile", str(SYNONYMS_TXT), str(data_dir)]) == 0
    assert (data_dir / "manifest.json").exists()
    assert main(["compile", str(SYNONYMS_TXT), str(data_dir), "--force"]) == 0

    doc = tmp_path / "doc.txt"
    doc.write_text("サーバの話。\n次はサーバーの話。", encoding="utf-8")
    assert main(["check", str(doc), "--dict", str(data_dir)]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"{doc}:1:1: 同義語である「サーバ」と「サーバー」が利用されています",
        f"{doc}:2:3: 同義語である「サーバ」と「サーバー」が利用されています",
    ]


def test_check_clean_file(tmp_path, capsys, fake_tokenizers):
    doc = tmp_path / "doc.txt"
    doc.write_text("サーバの話。", encoding="utf-8")
    assert main(["check", str(doc), "--dict", str(SYNONYMS_TXT)]) == 0
    assert capsys.readouterr().out == ""


def test_fix_in_place(tmp_path, fake_tokenizers):
    doc = tmp_path / "doc.txt"
    doc.write_text("問い合わせと問合せ", encoding="utf-8")
    assert main(["check", str(doc), "--dict", str(SYNONYMS_TXT), "--fix"]) == 0
    assert doc.read_text(encoding="utf-8") == "問い合わせと問い合わせ"


def test_missing_dictionary_exits_2(tmp_path, monkeypatch, fake_tokenizers):
    monkeypatch.delenv("NOSYN_DATA", raising=False)
    doc = tmp_path / "doc.txt"
    doc.write_text("サーバ", encoding="utf-8")
    assert main(["check", str(doc)]) == 2


def test_epilog_shows_plain_text_examples():
    epilog = build_parser().epilog
    assert "notes.txt" in epilog
    assert ".md" not in epilog
