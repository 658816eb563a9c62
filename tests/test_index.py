"""Tests for the surface form index and occurrence collection."""

from nosyn import Segment, SynonymGroup, build_index, merge_segments
from nosyn._collector import OccurrenceCollector
from nosyn._loader import make_item


def test_lookup(index):
    groups = index["問合せ"]
    assert len(groups) == 1
    assert {i.midashi for i in groups[0].items} == {"問い合わせ", "問合せ", "問合わせ"}
    assert index.get("問題") is None


def test_groups_indexed_whole(index):
    assert index["部屋"] == index["room"]
    assert [i.midashi for i in index["room"][0].items] == ["部屋", "ルーム", "room"]
    assert len(index.groups) == 11


def test_repeated_surface_indexed_once_per_group(index):
    # listed under two lexemes of the same group
    assert len(index["アーカイブ"]) == 1


def test_mapping_protocol():
    group = SynonymGroup(1, (make_item(1, 1, "猫"), make_item(1, 1, "ネコ")))
    index = build_index([group])
    assert len(index) == 2
    assert sorted(index) == ["ネコ", "猫"]
    assert index["猫"] == (group,)


def test_collect_positions_across_spans(index):
    collector = OccurrenceCollector(index)
    collector.collect([Segment("サーバ", 0, 3), Segment("と", 3, 4)], base_offset=10)
    collector.collect([Segment("サーバ", 2, 5)], base_offset=100)
    collector.collect([Segment("サーバー", 0, 4)], base_offset=200)

    sabaa, saba = index["サーバー"][0].items[:2]
    assert collector.positions(saba) == [10, 102]
    assert collector.positions(sabaa) == [200]
    assert collector.used_items == [saba, sabaa]
    assert collector.touched_groups == [index["サーバ"][0]]
    assert len(list(collector.iter_occurrences())) == 3


def test_unknown_segments_are_ignored(index):
    collector = OccurrenceCollector(index)
    collector.collect([Segment("猫", 0, 1), Segment("問題", 1, 3)])
    assert collector.used_items == []
    assert collector.touched_groups == []


def test_first_matching_entry_only(index):
    collector = OccurrenceCollector(index)
    collector.collect([Segment("アーカイブ", 0, 5)])
    group = index["アーカイブ"][0]
    assert collector.used_items == [group.items[0]]
    assert collector.occurrences == {group.items[0]: [0]}


def test_occurrence_completeness(index, tokenizers):
    text = "インターフェースとインターフェースとインターフェース"
    a, b = tokenizers
    collector = OccurrenceCollector(index)
    collector.collect(merge_segments(text, a(text), b(text)))
    (item,) = collector.used_items
    assert item.midashi == "インターフェース"
    assert collector.positions(item) == [0, 9, 18]
    for position in collector.positions(item):
        assert text[position:position + len(item.midashi)] == item.midashi
