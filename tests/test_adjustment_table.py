from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from rotationdb import (
    AdjustmentTable,
    DatabaseIndex,
    GameIndex,
    MalformedSource,
    SourceUnavailable,
    load_adjustment_table,
    parse_adjustment_table,
)

from conftest import ACTION_TABLE


def test_rows_parse_in_file_order() -> None:
    entries = parse_adjustment_table(ACTION_TABLE)

    assert [(e.class_name, e.game_index, e.database_index) for e in entries] == [
        ("Warrior", 12, 501),
        ("Warrior", 12, 502),
        ("Warrior", 31, 502),
        ("WhiteMage", 119, 601),
    ]


def test_contains_exactly_the_listed_triples() -> None:
    table = AdjustmentTable.build(parse_adjustment_table(ACTION_TABLE))

    assert table.contains("Warrior", GameIndex(12), DatabaseIndex(501))
    assert table.contains("Warrior", GameIndex(12), DatabaseIndex(502))
    assert table.contains("Warrior", GameIndex(31), DatabaseIndex(502))
    assert not table.contains("Warrior", GameIndex(12), DatabaseIndex(999))
    assert not table.contains("Warrior", GameIndex(31), DatabaseIndex(501))
    assert not table.contains("Paladin", GameIndex(12), DatabaseIndex(501))
    assert not table.contains("WhiteMage", GameIndex(12), DatabaseIndex(501))


def test_one_game_index_keeps_all_database_indices() -> None:
    table = AdjustmentTable.build(parse_adjustment_table(ACTION_TABLE))

    assert table.database_indices("Warrior", GameIndex(12)) == (501, 502)
    assert table.database_indices("Warrior", GameIndex(99)) == ()
    assert sorted(table.class_names) == ["Warrior", "WhiteMage"]
    assert len(table) == 4


def test_building_twice_from_same_rows_keeps_membership() -> None:
    entries = parse_adjustment_table(ACTION_TABLE)
    once = AdjustmentTable.build(entries)
    twice = AdjustmentTable.build(entries + entries)

    probes = [
        ("Warrior", 12, 501),
        ("Warrior", 12, 502),
        ("Warrior", 31, 502),
        ("WhiteMage", 119, 601),
        ("Warrior", 12, 999),
        ("Paladin", 12, 501),
    ]
    for class_name, game_index, database_index in probes:
        assert once.contains(class_name, game_index, database_index) == twice.contains(
            class_name, game_index, database_index
        )
    assert twice.database_indices("Warrior", GameIndex(12)) == (501, 502, 501, 502)


def test_extra_columns_and_whitespace_are_tolerated() -> None:
    content = "ClassName, ActionName, GameIdx, DBIdx, Note\nWarrior, Skull Sunder, 12, 501, first\n"
    table = AdjustmentTable.build(parse_adjustment_table(content))

    assert table.contains("Warrior", GameIndex(12), DatabaseIndex(501))


def test_byte_order_mark_in_header_is_ignored() -> None:
    entries = parse_adjustment_table("\ufeff" + ACTION_TABLE)

    assert len(entries) == 4


def test_header_only_table_is_empty() -> None:
    table = AdjustmentTable.build(parse_adjustment_table("ClassName,ActionName,GameIdx,DBIdx\n"))

    assert len(table) == 0
    assert not table.contains("Warrior", GameIndex(12), DatabaseIndex(501))


@pytest.mark.parametrize(
    "content",
    [
        "ClassName,ActionName,GameIdx,DBIdx\nWarrior,Skull Sunder,twelve,501\n",
        "ClassName,ActionName,GameIdx,DBIdx\nWarrior,Skull Sunder,12,5.5\n",
        "ClassName,ActionName,GameIdx,DBIdx\nWarrior,Skull Sunder,12,\n",
        "ClassName,ActionName,GameIdx,DBIdx\n,Skull Sunder,12,501\n",
    ],
)
def test_bad_row_fails_the_whole_table(content: str) -> None:
    with pytest.raises(MalformedSource) as excinfo:
        parse_adjustment_table(ACTION_TABLE + content.split("\n", 1)[1])

    assert "row 5" in str(excinfo.value)


def test_missing_column_is_malformed() -> None:
    with pytest.raises(MalformedSource, match="DBIdx"):
        parse_adjustment_table("ClassName,ActionName,GameIdx\nWarrior,Skull Sunder,12\n")


def test_empty_content_is_malformed() -> None:
    with pytest.raises(MalformedSource):
        parse_adjustment_table("")


def test_load_reads_file(action_table_path: Path) -> None:
    table = asyncio.run(load_adjustment_table(action_table_path))

    assert table.contains("WhiteMage", GameIndex(119), DatabaseIndex(601))


def test_load_missing_file_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailable):
        asyncio.run(load_adjustment_table(tmp_path / "missing.csv"))


def test_row_wider_than_header_is_malformed() -> None:
    content = "ClassName,ActionName,GameIdx,DBIdx\nWarrior,Skull Sunder,12,501,0\n"

    with pytest.raises(MalformedSource):
        parse_adjustment_table(content)


def test_load_non_utf8_file_is_malformed(tmp_path: Path) -> None:
    path = tmp_path / "ActionTable.csv"
    path.write_bytes(b"ClassName,ActionName,GameIdx,DBIdx\nWarrior,\xff\xfe,12,501\n")

    with pytest.raises(MalformedSource, match="UTF-8"):
        asyncio.run(load_adjustment_table(path))
