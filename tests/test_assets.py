"""Tests for setup asset parsing and special tile generation."""

import random
from collections import Counter

import pytest

from src.engine import SetupError, add_special_tiles
from src.engine.assets import (
    load_ability_layout,
    load_letter_values,
    load_word_list,
    parse_ability_layout,
    parse_letter_values,
    parse_word_list,
)
from src.verifiers import Location, TileKind

from helpers import tiles

EMPTY_ROW = " ".join(["--"] * 15)


def layout(rows):
    return "\n".join(rows) + "\n"


class TestAbilityLayout:
    """Parsing the 15x15 board layout."""

    def test_bundled_layout(self):
        abilities = load_ability_layout()
        counts = Counter(t.kind for t in abilities)
        assert counts[TileKind.TRIPLE_WORD] == 8
        assert counts[TileKind.DOUBLE_WORD] == 17
        assert counts[TileKind.TRIPLE_LETTER] == 12
        assert counts[TileKind.DOUBLE_LETTER] == 24
        assert all(t.creator == "all" for t in abilities)

    def test_locations_and_priorities(self):
        rows = [EMPTY_ROW] * 15
        rows[2] = "DL TW" + EMPTY_ROW[5:]
        abilities = parse_ability_layout(layout(rows))
        assert [(t.kind, t.location) for t in abilities] == [
            (TileKind.DOUBLE_LETTER, Location(2, 0)),
            (TileKind.TRIPLE_WORD, Location(2, 1)),
        ]
        assert abilities[0].priority < abilities[1].priority

    def test_blank_layout(self):
        assert parse_ability_layout(layout([EMPTY_ROW] * 15)) == []

    def test_unknown_token(self):
        rows = [EMPTY_ROW] * 15
        rows[4] = "XX" + EMPTY_ROW[2:]
        with pytest.raises(SetupError) as exc:
            parse_ability_layout(layout(rows))
        assert exc.value.line == 5
        assert "XX" in str(exc.value)

    def test_short_row(self):
        rows = [EMPTY_ROW] * 15
        rows[0] = " ".join(["--"] * 14)
        with pytest.raises(SetupError):
            parse_ability_layout(layout(rows))

    def test_wrong_line_count(self):
        with pytest.raises(SetupError):
            parse_ability_layout(layout([EMPTY_ROW] * 14))

    def test_missing_file(self, tmp_path):
        with pytest.raises(SetupError):
            load_ability_layout(tmp_path / "missing.txt")


class TestLetterValues:
    """Parsing the letter distribution."""

    def test_bundled_values(self):
        pool = load_letter_values()
        assert len(pool) == 98
        assert Counter(t.letter for t in pool)["A"] == 9
        assert all(t.kind is TileKind.NORMAL for t in pool)

    def test_amount_and_points(self):
        pool = parse_letter_values("Q 1 10\nE 2 1\n")
        assert [(t.letter, t.points) for t in pool] == [("Q", 10), ("E", 1), ("E", 1)]

    def test_each_tile_is_distinct(self):
        pool = parse_letter_values("E 3 1")
        assert len({t.uid for t in pool}) == 3

    @pytest.mark.parametrize("line", [
        "a 1 1",
        "AB 1 1",
        "A 1",
        "A 1 1 1",
        "A x 1",
        "A 1 -2",
    ])
    def test_malformed_line(self, line):
        with pytest.raises(SetupError) as exc:
            parse_letter_values(f"B 1 3\n{line}\n")
        assert exc.value.line == 2


class TestWordList:
    """Loading the dictionary."""

    def test_bundled_word_list(self):
        lexicon = load_word_list()
        assert "cat" in lexicon
        assert lexicon.check_word("QI")
        assert not lexicon.check_word("xq")

    def test_blank_lines_ignored(self):
        lexicon = parse_word_list("cat\n\n  dog \n")
        assert len(lexicon) == 2
        assert "dog" in lexicon


class TestSpecialTiles:
    """Turning part of the pool into traps."""

    def test_converts_requested_number(self):
        pool = tiles("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
        letters_before = Counter(t.letter for t in pool)
        traps = add_special_tiles(pool, random.Random(4), count=15)
        assert len(traps) == 15
        assert sum(1 for t in pool if t.is_trap) == 15
        assert len(pool) == 26
        assert Counter(t.letter for t in pool) == letters_before

    def test_traps_keep_points(self):
        pool = tiles("CCCC")
        add_special_tiles(pool, random.Random(0), count=4)
        assert all(t.is_trap and t.points == 3 for t in pool)

    def test_count_capped_by_pool(self):
        pool = tiles("AB")
        assert len(add_special_tiles(pool, random.Random(0), count=15)) == 2

    def test_seeded_kinds_repeat(self):
        first = tiles("ABCDEFGHIJ")
        second = tiles("ABCDEFGHIJ")
        add_special_tiles(first, random.Random(9), count=5)
        add_special_tiles(second, random.Random(9), count=5)
        assert [t.kind for t in first] == [t.kind for t in second]
