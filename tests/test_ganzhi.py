from __future__ import annotations

from nongli.core.ganzhi import branch_index, cycle_position, stem_index, year_animal, year_ganzhi


def test_known_years():
    assert year_ganzhi(4) == "甲子"
    assert year_ganzhi(1984) == "甲子"
    assert year_ganzhi(2024) == "甲辰"
    assert year_ganzhi(2026) == "丙午"
    assert year_animal(2026) == "马"
    assert year_animal(2023) == "兔"


def test_consecutive_years_advance_by_one():
    for y in range(1900, 2100):
        assert stem_index(y + 1) == (stem_index(y) + 1) % 10
        assert branch_index(y + 1) == (branch_index(y) + 1) % 12


def test_pair_period_is_60():
    pairs = [(stem_index(y), branch_index(y)) for y in range(1984, 1984 + 60)]
    assert len(set(pairs)) == 60
    for y in range(1900, 2041):
        assert (stem_index(y), branch_index(y)) == (stem_index(y + 60), branch_index(y + 60))
        assert cycle_position(y) == cycle_position(y + 60)
