from __future__ import annotations

import pytest

from ganzhi.algebra import (
    NA_JIA,
    MoonPhase,
    classify_moon_phase,
    combine,
    decompose,
    hour_stem_of,
    triad_element_of,
    trigram_of,
    union_element_of,
    union_partner_of,
    valid_pairs,
)
from ganzhi.stem_branch import (
    Branch,
    Element,
    InvalidCombination,
    OutOfRange,
    Stem,
    Trigram,
)

ALL_PAIRS = [(s, b) for s in range(10) for b in range(12)]
VALID = [(s, b) for s, b in ALL_PAIRS if (s + b) % 2 == 0]
INVALID = [(s, b) for s, b in ALL_PAIRS if (s + b) % 2 != 0]


# ------------------------------------------------------------
# Sexagenary cycle
# ------------------------------------------------------------

def test_combine_is_bijection_onto_cycle() -> None:
    indices = [combine(s, b) for s, b in VALID]

    assert len(VALID) == 60
    assert all(0 <= idx < 60 for idx in indices)
    assert sorted(indices) == list(range(60))


@pytest.mark.parametrize("stem, branch", VALID)
def test_combine_agrees_with_remainders(stem: int, branch: int) -> None:
    idx = combine(stem, branch)
    assert idx % 10 == stem
    assert idx % 12 == branch


@pytest.mark.parametrize("stem, branch", INVALID)
def test_combine_rejects_parity_mismatch(stem: int, branch: int) -> None:
    with pytest.raises(InvalidCombination) as excinfo:
        combine(stem, branch)
    assert excinfo.value.stem == stem
    assert excinfo.value.branch == branch


@pytest.mark.parametrize(
    "stem, branch, expected",
    [
        (0, 0, 0),  # Jia Zi
        (1, 1, 1),  # Yi Chou
        (2, 2, 2),  # Bing Yin
        (0, 10, 10),  # Jia Xu
        (9, 9, 9),  # Gui You
        (1, 5, 41),  # Yi Si
        (9, 11, 59),  # Gui Hai closes the cycle
    ],
)
def test_combine_anchors(stem: int, branch: int, expected: int) -> None:
    assert combine(stem, branch) == expected


def test_invalid_combination_is_value_error() -> None:
    with pytest.raises(ValueError):
        combine(0, 1)


@pytest.mark.parametrize("stem, branch", [(10, 0), (-2, 0), (0, 12), (0, -2)])
def test_combine_rejects_out_of_range(stem: int, branch: int) -> None:
    with pytest.raises(OutOfRange):
        combine(stem, branch)


def test_decompose_inverts_combine() -> None:
    for stem, branch in VALID:
        assert decompose(combine(stem, branch)) == (stem, branch)


@pytest.mark.parametrize("index", [-1, 60, 120])
def test_decompose_rejects_out_of_range(index: int) -> None:
    with pytest.raises(OutOfRange):
        decompose(index)


def test_valid_pairs_in_cycle_order() -> None:
    pairs = list(valid_pairs())

    assert len(pairs) == 60
    assert pairs[0] == (Stem.JIA, Branch.ZI)
    assert pairs[-1] == (Stem.GUI, Branch.HAI)
    assert [combine(s, b) for s, b in pairs] == list(range(60))


# ------------------------------------------------------------
# Na Jia
# ------------------------------------------------------------

def test_trigram_table_exact() -> None:
    assert [int(trigram_of(s)) for s in range(10)] == [7, 0, 4, 3, 2, 5, 1, 5, 7, 0]
    assert list(NA_JIA) == [7, 0, 4, 3, 2, 5, 1, 5, 7, 0]


def test_qian_and_kun_host_two_stems() -> None:
    assert trigram_of(Stem.JIA) == trigram_of(Stem.REN) == Trigram.QIAN == 7
    assert trigram_of(Stem.YI) == trigram_of(Stem.GUI) == Trigram.KUN == 0


@pytest.mark.parametrize("stem", [10, -1, 1.5, True])
def test_trigram_rejects_bad_stem(stem) -> None:
    with pytest.raises(OutOfRange):
        trigram_of(stem)


# ------------------------------------------------------------
# Five Elements
# ------------------------------------------------------------

def test_triad_table_exact() -> None:
    assert [int(triad_element_of(b)) for b in range(12)] == [4, 0, 1, 3] * 3


@pytest.mark.parametrize("branch", range(8))
def test_triad_has_period_four(branch: int) -> None:
    assert triad_element_of(branch) == triad_element_of(branch + 4)


def test_union_table_exact() -> None:
    assert [int(union_element_of(b)) for b in range(12)] == [
        2, 2, 0, 1, 3, 4, 2, 2, 4, 3, 1, 0,
    ]


@pytest.mark.parametrize("branch", range(12))
def test_union_partners_share_element(branch: int) -> None:
    partner = union_partner_of(branch)
    assert union_partner_of(partner) == branch
    assert union_element_of(branch) == union_element_of(partner)


@pytest.mark.parametrize(
    "first, second, element",
    [
        (Branch.ZI, Branch.CHOU, Element.EARTH),
        (Branch.YIN, Branch.HAI, Element.WOOD),
        (Branch.MAO, Branch.XU, Element.FIRE),
        (Branch.CHEN, Branch.YOU, Element.METAL),
        (Branch.SI, Branch.SHEN, Element.WATER),
        (Branch.WU, Branch.WEI, Element.EARTH),
    ],
)
def test_six_unions(first: Branch, second: Branch, element: Element) -> None:
    assert union_partner_of(first) == second
    assert union_element_of(first) == union_element_of(second) == element


def test_union_counts_zi_as_twelve() -> None:
    assert union_element_of(0) == union_element_of(12) == Element.EARTH


@pytest.mark.parametrize("branch", [-1, 13, 24, 12.0, True])
def test_element_mappers_reject_out_of_range(branch: int) -> None:
    with pytest.raises(OutOfRange):
        union_element_of(branch)
    with pytest.raises(OutOfRange):
        triad_element_of(branch)


def test_triad_rejects_twelve() -> None:
    with pytest.raises(OutOfRange):
        triad_element_of(12)


# ------------------------------------------------------------
# Five Rats Escape
# ------------------------------------------------------------

@pytest.mark.parametrize(
    "day_stem, hour_branch, expected",
    [
        (0, 0, 0),
        (0, 1, 1),
        (5, 0, 0),
        (5, 11, 1),
        (1, 0, 2),  # 乙庚丙作初
        (6, 0, 2),
        (2, 0, 4),  # 丙辛从戊起
        (3, 0, 6),  # 丁壬庚子居
        (4, 0, 8),  # 戊癸起壬子
        (9, 0, 8),
        (3, 5, 1),
    ],
)
def test_hour_stem(day_stem: int, hour_branch: int, expected: int) -> None:
    assert hour_stem_of(day_stem, hour_branch) == expected


def test_hour_stem_defaults_to_zi_hour() -> None:
    assert hour_stem_of(Stem.GENG) == Stem.BING


@pytest.mark.parametrize("day_stem", range(10))
def test_hour_stem_always_pairs_with_hour_branch(day_stem: int) -> None:
    for hour_branch in range(12):
        combine(hour_stem_of(day_stem, hour_branch), hour_branch)


def test_hour_stem_rejects_out_of_range() -> None:
    with pytest.raises(OutOfRange):
        hour_stem_of(10, 0)
    with pytest.raises(OutOfRange):
        hour_stem_of(0, 12)


# ------------------------------------------------------------
# Moon phase
# ------------------------------------------------------------

@pytest.mark.parametrize(
    "day, last, expected",
    [
        (1, False, MoonPhase.NEW),
        (15, False, MoonPhase.FULL),
        (8, False, MoonPhase.QUARTER),
        (7, False, MoonPhase.QUARTER),
        (22, False, MoonPhase.QUARTER),
        (23, False, MoonPhase.QUARTER),
        (10, True, MoonPhase.DARK),
        (30, True, MoonPhase.DARK),
        (10, False, MoonPhase.UNCLASSIFIED),
        (29, False, MoonPhase.UNCLASSIFIED),
    ],
)
def test_classify_moon_phase(day: int, last: bool, expected: MoonPhase) -> None:
    assert classify_moon_phase(day, last) == expected


def test_classify_moon_phase_first_rule_wins() -> None:
    assert classify_moon_phase(1, True) == MoonPhase.NEW
    assert classify_moon_phase(15, True) == MoonPhase.FULL


def test_operations_are_repeatable() -> None:
    for stem, branch in VALID:
        assert combine(stem, branch) == combine(stem, branch)
        assert trigram_of(stem) == trigram_of(stem)
        assert hour_stem_of(stem, branch) == hour_stem_of(stem, branch)
        assert union_element_of(branch) == union_element_of(branch)
        assert triad_element_of(branch) == triad_element_of(branch)
