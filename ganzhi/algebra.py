"""
Stem-Branch algebra: everything computed *from* a Stem/Branch pair.

Handles:
- Na Jia (納甲) Stem → Trigram mapping
- Branch → Five Element under the Triad (三合) and Union (六合) schemes
- Closed-form sexagenary index and its inverse
- Five Rats Escape (五鼠遁) hour Stem
- Moon phase classification of a lunar day

All functions are pure and validate their inputs; out-of-range values raise
OutOfRange rather than wrapping.
"""

from enum import Enum
from typing import Iterator

from ganzhi.stem_branch import (
    SEXAGENARY_CYCLE_LENGTH,
    Branch,
    Element,
    InvalidCombination,
    Stem,
    Trigram,
    check_branch,
    check_cycle_index,
    check_stem,
    same_parity,
)


# ============================================================
# NA JIA (納甲)
# ============================================================

# 乾纳甲壬，坤纳乙癸，震纳庚，巽纳辛，坎纳戊，离纳己，艮纳丙，兑纳丁
# Indexed by stem. Xin (7) maps to 5 in the published table; kept as-is,
# downstream charts depend on these exact values.
NA_JIA = (7, 0, 4, 3, 2, 5, 1, 5, 7, 0)


def trigram_of(stem: int) -> Trigram:
    """Return the trigram hosting ``stem`` under Na Jia."""
    return Trigram(NA_JIA[check_stem(stem)])


# ============================================================
# FIVE ELEMENTS OF BRANCH GROUPS
# ============================================================

# Indexed by branch % 4
TRIAD_ELEMENTS = (4, 0, 1, 3)

# Indexed by the folded branch position, see union_element_of
UNION_ELEMENTS = (2, 0, 1, 3, 4, 2)


def triad_element_of(branch: int) -> Element:
    """
    Element of the Triad (San He) group that ``branch`` belongs to.

    The twelve branches fall into three groups of four sharing ``branch % 4``.
    """
    return Element(TRIAD_ELEMENTS[check_branch(branch) % 4])


def union_element_of(branch: int) -> Element:
    """
    Element produced by the Union (Liu He) pair containing ``branch``.

    Branch i pairs with branch (13 - i) % 12 (Zi-Chou, Yin-Hai, Mao-Xu,
    Chen-You, Si-Shen, Wu-Wei), so a six-entry table covers all twelve
    positions once Zi is counted as position 12. 12 itself is accepted
    as another name for Zi.
    """
    is_twelve = isinstance(branch, int) and not isinstance(branch, bool) and branch == 12
    value = 12 if is_twelve else check_branch(branch)
    value = 12 if value == 0 else int(value)
    if value < 7:
        return Element(UNION_ELEMENTS[value - 1])
    return Element(UNION_ELEMENTS[12 - value])


def union_partner_of(branch: int) -> Branch:
    """Return the Liu He partner of ``branch``."""
    return Branch((13 - check_branch(branch)) % 12)


# ============================================================
# SEXAGENARY CYCLE (六十甲子)
# ============================================================

def combine(stem: int, branch: int) -> int:
    """
    Compute the 60-cycle index of a stem/branch pair.

    Closed form of the Chinese remainder correspondence between the mod 10
    and mod 12 cycles; only pairs of equal parity exist.

    Raises:
        InvalidCombination: if ``stem`` and ``branch`` differ in parity.
        OutOfRange: if either value is outside its domain.
    """
    stem = check_stem(stem)
    branch = check_branch(branch)
    if not same_parity(stem, branch):
        raise InvalidCombination(stem, branch)
    return (stem % 10) + ((6 - (branch >> 1) + (stem >> 1)) % 6) * 10


def decompose(index: int) -> tuple[Stem, Branch]:
    """Return the (stem, branch) pair at position ``index`` of the cycle."""
    index = check_cycle_index(index)
    return Stem(index % 10), Branch(index % 12)


def valid_pairs() -> Iterator[tuple[Stem, Branch]]:
    """Yield the 60 valid stem/branch pairs in cycle order (Jia Zi first)."""
    for index in range(SEXAGENARY_CYCLE_LENGTH):
        yield decompose(index)


# ============================================================
# FIVE RATS ESCAPE (五鼠遁)
# ============================================================

def hour_stem_of(day_stem: int, hour_branch: int = 0) -> Stem:
    """
    Compute the hour stem using the Five Rats Escape (Wu Shu Dun) rule.

    甲己还加甲，乙庚丙作初。丙辛从戊起，丁壬庚子居。戊癸起壬子，周而复始求。

    Day stems pair up by ``stem % 5`` and each pair fixes the stem of the
    Zi hour; every following hour branch advances the stem by one.

    Args:
        day_stem: index of the day pillar's stem (0-9)
        hour_branch: index of the hour branch (0-11), Zi by default
    """
    day_stem = check_stem(day_stem)
    hour_branch = check_branch(hour_branch)
    zi_start_stem = (day_stem % 5) * 2
    return Stem((zi_start_stem + hour_branch) % 10)


# ============================================================
# MOON PHASE
# ============================================================

class MoonPhase(Enum):
    NEW = "new"  # 朔
    QUARTER = "quarter"  # 弦
    FULL = "full"  # 望
    DARK = "dark"  # 晦
    UNCLASSIFIED = ""


QUARTER_DAYS = frozenset({7, 8, 22, 23})


def classify_moon_phase(lunar_day: int, is_last_day_of_month: bool = False) -> MoonPhase:
    """Name the phase of a lunar day; first matching rule wins."""
    if lunar_day == 1:
        return MoonPhase.NEW
    if lunar_day in QUARTER_DAYS:
        return MoonPhase.QUARTER
    if lunar_day == 15:
        return MoonPhase.FULL
    if is_last_day_of_month:
        return MoonPhase.DARK
    return MoonPhase.UNCLASSIFIED


__all__ = [
    "NA_JIA",
    "TRIAD_ELEMENTS",
    "UNION_ELEMENTS",
    "MoonPhase",
    "trigram_of",
    "triad_element_of",
    "union_element_of",
    "union_partner_of",
    "combine",
    "decompose",
    "valid_pairs",
    "hour_stem_of",
    "classify_moon_phase",
]
