"""Sexagenary Stem-Branch (Gan-Zhi) algebra for Four Pillars charts."""

from ganzhi.algebra import (
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
from ganzhi.cache import Cache
from ganzhi.pillars import FourPillars, Pillar, branch_value, stem_trigram_value, stem_value
from ganzhi.stem_branch import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    Branch,
    Element,
    GanzhiError,
    InvalidCombination,
    OutOfRange,
    Stem,
    Trigram,
    UnknownUnit,
    check_branch,
    check_stem,
)

__version__ = "0.1.0"

__all__ = [
    "EARTHLY_BRANCHES",
    "HEAVENLY_STEMS",
    "Branch",
    "Cache",
    "Element",
    "FourPillars",
    "GanzhiError",
    "InvalidCombination",
    "MoonPhase",
    "OutOfRange",
    "Pillar",
    "Stem",
    "Trigram",
    "UnknownUnit",
    "branch_value",
    "check_branch",
    "check_stem",
    "classify_moon_phase",
    "combine",
    "decompose",
    "hour_stem_of",
    "stem_trigram_value",
    "stem_value",
    "triad_element_of",
    "trigram_of",
    "union_element_of",
    "union_partner_of",
    "valid_pairs",
]
