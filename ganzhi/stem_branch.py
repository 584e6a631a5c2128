"""
Heavenly Stem / Earthly Branch value space.

Handles:
- Stem [0,10) and Branch [0,12) enumerations (integer order is a contract
  with whatever calendrical engine supplies the values)
- Trigram and Five-Element enumerations used by the derived mappings
- Range validation at the domain boundary
- Error types for the whole package
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


# ============================================================
# ERRORS
# ============================================================

class GanzhiError(ValueError):
    """Base class for Stem/Branch domain errors."""


class OutOfRange(GanzhiError):
    """A value lies outside the declared Stem/Branch/cycle domain."""


class InvalidCombination(GanzhiError):
    """A Stem and Branch of different parity cannot form a cycle position."""

    def __init__(self, stem: int, branch: int):
        self.stem = int(stem)
        self.branch = int(branch)
        super().__init__(f"Invalid SB value: stem={self.stem}, branch={self.branch} differ in parity")


class UnknownUnit(GanzhiError):
    """A pillar unit other than year/month/day/hour was requested."""


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


class Element(IntEnum):
    WOOD = 0
    FIRE = 1
    EARTH = 2
    METAL = 3
    WATER = 4

    @property
    def label(self) -> str:
        return self.name.lower()


class Trigram(IntEnum):
    # Lines read bottom-up as bits, yang = 1
    KUN = 0
    ZHEN = 1
    KAN = 2
    DUI = 3
    GEN = 4
    LI = 5
    XUN = 6
    QIAN = 7

    @property
    def label(self) -> str:
        return self.name.lower()


class Stem(IntEnum):
    JIA = 0
    YI = 1
    BING = 2
    DING = 3
    WU = 4
    JI = 5
    GENG = 6
    XIN = 7
    REN = 8
    GUI = 9

    @property
    def polarity(self) -> Polarity:
        return Polarity.YANG if self % 2 == 0 else Polarity.YIN

    @property
    def info(self) -> "HeavenlyStem":
        return HEAVENLY_STEMS[self]


class Branch(IntEnum):
    ZI = 0
    CHOU = 1
    YIN = 2
    MAO = 3
    CHEN = 4
    SI = 5
    WU = 6
    WEI = 7
    SHEN = 8
    YOU = 9
    XU = 10
    HAI = 11

    @property
    def polarity(self) -> Polarity:
        return Polarity.YANG if self % 2 == 0 else Polarity.YIN

    @property
    def info(self) -> "EarthlyBranch":
        return EARTHLY_BRANCHES[self]


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    index: int  # 0-9 in the cycle

    @property
    def polarity(self) -> Polarity:
        return Stem(self.index).polarity

    def __str__(self):
        return f"{self.pinyin} ({self.polarity.value} {self.element.label})"


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    element: Element  # season element
    index: int  # 0-11 in the cycle

    @property
    def polarity(self) -> Polarity:
        return Branch(self.index).polarity

    def __str__(self):
        return f"{self.pinyin} ({self.animal})"


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = [
    HeavenlyStem("甲", "Jia", Element.WOOD, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, 9),
]

EARTHLY_BRANCHES = [
    EarthlyBranch("子", "Zi", "Rat", Element.WATER, 0),
    EarthlyBranch("丑", "Chou", "Ox", Element.EARTH, 1),
    EarthlyBranch("寅", "Yin", "Tiger", Element.WOOD, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", Element.WOOD, 3),
    EarthlyBranch("辰", "Chen", "Dragon", Element.EARTH, 4),
    EarthlyBranch("巳", "Si", "Snake", Element.FIRE, 5),
    EarthlyBranch("午", "Wu", "Horse", Element.FIRE, 6),
    EarthlyBranch("未", "Wei", "Goat", Element.EARTH, 7),
    EarthlyBranch("申", "Shen", "Monkey", Element.METAL, 8),
    EarthlyBranch("酉", "You", "Rooster", Element.METAL, 9),
    EarthlyBranch("戌", "Xu", "Dog", Element.EARTH, 10),
    EarthlyBranch("亥", "Hai", "Pig", Element.WATER, 11),
]

STEM_COUNT = len(HEAVENLY_STEMS)
BRANCH_COUNT = len(EARTHLY_BRANCHES)
SEXAGENARY_CYCLE_LENGTH = 60

# Lookup helpers
STEM_BY_PINYIN = {s.pinyin: Stem(s.index) for s in HEAVENLY_STEMS}
BRANCH_BY_PINYIN = {b.pinyin: Branch(b.index) for b in EARTHLY_BRANCHES}
BRANCH_BY_ANIMAL = {b.animal: Branch(b.index) for b in EARTHLY_BRANCHES}


# ============================================================
# VALIDATION
# ============================================================

def _check_range(value, upper: int, what: str) -> int:
    # bool is an int subclass; True/False are never meant as indices
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRange(f"{what} must be an integer, got {value!r}")
    if not 0 <= value < upper:
        raise OutOfRange(f"{what} {value} outside [0, {upper})")
    return value


def check_stem(value: int) -> Stem:
    """Validate a Stem index, returning the enum member."""
    return Stem(_check_range(value, STEM_COUNT, "stem"))


def check_branch(value: int) -> Branch:
    """Validate a Branch index, returning the enum member."""
    return Branch(_check_range(value, BRANCH_COUNT, "branch"))


def check_cycle_index(value: int) -> int:
    return _check_range(value, SEXAGENARY_CYCLE_LENGTH, "sexagenary index")


def same_parity(stem: int, branch: int) -> bool:
    return (stem + branch) % 2 == 0
