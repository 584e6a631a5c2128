"""
Pillar accessor layer.

The calendrical engine that decides which stem/branch applies to a date is
external; it hands over one (stem, branch) pair per unit and this module
exposes them to the algebra in ganzhi.algebra.
"""

from dataclasses import dataclass
from typing import Optional

from ganzhi.algebra import (
    combine,
    decompose,
    triad_element_of,
    trigram_of,
    union_element_of,
)
from ganzhi.dates import pretty_unit
from ganzhi.stem_branch import (
    Branch,
    InvalidCombination,
    Stem,
    UnknownUnit,
    check_branch,
    check_stem,
    same_parity,
)

PILLAR_UNITS = ("year", "month", "day", "hour")


@dataclass(frozen=True)
class Pillar:
    stem: Stem
    branch: Branch
    position: str  # "year", "month", "day", "hour"

    def __post_init__(self):
        stem = check_stem(self.stem)
        branch = check_branch(self.branch)
        if not same_parity(stem, branch):
            raise InvalidCombination(stem, branch)
        # normalise plain ints to enum members
        object.__setattr__(self, "stem", stem)
        object.__setattr__(self, "branch", branch)

    @classmethod
    def from_index(cls, index: int, position: str) -> "Pillar":
        stem, branch = decompose(index)
        return cls(stem, branch, position)

    @property
    def cycle_index(self) -> int:
        return combine(self.stem, self.branch)

    def label(self) -> str:
        return f"{self.stem.info.pinyin} {self.branch.info.pinyin}"

    def __str__(self):
        return f"{self.label()} ({self.stem.polarity.value} {self.stem.info.element.label} {self.branch.info.animal})"

    def to_dict(self):
        return {
            "position": self.position,
            "stem": {
                "index": int(self.stem),
                "chinese": self.stem.info.chinese,
                "pinyin": self.stem.info.pinyin,
                "element": self.stem.info.element.label,
                "polarity": self.stem.polarity.value,
                "trigram": trigram_of(self.stem).label,
            },
            "branch": {
                "index": int(self.branch),
                "chinese": self.branch.info.chinese,
                "pinyin": self.branch.info.pinyin,
                "animal": self.branch.info.animal,
                "polarity": self.branch.polarity.value,
                "triad_element": triad_element_of(self.branch).label,
                "union_element": union_element_of(self.branch).label,
            },
            "cycle_index": self.cycle_index,
            "combined": self.label(),
            "description": str(self),
        }


@dataclass(frozen=True)
class FourPillars:
    """Year, month, day and hour pillars as supplied by a calendrical engine."""

    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar

    @classmethod
    def from_pairs(cls, year, month, day, hour) -> "FourPillars":
        """Build from four (stem, branch) tuples."""
        return cls(
            year=Pillar(*year, position="year"),
            month=Pillar(*month, position="month"),
            day=Pillar(*day, position="day"),
            hour=Pillar(*hour, position="hour"),
        )

    @classmethod
    def from_indices(cls, year: int, month: int, day: int, hour: int) -> "FourPillars":
        """Build from four sexagenary cycle indices."""
        return cls(
            year=Pillar.from_index(year, "year"),
            month=Pillar.from_index(month, "month"),
            day=Pillar.from_index(day, "day"),
            hour=Pillar.from_index(hour, "hour"),
        )

    def pillar(self, unit: str) -> Pillar:
        """
        Return the pillar for ``unit``.

        Accepts any spelling pretty_unit understands ("y", "years", "Day"...).
        """
        name = pretty_unit(unit)
        if name not in PILLAR_UNITS:
            raise UnknownUnit(f"No pillar for unit {unit!r}")
        return getattr(self, name)

    def ordered(self) -> tuple[Pillar, Pillar, Pillar, Pillar]:
        return (self.year, self.month, self.day, self.hour)

    def to_dict(self):
        return {
            "pillars": {p.position: p.to_dict() for p in self.ordered()},
            "day_master": {
                "stem": self.day.stem.info.pinyin,
                "chinese": self.day.stem.info.chinese,
                "element": self.day.stem.info.element.label,
                "polarity": self.day.stem.polarity.value,
                "description": str(self.day.stem.info),
            },
        }


def _reduce(value: int, div: Optional[int]) -> int:
    return value % div if div else int(value)


def stem_value(source: FourPillars, unit: str, div: Optional[int] = None) -> int:
    """Stem index of the ``unit`` pillar, reduced mod ``div`` when given."""
    return _reduce(source.pillar(unit).stem, div)


def branch_value(source: FourPillars, unit: str, div: Optional[int] = None) -> int:
    """Branch index of the ``unit`` pillar, reduced mod ``div`` when given."""
    return _reduce(source.pillar(unit).branch, div)


def stem_trigram_value(source: FourPillars, unit: str, div: Optional[int] = None) -> int:
    """Na Jia trigram of the ``unit`` pillar's stem, reduced mod ``div`` when given."""
    return _reduce(trigram_of(source.pillar(unit).stem), div)
