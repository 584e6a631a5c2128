"""
Lunar day engine.
Finds Sun-Moon conjunctions with the Swiss Ephemeris and turns any instant
into a Chinese-calendar lunar day (the civil day containing the conjunction
is day 1), which is what the moon phase classifier consumes.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

import swisseph as swe

from ganzhi.algebra import MoonPhase, classify_moon_phase
from ganzhi.cache import Cache
from ganzhi.stem_branch import OutOfRange

LOG = logging.getLogger(__name__)

# Point Swiss Ephemeris to data files; Moshier is used when they are absent
_ephe_path = str(Path(__file__).parent.parent / "ephe")
swe.set_ephe_path(_ephe_path)

# Chinese lunar dates are reckoned on the 120°E meridian
DEFAULT_TIMEZONE = "Asia/Shanghai"

SYNODIC_MONTH = 29.530588853
# Mean daily gain of the Moon on the Sun, degrees
MEAN_ELONGATION_RATE = 360.0 / SYNODIC_MONTH

_MAX_ITERATIONS = 20
_TOLERANCE_DEG = 1e-7


@dataclass(frozen=True)
class LunarDay:
    date: date  # civil date in the reckoning zone
    day: int  # 1-30
    is_last_day_of_month: bool
    new_moon_jd: float  # conjunction that opened the month (UT)
    next_new_moon_jd: float

    @property
    def phase(self) -> MoonPhase:
        return classify_moon_phase(self.day, self.is_last_day_of_month)

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "lunar_day": self.day,
            "is_last_day_of_month": self.is_last_day_of_month,
            "phase": self.phase.value,
            "new_moon": jd_to_datetime(self.new_moon_jd).isoformat(),
            "next_new_moon": jd_to_datetime(self.next_new_moon_jd).isoformat(),
        }


# ============================================================
# JULIAN DAY CONVERSION
# ============================================================

def datetime_to_jd(moment: datetime) -> float:
    """Julian Day (UT) of an aware datetime; naive values are taken as UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    hour = moment.hour + moment.minute / 60 + (moment.second + moment.microsecond / 1e6) / 3600
    return swe.julday(moment.year, moment.month, moment.day, hour)


def jd_to_datetime(jd: float) -> datetime:
    """Aware UTC datetime for a Julian Day (UT)."""
    y, m, d, h = swe.revjul(jd)
    return datetime(y, m, d, tzinfo=timezone.utc) + timedelta(hours=h)


# ============================================================
# CONJUNCTION SEARCH
# ============================================================

def _elongation(jd: float) -> float:
    """Moon minus Sun ecliptic longitude in [0, 360)."""
    sun, _ = swe.calc_ut(jd, swe.SUN, swe.FLG_SWIEPH)
    moon, _ = swe.calc_ut(jd, swe.MOON, swe.FLG_SWIEPH)
    return (moon[0] - sun[0]) % 360.0


def _signed(angle: float) -> float:
    """Wrap an angle to (-180, 180]."""
    angle = angle % 360.0
    return angle - 360.0 if angle > 180.0 else angle


def _refine(guess: float) -> float:
    """Newton iteration on the elongation towards the nearest conjunction."""
    jd = guess
    for _ in range(_MAX_ITERATIONS):
        delta = _signed(_elongation(jd))
        jd -= delta / MEAN_ELONGATION_RATE
        if abs(delta) < _TOLERANCE_DEG:
            return jd
    raise ValueError(f"Conjunction search did not converge near JD {guess}")


def new_moon_before(jd: float) -> float:
    """Julian Day of the last conjunction at or before ``jd``."""
    result = _refine(jd - _elongation(jd) / MEAN_ELONGATION_RATE)
    if result > jd:
        result = _refine(result - SYNODIC_MONTH)
    return result


def new_moon_after(jd: float) -> float:
    """Julian Day of the first conjunction strictly after ``jd``."""
    result = _refine(jd + (360.0 - _elongation(jd)) / MEAN_ELONGATION_RATE)
    if result <= jd:
        result = _refine(result + SYNODIC_MONTH)
    return result


# ============================================================
# LUNAR DAY
# ============================================================

def resolve_zone(tz: Union[str, ZoneInfo]) -> ZoneInfo:
    """ZoneInfo for an IANA name; unknown names raise OutOfRange."""
    if isinstance(tz, ZoneInfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise OutOfRange(f"Unknown time zone {tz!r}") from e


def _local_date(jd: float, zone: ZoneInfo) -> date:
    return jd_to_datetime(jd).astimezone(zone).date()


def _month_bounds(local: date, zone: ZoneInfo) -> tuple[float, float]:
    # End of the civil day: any conjunction before it lies on or before ``local``
    day_end = datetime(local.year, local.month, local.day, tzinfo=zone) + timedelta(days=1)
    jd_end = datetime_to_jd(day_end)
    LOG.debug("searching conjunctions around %s (JD %.5f)", local, jd_end)
    return new_moon_before(jd_end), new_moon_after(jd_end)


def lunar_day(moment: datetime,
              tz: Union[str, ZoneInfo] = DEFAULT_TIMEZONE,
              cache: Optional[Cache] = None) -> LunarDay:
    """
    Compute the lunar day of the month containing ``moment``.

    Args:
        moment: the instant; naive datetimes are read as wall time in ``tz``
        tz: zone whose civil days count the lunar days
        cache: optional Cache memoising the conjunction search per civil day

    Returns:
        LunarDay with the day number and end-of-month flag
    """
    zone = resolve_zone(tz)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=zone)
    local = moment.astimezone(zone).date()

    if cache is not None:
        key = f"lunar:{zone.key}:{local.isoformat()}"
        start_jd, next_jd = cache.cache_and_return(key, lambda: _month_bounds(local, zone))
    else:
        start_jd, next_jd = _month_bounds(local, zone)

    first_day = _local_date(start_jd, zone)
    day = (local - first_day).days + 1
    is_last = _local_date(next_jd, zone) == local + timedelta(days=1)

    return LunarDay(
        date=local,
        day=day,
        is_last_day_of_month=is_last,
        new_moon_jd=start_jd,
        next_new_moon_jd=next_jd,
    )


def phase_of_the_moon(moment: datetime,
                      tz: Union[str, ZoneInfo] = DEFAULT_TIMEZONE,
                      cache: Optional[Cache] = None) -> MoonPhase:
    """Traditional phase name (朔 弦 望 晦) of the lunar day containing ``moment``."""
    return lunar_day(moment, tz, cache).phase
