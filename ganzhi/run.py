"""
CLI for the Stem-Branch algebra.

Usage:
    ganzhi combine STEM BRANCH
    ganzhi decode INDEX
    ganzhi trigram STEM
    ganzhi element BRANCH [--scheme triad|union]
    ganzhi hour-stem DAY_STEM [HOUR_BRANCH]
    ganzhi pillars YEAR MONTH DAY HOUR
    ganzhi moon DATE [--timezone TZ | --latitude LAT --longitude LON]

Global options --locale en|zh and --verbose go before the command.

Stems and branches may be given as indices or pinyin names (Jia, Zi, ...).
Results are printed as JSON.
"""

import argparse
import json
import logging
import sys

from ganzhi.algebra import (
    combine,
    decompose,
    hour_stem_of,
    triad_element_of,
    trigram_of,
    union_element_of,
)
from ganzhi.cache import Cache
from ganzhi.dates import pad_zone_str, parse_date, timezone_for
from ganzhi.i18n import (
    animal_name,
    available_locales,
    branch_name,
    element_name,
    load_locale,
    moon_phase_name,
    stem_name,
    trigram_name,
)
from ganzhi.lunar import DEFAULT_TIMEZONE, lunar_day, resolve_zone
from ganzhi.pillars import FourPillars
from ganzhi.stem_branch import BRANCH_BY_PINYIN, STEM_BY_PINYIN, GanzhiError, Branch, Stem

LOG = logging.getLogger(__name__)


def _named_index(lookup: dict, what: str):
    def parse(text: str) -> int:
        if text.lstrip("-").isdigit():
            return int(text)
        for name, value in lookup.items():
            if name.lower() == text.lower():
                return int(value)
        raise argparse.ArgumentTypeError(f"unknown {what} {text!r}")
    parse.__name__ = what
    return parse


_stem = _named_index(STEM_BY_PINYIN, "stem")
_branch = _named_index(BRANCH_BY_PINYIN, "branch")


def _pair(stem: Stem, branch: Branch, locale) -> dict:
    return {
        "stem": int(stem),
        "stem_name": stem_name(stem, locale),
        "branch": int(branch),
        "branch_name": branch_name(branch, locale),
        "animal": animal_name(branch, locale),
    }


def cmd_combine(args, locale) -> dict:
    index = combine(args.stem, args.branch)
    return {"index": index, **_pair(*decompose(index), locale)}


def cmd_decode(args, locale) -> dict:
    return {"index": args.index, **_pair(*decompose(args.index), locale)}


def cmd_trigram(args, locale) -> dict:
    trigram = trigram_of(args.stem)
    return {"stem": args.stem, "trigram": int(trigram), "trigram_name": trigram_name(trigram, locale)}


def cmd_element(args, locale) -> dict:
    mapper = union_element_of if args.scheme == "union" else triad_element_of
    element = mapper(args.branch)
    return {
        "branch": args.branch,
        "scheme": args.scheme,
        "element": int(element),
        "element_name": element_name(element, locale),
    }


def cmd_hour_stem(args, locale) -> dict:
    stem = hour_stem_of(args.day_stem, args.hour_branch)
    return {
        "day_stem": args.day_stem,
        "hour_branch": args.hour_branch,
        "hour_stem": int(stem),
        "hour_stem_name": stem_name(stem, locale),
    }


def cmd_pillars(args, locale) -> dict:
    return FourPillars.from_indices(args.year, args.month, args.day, args.hour).to_dict()


def cmd_moon(args, locale) -> dict:
    if (args.latitude is None) != (args.longitude is None):
        raise GanzhiError("--latitude and --longitude must be given together")
    if args.latitude is not None:
        tz = timezone_for(args.latitude, args.longitude)
    else:
        tz = args.timezone
    zone = resolve_zone(tz)
    moment = parse_date(args.date)
    local = moment.astimezone(zone) if moment.tzinfo else moment.replace(tzinfo=zone)
    LOG.debug("lunar day for %s in %s", local, tz)
    result = lunar_day(local, zone, cache=Cache())
    payload = result.to_dict()
    payload["timezone"] = tz
    payload["utc_offset"] = pad_zone_str(local)
    payload["phase_name"] = moon_phase_name(result.phase, locale)
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ganzhi", description="Stem-Branch (Gan-Zhi) algebra.")
    parser.add_argument("--locale", default="en", choices=available_locales())
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("combine", help="Sexagenary index of a stem/branch pair")
    p.add_argument("stem", type=_stem)
    p.add_argument("branch", type=_branch)
    p.set_defaults(func=cmd_combine)

    p = sub.add_parser("decode", help="Stem/branch pair at a sexagenary index")
    p.add_argument("index", type=int)
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("trigram", help="Na Jia trigram of a stem")
    p.add_argument("stem", type=_stem)
    p.set_defaults(func=cmd_trigram)

    p = sub.add_parser("element", help="Five Element of a branch group")
    p.add_argument("branch", type=_branch)
    p.add_argument("--scheme", default="triad", choices=["triad", "union"])
    p.set_defaults(func=cmd_element)

    p = sub.add_parser("hour-stem", help="Five Rats Escape hour stem")
    p.add_argument("day_stem", type=_stem)
    p.add_argument("hour_branch", type=_branch, nargs="?", default=0)
    p.set_defaults(func=cmd_hour_stem)

    p = sub.add_parser("pillars", help="Describe four pillars given as sexagenary indices")
    for unit in ("year", "month", "day", "hour"):
        p.add_argument(unit, type=int)
    p.set_defaults(func=cmd_pillars)

    p = sub.add_parser("moon", help="Lunar day and moon phase of a date")
    p.add_argument("date")
    p.add_argument("--timezone", default=DEFAULT_TIMEZONE)
    p.add_argument("--latitude", type=float)
    p.add_argument("--longitude", type=float)
    p.set_defaults(func=cmd_moon)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    locale = load_locale(args.locale)
    try:
        result = args.func(args, locale)
    except ValueError as e:
        parser.error(str(e))

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
