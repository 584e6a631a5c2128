"""
Locale data and translation lookup.

Locales are nested JSON documents under ganzhi/locales/. A translation key
is a dotted path ("moonPhase.full", "stems.3") walked one segment at a time.
"""

from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Union
import json

from ganzhi.algebra import MoonPhase
from ganzhi.stem_branch import Branch, Element, Stem, Trigram

LOCALE_DIR = Path(__file__).parent / "locales"
DEFAULT_LOCALE = "en"

Leaf = Union[str, int, float]
LocaleNode = Union[Leaf, Mapping, Sequence]


def available_locales() -> list[str]:
    return sorted(p.stem for p in LOCALE_DIR.glob("*.json"))


@lru_cache(maxsize=None)
def load_locale(name: str = DEFAULT_LOCALE) -> Mapping:
    """
    Load a bundled locale.

    Raises:
        KeyError: if no locale file with that name exists.
    """
    path = LOCALE_DIR / f"{name}.json"
    if not path.is_file():
        raise KeyError(f"Unknown locale {name!r}; available: {', '.join(available_locales())}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _is_leaf(node: LocaleNode) -> bool:
    return isinstance(node, (str, int, float))


def get_translation(locale: Mapping, key: str) -> LocaleNode:
    """
    Resolve a dotted ``key`` inside ``locale``.

    - the walk stops at the first leaf (string or number) and returns it
    - sequence segments must be in-range integer indices, otherwise ""
    - a segment missing from a mapping returns the last segment of the key
    - a path that ends on a mapping returns the key unchanged
    """
    segments = key.split(".")
    node: LocaleNode = locale
    result: LocaleNode = key
    while True:
        if _is_leaf(node):
            return node
        if not segments:
            return result
        segment = segments.pop(0)
        if isinstance(node, Mapping):
            if segment not in node:
                return segments[-1] if segments else segment
            node = node[segment]
        elif isinstance(node, Sequence):
            if not segment.isdigit() or int(segment) >= len(node):
                return ""
            node = node[int(segment)]
            result = node
        else:
            return ""


def moon_phase_name(phase: MoonPhase, locale: Mapping) -> str:
    """Localised name of ``phase``; empty for unclassified days."""
    if phase is MoonPhase.UNCLASSIFIED:
        return ""
    return str(get_translation(locale, f"moonPhase.{phase.value}"))


def stem_name(stem: Stem, locale: Mapping) -> str:
    return str(get_translation(locale, f"stems.{int(stem)}"))


def branch_name(branch: Branch, locale: Mapping) -> str:
    return str(get_translation(locale, f"branches.{int(branch)}"))


def animal_name(branch: Branch, locale: Mapping) -> str:
    return str(get_translation(locale, f"animals.{int(branch)}"))


def trigram_name(trigram: Trigram, locale: Mapping) -> str:
    return str(get_translation(locale, f"trigrams.{int(trigram)}"))


def element_name(element: Element, locale: Mapping) -> str:
    return str(get_translation(locale, f"elements.{int(element)}"))
