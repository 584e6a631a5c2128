from __future__ import annotations

import json

import pytest

from ganzhi.run import main


def _run(capsys, *argv: str) -> dict:
    assert main(list(argv)) == 0
    return json.loads(capsys.readouterr().out)


def test_combine(capsys) -> None:
    data = _run(capsys, "combine", "9", "11")
    assert data == {
        "index": 59, "stem": 9, "stem_name": "Gui", "branch": 11, "branch_name": "Hai", "animal": "Pig",
    }


def test_combine_accepts_pinyin(capsys) -> None:
    assert _run(capsys, "combine", "yi", "Si")["index"] == 41


def test_combine_parity_mismatch_exits(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["combine", "Jia", "Chou"])
    assert excinfo.value.code == 2
    assert "Invalid SB value" in capsys.readouterr().err


def test_unknown_stem_name_exits() -> None:
    with pytest.raises(SystemExit):
        main(["trigram", "Alpha"])


def test_decode(capsys) -> None:
    data = _run(capsys, "--locale", "zh", "decode", "0")
    assert data["stem_name"] == "甲"
    assert data["branch_name"] == "子"
    assert data["animal"] == "鼠"


def test_trigram(capsys) -> None:
    data = _run(capsys, "--locale", "zh", "trigram", "8")
    assert data["trigram"] == 7
    assert data["trigram_name"] == "乾"


@pytest.mark.parametrize("scheme, element, name", [("triad", 4, "Water"), ("union", 2, "Earth")])
def test_element(capsys, scheme: str, element: int, name: str) -> None:
    data = _run(capsys, "element", "0", "--scheme", scheme)
    assert data["element"] == element
    assert data["element_name"] == name


def test_hour_stem(capsys) -> None:
    assert _run(capsys, "hour-stem", "5", "11")["hour_stem"] == 1
    assert _run(capsys, "hour-stem", "Geng")["hour_stem_name"] == "Bing"


def test_pillars(capsys) -> None:
    data = _run(capsys, "pillars", "0", "2", "3", "41")
    assert data["pillars"]["hour"]["combined"] == "Yi Si"


def test_pillars_out_of_range_exits() -> None:
    with pytest.raises(SystemExit):
        main(["pillars", "0", "2", "3", "60"])


def test_moon(capsys) -> None:
    data = _run(capsys, "moon", "2024-02-24 21:00")
    assert data["lunar_day"] == 15
    assert data["phase"] == "full"
    assert data["phase_name"] == "Full Moon"
    assert data["timezone"] == "Asia/Shanghai"
    assert data["utc_offset"] == "+08:00"


def test_moon_from_coordinates(capsys) -> None:
    data = _run(capsys, "--locale", "zh", "moon", "2024-02-10 12:00",
                "--latitude", "39.9", "--longitude", "116.4")
    assert data["timezone"] == "Asia/Shanghai"
    assert data["phase_name"] == "朔"


def test_moon_requires_both_coordinates() -> None:
    with pytest.raises(SystemExit):
        main(["moon", "2024-02-10", "--latitude", "39.9"])


def test_moon_reports_offset_of_reckoning_zone(capsys) -> None:
    data = _run(capsys, "moon", "2024-02-10T12:00:00Z")
    assert data["date"] == "2024-02-10"
    assert data["lunar_day"] == 1
    assert data["utc_offset"] == "+08:00"


def test_moon_unknown_timezone_exits(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["moon", "2024-02-10", "--timezone", "Mars/Olympus"])
    assert excinfo.value.code == 2
    assert "Unknown time zone" in capsys.readouterr().err
