# living_hinge/test_naming_storage.py
# Descriptive file names (build + parse) and artifact discovery.

from __future__ import annotations

from datetime import datetime

import pytest

from living_hinge.naming import artifact_name, describe_filename, is_artifact_name, parse_filename, type_slug
from living_hinge.parameters import create
from living_hinge.presets import apply_preset
from living_hinge.storage import DirectoryStorage, MemoryStorage, list_generated_hinges

WHEN = datetime(2026, 10, 18, 14, 5, 9)


def _clock():
    return WHEN


def test_standard_name() -> None:
    name = describe_filename(create(), "Standard", clock=_clock)
    assert name == "hinge_standard_100x50_slit15x1.0_sp3_off8_alt_20261018_140509"


def test_half_values_round_up() -> None:
    pset = create()
    apply_preset(pset, "Flexible")            # SlitSpacing 2.5
    pset.set_base("SlitWidth", 0.25)
    pset.set_base("AlternateRows", False)
    name = describe_filename(pset, "Flexible", clock=_clock)
    assert name == "hinge_flexible_120x60_slit25x0.3_sp3_off7_reg_20261018_140509"


def test_huge_values_still_produce_a_name() -> None:
    name = describe_filename(create({"SlitWidth": 1e30, "Length": 1e40}), "Standard", clock=_clock)
    assert f"_{10 ** 40}x50_" in name
    assert f"_slit15x{10 ** 30}.0_" in name


def test_type_defaults_to_custom() -> None:
    assert describe_filename(create(), None, clock=_clock).startswith("hinge_custom_")
    assert type_slug("My Hinge_v2") == "my-hinge-v2"


def test_round_trip() -> None:
    pset = create({"Length": 149.6, "Width": 75.2, "SlitLength": 19.5, "SlitWidth": 0.8, "AlternateRows": False})
    name = artifact_name(describe_filename(pset, "Sparse", clock=_clock))
    info = parse_filename(name)
    assert info is not None
    assert info.hinge_type == "sparse"
    assert (info.length, info.width) == (150, 75)
    assert info.slit_length == 20
    assert info.slit_width == pytest.approx(0.8)
    assert (info.spacing, info.offset) == (3, 8)
    assert info.alternate is False
    assert info.timestamp == WHEN


@pytest.mark.parametrize(
    "name",
    ["living_hinge_20240101_101010.svg", "hinge.svg", "hinge_standard_100x50.svg", "notes.txt"],
)
def test_parse_rejects_other_names(name: str) -> None:
    assert parse_filename(name) is None


def test_timestamp_order_is_name_order() -> None:
    pset = create()
    older = describe_filename(pset, "Dense", clock=lambda: datetime(2026, 1, 2, 23, 59, 59))
    newer = describe_filename(pset, "Dense", clock=lambda: datetime(2026, 1, 10, 0, 0, 0))
    assert sorted([newer, older]) == [older, newer]


def test_artifact_families() -> None:
    assert is_artifact_name("living_hinge_old.svg")
    assert is_artifact_name("hinge_dense_80x40_slit12x1.0_sp2_off6_alt_20260101_000000.svg")
    assert not is_artifact_name("hinge_dense.png")
    assert artifact_name("a.svg") == "a.svg"
    assert artifact_name("a") == "a.svg"


def test_list_generated_hinges_newest_first() -> None:
    storage = MemoryStorage()
    for n in (
        "living_hinge_20240101_120000.svg",
        "hinge_standard_100x50_slit15x1.0_sp3_off8_alt_20260101_000000.svg",
        "hinge_standard_100x50_slit15x1.0_sp3_off8_alt_20260301_000000.svg",
        "notes.txt",
        "preview.png",
    ):
        storage.write(n, "<svg/>")

    assert list_generated_hinges(storage) == [
        "living_hinge_20240101_120000.svg",
        "hinge_standard_100x50_slit15x1.0_sp3_off8_alt_20260301_000000.svg",
        "hinge_standard_100x50_slit15x1.0_sp3_off8_alt_20260101_000000.svg",
    ]


def test_directory_storage(tmp_path) -> None:
    storage = DirectoryStorage(tmp_path / "out")
    assert list_generated_hinges(storage) == []
    storage.write("hinge_a.svg", "<svg/>")
    storage.write("living_hinge_b.svg", "<svg/>")
    storage.write("other.svg", "<svg/>")
    assert (tmp_path / "out" / "hinge_a.svg").read_text(encoding="utf-8") == "<svg/>"
    assert storage.read("hinge_a.svg") == "<svg/>"
    assert list_generated_hinges(storage) == ["living_hinge_b.svg", "hinge_a.svg"]


@pytest.mark.parametrize("bad", ["../escape.svg", "/abs.svg"])
def test_storage_rejects_paths_outside_root(tmp_path, bad: str) -> None:
    with pytest.raises(ValueError):
        DirectoryStorage(tmp_path).write(bad, "x")
    with pytest.raises(ValueError):
        MemoryStorage().write(bad, "x")
