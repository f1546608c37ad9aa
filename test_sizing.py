#!/usr/bin/env python3
"""
Tests for diameter arithmetic, clearances, naming and ring collections.
"""
import logging

import pytest

from ringmesh.sizing import (
    adapter_pair,
    calculate_dust_collection_clearance,
    calculate_inner_diameter,
    calculate_outer_diameter,
    clearance_table,
    default_label,
    dust_collection_clearance,
    fit_kit,
    generate_filename,
    ring_series,
    spec_from_inner_diameter,
    spec_from_outer_diameter,
)


def test_clearance_matches_measured_fits():
    assert calculate_dust_collection_clearance(45.8) == pytest.approx(0.6, abs=0.1)
    assert calculate_dust_collection_clearance(101) == pytest.approx(0.1, abs=0.05)


def test_clearance_rounds_to_five_hundredths():
    for diameter in (25, 38, 45.8, 63, 101, 150):
        clearance = calculate_dust_collection_clearance(diameter)
        assert clearance * 20 == pytest.approx(round(clearance * 20), abs=1e-9)


def test_clearance_strictly_decreases_with_diameter():
    diameters = [1.0, 5.0, 10.0, 25.0, 25.5, 50.0, 100.0, 100.1, 150.0, 300.0]
    clearances = [dust_collection_clearance(d) for d in diameters]
    for bigger_gap, smaller_gap in zip(clearances, clearances[1:]):
        assert bigger_gap > smaller_gap > 0


def test_clearance_rejects_non_positive_diameter():
    with pytest.raises(ValueError):
        dust_collection_clearance(0)
    with pytest.raises(ValueError):
        calculate_dust_collection_clearance(-10)


@pytest.mark.parametrize("diameter", [1e-200, 1e-140, float("nan"), float("inf")])
def test_clearance_rejects_diameters_outside_the_formula(diameter):
    with pytest.raises(ValueError):
        dust_collection_clearance(diameter)
    with pytest.raises(ValueError):
        fit_kit(diameter, is_outer_mode=True)


def test_clearance_table_covers_common_sizes():
    rows = clearance_table()
    assert [r["diameter"] for r in rows] == [25, 32, 38, 50, 63, 76, 100, 125, 150]
    for row in rows:
        assert row["tight"] < row["snug"] < row["optimal"] < row["loose"]


def test_inner_diameter_from_outer():
    assert calculate_inner_diameter(30.0, 2.0) == 26.0
    assert calculate_inner_diameter(100.0, 5.0) == 90.0
    with pytest.raises(ValueError):
        calculate_inner_diameter(10.0, 5.0)
    with pytest.raises(ValueError):
        calculate_inner_diameter(10.0, 6.0)


@pytest.mark.parametrize("outer, thickness", [
    (3.0, 0.25), (50.5, 1.25), (7.7, 0.7), (7.7, 1.3), (101.6, 2.0), (33.3, 4.4),
])
def test_inner_diameter_inverts_outer_diameter(outer, thickness):
    # Exact only when the values are representable in binary; otherwise to rounding
    inner = calculate_inner_diameter(outer, thickness)
    assert inner + 2 * thickness == pytest.approx(outer, rel=1e-12)
    assert calculate_outer_diameter(inner, thickness) == pytest.approx(outer, rel=1e-12)


def test_default_label_and_filenames():
    assert default_label(50.4, inner=True) == "ID50MM"
    assert default_label(101.9, inner=False) == "OD101MM"
    assert generate_filename(25.0, 2.0, 20.0, True) == "ring_id25.0_t2.0_h20.0.stl"
    assert generate_filename(25.0, 2.0, 20.0, False, outer_diameter=29.0) == "ring_od29.0_t2.0_h20.0.stl"
    assert generate_filename(25.5, 2.3, 20.7, True, extension=".scad") == "ring_id25.5_t2.3_h20.7.scad"


def test_spec_from_inner_diameter():
    spec = spec_from_inner_diameter(50.0)
    assert spec.inner_radius == 25.0
    assert spec.outer_radius == 27.0
    assert spec.label == "ID50MM"
    assert spec.label_on_inner
    assert spec.name == "ring_id50.0_t2.0_h20.0"


def test_spec_from_outer_diameter():
    spec = spec_from_outer_diameter(64.0, thickness=3.0, height=10.0, label_raised=False)
    assert spec.inner_diameter == 58.0
    assert spec.outer_diameter == 64.0
    assert spec.label == "OD64MM"
    assert not spec.label_on_inner
    assert not spec.label_raised
    assert spec.name == "ring_od64.0_t3.0_h10.0"

    with pytest.raises(ValueError):
        spec_from_outer_diameter(4.0, thickness=2.0)


def test_ring_series_steps_and_skips(caplog):
    with caplog.at_level(logging.WARNING, logger="ringmesh.sizing"):
        rings = ring_series(10.0, inner_mode=False, step=2.0, count=5, up=False, thickness=2.0)

    assert [r.outer_diameter for r in rings] == [10.0, 8.0, 6.0]
    assert [r.label for r in rings] == ["O10.0mm", "O8.0mm", "O6.0mm"]
    assert len([rec for rec in caplog.records if "Skipping" in rec.getMessage()]) == 2


def test_ring_series_upwards_in_inner_mode():
    rings = ring_series(30.0, inner_mode=True, step=0.5, count=3)
    assert [r.inner_diameter for r in rings] == [30.0, 30.5, 31.0]
    assert all(r.label_on_inner for r in rings)
    assert rings[1].name == "ring_id30.50"


def test_fit_kit_over_an_outside_measurement():
    kit = fit_kit(100.0, is_outer_mode=True)
    assert len(kit) == 5
    assert kit[0].description == "Replica of measured part"
    assert kit[0].spec.outer_diameter == 100.0

    test_bores = [ring.spec.inner_diameter for ring in kit[1:]]
    assert all(bore > 100.0 for bore in test_bores)
    assert test_bores == sorted(test_bores)
    assert [ring.description for ring in kit[1:]] == [
        "Test ring - tight fit", "Test ring - snug fit",
        "Test ring - optimal fit", "Test ring - loose fit",
    ]


def test_fit_kit_into_a_bore():
    kit = fit_kit(50.0, is_outer_mode=False)
    assert kit[0].spec.inner_diameter == 50.0
    assert all(ring.spec.outer_diameter < 50.0 for ring in kit[1:])
    assert not any(ring.spec.label_on_inner for ring in kit[1:])


def test_adapter_pair_over_an_outside_measurement():
    replica, adapter = adapter_pair(101.0, is_outer_mode=True)
    assert replica.name == "replica_od101"
    assert replica.spec.outer_diameter == 101.0
    assert adapter.name == "adapter_id101.1"
    assert adapter.spec.inner_diameter == pytest.approx(101.1)
    assert adapter.spec.label == "I101.1mm"
    assert adapter.spec.label_on_inner
    assert adapter.description == "Adapter that fits over replica"


def test_adapter_pair_into_a_bore():
    replica, adapter = adapter_pair(45.8, is_outer_mode=False, thickness=3.0)
    assert replica.spec.inner_diameter == 45.8
    assert replica.spec.label == "I45.8mm"
    assert adapter.spec.outer_diameter == pytest.approx(45.2)
    assert adapter.spec.inner_diameter == pytest.approx(39.2)
    assert not adapter.spec.label_on_inner
    assert adapter.name == "adapter_od45.2"
