import math

import pytest

from paris_app.constants import PARIS_CENTER, SPIRAL_OFFSETS
from paris_app.matching import (
    derive_display_coordinate,
    geometry_center,
    locate_feature,
    match_boundary,
    spiral_coordinate,
    unit_center,
)
from paris_app.models import AdministrativeUnit, BoundaryFeature, District, GreenSpace

from .conftest import square


def feature(props, geometry=None):
    return BoundaryFeature(geometry=geometry or square(2.30, 48.85, 2.32, 48.87), properties=props)


@pytest.mark.parametrize(
    "props",
    [{"c_ar": 7}, {"c_ar": "7"}, {"code_arr": "07"}, {"c_arinsee": "75107"}, {"c_arinsee": 7}],
)
def test_unit_matches_code_aliases(props):
    unit = AdministrativeUnit(id="u", name="7e", code="7")
    assert match_boundary(unit, [feature(props)]) is not None


def test_unit_rejects_boolean_and_other_codes():
    unit = AdministrativeUnit(id="u", name="7e", code="7")
    assert match_boundary(unit, [feature({"c_ar": True})]) is None
    assert match_boundary(unit, [feature({"c_ar": 17})]) is None
    assert match_boundary(unit, [feature({"c_arinsee": 75117})]) is None


def test_unit_match_returns_first_feature():
    unit = AdministrativeUnit(id="u", name="3e", code="3")
    first = feature({"c_ar": 3, "tag": "a"})
    second = feature({"c_ar": "3", "tag": "b"})
    assert match_boundary(unit, [feature({"c_ar": 4}), first, second]) is first


def test_district_matches_name_case_insensitively():
    district = District(id="q1", name="Halles")
    assert match_boundary(district, [feature({"l_qu": "HALLES"})]) is not None
    assert match_boundary(district, [feature({"nom": "halles"})]) is not None
    assert match_boundary(district, [feature({"l_qu": "Halles Nord"})]) is None


def test_green_space_matches_substring_both_ways():
    space = GreenSpace(id="g", name="Parc Monceau")
    assert match_boundary(space, [feature({"nom": "Parc Monceau - entrée nord"})]) is not None
    assert match_boundary(space, [feature({"nom_ev": "monceau"})]) is not None
    assert match_boundary(space, [feature({"nom": "Parc Montsouris"})]) is None


def test_no_features_means_no_match():
    assert match_boundary(District(id="q1", name="Halles"), []) is None
    assert match_boundary(District(id="q1", name="Halles"), None) is None


def test_geometry_center_uses_bounding_box():
    lat, lng = geometry_center(square(2.0, 48.0, 3.0, 49.0))
    assert lat == pytest.approx(48.5)
    assert lng == pytest.approx(2.5)


def test_geometry_center_handles_invalid_input():
    assert geometry_center(None) is None
    assert geometry_center({"type": "Unknown"}) is None


def test_spiral_positions_are_distinct_and_reproducible():
    base = (48.85, 2.35)
    points = [spiral_coordinate(i, base, 0.005) for i in range(10)]
    assert len(set(points)) == 10
    assert points == [spiral_coordinate(i, base, 0.005) for i in range(10)]
    first = points[0]
    assert math.hypot(first[0] - base[0], first[1] - base[1]) == pytest.approx(0.0025)


def test_display_coordinate_prefers_geometry_then_point_then_spiral():
    geom = square(2.0, 48.0, 3.0, 49.0)
    with_geometry = GreenSpace(id="a", name="A", geometry=geom, lat=1.0, lng=1.0)
    assert derive_display_coordinate(with_geometry, 0) == pytest.approx((48.5, 2.5))

    with_point = GreenSpace(id="b", name="B", lat=48.9, lng=2.4)
    assert derive_display_coordinate(with_point, 0) == (48.9, 2.4)

    bare = GreenSpace(id="c", name="C")
    expected = spiral_coordinate(2, PARIS_CENTER, SPIRAL_OFFSETS["green_space"])
    assert derive_display_coordinate(bare, 2) == expected


def test_display_coordinate_uses_matched_feature_for_districts():
    district = District(id="q1", name="Halles")
    matched = feature({"l_qu": "Halles"}, square(2.0, 48.0, 2.2, 48.2))
    assert derive_display_coordinate(district, 5, matched) == pytest.approx((48.1, 2.1))
    parent = (48.86, 2.34)
    expected = spiral_coordinate(5, parent, SPIRAL_OFFSETS["district"])
    assert derive_display_coordinate(district, 5, None, parent) == expected


def test_unit_center_handles_zero_padded_codes():
    assert unit_center(AdministrativeUnit(id="x", name="", code="07")) == unit_center(
        AdministrativeUnit(id="x", name="", code="7")
    )
    assert unit_center(None) is None


def test_locate_feature_point_in_polygon():
    inside = feature({"l_qu": "A"}, square(2.0, 48.0, 2.1, 48.1))
    other = feature({"l_qu": "B"}, square(3.0, 49.0, 3.1, 49.1))
    assert locate_feature(48.05, 2.05, [other, inside]) is inside
    assert locate_feature(10.0, 10.0, [other, inside]) is None
