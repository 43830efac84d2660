import json

from paris_app.models import (
    district_from_record,
    features_from_geojson,
    first_text,
    green_space_from_record,
    parse_geometry,
    unit_from_record,
)

from .conftest import square


def test_unit_code_from_zipcode():
    unit = unit_from_record({"id": "u7", "zonename": "7e", "zipcode": "75007", "population": 48000})
    assert unit.code == "07"
    assert unit.zipcode == "75007"
    assert unit.population == 48000.0


def test_unit_aliases_and_ordinal_name():
    unit = unit_from_record({"c_ar": 12, "surface": 1.6e7, "unrelated": "x"})
    assert unit.id == "12"
    assert unit.code == "12"
    assert unit.name == "12ème Arrondissement"
    assert unit.extras == {"surface": 1.6e7}


def test_unit_without_code_has_empty_name():
    unit = unit_from_record({"id": "x"})
    assert unit.name == ""


def test_district_aliases():
    district = district_from_record({"c_qu": "q5", "l_qu": "Gaillon", "c_ar": 2, "c_quinsee": 7510205})
    assert district.id == "q5"
    assert district.name == "Gaillon"
    assert district.unit_id == "2"
    assert district.unit_name == "2ème Arrondissement"
    assert district.extras == {"c_quinsee": 7510205}


def test_green_space_geometry_from_json_string():
    geom = square(2.30, 48.85, 2.31, 48.86)
    space = green_space_from_record(
        {"nsq_espace_vert": 42, "nom_ev": "Square X", "geom": json.dumps(geom), "lat": 0, "lng": 0}
    )
    assert space.id == "42"
    assert space.name == "Square X"
    assert space.type == "Espace vert"
    assert space.geometry["type"] == "Polygon"
    assert space.lat is None and space.lng is None


def test_parse_geometry_rejects_points_and_garbage():
    assert parse_geometry({"type": "Point", "coordinates": [2.3, 48.8]}) is None
    assert parse_geometry("{not json") is None
    assert parse_geometry({"type": "Polygon", "coordinates": []}) is None


def test_features_from_geojson_skips_non_polygons():
    payload = {
        "features": [
            {"geometry": square(0, 0, 1, 1), "properties": {"c_ar": 1}},
            {"geometry": {"type": "Point", "coordinates": [0, 0]}, "properties": {}},
            "junk",
        ]
    }
    features = features_from_geojson(payload)
    assert len(features) == 1
    assert features[0].properties == {"c_ar": 1}


def test_first_text_skips_blank_values():
    assert first_text({"a": "", "b": 0, "c": "ok"}, ("a", "b", "c")) == "ok"
    assert first_text({}, ("a",), default="fallback") == "fallback"
