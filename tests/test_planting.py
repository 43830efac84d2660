import pytest

from paris_app.constants import PLANTING_API
from paris_app.models import AdministrativeUnit, District
from paris_app.planting import (
    PlantingParams,
    fetch_planting_simulation,
    group_by_zipcode,
    has_recommendations,
    parse_simulation,
    plan_display_name,
    planting_params_for,
)

PAYLOAD = {
    "generated_at": "2025-02-01T10:00:00",
    "plans": [
        {
            "plan_id": "impact_max",
            "count": 3,
            "results": [
                {"target_type": "road", "target_id": "r1", "target_name": "Rue A", "zipcode": "75011",
                 "score_priorite": 0.9, "nb_arbres_recommande": 4, "features": {"deficit": 2.5}},
                {"target_type": "road", "target_id": "r2", "target_name": "Rue B", "zipcode": "75011",
                 "score_priorite": 0.5, "nb_arbres_recommande": 2},
                {"target_id": "ev3"},
            ],
        },
        {"plan_id": "biodiversite", "results": [{"target_id": "r1", "nb_arbres_recommande": 1}]},
    ],
}


def test_params_query_string_values():
    params = PlantingParams("quartier", "q3", max_per_road=10)
    query = params.query()
    assert query["include_roads"] == "true"
    assert query["use_species_per_ev"] == "false"
    assert query["plans"] == "impact_max,biodiversite"
    assert query["max_per_road"] == "10"


def test_invalid_zone_type():
    with pytest.raises(ValueError):
        PlantingParams("region", "1")


def test_params_prefer_district():
    unit = AdministrativeUnit(id="u", name="", code="7", zipcode="75007")
    assert planting_params_for(unit, District(id="q3", name="X")).zone_type == "quartier"
    params = planting_params_for(unit, None)
    assert (params.zone_type, params.zone_id) == ("arrondissement", "75007")
    assert planting_params_for(AdministrativeUnit(id="u", name="", code="7"), None).zone_id == "75007"
    assert planting_params_for(None, None) is None


def test_parse_simulation_and_summary():
    simulation = parse_simulation(PlantingParams("arrondissement", "75011"), PAYLOAD)
    impact, biodiversity = simulation.plans
    assert impact.count == 3
    unknown = impact.recommendations[2]
    assert unknown.target_name == "Unknown Location"
    assert unknown.recommended_trees == 1
    assert impact.recommendations[0].deficit == 2.5
    assert simulation.summary.total_trees == 8
    assert simulation.summary.total_locations == 3
    assert has_recommendations(simulation)


def test_group_by_zipcode_uses_autre_for_missing():
    simulation = parse_simulation(PlantingParams("arrondissement", "75011"), PAYLOAD)
    groups = group_by_zipcode(simulation.plans[0].recommendations)
    assert list(groups) == ["75011", "Autre"]
    assert len(groups["75011"]) == 2


def test_plan_display_names():
    assert plan_display_name("impact_max") == "Impact Maximum"
    assert plan_display_name("ombre_max") == "ombre max"


def test_fetch_without_zone():
    result = fetch_planting_simulation(None)
    assert result.data is None


def test_fetch_live_and_failure(fake_http):
    params = PlantingParams("quartier", "q3")
    assert not fetch_planting_simulation(params).live

    fake_http.routes[PLANTING_API] = PAYLOAD
    other = PlantingParams("quartier", "q4")
    result = fetch_planting_simulation(other)
    assert result.live
    assert result.data.zone_id == "q4"
    assert fake_http.calls[-1][1]["zone_id"] == "q4"
