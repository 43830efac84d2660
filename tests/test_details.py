from paris_app.details import breadcrumb, extra_attributes, format_area, level_summary
from paris_app.fallback import FALLBACK_DISTRICTS, FALLBACK_GREEN_SPACES, FALLBACK_UNITS
from paris_app.models import GreenSpace
from paris_app.navigation import Navigator


def test_breadcrumb_and_summary():
    nav = Navigator()
    assert breadcrumb(nav.state) == []
    assert level_summary(nav.state, FALLBACK_UNITS, FALLBACK_DISTRICTS, FALLBACK_GREEN_SPACES) == "20 Arrondissements"
    nav.select_unit(FALLBACK_UNITS[0])
    assert level_summary(nav.state, FALLBACK_UNITS, FALLBACK_DISTRICTS, FALLBACK_GREEN_SPACES) == "4 Quartiers"
    nav.select_district(FALLBACK_DISTRICTS[2])
    assert breadcrumb(nav.state) == ["1er Arrondissement", "Palais-Royal"]
    assert level_summary(nav.state, FALLBACK_UNITS, FALLBACK_DISTRICTS, FALLBACK_GREEN_SPACES) == "2 Espaces Verts"


def test_extra_attributes_serialise_structures():
    space = GreenSpace(id="g", name="G", extras={"categorie": "Jardin", "url_plan": {"href": "x"}})
    assert extra_attributes(space) == [("categorie", "Jardin"), ("url_plan", '{"href": "x"}')]


def test_format_area():
    assert format_area(254000) == "254 000 m²"
