from paris_app.models import AdministrativeUnit, District, GreenSpace
from paris_app.navigation import (
    INITIAL_STATE,
    Navigator,
    ViewLevel,
    filter_children,
    reconcile_districts,
    reconcile_green_spaces,
    visible_districts,
)

UNITS = (
    AdministrativeUnit(id="u1", name="1er Arrondissement", code="1"),
    AdministrativeUnit(id="u2", name="2ème Arrondissement", code="2"),
)
DISTRICTS = (
    District(id="q1", name="Halles", unit_id="u1"),
    District(id="q2", name="Mail", unit_name="2ème Arrondissement"),
    District(id="q3", name="Orphan"),
)
SPACES = (
    GreenSpace(id="g1", name="Jardin", district_id="q1"),
    GreenSpace(id="g2", name="Square", district_name="Mail"),
)


def test_drill_down_and_back():
    nav = Navigator()
    nav.select_unit(UNITS[0])
    assert nav.state.level is ViewLevel.DISTRICT
    nav.select_district(DISTRICTS[0])
    assert nav.state.level is ViewLevel.GREEN_SPACE
    assert nav.state.unit == UNITS[0]
    nav.select_green_space(SPACES[0])
    assert nav.state.green_space == SPACES[0]

    nav.go_back()
    assert nav.state.level is ViewLevel.GREEN_SPACE
    assert nav.state.green_space is None
    assert nav.state.district == DISTRICTS[0]

    nav.go_back()
    assert nav.state.level is ViewLevel.DISTRICT
    assert nav.state.district is None

    nav.go_back()
    assert nav.state == INITIAL_STATE
    assert nav.go_back() == INITIAL_STATE


def test_selecting_a_unit_clears_deeper_selection():
    nav = Navigator()
    nav.select_unit(UNITS[0])
    nav.select_district(DISTRICTS[0])
    nav.select_unit(UNITS[1])
    assert nav.state.district is None
    assert nav.state.green_space is None


def test_close_resets_everything():
    nav = Navigator()
    nav.select_unit(UNITS[0])
    nav.select_district(DISTRICTS[0])
    assert nav.close() == INITIAL_STATE


def test_filter_by_id_or_name():
    assert filter_children(UNITS[0], DISTRICTS) == (DISTRICTS[0],)
    assert filter_children(UNITS[1], DISTRICTS) == (DISTRICTS[1],)
    assert filter_children(None, DISTRICTS) == DISTRICTS


def test_blank_links_never_match():
    nameless = AdministrativeUnit(id="", name="", code="")
    assert filter_children(nameless, DISTRICTS) == ()


def test_reconcile_rewrites_parent_links():
    reconciled = reconcile_districts(UNITS, DISTRICTS)
    assert reconciled[1].unit_id == "u2"
    assert reconciled[0].unit_name == "1er Arrondissement"
    assert reconciled[2] == DISTRICTS[2]

    spaces = reconcile_green_spaces(reconciled, SPACES)
    assert spaces[1].district_id == "q2"


def test_visible_districts_follow_state():
    nav = Navigator()
    assert visible_districts(nav.state, DISTRICTS) == DISTRICTS
    nav.select_unit(UNITS[0])
    assert visible_districts(nav.state, DISTRICTS) == (DISTRICTS[0],)


def test_jump_to_district_resolves_unit():
    nav = Navigator()
    state = nav.jump_to_district(DISTRICTS[1], UNITS)
    assert state.level is ViewLevel.GREEN_SPACE
    assert state.unit == UNITS[1]
    assert state.district == DISTRICTS[1]


def test_jump_to_green_space_resolves_ancestors():
    nav = Navigator()
    state = nav.jump_to_green_space(SPACES[0], DISTRICTS, UNITS)
    assert (state.unit, state.district, state.green_space) == (UNITS[0], DISTRICTS[0], SPACES[0])


def test_jump_to_orphan_green_space_keeps_current_context():
    nav = Navigator()
    nav.select_unit(UNITS[0])
    orphan = GreenSpace(id="g9", name="Lost")
    state = nav.jump_to_green_space(orphan, DISTRICTS, UNITS)
    assert state.unit == UNITS[0]
    assert state.district is None
    assert state.green_space == orphan


def test_selecting_a_district_clears_the_green_space():
    nav = Navigator()
    nav.select_unit(UNITS[0])
    nav.select_district(DISTRICTS[0])
    nav.select_green_space(SPACES[0])

    state = nav.select_district(DISTRICTS[1])
    assert state.green_space is None
    assert state.district == DISTRICTS[1]
    assert state.unit == UNITS[0]

    nav.select_green_space(SPACES[1])
    state = nav.select_district(DISTRICTS[0])
    assert state.green_space is None
    assert state.district == DISTRICTS[0]


def test_stale_unit_id_with_matching_name_is_kept_and_reconciled():
    stale = District(id="q9", name="Louvre", unit_id="u9", unit_name="1er Arrondissement")
    districts = DISTRICTS + (stale,)
    assert filter_children(UNITS[0], districts) == (DISTRICTS[0], stale)

    reconciled = reconcile_districts(UNITS, districts)
    assert reconciled[-1].unit_id == "u1"
    assert filter_children(UNITS[1], reconciled) == (reconciled[1],)
