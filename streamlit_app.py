"""Streamlit explorer for Paris green spaces.

Drill down from the arrondissements to their quartiers and then to the parks,
gardens and squares of each quartier. The map is drawn with pydeck; polygons
come from the Paris open-data GeoJSON exports and are matched to the API
records heuristically. Every remote source falls back to bundled data when it
is unreachable, so the app stays usable offline.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from paris_app.airquality import aqi_level, fetch_air_quality
from paris_app.details import (
    LEVEL_TITLES,
    breadcrumb,
    extra_attributes,
    format_area,
    level_summary,
    unit_title,
)
from paris_app.gateways import COLLECTION_KINDS, fetch_boundaries, fetch_collection
from paris_app.maps import build_deck, selection_to_target
from paris_app.models import AdministrativeUnit, District, FetchResult, GreenSpace
from paris_app.navigation import (
    Navigator,
    NavigatorState,
    ViewLevel,
    reconcile_districts,
    reconcile_green_spaces,
    visible_districts,
    visible_green_spaces,
)
from paris_app.planting import (
    fetch_planting_simulation,
    group_by_zipcode,
    has_recommendations,
    plan_display_name,
    planting_params_for,
)
from paris_app.pollution import (
    PollutionData,
    fetch_pollution,
    pollution_level_by_value,
)
from paris_app.search import search


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Espaces verts de Paris", page_icon="🌳", layout="wide")


def _initialise_session_state() -> None:
    if "navigator" not in st.session_state:
        st.session_state.navigator = Navigator()
    st.session_state.setdefault("notified", set())
    st.session_state.setdefault("show_planting", False)


def _navigator() -> Navigator:
    return st.session_state.navigator


def _notify(key: str, result: FetchResult) -> None:
    """Toast the live/offline status of a gateway once per session."""

    if key in st.session_state.notified or not result.message:
        return
    st.session_state.notified.add(key)
    st.toast(result.message, icon="✅" if result.live else "⚠️")


def _rerun() -> None:
    rerun_fn = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if rerun_fn:
        rerun_fn()


def _load_data():
    results = {kind: fetch_collection(kind) for kind in COLLECTION_KINDS}
    for kind, result in results.items():
        _notify(kind, result)
    units = tuple(results["units"].data)
    districts = reconcile_districts(units, results["districts"].data)
    spaces = reconcile_green_spaces(districts, results["green_spaces"].data)
    boundaries = {kind: fetch_boundaries(kind).data for kind in COLLECTION_KINDS}
    return units, districts, spaces, boundaries


def _map_key(state: NavigatorState) -> str:
    """A fresh key per view so a stale map selection never re-applies."""

    parts = [state.level.value]
    for entity in (state.unit, state.district, state.green_space):
        parts.append(entity.id if entity is not None else "-")
    return "paris-map-" + "-".join(parts)


def _apply_target(
    kind: str,
    entity_id: str,
    units: Sequence[AdministrativeUnit],
    districts: Sequence[District],
    spaces: Sequence[GreenSpace],
) -> bool:
    navigator = _navigator()
    state = navigator.state
    if kind == "unit":
        unit = next((u for u in units if u.id == entity_id), None)
        if unit is not None and unit != state.unit:
            navigator.select_unit(unit)
            return True
    elif kind == "district":
        district = next((d for d in districts if d.id == entity_id), None)
        if district is not None and district != state.district:
            navigator.select_district(district)
            return True
    elif kind == "green_space":
        space = next((g for g in spaces if g.id == entity_id), None)
        if space is not None and space != state.green_space:
            navigator.select_green_space(space)
            return True
    return False


def _search_box(units, districts, spaces) -> None:
    st.sidebar.header("Rechercher")
    query = st.sidebar.text_input("Arrondissement, quartier ou espace vert", key="search_query")
    results = search(query, units, districts, spaces)
    if len(query) >= 2 and not results:
        st.sidebar.caption("Aucun résultat.")
    navigator = _navigator()
    for unit in results.units:
        if st.sidebar.button(f"🏛️ {unit_title(unit)}", key=f"search-unit-{unit.id}"):
            navigator.select_unit(unit)
            _rerun()
    for district in results.districts:
        if st.sidebar.button(f"📍 {district.name}", key=f"search-district-{district.id}"):
            navigator.jump_to_district(district, units)
            _rerun()
    for space in results.green_spaces:
        if st.sidebar.button(f"🌳 {space.name}", key=f"search-space-{space.id}"):
            navigator.jump_to_green_space(space, districts, units)
            _rerun()


def _pollution_chart(data: PollutionData) -> go.Figure:
    records = sorted(data.records, key=lambda r: r.zipcode)
    return go.Figure(
        data=go.Bar(
            x=[r.zipcode for r in records],
            y=[r.urban_index for r in records],
            marker_color=[pollution_level_by_value(r.pm10).color for r in records],
        )
    ).update_layout(
        yaxis_title="Indice urbain",
        margin=dict(l=20, r=20, t=20, b=20),
        height=240,
    )


def _render_pollution() -> None:
    st.markdown("#### 🌬️ Pollution")
    selected_date = st.date_input(
        "Date",
        value=date.today(),
        max_value=date.today(),
        format="DD/MM/YYYY",
        key="pollution_date",
    )
    day = selected_date.isoformat()
    with st.spinner("Chargement de la pollution..."):
        result = fetch_pollution(day, day)
    data: Optional[PollutionData] = result.data
    if data is None or not data.records:
        st.caption("Données de pollution non disponibles pour cette date.")
        return
    level = pollution_level_by_value(data.average.pm10)
    col_index, col_no2, col_pm10 = st.columns(3)
    col_index.metric("Indice urbain", f"{data.average.urban_index:.2f}")
    col_no2.metric("NO₂", f"{data.average.no2:.1f} µg/m³")
    col_pm10.metric("PM10", f"{data.average.pm10:.1f} µg/m³")
    st.markdown(
        f"<span style='color:{level.color};font-weight:600'>{level.label}</span> · {level.description}",
        unsafe_allow_html=True,
    )
    st.plotly_chart(_pollution_chart(data), use_container_width=True)
    st.caption(f"Période : {data.period} · Source : {data.source}")


def _render_air_quality(district: District) -> None:
    reading = fetch_air_quality(district.id)
    if reading is None:
        st.caption("Qualité de l'air en direct indisponible.")
        return
    level = aqi_level(reading.european_aqi)
    st.markdown(f"#### Qualité de l'air · {level.label}")
    col_aqi, col_pm25, col_o3 = st.columns(3)
    col_aqi.metric("AQI européen", f"{reading.european_aqi:.0f}")
    col_pm25.metric("PM2.5", f"{reading.pm2_5:.1f}")
    col_o3.metric("O₃", f"{reading.ozone:.1f}")
    st.caption(f"{level.description} · {reading.time} · Open-Meteo")


def _render_planting(state: NavigatorState) -> None:
    if not st.session_state.show_planting:
        if st.button("🌱 Prédiction de Plantation", type="primary", use_container_width=True):
            st.session_state.show_planting = True
            _rerun()
        return

    header, close = st.columns([4, 1])
    header.markdown("#### 🌱 Recommandations de Plantation")
    if close.button("Fermer", key="close-planting"):
        st.session_state.show_planting = False
        _rerun()

    params = planting_params_for(state.unit, state.district)
    with st.spinner("Analyse en cours..."):
        result = fetch_planting_simulation(params)
    simulation = result.data
    if not result.live and params is not None:
        st.caption("Impossible de charger les recommandations. Veuillez réessayer.")
        return
    if not has_recommendations(simulation):
        st.caption("Aucune recommandation de plantation disponible pour cette zone.")
        return

    if simulation.summary.total_trees > 0:
        col_trees, col_places = st.columns(2)
        col_trees.metric("Arbres proposés", simulation.summary.total_trees)
        col_places.metric("Lieux identifiés", simulation.summary.total_locations)
    if simulation.generated_at:
        st.caption(f"Généré le : {simulation.generated_at}")

    for plan in simulation.plans:
        label = f"{plan_display_name(plan.plan_type)} ({len(plan.recommendations)} lieux)"
        with st.expander(label):
            for zipcode, recs in group_by_zipcode(plan.recommendations).items():
                st.markdown(f"**📍 {zipcode}** · {len(recs)} lieux")
                st.dataframe(
                    pd.DataFrame(
                        [
                            {
                                "Lieu": rec.target_name,
                                "Type": rec.target_type,
                                "Arbres": rec.recommended_trees,
                                "Priorité": round(rec.priority_score, 3),
                            }
                            for rec in recs
                        ]
                    ),
                    hide_index=True,
                    use_container_width=True,
                )


def _child_buttons(items, prefix: str, on_select) -> None:
    for item in items:
        caption = getattr(item, "type", "")
        label = f"{item.name} · {caption}" if caption else item.name
        if st.button(label, key=f"{prefix}-{item.id}", use_container_width=True):
            on_select(item)
            _rerun()


def _render_green_space(space: GreenSpace) -> None:
    st.caption("🌳 Espace Vert")
    st.subheader(space.name)
    rows: Dict[str, str] = {}
    if space.type:
        rows["Type"] = space.type
    if space.address:
        rows["Adresse"] = space.address
    if space.area:
        rows["Superficie"] = format_area(space.area)
    if space.hours:
        rows["Horaires"] = space.hours
    for key, value in extra_attributes(space):
        rows[key.replace("_", " ")] = value
    for label, value in rows.items():
        left, right = st.columns([1, 2])
        left.caption(label)
        right.write(value)


def _render_panel(units, districts, spaces) -> None:
    navigator = _navigator()
    state = navigator.state

    col_back, col_title, col_close = st.columns([1, 4, 1])
    if state.level is not ViewLevel.CITY and col_back.button("←", key="go-back"):
        navigator.go_back()
        _rerun()
    col_title.markdown(f"### {LEVEL_TITLES[state.level]}")
    if col_close.button("✕", key="close-panel"):
        navigator.close()
        st.session_state.show_planting = False
        _rerun()

    trail = breadcrumb(state)
    if trail:
        st.caption(" › ".join(trail))

    if state.level is ViewLevel.GREEN_SPACE and state.green_space is not None:
        _render_green_space(state.green_space)
    elif state.level is ViewLevel.GREEN_SPACE and state.district is not None:
        st.subheader(state.district.name)
        _render_pollution()
        _render_air_quality(state.district)
        _render_planting(state)
        children = visible_green_spaces(state, spaces)
        st.markdown(f"#### Espaces Verts ({len(children)})")
        if children:
            _child_buttons(children, "space", navigator.select_green_space)
        else:
            st.caption("Aucun espace vert répertorié pour ce quartier.")
    elif state.level is ViewLevel.DISTRICT and state.unit is not None:
        st.subheader(unit_title(state.unit))
        if state.unit.population:
            st.metric("Population", f"{state.unit.population:,.0f}".replace(",", " "))
        if state.unit.area:
            st.metric("Superficie", format_area(state.unit.area))
        _render_planting(state)
        children = visible_districts(state, districts)
        st.markdown(f"#### Quartiers ({len(children)})")
        if children:
            _child_buttons(children, "district", navigator.select_district)
        else:
            st.caption("Aucun quartier trouvé pour cet arrondissement.")
    else:
        st.write("Sélectionnez un arrondissement sur la carte pour explorer ses quartiers et espaces verts.")
        _child_buttons(units, "unit", navigator.select_unit)


def main() -> None:
    _initialise_session_state()

    st.title("🌳 Espaces verts de Paris")
    with st.spinner("Chargement..."):
        units, districts, spaces, boundaries = _load_data()
    _search_box(units, districts, spaces)

    state = _navigator().state
    pollution = fetch_pollution().data if state.level is ViewLevel.CITY else None

    col_map, col_panel = st.columns([1.7, 1.3], gap="large")
    with col_map:
        deck = build_deck(state, units, districts, spaces, boundaries, pollution)
        selection_state = st.pydeck_chart(
            deck,
            use_container_width=True,
            selection_mode="single-object",
            on_select="rerun",
            key=_map_key(state),
        )
        target = selection_to_target(selection_state)
        if target and _apply_target(*target, units, districts, spaces):
            _rerun()
        st.caption(f"🌳 {level_summary(state, units, districts, spaces)}")

    with col_panel:
        _render_panel(units, districts, spaces)


if __name__ == "__main__":
    main()
