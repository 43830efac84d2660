"""pydeck layers for the navigator state and selection helpers."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import pydeck as pdk

from .constants import (
    BASEMAP_TILE_URL,
    LAYER_COLORS,
    PARIS_CENTER,
    POLLUTION_COLORS,
    QUARTIER_COORDS,
    ZOOM_BY_LEVEL,
)
from .matching import derive_display_coordinate, geometry_center, match_boundary, unit_center
from .models import AdministrativeUnit, BoundaryFeature, District, GreenSpace
from .navigation import NavigatorState, ViewLevel, visible_districts, visible_green_spaces
from .pollution import PollutionData, pollution_for_unit

POLYGON_LAYER_ID = "boundaries"
MARKER_LAYER_ID = "markers"


def view_for(state: NavigatorState) -> Tuple[Tuple[float, float], int]:
    center = unit_center(state.unit) if state.unit is not None else None
    return center or PARIS_CENTER, ZOOM_BY_LEVEL[state.level.value]


def interpolate_colors(
    values: Mapping[str, float], colors: Optional[List[List[int]]] = None
) -> Dict[str, List[int]]:
    """Map each value to a colour along the palette, scaled min-max."""

    if not values:
        return {}
    keys = list(values)
    raw = np.array([values[k] for k in keys], dtype=float)
    vmin, vmax = float(raw.min()), float(raw.max())
    if math.isclose(vmin, vmax):
        vmax = vmin + 1e-6
    normalized = (raw - vmin) / (vmax - vmin)
    palette = np.array(colors if colors else POLLUTION_COLORS, dtype=float)
    if palette.shape[0] < 2:
        palette = np.vstack([palette, palette])
    stops = np.linspace(0.0, 1.0, palette.shape[0])
    channels = [np.interp(normalized, stops, palette[:, i]) for i in range(3)]
    rgb = np.clip(np.column_stack(channels), 0, 255).astype(int)
    return {key: [int(v) for v in rgb[i]] for i, key in enumerate(keys)}


def _feature_dict(
    feature: BoundaryFeature,
    kind: str,
    entity_id: str,
    name: str,
    selected: bool,
    fill: Optional[List[int]] = None,
) -> Dict[str, Any]:
    colors = LAYER_COLORS[kind]
    return {
        "type": "Feature",
        "geometry": feature.geometry,
        "properties": {
            "kind": kind,
            "id": entity_id,
            "name": name,
            "fill_color": fill or colors["selected_fill" if selected else "fill"],
            "line_color": colors["selected_line" if selected else "line"],
        },
    }


def _green_space_feature(space: GreenSpace, features: Sequence[BoundaryFeature]) -> Optional[BoundaryFeature]:
    if space.geometry:
        return BoundaryFeature(geometry=space.geometry, properties={"nom": space.name})
    return match_boundary(space, features)


def district_center(
    district: Optional[District], feature: Optional[BoundaryFeature], unit: Optional[AdministrativeUnit]
) -> Optional[Tuple[float, float]]:
    if feature is not None:
        center = geometry_center(feature.geometry)
        if center is not None:
            return center
    if district is not None and district.id in QUARTIER_COORDS:
        return QUARTIER_COORDS[district.id]
    return unit_center(unit)


def _marker(lat: float, lon: float, kind: str, entity_id: str, name: str, detail: str = "") -> Dict[str, Any]:
    return {
        "lat": lat,
        "lon": lon,
        "kind": kind,
        "id": entity_id,
        "name": name,
        "detail": detail,
        "color": LAYER_COLORS[kind]["marker"],
    }


def layer_data(
    state: NavigatorState,
    units: Sequence[AdministrativeUnit],
    districts: Sequence[District],
    spaces: Sequence[GreenSpace],
    boundaries: Mapping[str, Sequence[BoundaryFeature]],
    pollution: Optional[PollutionData] = None,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Return ``(polygon features, marker rows)`` for the current level."""

    unit_features = boundaries.get("units") or ()
    district_features = boundaries.get("districts") or ()
    space_features = boundaries.get("green_spaces") or ()
    polygons: List[Dict[str, Any]] = []
    markers: List[Dict[str, Any]] = []

    if state.level is ViewLevel.CITY:
        fills: Dict[str, List[int]] = {}
        if pollution is not None:
            readings = {}
            for unit in units:
                record = pollution_for_unit(pollution, unit)
                if record is not None:
                    readings[unit.id] = record.urban_index
            fills = {key: color + [110] for key, color in interpolate_colors(readings).items()}
        for unit in units:
            feature = match_boundary(unit, unit_features)
            if feature is not None:
                polygons.append(_feature_dict(feature, "unit", unit.id, unit.name, False, fills.get(unit.id)))
        if not unit_features:
            for unit in units:
                coords = unit_center(unit)
                if coords is None:
                    continue
                markers.append(_marker(coords[0], coords[1], "unit", unit.id, unit.name))
        return polygons, markers

    unit_feature = match_boundary(state.unit, unit_features) if state.unit is not None else None
    if unit_feature is not None:
        polygons.append(
            _feature_dict(unit_feature, "unit", state.unit.id, state.unit.name, state.level is ViewLevel.DISTRICT)
        )
    base = unit_center(state.unit)

    if state.level is ViewLevel.DISTRICT:
        for index, district in enumerate(visible_districts(state, districts)):
            feature = match_boundary(district, district_features)
            if feature is not None:
                polygons.append(_feature_dict(feature, "district", district.id, district.name, False))
            lat, lon = derive_display_coordinate(district, index, feature, base)
            markers.append(_marker(lat, lon, "district", district.id, district.name))
        return polygons, markers

    district_feature = match_boundary(state.district, district_features) if state.district is not None else None
    if district_feature is not None:
        polygons.append(
            _feature_dict(district_feature, "district", state.district.id, state.district.name, True)
        )
    space_base = district_center(state.district, district_feature, state.unit)
    selected_id = state.green_space.id if state.green_space is not None else None
    for index, space in enumerate(visible_green_spaces(state, spaces)):
        feature = _green_space_feature(space, space_features)
        if feature is not None:
            polygons.append(
                _feature_dict(feature, "green_space", space.id, space.name, space.id == selected_id)
            )
        lat, lon = derive_display_coordinate(space, index, feature, space_base)
        markers.append(_marker(lat, lon, "green_space", space.id, space.name, space.type))
    return polygons, markers


def build_deck(
    state: NavigatorState,
    units: Sequence[AdministrativeUnit],
    districts: Sequence[District],
    spaces: Sequence[GreenSpace],
    boundaries: Mapping[str, Sequence[BoundaryFeature]],
    pollution: Optional[PollutionData] = None,
    basemap_tile_url: Optional[str] = BASEMAP_TILE_URL,
) -> pdk.Deck:
    center, zoom = view_for(state)
    view_state = pdk.ViewState(latitude=center[0], longitude=center[1], zoom=zoom, pitch=0)
    polygons, markers = layer_data(state, units, districts, spaces, boundaries, pollution)

    layers = []
    if basemap_tile_url:
        layers.append(
            pdk.Layer(
                "TileLayer",
                data=basemap_tile_url,
                id="base-map",
                min_zoom=0,
                max_zoom=19,
                tile_size=256,
                pickable=False,
            )
        )
    if polygons:
        layers.append(
            pdk.Layer(
                "GeoJsonLayer",
                data={"type": "FeatureCollection", "features": polygons},
                id=POLYGON_LAYER_ID,
                get_fill_color="properties.fill_color",
                get_line_color="properties.line_color",
                line_width_min_pixels=1,
                pickable=True,
                auto_highlight=True,
            )
        )
    if markers:
        layers.append(
            pdk.Layer(
                "ScatterplotLayer",
                data=pd.DataFrame(markers),
                id=MARKER_LAYER_ID,
                get_position="[lon, lat]",
                get_fill_color="color",
                get_line_color=[255, 255, 255, 255],
                get_radius=60,
                radius_min_pixels=6,
                radius_max_pixels=14,
                stroked=True,
                line_width_min_pixels=2,
                pickable=True,
                auto_highlight=True,
            )
        )

    return pdk.Deck(
        map_style=None,
        initial_view_state=view_state,
        layers=layers,
        tooltip={
            "html": "<b>{name}</b>",
            "style": {"backgroundColor": "#14532d", "color": "#f8fafc"},
        },
    )


def _target_from_object(obj: Mapping[str, Any]) -> Optional[Tuple[str, str]]:
    properties = obj.get("properties")
    source = properties if isinstance(properties, Mapping) else obj
    kind = source.get("kind")
    entity_id = source.get("id")
    if kind and entity_id is not None:
        return str(kind), str(entity_id)
    return None


def selection_to_target(selection: Optional[Mapping[str, Any]]) -> Optional[Tuple[str, str]]:
    """Extract ``(kind, id)`` of the clicked polygon or marker from a pydeck event."""

    if not selection:
        return None
    event = selection.get("selection")
    if not event:
        return None
    objects_by_layer = event.get("objects")
    if not objects_by_layer:
        return None
    for layer_id in (MARKER_LAYER_ID, POLYGON_LAYER_ID):
        for obj in objects_by_layer.get(layer_id, []):
            target = _target_from_object(obj)
            if target:
                return target
    return None


__all__ = [
    "POLYGON_LAYER_ID",
    "MARKER_LAYER_ID",
    "view_for",
    "interpolate_colors",
    "district_center",
    "layer_data",
    "build_deck",
    "selection_to_target",
]
