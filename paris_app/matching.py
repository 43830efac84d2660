"""Boundary matching and marker placement for Paris entities.

Boundary features come from open-data exports that are not keyed by the
entity identifiers, so each entity kind is matched heuristically:

* arrondissements by numeric code (``c_ar``/``code_arr``/``c_arinsee``),
  accepting the INSEE form ``751NN``;
* quartiers by exact, case-insensitive name;
* green spaces by case-insensitive substring match in either direction.

When nothing matches, markers are laid out on a golden-angle spiral around
the parent centre so siblings never overlap and the layout is reproducible.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from shapely.errors import ShapelyError
from shapely.geometry import Point, shape

from .constants import (
    ARRONDISSEMENT_COORDS,
    GOLDEN_ANGLE_DEG,
    INSEE_UNIT_PREFIX,
    PARIS_CENTER,
    SPIRAL_OFFSETS,
)
from .models import AdministrativeUnit, BoundaryFeature, District, GreenSpace

Entity = Union[AdministrativeUnit, District, GreenSpace]
LatLng = Tuple[float, float]

UNIT_CODE_KEYS = ("c_ar", "code_arr", "c_arinsee")
DISTRICT_NAME_KEYS = ("l_qu", "nom")
GREEN_SPACE_NAME_KEYS = ("nom", "nom_ev")


def _digits(value: Any) -> Optional[int]:
    cleaned = re.sub(r"\D", "", str(value))
    if not cleaned:
        return None
    return int(cleaned)


def unit_code(unit: AdministrativeUnit) -> Optional[int]:
    return _digits(unit.code or unit.id)


def _property(properties: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = properties.get(key)
        if value not in (None, ""):
            return value
    return None


def _feature_name(feature: BoundaryFeature, keys: Iterable[str]) -> str:
    value = _property(feature.properties, keys)
    return value.lower() if isinstance(value, str) else ""


def _unit_matches(code: int, feature: BoundaryFeature) -> bool:
    candidate = _property(feature.properties, UNIT_CODE_KEYS)
    if isinstance(candidate, bool):
        return False
    if isinstance(candidate, (int, float)):
        return candidate == code
    if isinstance(candidate, str):
        parsed = _digits(candidate)
        return parsed is not None and parsed in (code, INSEE_UNIT_PREFIX + code)
    return False


def match_boundary(
    entity: Entity, features: Optional[Sequence[BoundaryFeature]]
) -> Optional[BoundaryFeature]:
    """Return the first boundary feature describing ``entity``, if any."""

    if not features:
        return None
    if isinstance(entity, AdministrativeUnit):
        code = unit_code(entity)
        if code is None:
            return None
        return next((f for f in features if _unit_matches(code, f)), None)
    if isinstance(entity, District):
        name = entity.name.lower()
        return next((f for f in features if _feature_name(f, DISTRICT_NAME_KEYS) == name), None)
    if isinstance(entity, GreenSpace):
        name = entity.name.lower()
        if not name:
            return None
        for feature in features:
            feature_name = _feature_name(feature, GREEN_SPACE_NAME_KEYS)
            if feature_name and (name in feature_name or feature_name in name):
                return feature
    return None


def geometry_center(geometry: Optional[Mapping[str, Any]]) -> Optional[LatLng]:
    """Bounding-box centre of a GeoJSON geometry as ``(lat, lng)``."""

    if not geometry:
        return None
    try:
        geom = shape(geometry)
        if geom.is_empty:
            return None
        west, south, east, north = geom.bounds
    except (ShapelyError, TypeError, ValueError, KeyError, IndexError, AttributeError):
        return None
    if not all(math.isfinite(v) for v in (west, south, east, north)):
        return None
    return (south + north) / 2, (west + east) / 2


def spiral_coordinate(index: int, base: LatLng, offset: float) -> LatLng:
    angle = math.radians(index * GOLDEN_ANGLE_DEG)
    radius = math.sqrt(index + 1) * offset * 0.5
    return base[0] + math.cos(angle) * radius, base[1] + math.sin(angle) * radius


def unit_center(unit: Optional[AdministrativeUnit]) -> Optional[LatLng]:
    if unit is None:
        return None
    code = unit_code(unit)
    if code is None:
        return None
    return ARRONDISSEMENT_COORDS.get(str(code))


def _entity_kind(entity: Entity) -> str:
    return "green_space" if isinstance(entity, GreenSpace) else "district"


def derive_display_coordinate(
    entity: Entity,
    index: int,
    matched_feature: Optional[BoundaryFeature] = None,
    parent_center: Optional[LatLng] = None,
) -> LatLng:
    """Return the marker position for ``entity``.

    Prefers the entity's own geometry, then the matched feature, then an
    explicit point; otherwise places it on the spiral around ``parent_center``.
    """

    geometry = getattr(entity, "geometry", None) or (
        matched_feature.geometry if matched_feature is not None else None
    )
    center = geometry_center(geometry)
    if center is not None:
        return center

    lat = getattr(entity, "lat", None)
    lng = getattr(entity, "lng", None)
    if isinstance(lat, (int, float)) and isinstance(lng, (int, float)):
        return float(lat), float(lng)

    base = parent_center or PARIS_CENTER
    return spiral_coordinate(index, base, SPIRAL_OFFSETS[_entity_kind(entity)])


def locate_feature(
    lat: float, lng: float, features: Sequence[BoundaryFeature]
) -> Optional[BoundaryFeature]:
    """Return the first feature whose polygon contains the point."""

    point = Point(lng, lat)
    for feature in features:
        try:
            if shape(feature.geometry).contains(point):
                return feature
        except (ShapelyError, TypeError, ValueError, KeyError, IndexError, AttributeError):
            continue
    return None


__all__ = [
    "match_boundary",
    "geometry_center",
    "spiral_coordinate",
    "unit_code",
    "unit_center",
    "derive_display_coordinate",
    "locate_feature",
]
