"""Data models and field normalisation for the Paris collections."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

POLYGON_TYPES = ("Polygon", "MultiPolygon")

# Raw source fields kept on each entity, beyond the canonical attributes.
UNIT_EXTRA_KEYS = ("c_arinsee", "l_aroff", "surface", "perimetre")
DISTRICT_EXTRA_KEYS = ("c_quinsee", "surface", "perimetre")
GREEN_SPACE_EXTRA_KEYS = (
    "categorie",
    "presence_cloture",
    "ouvert_ferme",
    "annee_ouverture",
    "annee_renovation",
    "ancien_nom_ev",
    "surface_horticole",
    "url_plan",
)


@dataclass(frozen=True)
class AdministrativeUnit:
    id: str
    name: str
    code: str
    zipcode: Optional[str] = None
    population: Optional[float] = None
    area: Optional[float] = None
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class District:
    id: str
    name: str
    unit_id: str = ""
    unit_name: str = ""
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class GreenSpace:
    id: str
    name: str
    district_id: str = ""
    district_name: str = ""
    type: str = "Espace vert"
    address: str = ""
    area: Optional[float] = None
    hours: str = ""
    geometry: Optional[Dict[str, Any]] = field(default=None, compare=False, hash=False)
    lat: Optional[float] = None
    lng: Optional[float] = None
    extras: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class BoundaryFeature:
    geometry: Dict[str, Any] = field(hash=False)
    properties: Dict[str, Any] = field(default_factory=dict, hash=False)


FeatureCollection = Tuple[BoundaryFeature, ...]


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a gateway call: the data plus whether it came from the live API."""

    data: Any
    live: bool
    message: str = ""


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value is False


def first_value(mapping: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the first non-blank value found under ``keys``, in order."""

    for key in keys:
        value = mapping.get(key)
        if not _is_blank(value):
            return value
    return None


def first_text(mapping: Mapping[str, Any], keys: Iterable[str], default: str = "") -> str:
    value = first_value(mapping, keys)
    return default if value is None else str(value)


def first_float(mapping: Mapping[str, Any], keys: Iterable[str]) -> Optional[float]:
    for key in keys:
        value = mapping.get(key)
        if value is None or value == "":
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None


def _extras(item: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    return {key: item[key] for key in keys if item.get(key) is not None}


def _ordinal_unit_name(code: Any) -> str:
    if _is_blank(code):
        return ""
    return f"{code}ème Arrondissement"


def unit_from_record(item: Mapping[str, Any]) -> AdministrativeUnit:
    zipcode = item.get("zipcode")
    zipcode_text = str(zipcode) if not _is_blank(zipcode) else None
    code = zipcode_text[-2:] if zipcode_text else first_text(item, ("code", "c_ar"))
    return AdministrativeUnit(
        id=first_text(item, ("id", "zipcode", "c_ar")),
        name=first_text(
            item, ("zonename", "nom", "l_ar"), default=_ordinal_unit_name(item.get("c_ar") or code)
        ),
        code=code,
        zipcode=zipcode_text,
        population=first_float(item, ("population",)),
        area=first_float(item, ("superficie", "area")),
        extras=_extras(item, UNIT_EXTRA_KEYS),
    )


def district_from_record(item: Mapping[str, Any]) -> District:
    return District(
        id=first_text(item, ("id", "c_qu")),
        name=first_text(item, ("nom", "l_qu", "name")),
        unit_id=first_text(item, ("arrondissement_id", "c_ar")),
        unit_name=first_text(
            item, ("arrondissement", "l_ar"), default=_ordinal_unit_name(item.get("c_ar"))
        ),
        extras=_extras(item, DISTRICT_EXTRA_KEYS),
    )


def parse_geometry(raw: Any) -> Optional[Dict[str, Any]]:
    """Return a Polygon/MultiPolygon mapping from a GeoJSON string or mapping."""

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None
    if isinstance(raw, Mapping) and raw.get("type") in POLYGON_TYPES and raw.get("coordinates"):
        return dict(raw)
    return None


def green_space_from_record(item: Mapping[str, Any]) -> GreenSpace:
    lat = first_float(item, ("lat",))
    lng = first_float(item, ("lng",))
    return GreenSpace(
        id=first_text(item, ("id", "nsq_espace_vert")),
        name=first_text(item, ("nom", "nom_ev", "name")),
        district_id=first_text(item, ("quartier_id", "c_qu")),
        district_name=first_text(item, ("quartier", "l_qu")),
        type=first_text(item, ("type", "type_ev", "categorie"), default="Espace vert"),
        address=first_text(item, ("adresse", "adresse_codepostal")),
        area=first_float(item, ("superficie", "surface_totale_reelle", "total_area")),
        hours=first_text(item, ("horaires", "horaires_ouverture")),
        geometry=parse_geometry(item.get("geom") or item.get("geometry")),
        lat=lat or None,
        lng=lng or None,
        extras=_extras(item, GREEN_SPACE_EXTRA_KEYS),
    )


def feature_from_geojson(obj: Mapping[str, Any]) -> Optional[BoundaryFeature]:
    geometry = parse_geometry(obj.get("geometry"))
    if geometry is None:
        return None
    properties = obj.get("properties") or {}
    return BoundaryFeature(geometry=geometry, properties=dict(properties))


def features_from_geojson(payload: Mapping[str, Any]) -> FeatureCollection:
    features = []
    for raw in payload.get("features") or []:
        if not isinstance(raw, Mapping):
            continue
        feature = feature_from_geojson(raw)
        if feature is None:
            logger.debug("Skipping boundary feature without polygon geometry")
            continue
        features.append(feature)
    return tuple(features)


__all__ = [
    "AdministrativeUnit",
    "District",
    "GreenSpace",
    "BoundaryFeature",
    "FeatureCollection",
    "FetchResult",
    "UNIT_EXTRA_KEYS",
    "DISTRICT_EXTRA_KEYS",
    "GREEN_SPACE_EXTRA_KEYS",
    "first_value",
    "first_text",
    "first_float",
    "parse_geometry",
    "unit_from_record",
    "district_from_record",
    "green_space_from_record",
    "feature_from_geojson",
    "features_from_geojson",
]
