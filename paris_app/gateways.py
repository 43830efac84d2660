"""Remote collection and boundary gateways with offline fallbacks."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import requests
import streamlit as st

from .constants import (
    BOUNDARY_ENDPOINTS,
    BOUNDARY_TTL,
    COLLECTION_ENDPOINTS,
    COLLECTION_LABELS,
    COLLECTION_TTL,
    HTTP_TIMEOUT,
)
from .fallback import FALLBACK_BOUNDARIES, FALLBACK_COLLECTIONS
from .matching import locate_feature
from .models import (
    BoundaryFeature,
    FetchResult,
    GreenSpace,
    district_from_record,
    features_from_geojson,
    first_text,
    green_space_from_record,
    unit_from_record,
)

logger = logging.getLogger(__name__)

COLLECTION_KINDS = tuple(COLLECTION_ENDPOINTS)

_PARSERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "units": unit_from_record,
    "districts": district_from_record,
    "green_spaces": green_space_from_record,
}


class EmptyPayload(ValueError):
    """Raised when the API answers successfully but without any record."""


def get_json(url: str, params: Optional[Dict[str, Any]] = None) -> Any:
    response = requests.get(url, params=params, timeout=HTTP_TIMEOUT)
    response.raise_for_status()
    return response.json()


def _records(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, list):
            return data
    return []


def _parse_records(kind: str, records: Sequence[Any]) -> Tuple[Any, ...]:
    parser = _PARSERS[kind]
    items = []
    for raw in records:
        if not isinstance(raw, Mapping):
            logger.debug("Skipping non-object %s record: %r", kind, raw)
            continue
        try:
            item = parser(raw)
        except (TypeError, ValueError) as exc:
            logger.debug("Skipping malformed %s record: %s", kind, exc)
            continue
        if not item.name:
            logger.debug("Skipping unnamed %s record %r", kind, item.id)
            continue
        items.append(item)
    return tuple(items)


def _check_kind(kind: str, known: Mapping[str, Any]) -> None:
    if kind not in known:
        raise ValueError(f"Unknown collection kind: {kind!r}")


def assign_districts(
    spaces: Sequence[GreenSpace], district_features: Sequence[BoundaryFeature]
) -> Tuple[GreenSpace, ...]:
    """Fill missing quartier links by locating each green space's point."""

    if not district_features:
        return tuple(spaces)
    resolved = []
    for space in spaces:
        linked = space.district_id and space.district_name
        if linked or space.lat is None or space.lng is None:
            resolved.append(space)
            continue
        found = locate_feature(space.lat, space.lng, district_features)
        if found is None:
            resolved.append(space)
            continue
        resolved.append(
            replace(
                space,
                district_id=first_text(found.properties, ("c_qu", "c_quinsee")),
                district_name=first_text(found.properties, ("l_qu",)),
            )
        )
    return tuple(resolved)


@st.cache_data(show_spinner=False, ttl=BOUNDARY_TTL)
def fetch_boundaries(kind: str) -> FetchResult:
    """Return the GeoJSON boundary features for a collection kind."""

    _check_kind(kind, BOUNDARY_ENDPOINTS)
    label = COLLECTION_LABELS[kind]
    try:
        payload = get_json(BOUNDARY_ENDPOINTS[kind])
        if not isinstance(payload, Mapping):
            raise ValueError("GeoJSON payload is not an object")
        features = features_from_geojson(payload)
    except Exception as exc:
        logger.info("Using fallback %s boundaries: %s", label, exc)
        return FetchResult(
            FALLBACK_BOUNDARIES[kind],
            live=False,
            message=f"Approximate {label.lower()} boundaries in use.",
        )
    logger.info("Loaded %d %s boundaries", len(features), label)
    return FetchResult(features, live=True, message=f"{len(features)} {label.lower()} boundaries loaded.")


@st.cache_data(show_spinner=False, ttl=COLLECTION_TTL)
def fetch_collection(kind: str) -> FetchResult:
    """Fetch one entity collection, substituting the fallback on any failure."""

    _check_kind(kind, COLLECTION_ENDPOINTS)
    label = COLLECTION_LABELS[kind]
    try:
        items = _parse_records(kind, _records(get_json(COLLECTION_ENDPOINTS[kind])))
        if not items:
            raise EmptyPayload("Empty data received")
    except Exception as exc:
        logger.warning("API error (%s), using fallback data: %s", label, exc)
        return FetchResult(
            FALLBACK_COLLECTIONS[kind],
            live=False,
            message=f"Offline Mode ({label}): {exc}",
        )

    if kind == "green_spaces":
        items = assign_districts(items, fetch_boundaries("districts").data)

    logger.info("Loaded %d %s from the live API", len(items), label)
    return FetchResult(
        items,
        live=True,
        message=f"Connected to Live Data: loaded {len(items)} {label.lower()}",
    )


def fetch_units() -> FetchResult:
    return fetch_collection("units")


def fetch_districts() -> FetchResult:
    return fetch_collection("districts")


def fetch_green_spaces() -> FetchResult:
    return fetch_collection("green_spaces")


__all__ = [
    "COLLECTION_KINDS",
    "EmptyPayload",
    "get_json",
    "assign_districts",
    "fetch_boundaries",
    "fetch_collection",
    "fetch_units",
    "fetch_districts",
    "fetch_green_spaces",
]
