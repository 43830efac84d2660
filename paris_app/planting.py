"""Tree-planting simulation queries and result grouping."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from statistics import mean
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import streamlit as st

from .constants import PLAN_DISPLAY, PLANTING_API, PLANTING_TTL
from .gateways import get_json
from .matching import unit_code
from .models import AdministrativeUnit, District, FetchResult, first_float, first_text

logger = logging.getLogger(__name__)

ZONE_TYPES = ("arrondissement", "quartier", "espace_vert")
DEFAULT_PLANS = "impact_max,biodiversite"


@dataclass(frozen=True)
class PlantingParams:
    zone_type: str
    zone_id: str
    include_roads: bool = True
    use_species_per_ev: bool = False
    top_k: int = 20
    max_per_road: int = 8
    plans: str = DEFAULT_PLANS

    def __post_init__(self) -> None:
        if self.zone_type not in ZONE_TYPES:
            raise ValueError(f"zone_type must be one of {', '.join(ZONE_TYPES)}")

    def query(self) -> Dict[str, str]:
        return {
            "zone_type": self.zone_type,
            "zone_id": str(self.zone_id),
            "include_roads": str(self.include_roads).lower(),
            "use_species_per_ev": str(self.use_species_per_ev).lower(),
            "top_k": str(self.top_k),
            "max_per_road": str(self.max_per_road),
            "plans": self.plans,
        }


@dataclass(frozen=True)
class Recommendation:
    target_type: str
    target_id: str
    target_name: str
    priority_score: float
    recommended_trees: int
    zipcode: Optional[str] = None
    trees_count: Optional[float] = None
    possible_trees: Optional[float] = None
    deficit: Optional[float] = None
    capacity_norm: Optional[float] = None


@dataclass(frozen=True)
class PlantingPlan:
    plan_type: str
    recommendations: Tuple[Recommendation, ...]
    params: Dict[str, Any] = field(default_factory=dict, hash=False)
    count: Optional[int] = None


@dataclass(frozen=True)
class PlantingSummary:
    total_trees: int = 0
    total_locations: int = 0
    average_priority_score: float = 0.0


@dataclass(frozen=True)
class PlantingSimulation:
    zone_type: str
    zone_id: str
    plans: Tuple[PlantingPlan, ...]
    summary: PlantingSummary
    generated_at: Optional[str] = None


def planting_params_for(
    unit: Optional[AdministrativeUnit], district: Optional[District]
) -> Optional[PlantingParams]:
    """Zone parameters for the current selection; the quartier wins over the arrondissement."""

    if district is not None:
        return PlantingParams("quartier", district.id, max_per_road=10)
    if unit is None:
        return None
    zone_id = unit.zipcode
    if not zone_id:
        code = unit_code(unit) if unit.code else None
        zone_id = f"750{code:02d}" if code is not None else unit.id
    return PlantingParams("arrondissement", zone_id, max_per_road=10)


def _recommendation(raw: Mapping[str, Any]) -> Recommendation:
    features = raw.get("features") or {}
    zipcode = raw.get("zipcode")
    return Recommendation(
        target_type=first_text(raw, ("target_type",), default="unknown"),
        target_id=first_text(raw, ("target_id",), default="unknown"),
        target_name=first_text(raw, ("target_name",), default="Unknown Location"),
        priority_score=first_float(raw, ("score_priorite",)) or 0.0,
        recommended_trees=int(first_float(raw, ("nb_arbres_recommande",)) or 1),
        zipcode=str(zipcode) if zipcode else None,
        trees_count=first_float(raw, ("trees_count",)),
        possible_trees=first_float(raw, ("nb_arbres_possible",)),
        deficit=first_float(features, ("deficit",)),
        capacity_norm=first_float(features, ("capacity_norm",)),
    )


def summarise(plans: Sequence[PlantingPlan]) -> PlantingSummary:
    recommendations = [rec for plan in plans for rec in plan.recommendations]
    if not recommendations:
        return PlantingSummary()
    return PlantingSummary(
        total_trees=sum(rec.recommended_trees for rec in recommendations),
        total_locations=len({rec.target_id for rec in recommendations}),
        average_priority_score=mean(rec.priority_score for rec in recommendations),
    )


def parse_simulation(params: PlantingParams, payload: Mapping[str, Any]) -> PlantingSimulation:
    plans = []
    raw_plans = payload.get("plans")
    if isinstance(raw_plans, list):
        for raw in raw_plans:
            results = raw.get("results") or raw.get("recommendations") or []
            recommendations = tuple(
                _recommendation(item) for item in results if isinstance(item, Mapping)
            ) if isinstance(results, list) else ()
            count = raw.get("count")
            plans.append(
                PlantingPlan(
                    plan_type=first_text(raw, ("plan_id",), default="unknown"),
                    recommendations=recommendations,
                    params=dict(raw.get("params") or {}),
                    count=int(count) if isinstance(count, (int, float)) else None,
                )
            )
    plans_tuple = tuple(plans)
    return PlantingSimulation(
        zone_type=params.zone_type,
        zone_id=str(params.zone_id),
        plans=plans_tuple,
        summary=summarise(plans_tuple),
        generated_at=payload.get("generated_at"),
    )


@st.cache_data(show_spinner=False, ttl=PLANTING_TTL)
def _cached_simulation(query: Tuple[Tuple[str, Any], ...]) -> FetchResult:
    params = PlantingParams(**dict(query))
    try:
        payload = get_json(PLANTING_API, params=params.query())
        simulation = parse_simulation(params, payload)
    except Exception as exc:
        logger.warning("Planting simulation API error: %s", exc)
        return FetchResult(None, live=False, message=f"Planting simulation unavailable: {exc}")
    return FetchResult(simulation, live=True, message="Planting simulation loaded.")


def fetch_planting_simulation(params: Optional[PlantingParams]) -> FetchResult:
    """Run the planting simulation for a zone; ``None`` params yield no data."""

    if params is None:
        return FetchResult(None, live=False, message="No zone selected.")
    return _cached_simulation(tuple(sorted(asdict(params).items())))


def group_by_zipcode(
    recommendations: Sequence[Recommendation],
) -> Dict[str, Tuple[Recommendation, ...]]:
    groups: Dict[str, list] = {}
    for rec in recommendations:
        groups.setdefault(rec.zipcode or "Autre", []).append(rec)
    return {key: tuple(recs) for key, recs in groups.items()}


def plan_display_name(plan_type: str) -> str:
    return PLAN_DISPLAY.get(plan_type, plan_type.replace("_", " "))


def has_recommendations(simulation: Optional[PlantingSimulation]) -> bool:
    return simulation is not None and any(plan.recommendations for plan in simulation.plans)


__all__ = [
    "ZONE_TYPES",
    "PlantingParams",
    "Recommendation",
    "PlantingPlan",
    "PlantingSummary",
    "PlantingSimulation",
    "planting_params_for",
    "summarise",
    "parse_simulation",
    "fetch_planting_simulation",
    "group_by_zipcode",
    "plan_display_name",
    "has_recommendations",
]
