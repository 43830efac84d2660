"""Pollution readings per arrondissement and level classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from statistics import mean
from typing import Dict, Optional, Tuple

import streamlit as st

from .constants import POLLUTION_API, POLLUTION_DEFAULT_DAYS, POLLUTION_TTL
from .gateways import get_json
from .matching import unit_code
from .models import AdministrativeUnit, FetchResult, first_float, first_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollutionRecord:
    zipcode: str
    no2: float
    pm10: float
    urban_index: float
    level: str


@dataclass(frozen=True)
class PollutionAverage:
    no2: float = 0.0
    pm10: float = 0.0
    urban_index: float = 0.0


@dataclass(frozen=True)
class PollutionData:
    period: str
    source: str
    records: Tuple[PollutionRecord, ...]
    average: PollutionAverage


@dataclass(frozen=True)
class PollutionLevel:
    label: str
    color: str
    description: str


_LEVELS: Dict[str, PollutionLevel] = {
    "faible": PollutionLevel("Faible", "#16a34a", "Qualité de l'air excellente"),
    "modéré": PollutionLevel("Modéré", "#ca8a04", "Qualité de l'air modérée"),
    "élevé": PollutionLevel("Élevé", "#ea580c", "Qualité de l'air médiocre"),
    "très élevé": PollutionLevel("Très élevé", "#dc2626", "Qualité de l'air mauvaise"),
}
_LEVEL_ALIASES = {
    "modere": "modéré",
    "eleve": "élevé",
    "tres eleve": "très élevé",
}


def pollution_level(niveau: str) -> PollutionLevel:
    key = (niveau or "").strip().lower()
    key = _LEVEL_ALIASES.get(key, key)
    return _LEVELS.get(key, PollutionLevel(niveau, "#4b5563", "Niveau inconnu"))


def pollution_level_by_value(pm10: float) -> PollutionLevel:
    if pm10 <= 20:
        return _LEVELS["faible"]
    if pm10 <= 40:
        return _LEVELS["modéré"]
    if pm10 <= 60:
        return _LEVELS["élevé"]
    return _LEVELS["très élevé"]


def default_period(today: Optional[date] = None) -> Tuple[str, str]:
    end = today or date.today()
    start = end - timedelta(days=POLLUTION_DEFAULT_DAYS)
    return start.isoformat(), end.isoformat()


def _average(records: Tuple[PollutionRecord, ...]) -> PollutionAverage:
    if not records:
        return PollutionAverage()
    return PollutionAverage(
        no2=mean(r.no2 for r in records),
        pm10=mean(r.pm10 for r in records),
        urban_index=mean(r.urban_index for r in records),
    )


def parse_pollution(payload: Dict) -> PollutionData:
    records = []
    for item in payload.get("resultats") or []:
        records.append(
            PollutionRecord(
                zipcode=first_text(item, ("zipcode",)),
                no2=first_float(item, ("NO2_moyenne",)) or 0.0,
                pm10=first_float(item, ("PM10_moyenne",)) or 0.0,
                urban_index=first_float(item, ("indice_urbain",)) or 0.0,
                level=first_text(item, ("niveau",)),
            )
        )
    records_tuple = tuple(records)
    return PollutionData(
        period=str(payload.get("periode") or ""),
        source=str(payload.get("source_pollution") or ""),
        records=records_tuple,
        average=_average(records_tuple),
    )


@st.cache_data(show_spinner=False, ttl=POLLUTION_TTL)
def fetch_pollution(start_date: Optional[str] = None, end_date: Optional[str] = None) -> FetchResult:
    """Return pollution averages for every arrondissement over a date range."""

    default_start, default_end = default_period()
    params = {"start_date": start_date or default_start, "end_date": end_date or default_end}
    try:
        payload = get_json(POLLUTION_API, params=params)
        data = parse_pollution(payload)
    except Exception as exc:
        logger.warning("Pollution API error: %s", exc)
        return FetchResult(None, live=False, message=f"Pollution data unavailable: {exc}")
    return FetchResult(data, live=True, message=f"Pollution data for {data.period or params['start_date']}")


def pollution_for_unit(
    data: Optional[PollutionData], unit: Optional[AdministrativeUnit]
) -> Optional[PollutionRecord]:
    if data is None or unit is None:
        return None
    zipcode = unit.zipcode
    if not zipcode:
        code = unit_code(unit)
        if code is None:
            return None
        zipcode = f"750{code:02d}"
    return next((r for r in data.records if r.zipcode == zipcode), None)


__all__ = [
    "PollutionRecord",
    "PollutionAverage",
    "PollutionData",
    "PollutionLevel",
    "pollution_level",
    "pollution_level_by_value",
    "default_period",
    "parse_pollution",
    "fetch_pollution",
    "pollution_for_unit",
]
