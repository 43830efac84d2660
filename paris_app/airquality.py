"""Live air quality per quartier, backed by the Open-Meteo API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import requests
import streamlit as st

from .constants import AIR_QUALITY_API, AIR_QUALITY_TTL, HTTP_TIMEOUT, PARIS_CENTER, QUARTIER_COORDS

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "pm10,pm2_5,ozone,nitrogen_dioxide,european_aqi"


@dataclass(frozen=True)
class AirQuality:
    european_aqi: float
    pm10: float
    pm2_5: float
    ozone: float
    nitrogen_dioxide: float
    time: str


@dataclass(frozen=True)
class AirQualityLevel:
    label: str
    color: str
    description: str


def aqi_level(aqi: float) -> AirQualityLevel:
    """European AQI bands."""

    if aqi <= 20:
        return AirQualityLevel("Excellent", "#16a34a", "Air quality is excellent")
    if aqi <= 40:
        return AirQualityLevel("Bon", "#65a30d", "Air quality is good")
    if aqi <= 60:
        return AirQualityLevel("Modéré", "#ca8a04", "Moderate air quality")
    if aqi <= 80:
        return AirQualityLevel("Médiocre", "#ea580c", "Poor air quality")
    if aqi <= 100:
        return AirQualityLevel("Mauvais", "#dc2626", "Very poor air quality")
    return AirQualityLevel("Très mauvais", "#9333ea", "Extremely poor air quality")


def _value(current: dict, key: str) -> float:
    value = current.get(key)
    return float(value) if value is not None else 0.0


@st.cache_data(show_spinner=False, ttl=AIR_QUALITY_TTL)
def fetch_air_quality(district_id: Optional[str]) -> Optional[AirQuality]:
    """Return current air-quality readings at the quartier's approximate centre."""

    if not district_id:
        return None
    coords = QUARTIER_COORDS.get(district_id)
    if coords is None:
        logger.info("No coordinates for quartier %s, using Paris centre", district_id)
        coords = PARIS_CENTER
    lat, lon = coords

    try:
        response = requests.get(
            AIR_QUALITY_API,
            params={"latitude": lat, "longitude": lon, "current": CURRENT_FIELDS},
            timeout=HTTP_TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()
    except Exception as exc:
        logger.warning("Air quality API error: %s", exc)
        return None

    current = payload.get("current") if isinstance(payload, dict) else None
    if not current:
        return None
    return AirQuality(
        european_aqi=_value(current, "european_aqi"),
        pm10=_value(current, "pm10"),
        pm2_5=_value(current, "pm2_5"),
        ozone=_value(current, "ozone"),
        nitrogen_dioxide=_value(current, "nitrogen_dioxide"),
        time=str(current.get("time") or datetime.now().isoformat(timespec="minutes")),
    )


__all__ = ["AirQuality", "AirQualityLevel", "aqi_level", "fetch_air_quality"]
