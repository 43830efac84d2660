"""Support modules for the Paris green-space explorer Streamlit app."""

from . import (  # noqa: F401
    airquality,
    constants,
    details,
    fallback,
    gateways,
    maps,
    matching,
    models,
    navigation,
    planting,
    pollution,
    search,
)

__all__ = [
    "airquality",
    "constants",
    "details",
    "fallback",
    "gateways",
    "maps",
    "matching",
    "models",
    "navigation",
    "planting",
    "pollution",
    "search",
]
