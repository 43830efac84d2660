"""Shared constants for the Paris green-space explorer."""

from __future__ import annotations

import os
from typing import Dict, Tuple


API_BASE = os.getenv("PARIS_API_BASE", "https://0ywkwjo2v9.execute-api.eu-west-3.amazonaws.com")
POLLUTION_API = os.getenv(
    "PARIS_POLLUTION_API", "https://nx1hao3rlc.execute-api.eu-west-3.amazonaws.com/pollution"
)
PARIS_OPENDATA_BASE = os.getenv(
    "PARIS_OPENDATA_BASE", "https://opendata.paris.fr/api/explore/v2.1/catalog/datasets"
)
PLANTING_API = f"{API_BASE}/planting_simulation"
AIR_QUALITY_API = "https://air-quality-api.open-meteo.com/v1/air-quality"

COLLECTION_ENDPOINTS: Dict[str, str] = {
    "units": f"{API_BASE}/arrondissements",
    "districts": f"{API_BASE}/quartiers",
    "green_spaces": f"{API_BASE}/espaces-verts",
}

BOUNDARY_ENDPOINTS: Dict[str, str] = {
    "units": f"{PARIS_OPENDATA_BASE}/arrondissements/exports/geojson",
    "districts": f"{PARIS_OPENDATA_BASE}/quartier_paris/exports/geojson",
    "green_spaces": f"{PARIS_OPENDATA_BASE}/espaces_verts/exports/geojson",
}

COLLECTION_LABELS: Dict[str, str] = {
    "units": "Arrondissements",
    "districts": "Quartiers",
    "green_spaces": "Espaces Verts",
}

HTTP_TIMEOUT = 20  # seconds

# Freshness windows, in seconds.
COLLECTION_TTL = 5 * 60
BOUNDARY_TTL = 24 * 3600
POLLUTION_TTL = 5 * 60
PLANTING_TTL = 10 * 60
AIR_QUALITY_TTL = 5 * 60

POLLUTION_DEFAULT_DAYS = 180

PARIS_CENTER: Tuple[float, float] = (48.8566, 2.3522)
INSEE_UNIT_PREFIX = 75100

ZOOM_BY_LEVEL = {
    "city": 12,
    "district": 14,
    "green_space": 15,
}

# Golden-angle spiral used to place markers that have no geometry.
GOLDEN_ANGLE_DEG = 137.5
SPIRAL_OFFSETS = {
    "district": 0.005,
    "green_space": 0.003,
}

ARRONDISSEMENT_COORDS: Dict[str, Tuple[float, float]] = {
    "1": (48.8605, 2.3426),
    "2": (48.8683, 2.3431),
    "3": (48.8654, 2.3612),
    "4": (48.8543, 2.3574),
    "5": (48.8448, 2.3493),
    "6": (48.8495, 2.3324),
    "7": (48.8577, 2.3119),
    "8": (48.8743, 2.3099),
    "9": (48.8765, 2.3372),
    "10": (48.8764, 2.3603),
    "11": (48.8603, 2.3793),
    "12": (48.8406, 2.3888),
    "13": (48.8322, 2.3561),
    "14": (48.8313, 2.3254),
    "15": (48.8412, 2.2989),
    "16": (48.8638, 2.2769),
    "17": (48.8872, 2.3048),
    "18": (48.8924, 2.3444),
    "19": (48.8817, 2.3825),
    "20": (48.8639, 2.3985),
}

QUARTIER_COORDS: Dict[str, Tuple[float, float]] = {
    "q1": (48.8597, 2.3412),
    "q2": (48.8619, 2.3451),
    "q3": (48.8643, 2.3377),
    "q4": (48.8679, 2.3296),
    "q5": (48.8698, 2.3344),
    "q6": (48.8683, 2.3399),
    "q7": (48.8666, 2.3465),
    "q8": (48.8695, 2.3498),
    "q9": (48.8656, 2.3568),
    "q10": (48.8634, 2.3624),
    "q11": (48.8621, 2.3579),
    "q12": (48.8606, 2.3561),
    "q13": (48.8589, 2.3509),
    "q14": (48.8554, 2.3587),
    "q15": (48.8503, 2.3652),
    "q16": (48.8534, 2.3488),
    "q17": (48.8476, 2.3539),
    "q18": (48.8432, 2.3594),
    "q19": (48.8418, 2.3438),
    "q20": (48.8488, 2.3441),
    "q21": (48.8539, 2.3395),
    "q22": (48.8508, 2.3388),
    "q23": (48.8459, 2.3281),
    "q24": (48.8541, 2.3324),
    "q25": (48.8568, 2.3234),
    "q26": (48.8566, 2.3146),
    "q27": (48.8545, 2.3021),
    "q28": (48.8605, 2.3036),
    "q29": (48.8698, 2.3075),
    "q30": (48.8768, 2.3012),
    "q31": (48.8711, 2.3238),
    "q32": (48.8789, 2.3245),
    "q33": (48.8796, 2.3356),
    "q34": (48.8729, 2.3336),
    "q35": (48.8752, 2.3442),
    "q36": (48.8814, 2.3487),
    "q37": (48.8796, 2.3556),
    "q38": (48.8696, 2.3549),
    "q39": (48.8674, 2.3622),
    "q40": (48.8742, 2.3686),
    "q41": (48.8652, 2.3734),
    "q42": (48.8608, 2.3789),
    "q43": (48.8567, 2.3834),
    "q44": (48.8518, 2.3912),
    "q45": (48.8398, 2.4012),
    "q46": (48.8432, 2.4134),
    "q47": (48.8312, 2.3867),
    "q48": (48.8456, 2.3756),
    "q49": (48.8356, 2.3612),
    "q50": (48.8289, 2.3698),
    "q51": (48.8198, 2.3578),
    "q52": (48.8365, 2.3498),
    "q53": (48.8421, 2.3234),
    "q54": (48.8198, 2.3367),
    "q55": (48.8267, 2.3234),
    "q56": (48.8312, 2.3098),
    "q57": (48.8345, 2.2978),
    "q58": (48.8456, 2.3145),
    "q59": (48.8489, 2.2934),
    "q60": (48.8356, 2.2756),
    "q61": (48.8512, 2.2634),
    "q62": (48.8598, 2.2712),
    "q63": (48.8712, 2.2745),
    "q64": (48.8634, 2.2889),
    "q65": (48.8798, 2.2978),
    "q66": (48.8834, 2.3089),
    "q67": (48.8889, 2.3178),
    "q68": (48.8934, 2.3267),
    "q69": (48.8912, 2.3389),
    "q70": (48.8956, 2.3456),
    "q71": (48.8867, 2.3567),
    "q72": (48.8923, 2.3623),
    "q73": (48.8934, 2.3856),
    "q74": (48.8989, 2.3934),
    "q75": (48.8834, 2.3989),
    "q76": (48.8756, 2.3834),
    "q77": (48.8712, 2.3923),
    "q78": (48.8712, 2.4078),
    "q79": (48.8612, 2.3989),
    "q80": (48.8534, 2.4034),
}

BASEMAP_TILE_URL = "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png"

# RGBA colours for polygons and markers, per entity kind.
LAYER_COLORS = {
    "unit": {
        "fill": [34, 139, 89, 26],
        "line": [34, 139, 89, 204],
        "selected_fill": [46, 184, 115, 64],
        "selected_line": [27, 110, 68, 255],
        "marker": [36, 143, 93, 255],
    },
    "district": {
        "fill": [56, 176, 140, 38],
        "line": [56, 176, 140, 204],
        "selected_fill": [64, 196, 150, 77],
        "selected_line": [40, 140, 110, 255],
        "marker": [57, 172, 134, 255],
    },
    "green_space": {
        "fill": [70, 172, 80, 77],
        "line": [52, 140, 60, 230],
        "selected_fill": [88, 201, 96, 128],
        "selected_line": [34, 110, 42, 255],
        "marker": [72, 172, 80, 255],
    },
}

POLLUTION_COLORS = [
    [22, 163, 74],
    [234, 179, 8],
    [234, 88, 12],
    [220, 38, 38],
]

PLAN_DISPLAY = {
    "impact_max": "Impact Maximum",
    "biodiversite": "Biodiversité",
}


__all__ = [
    "API_BASE",
    "POLLUTION_API",
    "PARIS_OPENDATA_BASE",
    "PLANTING_API",
    "AIR_QUALITY_API",
    "COLLECTION_ENDPOINTS",
    "BOUNDARY_ENDPOINTS",
    "COLLECTION_LABELS",
    "HTTP_TIMEOUT",
    "COLLECTION_TTL",
    "BOUNDARY_TTL",
    "POLLUTION_TTL",
    "PLANTING_TTL",
    "AIR_QUALITY_TTL",
    "POLLUTION_DEFAULT_DAYS",
    "PARIS_CENTER",
    "INSEE_UNIT_PREFIX",
    "ZOOM_BY_LEVEL",
    "GOLDEN_ANGLE_DEG",
    "SPIRAL_OFFSETS",
    "ARRONDISSEMENT_COORDS",
    "QUARTIER_COORDS",
    "BASEMAP_TILE_URL",
    "LAYER_COLORS",
    "POLLUTION_COLORS",
    "PLAN_DISPLAY",
]
