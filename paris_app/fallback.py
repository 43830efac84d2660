"""Fixed datasets substituted when a live fetch fails."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import AdministrativeUnit, BoundaryFeature, District, FeatureCollection, GreenSpace


def _unit_name(code: int) -> str:
    return "1er Arrondissement" if code == 1 else f"{code}ème Arrondissement"


FALLBACK_UNITS: Tuple[AdministrativeUnit, ...] = tuple(
    AdministrativeUnit(id=str(code), code=str(code), name=_unit_name(code)) for code in range(1, 21)
)

# (district id, name, parent unit code); four quartiers per arrondissement.
_DISTRICT_ROWS: List[Tuple[str, str, int]] = [
    ("q1", "Saint-Germain-l'Auxerrois", 1),
    ("q2", "Halles", 1),
    ("q3", "Palais-Royal", 1),
    ("q4", "Place Vendôme", 1),
    ("q5", "Gaillon", 2),
    ("q6", "Vivienne", 2),
    ("q7", "Mail", 2),
    ("q8", "Bonne-Nouvelle", 2),
    ("q9", "Arts-et-Métiers", 3),
    ("q10", "Enfants-Rouges", 3),
    ("q11", "Archives", 3),
    ("q12", "Sainte-Avoye", 3),
    ("q13", "Saint-Merri", 4),
    ("q14", "Saint-Gervais", 4),
    ("q15", "Arsenal", 4),
    ("q16", "Notre-Dame", 4),
    ("q17", "Saint-Victor", 5),
    ("q18", "Jardin des Plantes", 5),
    ("q19", "Val-de-Grâce", 5),
    ("q20", "Sorbonne", 5),
    ("q21", "Monnaie", 6),
    ("q22", "Odéon", 6),
    ("q23", "Notre-Dame-des-Champs", 6),
    ("q24", "Saint-Germain-des-Prés", 6),
    ("q25", "Saint-Thomas-d'Aquin", 7),
    ("q26", "Invalides", 7),
    ("q27", "École Militaire", 7),
    ("q28", "Gros-Caillou", 7),
    ("q29", "Champs-Élysées", 8),
    ("q30", "Faubourg du Roule", 8),
    ("q31", "Madeleine", 8),
    ("q32", "Europe", 8),
    ("q33", "Saint-Georges", 9),
    ("q34", "Chaussée-d'Antin", 9),
    ("q35", "Faubourg Montmartre", 9),
    ("q36", "Rochechouart", 9),
    ("q37", "Saint-Vincent-de-Paul", 10),
    ("q38", "Porte Saint-Denis", 10),
    ("q39", "Porte Saint-Martin", 10),
    ("q40", "Hôpital Saint-Louis", 10),
    ("q41", "Folie-Méricourt", 11),
    ("q42", "Saint-Ambroise", 11),
    ("q43", "Roquette", 11),
    ("q44", "Sainte-Marguerite", 11),
    ("q45", "Bel-Air", 12),
    ("q46", "Picpus", 12),
    ("q47", "Bercy", 12),
    ("q48", "Quinze-Vingts", 12),
    ("q49", "Salpêtrière", 13),
    ("q50", "Gare", 13),
    ("q51", "Maison-Blanche", 13),
    ("q52", "Croulebarbe", 13),
    ("q53", "Montparnasse", 14),
    ("q54", "Parc de Montsouris", 14),
    ("q55", "Petit-Montrouge", 14),
    ("q56", "Plaisance", 14),
    ("q57", "Saint-Lambert", 15),
    ("q58", "Necker", 15),
    ("q59", "Grenelle", 15),
    ("q60", "Javel", 15),
    ("q61", "Auteuil", 16),
    ("q62", "Muette", 16),
    ("q63", "Porte Dauphine", 16),
    ("q64", "Chaillot", 16),
    ("q65", "Ternes", 17),
    ("q66", "Plaine de Monceaux", 17),
    ("q67", "Batignolles", 17),
    ("q68", "Épinettes", 17),
    ("q69", "Grandes-Carrières", 18),
    ("q70", "Clignancourt", 18),
    ("q71", "Goutte-d'Or", 18),
    ("q72", "Chapelle", 18),
    ("q73", "Villette", 19),
    ("q74", "Pont-de-Flandre", 19),
    ("q75", "Amérique", 19),
    ("q76", "Combat", 19),
    ("q77", "Belleville", 20),
    ("q78", "Saint-Fargeau", 20),
    ("q79", "Père-Lachaise", 20),
    ("q80", "Charonne", 20),
]

FALLBACK_DISTRICTS: Tuple[District, ...] = tuple(
    District(id=district_id, name=name, unit_id=str(code), unit_name=_unit_name(code))
    for district_id, name, code in _DISTRICT_ROWS
)

_DISTRICT_NAMES: Dict[str, str] = {district_id: name for district_id, name, _ in _DISTRICT_ROWS}

# (id, name, district id, type, address, area m², opening hours)
_GREEN_SPACE_ROWS: List[Tuple[str, str, str, str, str, float, str]] = [
    ("ev1", "Jardin des Tuileries", "q3", "Jardin", "Place de la Concorde", 254000, "7h-21h"),
    ("ev2", "Jardin du Palais Royal", "q3", "Jardin", "8 Rue de Montpensier", 20850, "8h-20h30"),
    ("ev3", "Square du Vert-Galant", "q16", "Square", "Place du Pont Neuf", 2000, "24h/24"),
    ("ev4", "Jardin des Plantes", "q18", "Jardin", "57 Rue Cuvier", 235000, "7h30-20h"),
    ("ev5", "Arènes de Lutèce", "q17", "Square", "49 Rue Monge", 5500, "8h-21h"),
    ("ev6", "Jardin du Luxembourg", "q23", "Jardin", "Rue de Médicis", 224500, "7h30-21h30"),
    ("ev7", "Champ de Mars", "q27", "Parc", "Quai Branly", 248000, "24h/24"),
    ("ev8", "Esplanade des Invalides", "q26", "Esplanade", "Esplanade des Invalides", 50000, "24h/24"),
    ("ev9", "Parc Monceau", "q32", "Parc", "35 Boulevard de Courcelles", 82500, "7h-22h"),
    ("ev10", "Square Maurice Gardette", "q42", "Square", "2 Rue du Général Blaise", 8300, "8h-20h"),
    ("ev11", "Bois de Vincennes", "q45", "Bois", "Route de la Pyramide", 9950000, "24h/24"),
    ("ev12", "Parc de Bercy", "q47", "Parc", "128 Quai de Bercy", 140000, "8h-21h"),
    ("ev13", "Coulée Verte René-Dumont", "q45", "Promenade", "1 Coulée Verte René-Dumont", 65000, "8h-21h"),
    ("ev14", "Parc Montsouris", "q54", "Parc", "2 Rue Gazan", 155000, "7h-21h"),
    ("ev15", "Bois de Boulogne", "q63", "Bois", "Route de Suresnes", 8460000, "24h/24"),
    ("ev16", "Jardin du Ranelagh", "q62", "Jardin", "Avenue du Ranelagh", 60000, "8h-21h"),
    ("ev17", "Square des Batignolles", "q67", "Square", "147 Rue Cardinet", 16800, "8h-20h"),
    ("ev18", "Square Louise Michel", "q69", "Square", "Place Saint-Pierre", 5000, "8h-21h"),
    ("ev19", "Parc des Buttes-Chaumont", "q76", "Parc", "1 Rue Botzaris", 247000, "7h-22h"),
    ("ev20", "Parc de la Villette", "q73", "Parc", "211 Avenue Jean Jaurès", 550000, "24h/24"),
    ("ev21", "Cimetière du Père-Lachaise", "q79", "Cimetière paysager", "16 Rue du Repos", 440000, "8h-18h"),
    ("ev22", "Parc de Belleville", "q77", "Parc", "47 Rue des Couronnes", 45000, "7h30-21h"),
]

FALLBACK_GREEN_SPACES: Tuple[GreenSpace, ...] = tuple(
    GreenSpace(
        id=space_id,
        name=name,
        district_id=district_id,
        district_name=_DISTRICT_NAMES[district_id],
        type=space_type,
        address=address,
        area=float(area),
        hours=hours,
    )
    for space_id, name, district_id, space_type, address, area, hours in _GREEN_SPACE_ROWS
)


# Approximate hexagonal outlines, (west, south, east, north) per arrondissement.
_UNIT_BOXES: List[Tuple[float, float, float, float]] = [
    (2.317, 48.855, 2.357, 48.868),
    (2.317, 48.862, 2.357, 48.878),
    (2.342, 48.858, 2.375, 48.875),
    (2.335, 48.845, 2.375, 48.862),
    (2.325, 48.838, 2.365, 48.855),
    (2.310, 48.842, 2.345, 48.858),
    (2.285, 48.850, 2.325, 48.868),
    (2.285, 48.865, 2.330, 48.885),
    (2.320, 48.868, 2.355, 48.885),
    (2.345, 48.868, 2.385, 48.885),
    (2.360, 48.850, 2.400, 48.875),
    (2.360, 48.825, 2.430, 48.860),
    (2.330, 48.818, 2.400, 48.848),
    (2.300, 48.818, 2.350, 48.848),
    (2.255, 48.830, 2.320, 48.860),
    (2.235, 48.845, 2.295, 48.885),
    (2.270, 48.878, 2.340, 48.908),
    (2.320, 48.880, 2.380, 48.905),
    (2.360, 48.870, 2.420, 48.900),
    (2.375, 48.850, 2.430, 48.880),
]


def _hexagon(west: float, south: float, east: float, north: float) -> List[List[float]]:
    inset = (east - west) / 4
    mid_lat = round((south + north) / 2, 4)
    ring = [
        [west + inset, south],
        [east - inset, south],
        [east, mid_lat],
        [east - inset, north],
        [west + inset, north],
        [west, mid_lat],
        [west + inset, south],
    ]
    return [[round(lon, 4), lat] for lon, lat in ring]


FALLBACK_UNIT_BOUNDARIES: FeatureCollection = tuple(
    BoundaryFeature(
        geometry={"type": "Polygon", "coordinates": [_hexagon(*box)]},
        properties={
            "c_ar": code,
            "c_arinsee": 75100 + code,
            "l_ar": "1er Ardt" if code == 1 else f"{code}ème Ardt",
        },
    )
    for code, box in enumerate(_UNIT_BOXES, start=1)
)

FALLBACK_COLLECTIONS = {
    "units": FALLBACK_UNITS,
    "districts": FALLBACK_DISTRICTS,
    "green_spaces": FALLBACK_GREEN_SPACES,
}

FALLBACK_BOUNDARIES: Dict[str, FeatureCollection] = {
    "units": FALLBACK_UNIT_BOUNDARIES,
    "districts": (),
    "green_spaces": (),
}


__all__ = [
    "FALLBACK_UNITS",
    "FALLBACK_DISTRICTS",
    "FALLBACK_GREEN_SPACES",
    "FALLBACK_UNIT_BOUNDARIES",
    "FALLBACK_COLLECTIONS",
    "FALLBACK_BOUNDARIES",
]
