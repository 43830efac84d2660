"""Text helpers for the detail panel."""

from __future__ import annotations

import json
from typing import Any, List, Sequence, Tuple, Union

from .models import AdministrativeUnit, District, GreenSpace
from .navigation import NavigatorState, ViewLevel, visible_districts, visible_green_spaces

LEVEL_TITLES = {
    ViewLevel.CITY: "Paris",
    ViewLevel.DISTRICT: "Quartiers",
    ViewLevel.GREEN_SPACE: "Espaces Verts",
}


def unit_title(unit: AdministrativeUnit) -> str:
    return unit.name or f"{unit.code}ème Arrondissement"


def breadcrumb(state: NavigatorState) -> List[str]:
    items = []
    if state.unit is not None:
        items.append(unit_title(state.unit))
    if state.district is not None:
        items.append(state.district.name)
    if state.green_space is not None:
        items.append(state.green_space.name)
    return items


def _display_value(value: Any) -> str:
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def extra_attributes(entity: Union[AdministrativeUnit, District, GreenSpace]) -> List[Tuple[str, str]]:
    return [(key, _display_value(value)) for key, value in entity.extras.items()]


def format_area(area: float) -> str:
    return f"{area:,.0f} m²".replace(",", " ")


def level_summary(
    state: NavigatorState,
    units: Sequence[AdministrativeUnit],
    districts: Sequence[District],
    spaces: Sequence[GreenSpace],
) -> str:
    if state.level is ViewLevel.DISTRICT:
        return f"{len(visible_districts(state, districts))} Quartiers"
    if state.level is ViewLevel.GREEN_SPACE:
        return f"{len(visible_green_spaces(state, spaces))} Espaces Verts"
    return f"{len(units)} Arrondissements"


__all__ = [
    "LEVEL_TITLES",
    "unit_title",
    "breadcrumb",
    "extra_attributes",
    "format_area",
    "level_summary",
]
