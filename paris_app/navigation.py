"""Drill-down navigation: city → arrondissement → quartier → green space."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, TypeVar, Union

from .models import AdministrativeUnit, District, GreenSpace

Child = TypeVar("Child", District, GreenSpace)
Parent = Union[AdministrativeUnit, District]


class ViewLevel(str, Enum):
    CITY = "city"
    DISTRICT = "district"
    GREEN_SPACE = "green_space"


@dataclass(frozen=True)
class NavigatorState:
    level: ViewLevel = ViewLevel.CITY
    unit: Optional[AdministrativeUnit] = None
    district: Optional[District] = None
    green_space: Optional[GreenSpace] = None


INITIAL_STATE = NavigatorState()


def _parent_link(child: Union[District, GreenSpace]) -> Tuple[str, str]:
    if isinstance(child, District):
        return child.unit_id, child.unit_name
    return child.district_id, child.district_name


def links_to(child: Union[District, GreenSpace], parent: Parent) -> bool:
    """True when the child references ``parent`` by id or by display name."""

    parent_id, parent_name = _parent_link(child)
    if parent.id and parent_id == parent.id:
        return True
    return bool(parent.name) and parent_name == parent.name


def filter_children(parent: Optional[Parent], children: Sequence[Child]) -> Tuple[Child, ...]:
    if parent is None:
        return tuple(children)
    return tuple(child for child in children if links_to(child, parent))


def find_parent(child: Union[District, GreenSpace], parents: Sequence[Parent]) -> Optional[Parent]:
    """Resolve the parent by id first, then by name."""

    parent_id, parent_name = _parent_link(child)
    if parent_id:
        by_id = next((p for p in parents if p.id == parent_id), None)
        if by_id is not None:
            return by_id
    if parent_name:
        return next((p for p in parents if p.name == parent_name), None)
    return None


def reconcile_districts(
    units: Sequence[AdministrativeUnit], districts: Sequence[District]
) -> Tuple[District, ...]:
    """Rewrite each quartier's parent link to the canonical arrondissement id and name."""

    reconciled = []
    for district in districts:
        unit = find_parent(district, units)
        if unit is not None:
            district = replace(district, unit_id=unit.id, unit_name=unit.name)
        reconciled.append(district)
    return tuple(reconciled)


def reconcile_green_spaces(
    districts: Sequence[District], spaces: Sequence[GreenSpace]
) -> Tuple[GreenSpace, ...]:
    reconciled = []
    for space in spaces:
        district = find_parent(space, districts)
        if district is not None:
            space = replace(space, district_id=district.id, district_name=district.name)
        reconciled.append(space)
    return tuple(reconciled)


def visible_districts(state: NavigatorState, districts: Sequence[District]) -> Tuple[District, ...]:
    return filter_children(state.unit, districts)


def visible_green_spaces(
    state: NavigatorState, spaces: Sequence[GreenSpace]
) -> Tuple[GreenSpace, ...]:
    return filter_children(state.district, spaces)


class Navigator:
    """Holds the current view state and applies user transitions to it."""

    def __init__(self, state: NavigatorState = INITIAL_STATE) -> None:
        self.state = state

    def _set(self, state: NavigatorState) -> NavigatorState:
        self.state = state
        return state

    def select_unit(self, unit: AdministrativeUnit) -> NavigatorState:
        return self._set(NavigatorState(level=ViewLevel.DISTRICT, unit=unit))

    def select_district(self, district: District) -> NavigatorState:
        return self._set(
            NavigatorState(level=ViewLevel.GREEN_SPACE, unit=self.state.unit, district=district)
        )

    def select_green_space(self, space: GreenSpace) -> NavigatorState:
        return self._set(replace(self.state, level=ViewLevel.GREEN_SPACE, green_space=space))

    def go_back(self) -> NavigatorState:
        state = self.state
        if state.green_space is not None:
            return self._set(replace(state, green_space=None))
        if state.level is ViewLevel.GREEN_SPACE:
            return self._set(replace(state, level=ViewLevel.DISTRICT, district=None))
        if state.level is ViewLevel.DISTRICT:
            return self._set(replace(state, level=ViewLevel.CITY, unit=None))
        return state

    def close(self) -> NavigatorState:
        return self._set(INITIAL_STATE)

    def jump_to_district(
        self, district: District, units: Sequence[AdministrativeUnit]
    ) -> NavigatorState:
        unit = find_parent(district, units)
        return self._set(
            NavigatorState(
                level=ViewLevel.GREEN_SPACE,
                unit=unit if unit is not None else self.state.unit,
                district=district,
            )
        )

    def jump_to_green_space(
        self,
        space: GreenSpace,
        districts: Sequence[District],
        units: Sequence[AdministrativeUnit],
    ) -> NavigatorState:
        district = find_parent(space, districts)
        unit = self.state.unit
        if district is not None:
            unit = find_parent(district, units) or unit
        else:
            district = self.state.district
        return self._set(
            NavigatorState(
                level=ViewLevel.GREEN_SPACE, unit=unit, district=district, green_space=space
            )
        )


__all__ = [
    "ViewLevel",
    "NavigatorState",
    "INITIAL_STATE",
    "links_to",
    "filter_children",
    "find_parent",
    "reconcile_districts",
    "reconcile_green_spaces",
    "visible_districts",
    "visible_green_spaces",
    "Navigator",
]
