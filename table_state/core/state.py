from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, Literal, Mapping, Optional, Tuple, TYPE_CHECKING

from table_state.core.columns import ColumnDescriptor, MenuItem

if TYPE_CHECKING:
    from table_state.core.selection import ToggleResult

SortDirection = Literal["asc", "desc"]

SORT_DIRECTIONS: frozenset[str] = frozenset({"asc", "desc"})


def _frozen_mapping(data: Optional[Mapping[str, Any]] = None) -> Mapping[str, Any]:
    """Read-only view over a private copy of ``data``."""
    return MappingProxyType(dict(data or {}))


def _dedupe(values: Iterable[Any]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(str(v) for v in values))


@dataclass(frozen=True)
class FilterState:
    """
    Current filter selections.

    Fields:

    - global_filter: trimmed, lower-cased free-text query ("" = inactive)
    - criteria_filters: field -> allowed normalised values. A field is only ever
      present with at least one value; clearing a field removes its key.
    """
    global_filter: str = ""
    criteria_filters: Mapping[str, Tuple[str, ...]] = field(default_factory=_frozen_mapping)

    def with_global_filter(self, query: str) -> FilterState:
        return replace(self, global_filter=(query or "").strip().lower())

    def with_criteria(self, field_name: str, selected_values: Iterable[Any]) -> FilterState:
        criteria = dict(self.criteria_filters)
        values = _dedupe(selected_values or ())
        if values:
            criteria[field_name] = values
        else:
            criteria.pop(field_name, None)
        return replace(self, criteria_filters=_frozen_mapping(criteria))

    @property
    def is_active(self) -> bool:
        return bool(self.global_filter) or bool(self.criteria_filters)

    def cache_key(self) -> Tuple[str, Tuple[Tuple[str, Tuple[str, ...]], ...]]:
        """Order-insensitive key used to memoise filter results."""
        return (
            self.global_filter,
            tuple(
                (name, tuple(sorted(values)))
                for name, values in sorted(self.criteria_filters.items())
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "global_filter": self.global_filter,
            "criteria_filters": {k: list(v) for k, v in self.criteria_filters.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilterState:
        state = cls().with_global_filter(data.get("global_filter", ""))
        for name, values in (data.get("criteria_filters") or {}).items():
            state = state.with_criteria(name, values)
        return state


def normalise_direction(direction: Optional[str]) -> Optional[SortDirection]:
    """'' (no sort) and None both mean "unsorted"; anything else is lower-cased."""
    if not direction:
        return None
    direction = direction.lower()
    return direction if direction in SORT_DIRECTIONS else None  # type: ignore[return-value]


@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    direction: Optional[SortDirection] = None

    @property
    def is_active(self) -> bool:
        return bool(self.key) and self.direction is not None

    def cache_key(self) -> Tuple[Optional[str], Optional[str]]:
        if not self.is_active:
            return (None, None)
        return (self.key, self.direction)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "direction": self.direction}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SortState:
        return cls(key=data.get("key") or None, direction=normalise_direction(data.get("direction")))


@dataclass(frozen=True)
class SelectionState:
    """
    Row selection.

    - selected_rows: selected records in selection order (unique by identifier)
    - current_selection: the record most recently toggled (selected or deselected)
    - multi_select: False means at most one selected row
    - max_selection_limit: ceiling for multi-select; None or 0 means unlimited
    - last_toggle: outcome of the most recent toggle, if any
    """
    selected_rows: Tuple[Any, ...] = ()
    current_selection: Any = None
    multi_select: bool = False
    max_selection_limit: Optional[int] = None
    last_toggle: Optional[ToggleResult] = None

    @property
    def count(self) -> int:
        return len(self.selected_rows)

    @property
    def has_limit(self) -> bool:
        return bool(self.max_selection_limit)


@dataclass(frozen=True)
class TableState:
    """
    Snapshot of the whole table.

    Every container is a tuple or a read-only mapping, so a snapshot can be handed
    to consumers as-is. The store swaps in a new snapshot on each mutation.
    """
    table_id: str = "default-table"
    loading: bool = False

    data: Tuple[Any, ...] = ()
    columns: Tuple[ColumnDescriptor, ...] = ()
    identifier: str = "id"

    filters: FilterState = field(default_factory=FilterState)
    sort: SortState = field(default_factory=SortState)
    selection: SelectionState = field(default_factory=SelectionState)

    column_visibility: Mapping[str, bool] = field(default_factory=_frozen_mapping)
    available_filter_options: Mapping[str, Tuple[str, ...]] = field(default_factory=_frozen_mapping)
    row_context_menu: Tuple[MenuItem, ...] = ()

    @property
    def global_filter(self) -> str:
        return self.filters.global_filter

    @property
    def criteria_filters(self) -> Mapping[str, Tuple[str, ...]]:
        return self.filters.criteria_filters

    @property
    def selected_rows(self) -> Tuple[Any, ...]:
        return self.selection.selected_rows

    @property
    def current_selection(self) -> Any:
        return self.selection.current_selection

    def is_column_visible(self, field_name: str) -> bool:
        return self.column_visibility.get(field_name, True)


def initial_visibility(columns: Iterable[ColumnDescriptor]) -> Mapping[str, bool]:
    return _frozen_mapping({col.field: col.visible is not False for col in columns})


def with_visibility(visibility: Mapping[str, bool], field_name: str, visible: bool) -> Mapping[str, bool]:
    updated = dict(visibility)
    updated[field_name] = bool(visible)
    return _frozen_mapping(updated)


def frozen_options(options: Mapping[str, Iterable[str]]) -> Mapping[str, Tuple[str, ...]]:
    return _frozen_mapping({k: tuple(v) for k, v in options.items()})
