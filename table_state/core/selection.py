from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple

from table_state.core.accessor import FieldAccessor
from table_state.core.state import SelectionState


class ToggleResult(str, Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    LIMIT_REACHED = "limitReached"


@dataclass(frozen=True)
class SelectionExport:
    """What a table emits to its host after a successful toggle."""
    selected_rows: Tuple[Any, ...]
    current_selection: Any
    toggle_state: Optional[ToggleResult]


@dataclass(frozen=True)
class RowContext:
    """Record plus selection context handed to row-scoped action menus."""
    row: Any
    is_selected: bool
    is_current: bool
    selection_count: int


def find_selected(selection: SelectionState, row: Any, identifier: str) -> int:
    """Position of ``row`` in the selection by identifier, or -1."""
    key = FieldAccessor.get(row, identifier)
    for i, selected in enumerate(selection.selected_rows):
        if FieldAccessor.get(selected, identifier) == key:
            return i
    return -1


def toggle(selection: SelectionState, row: Any, identifier: str) -> Tuple[SelectionState, ToggleResult]:
    """
    Toggle ``row`` in or out of the selection.

    1. Already selected -> removed (always allowed, whatever the limit).
    2. Single-select -> the selection becomes exactly [row].
    3. Multi-select at the limit -> rejected, selection returned unchanged.
    4. Otherwise appended.

    The returned state carries ``last_toggle``; on rejection the original
    object is returned untouched.
    """
    index = find_selected(selection, row, identifier)

    if index != -1:
        rows = selection.selected_rows[:index] + selection.selected_rows[index + 1:]
        return (
            replace(selection, selected_rows=rows, current_selection=row,
                    last_toggle=ToggleResult.DESELECTED),
            ToggleResult.DESELECTED,
        )

    if not selection.multi_select:
        return (
            replace(selection, selected_rows=(row,), current_selection=row,
                    last_toggle=ToggleResult.SELECTED),
            ToggleResult.SELECTED,
        )

    if selection.has_limit and selection.count >= selection.max_selection_limit:
        return selection, ToggleResult.LIMIT_REACHED

    return (
        replace(selection, selected_rows=selection.selected_rows + (row,), current_selection=row,
                last_toggle=ToggleResult.SELECTED),
        ToggleResult.SELECTED,
    )


def cleared(selection: SelectionState) -> SelectionState:
    return replace(selection, selected_rows=(), current_selection=None, last_toggle=None)
