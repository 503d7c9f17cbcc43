"""
Pure translations between TableStateStore and Dash component props.

Nothing here talks to Dash at runtime, which keeps it testable without a
browser or a running server.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from table_state.core.accessor import FieldAccessor
from table_state.core.selection import ToggleResult
from table_state.core.store import TableStateStore

# DataTable reports a row back through the "id" key of its data dict, so
# cells live under prefixed keys and never collide with it.
ROW_ID = "id"
CELL_KEY_PREFIX = "cell:"
SELECTED_ROW_STYLE = {"backgroundColor": "#e0ecff", "fontWeight": "600"}


def get_filter_dropdown_options(store: TableStateStore) -> Dict[str, List[dict]]:
    """Dropdown options per criteria-filterable column, from the full dataset."""
    return {
        field: [{"label": v if v != "" else "(empty)", "value": v} for v in values]
        for field, values in store.available_filter_options().items()
    }


def criteria_columns(store: TableStateStore) -> List[Tuple[str, str]]:
    """(field, label) of every column with a criteria filter, in column order."""
    return [(c.field, c.label) for c in store.state.columns if c.filterable_by_criteria]


def column_toggle_options(store: TableStateStore) -> List[dict]:
    return [{"label": c.label, "value": c.field} for c in store.state.columns]


def visible_column_values(store: TableStateStore) -> List[str]:
    return [c.field for c in store.visible_columns()]


def cell_key(field: str) -> str:
    return f"{CELL_KEY_PREFIX}{field}"


def field_from_cell_key(key: Optional[str]) -> Optional[str]:
    if key and key.startswith(CELL_KEY_PREFIX):
        return key[len(CELL_KEY_PREFIX):]
    return key


def table_columns(store: TableStateStore) -> List[dict]:
    return [
        {"name": c.label, "id": cell_key(c.field)}
        for c in store.visible_columns()
    ]


def table_rows(store: TableStateStore) -> List[Dict[str, Any]]:
    """
    One dict per visible row, cells already formatted and keyed by
    ``cell_key(field)``. ``id`` carries the raw identifier so DataTable can
    report it back as ``row_id``.
    """
    identifier = store.state.identifier
    columns = store.visible_columns()
    rows: List[Dict[str, Any]] = []
    for record in store.visible_data():
        row = {cell_key(c.field): store.cell_value(record, c) for c in columns}
        row[ROW_ID] = FieldAccessor.get(record, identifier)
        rows.append(row)
    return rows


def selection_styles(store: TableStateStore) -> List[dict]:
    """Highlight selected rows by their position in the current view."""
    return [
        {"if": {"row_index": i}, **SELECTED_ROW_STYLE}
        for i, record in enumerate(store.visible_data())
        if store.is_row_selected(record)
    ]


def sort_by_to_store(sort_by: Optional[Sequence[dict]]) -> Tuple[Optional[str], Optional[str]]:
    """DataTable ``sort_by`` (custom sort mode) -> (key, direction)."""
    if not sort_by:
        return None, None
    first = sort_by[0]
    return field_from_cell_key(first.get("column_id")), first.get("direction")


def store_sort_to_sort_by(store: TableStateStore) -> List[dict]:
    sort = store.sort
    if not sort.is_active:
        return []
    return [{"column_id": cell_key(sort.key), "direction": sort.direction}]


def status_text(store: TableStateStore) -> str:
    state = store.state
    return f"{len(store.visible_data())} of {len(state.data)} rows · {state.selection.count} selected"


def selection_summary(store: TableStateStore) -> str:
    selection = store.selection
    if not selection.selected_rows:
        return "No rows selected"
    identifier = store.state.identifier
    keys = ", ".join(str(FieldAccessor.get(r, identifier)) for r in selection.selected_rows)
    return f"Selected: {keys}"


def selection_feedback(result: Optional[ToggleResult], store: TableStateStore) -> Optional[str]:
    """User-facing message for a rejected toggle, None otherwise."""
    if result is not ToggleResult.LIMIT_REACHED:
        return None
    limit = store.selection.max_selection_limit
    return f"You can only select up to {limit} items."
