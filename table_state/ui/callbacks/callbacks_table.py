from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
from dash import ALL, Input, Output, State

from table_state.core.selection import ToggleResult
from table_state.ui.helpers import (
    selection_feedback,
    selection_styles,
    selection_summary,
    sort_by_to_store,
    status_text,
    table_columns,
    table_rows,
)
from table_state.ui.ids import IDs

if TYPE_CHECKING:
    from table_state.core.store import TableStateStore
    from table_state.ui.context import AppContext

logger = logging.getLogger(__name__)


def apply_controls(
    store: TableStateStore,
    global_filter: Optional[str],
    criteria_values: List[Optional[List[str]]],
    criteria_ids: List[dict],
    sort_by: Optional[List[dict]],
    visible_fields: Optional[List[str]],
) -> None:
    """
    Push the current value of every idempotent control into the store.

    Re-applying an unchanged value is a no-op for the store, so this can run
    on any trigger.
    """
    store.update_global_filter(global_filter or "")

    for id_, values in zip(criteria_ids, criteria_values):
        store.update_criteria_filter(id_["field"], values or [])

    key, direction = sort_by_to_store(sort_by)
    store.update_sort(key, direction)

    if visible_fields is not None:
        shown = set(visible_fields)
        for col in store.state.columns:
            store.toggle_column_visibility(col.field, col.field in shown)


def toggle_from_active_cell(store: TableStateStore, active_cell: Optional[dict]) -> Optional[ToggleResult]:
    if not active_cell:
        return None
    row = store.row_by_id(active_cell.get("row_id"))
    if row is None:
        logger.warning("Clicked row not found", extra={"row_id": active_cell.get("row_id")})
        return None
    return store.toggle_row_selection(row)


def register_table_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # Controls -> store -> table
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MAIN_TABLE, "data"),
        Output(IDs.Control.MAIN_TABLE, "columns"),
        Output(IDs.Control.MAIN_TABLE, "style_data_conditional"),
        Output(IDs.Control.MAIN_TABLE, "active_cell"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Output(IDs.Control.SELECTION_SUMMARY, "children"),
        Output(IDs.Control.SELECTION_ALERT, "children"),
        Output(IDs.Control.SELECTION_ALERT, "is_open"),
        Input(IDs.Control.GLOBAL_FILTER, "value"),
        Input({"type": IDs.Pattern.CRITERIA_SELECT, "field": ALL}, "value"),
        Input(IDs.Control.MAIN_TABLE, "sort_by"),
        Input(IDs.Control.COLUMN_TOGGLE, "value"),
        Input(IDs.Control.MAIN_TABLE, "active_cell"),
        Input(IDs.Control.CLEAR_SELECTION_BTN, "n_clicks"),
        State({"type": IDs.Pattern.CRITERIA_SELECT, "field": ALL}, "id"),
    )
    def update_table(
        global_filter: Optional[str],
        criteria_values: List[Any],
        sort_by: Optional[List[dict]],
        visible_fields: Optional[List[str]],
        active_cell: Optional[dict],
        _clear_clicks: Optional[int],
        criteria_ids: List[dict],
    ):
        store = ctx.store
        triggered = dash.ctx.triggered_id
        result: Optional[ToggleResult] = None

        with store.batch():
            apply_controls(store, global_filter, criteria_values, criteria_ids, sort_by, visible_fields)

            if triggered == IDs.Control.MAIN_TABLE and active_cell:
                result = toggle_from_active_cell(store, active_cell)
            elif triggered == IDs.Control.CLEAR_SELECTION_BTN:
                store.clear_selection()

        message = selection_feedback(result, store)

        return (
            table_rows(store),
            table_columns(store),
            selection_styles(store),
            None,
            status_text(store),
            selection_summary(store),
            message or "",
            message is not None,
        )
