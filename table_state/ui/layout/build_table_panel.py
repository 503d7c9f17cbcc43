from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, html

from table_state.core.store import TableStateStore
from table_state.ui.helpers import (
    selection_styles,
    selection_summary,
    status_text,
    store_sort_to_sort_by,
    table_columns,
    table_rows,
)
from table_state.ui.ids import IDs

FONT_FAMILY = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'


def build_table_panel(store: TableStateStore) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Span(status_text(store), id=IDs.Control.STATUS_BAR),
                        dbc.Button(
                            "Clear selection",
                            id=IDs.Control.CLEAR_SELECTION_BTN,
                            size="sm",
                            color="secondary",
                            outline=True,
                        ),
                    ],
                    className="d-flex justify-content-between align-items-center",
                )
            ),
            dbc.CardBody(
                [
                    dbc.Alert(
                        id=IDs.Control.SELECTION_ALERT,
                        color="warning",
                        is_open=False,
                        dismissable=True,
                        duration=4000,
                    ),
                    dash_table.DataTable(
                        id=IDs.Control.MAIN_TABLE,
                        data=table_rows(store),
                        columns=table_columns(store),
                        sort_action="custom",
                        sort_mode="single",
                        sort_by=store_sort_to_sort_by(store),
                        style_table={"overflowX": "auto"},
                        style_as_list_view=True,
                        style_cell={
                            "fontFamily": FONT_FAMILY,
                            "fontSize": "12px",
                            "padding": "6px 8px",
                            "border": "none",
                            "textAlign": "left",
                            "cursor": "pointer",
                        },
                        style_header={
                            "fontFamily": FONT_FAMILY,
                            "fontSize": "12px",
                            "fontWeight": "600",
                            "backgroundColor": "#f3f4f6",
                            "borderBottom": "1px solid #e5e7eb",
                        },
                        style_data={"borderBottom": "1px solid #e5e7eb"},
                        style_data_conditional=selection_styles(store),
                        page_size=25,
                    ),
                    html.P(
                        selection_summary(store),
                        id=IDs.Control.SELECTION_SUMMARY,
                        className="text-muted mt-2",
                    ),
                ]
            ),
        ],
        className="tsb-table-card",
    )
