from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_state.core.store import TableStateStore
from table_state.ui.helpers import (
    column_toggle_options,
    criteria_columns,
    get_filter_dropdown_options,
    visible_column_values,
)
from table_state.ui.ids import IDs, criteria_select_id


def build_filter_panel(store: TableStateStore, title: str) -> dbc.Card:
    options = get_filter_dropdown_options(store)

    criteria_dropdowns = [
        html.Div(
            [
                html.Label(f"Filter by {label}", className="form-label"),
                dcc.Dropdown(
                    id=criteria_select_id(field),
                    options=options.get(field, []),
                    multi=True,
                    placeholder=f"All {label.lower()}",
                    className="mb-3",
                ),
            ]
        )
        for field, label in criteria_columns(store)
    ]

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.H5(title, className="card-title"),
                    html.P(
                        f"{len(store.state.data)} rows",
                        className="card-subtitle text-muted mb-3",
                    ),
                    html.Hr(),
                    html.Label("Search", className="form-label"),
                    dbc.Input(
                        id=IDs.Control.GLOBAL_FILTER,
                        type="search",
                        placeholder="Search all columns",
                        debounce=True,
                        className="mb-3",
                    ),
                    *criteria_dropdowns,
                    html.Hr(),
                    html.Label("Columns", className="form-label"),
                    dcc.Checklist(
                        id=IDs.Control.COLUMN_TOGGLE,
                        options=column_toggle_options(store),
                        value=visible_column_values(store),
                        inputClassName="me-2",
                        labelClassName="d-block",
                    ),
                ]
            ),
        ],
        className="tsb-sidebar",
    )
