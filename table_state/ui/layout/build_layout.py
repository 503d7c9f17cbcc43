from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc

from table_state.ui.layout.build_filter_panel import build_filter_panel
from table_state.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from table_state.ui.context import AppContext


def build_layout(ctx: AppContext) -> dbc.Container:
    navbar = dbc.NavbarSimple(
        brand=ctx.global_config.ui_title,
        color="primary",
        dark=True,
        fluid=True,
        className="mb-3",
    )

    if ctx.active_table is None:
        return dbc.Container(
            fluid=True,
            children=[
                navbar,
                dbc.Alert("No tables configured. Add a table config under tables/.", color="info"),
            ],
        )

    store = ctx.store

    return dbc.Container(
        fluid=True,
        className="tsb-root",
        children=[
            navbar,
            dbc.Row(
                [
                    dbc.Col(build_filter_panel(store, ctx.title_for(ctx.active_table)), md=3),
                    dbc.Col(build_table_panel(store), md=9),
                ]
            ),
        ],
    )
