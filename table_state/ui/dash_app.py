from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from table_state.config.loader import build_store, load_global_config
from table_state.config.model import GlobalConfig
from table_state.core.exceptions import ConfigError
from table_state.ui.callbacks.callbacks_table import register_table_callbacks
from table_state.ui.context import AppContext
from table_state.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(
    config_root: Path | str = Path("config"),
    table_id: Optional[str] = None,
    global_config: Optional[GlobalConfig] = None,
) -> Dash:
    """
    Build the demo app for one table.

    :param table_id: table to render; defaults to ``default_table`` from global.json
    :param global_config: already loaded config, skips reading ``config_root`` again
    :raises ConfigError: if ``table_id`` names no configured table
    """
    config_root = Path(config_root)

    # 1) Load Config
    if global_config is None:
        global_config = load_global_config(config_root)
    if not global_config.tables:
        logger.warning("No table configs were loaded", extra={"config_root": str(config_root)})

    # 2) Build one store per table
    stores = {
        cfg.id: build_store(cfg, global_config.data_root)
        for cfg in global_config.tables
    }

    # 3) App Context
    active_table = table_id or global_config.default_table
    if table_id and table_id not in stores:
        raise ConfigError(f"Table '{table_id}' is not configured under {config_root}")

    ctx = AppContext(
        config_root=config_root,
        global_config=global_config,
        stores=stores,
        active_table=active_table if active_table in stores else None,
    )
    logger.info("Dash app created", extra={"active_table": ctx.active_table, "n_tables": len(stores)})

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        suppress_callback_exceptions=True,
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    if ctx.active_table is not None:
        register_table_callbacks(app, ctx)

    return app
