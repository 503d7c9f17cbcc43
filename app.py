"""
Demo server for the table browser.

Environment:
    TABLE_STATE_CONFIG_ROOT    config directory (default: config)
    TABLE_STATE_DEFAULT_TABLE  table to open instead of global.json's default_table
    TABLE_STATE_LOG_LEVEL      overrides global.json's log_level
    TABLE_STATE_LOG_FORMAT     json | plain
    PORT, DEBUG                dev server options
"""
import logging
import os
import socket
from pathlib import Path

from table_state.config.loader import load_global_config
from table_state.logging_config import configure_logging
from table_state.ui.dash_app import create_dash_app

logger = logging.getLogger("table_state.app")

PORT_SCAN_RANGE = 100

config_root = Path(os.getenv("TABLE_STATE_CONFIG_ROOT", "config"))
global_config = load_global_config(config_root)
configure_logging(default_level=global_config.log_level)

app = create_dash_app(
    config_root,
    table_id=os.getenv("TABLE_STATE_DEFAULT_TABLE") or None,
    global_config=global_config,
)
server = app.server


def find_free_port(start_port: int, host: str = "localhost") -> int:
    """First port at or after ``start_port`` nothing is listening on."""
    for port in range(start_port, start_port + PORT_SCAN_RANGE):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex((host, port)) != 0:
                return port
    return start_port


if __name__ == "__main__":
    preferred_port = int(os.getenv("PORT", "8051"))
    port = find_free_port(preferred_port)
    if port != preferred_port:
        logger.warning("Preferred port taken", extra={"preferred_port": preferred_port, "port": port})

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")
