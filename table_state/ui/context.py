from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from table_state.config.model import GlobalConfig
from table_state.core.store import TableStateStore


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: config root, global config and one
    TableStateStore per configured table. Passed into layout + callback
    registration functions instead of using module-level globals.

    The stores live in the server process, so the demo app serves a single user.
    """
    config_root: Path
    global_config: GlobalConfig
    stores: Dict[str, TableStateStore] = field(default_factory=dict)
    active_table: Optional[str] = None

    @property
    def store(self) -> TableStateStore:
        if self.active_table is None or self.active_table not in self.stores:
            raise RuntimeError("AppContext has no active table store.")
        return self.stores[self.active_table]

    def title_for(self, table_id: str) -> str:
        try:
            return self.global_config.table(table_id).title
        except KeyError:
            return table_id
