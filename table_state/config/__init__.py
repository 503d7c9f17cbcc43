"""
Configuration layer: JSON table configs and named formatters.
Loading lives in table_state.config.loader.
"""

from .model import ColumnConfig, GlobalConfig, TableConfig

__all__ = ["ColumnConfig", "GlobalConfig", "TableConfig"]
