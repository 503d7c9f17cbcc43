from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from table_state.config.model import GlobalConfig, TableConfig
from table_state.core.exceptions import ConfigError
from table_state.core.store import TableStateStore
from table_state.validation.config_validation import validate_table_config

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        with path.open() as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_table_configs(root: Path) -> List[TableConfig]:
    """
    Parse every ``root/tables/*.json`` file (sorted by name) into a TableConfig.
    A missing tables directory yields an empty list.
    """
    tables_dir = root / "tables"
    tables: List[TableConfig] = []

    if tables_dir.is_dir():
        for idx, config_file in enumerate(sorted(tables_dir.glob("*.json"))):
            raw = _read_json(config_file)
            if not isinstance(raw, dict):
                raise ConfigError(f"Table config {config_file} must be a JSON object")
            tables.append(TableConfig.from_raw(raw, source_path=config_file, index=idx))

    return tables


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            tables/
                flights.json
                employees.json
                ...

    - ui_title: title for UI, defaults to 'Table Browser'
    - default_table: id of the table shown first, defaults to the first table
    - data_root: directory that relative ``data`` paths are resolved against
                 (relative to root when itself relative; defaults to root)
    - log_level: root log level used by the demo app, defaults to INFO
    - tables: list of TableConfigs

    :param root: Directory containing 'global.json' and optionally 'tables/'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    raw_global = _read_json(global_path)
    tables = load_table_configs(root)

    data_root_raw = raw_global.get("data_root")
    if data_root_raw is None:
        data_root = root.resolve()
    else:
        data_root_path = Path(data_root_raw)
        data_root = data_root_path if data_root_path.is_absolute() else (root / data_root_path).resolve()

    default_table = raw_global.get("default_table")
    if default_table is None and tables:
        default_table = tables[0].id

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Table Browser"),
        default_table=default_table,
        tables=tables,
        data_root=data_root,
        log_level=str(raw_global.get("log_level", "INFO")).upper(),
    )


def load_records(path: Path) -> List[Dict[str, Any]]:
    """
    Read table rows from ``.csv`` (via pandas) or ``.json`` (a list of objects).
    Missing CSV cells come back as None.

    :raises FileNotFoundError: if the file does not exist
    :raises ConfigError: for unsupported extensions or malformed JSON
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found at {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
        return df.astype(object).where(df.notna(), None).to_dict("records")

    if suffix == ".json":
        raw = _read_json(path)
        if not isinstance(raw, list):
            raise ConfigError(f"{path} must contain a JSON list of records")
        return raw

    raise ConfigError(f"Unsupported data file type '{suffix}' for {path}")


def resolve_data_path(cfg: TableConfig, data_root: Optional[Path]) -> Path:
    if not cfg.data:
        raise ConfigError(f"Table '{cfg.id}' has no 'data' path")
    data_path = Path(cfg.data)
    if data_path.is_absolute() or data_root is None:
        return data_path
    return data_root / data_path


def build_store(cfg: TableConfig, data_root: Optional[Path] = None) -> TableStateStore:
    """
    Validate ``cfg``, load its records and return a configured TableStateStore.
    An initial sort from the config is applied as a follow-up update_sort().
    """
    validate_table_config(cfg)

    records = load_records(resolve_data_path(cfg, data_root))

    store = TableStateStore(table_id=cfg.id)
    with store.batch():
        store.configure(
            records,
            cfg.column_descriptors(),
            cfg.identifier,
            multi_select=cfg.multi_select,
            max_selection_limit=cfg.max_selection_limit,
        )
        sort = cfg.sort
        if sort:
            store.update_sort(sort.get("key"), sort.get("direction"))

    logger.info(
        "Table store built",
        extra={"table_id": cfg.id, "source": str(cfg.source_path), "n_rows": len(records)},
    )
    return store
