import json
from pathlib import Path

import pytest

from table_state.config.loader import build_store, load_global_config, load_records
from table_state.config.model import ColumnConfig
from table_state.core.exceptions import ConfigError, UnknownFormatterError
from table_state.validation.errors import ValidationError


def _write_config(tmp_path: Path, table: dict, records_name="items.csv", records_text=None) -> Path:
    # root/
    #   global.json
    #   data/items.csv
    #   tables/items.json
    config_root = tmp_path / "config"
    (config_root / "tables").mkdir(parents=True)
    (config_root / "data").mkdir()

    (config_root / "global.json").write_text(json.dumps({"ui_title": "Test Tables", "data_root": "data"}))
    (config_root / "tables" / "items.json").write_text(json.dumps(table))

    if records_text is None:
        records_text = (
            "id,name,value,category,organic\n"
            "1,Apple,100,Fruit,True\n"
            "2,Banana,50,Fruit,False\n"
            "3,Carrot,200,Vegetable,\n"
        )
    (config_root / "data" / records_name).write_text(records_text)
    return config_root


def _table(**overrides):
    table = {
        "id": "items",
        "title": "Items",
        "data": "items.csv",
        "identifier": "id",
        "multi_select": True,
        "max_selection_limit": 2,
        "columns": [
            {"field": "name", "label": "Name", "sortable": True, "formatter": "upper"},
            {"field": "value", "label": "Value", "type": "number", "sortable": True, "formatter": "currency"},
            {"field": "category", "label": "Category", "filterable_by_criteria": True},
            {"field": "organic", "label": "Organic", "type": "boolean", "visible": False, "filterable_by_criteria": True},
        ],
    }
    table.update(overrides)
    return table


def test_load_global_config_from_dir(tmp_path):
    config_root = _write_config(tmp_path, _table())

    cfg = load_global_config(config_root)

    assert cfg.ui_title == "Test Tables"
    assert cfg.default_table == "items"
    assert cfg.data_root == (config_root / "data").resolve()
    assert [t.id for t in cfg.tables] == ["items"]

    table = cfg.table("items")
    assert table.identifier == "id"
    assert table.multi_select is True
    assert [c.field for c in table.columns] == ["name", "value", "category", "organic"]
    assert table.columns[3].visible is False


def test_load_global_config_requires_global_json(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_global_config(tmp_path)


def test_invalid_json_raises_config_error(tmp_path):
    config_root = _write_config(tmp_path, _table())
    (config_root / "tables" / "broken.json").write_text("{not json")

    with pytest.raises(ConfigError):
        load_global_config(config_root)


def test_load_records_csv_maps_blank_cells_to_none(tmp_path):
    config_root = _write_config(tmp_path, _table())

    records = load_records(config_root / "data" / "items.csv")

    assert len(records) == 3
    assert records[0]["name"] == "Apple"
    assert records[2]["organic"] is None


def test_load_records_rejects_unknown_extension(tmp_path):
    path = tmp_path / "items.txt"
    path.write_text("x")

    with pytest.raises(ConfigError):
        load_records(path)


def test_build_store_configures_table(tmp_path):
    config_root = _write_config(tmp_path, _table())
    cfg = load_global_config(config_root)

    store = build_store(cfg.table("items"), cfg.data_root)

    state = store.state
    assert store.table_id == "items"
    assert len(state.data) == 3
    assert state.selection.multi_select is True
    assert state.selection.max_selection_limit == 2
    assert [c.field for c in store.visible_columns()] == ["name", "value", "category"]
    assert store.available_filter_options()["category"] == ["Fruit", "Vegetable"]
    assert store.available_filter_options()["organic"] == ["", "No", "Yes"]

    name_col, value_col = store.visible_columns()[:2]
    assert store.cell_value(state.data[0], name_col) == "APPLE"
    assert store.cell_value(state.data[0], value_col) == "$100"


def test_build_store_applies_initial_sort_from_json_records(tmp_path):
    records = json.dumps([
        {"id": 1, "name": "Apple", "value": 100, "category": "Fruit", "organic": True},
        {"id": 2, "name": "Banana", "value": 50, "category": "Fruit", "organic": False},
    ])
    table = _table(data="items.json", sort={"key": "value", "direction": "asc"})
    config_root = _write_config(tmp_path, table, records_name="items.json", records_text=records)
    cfg = load_global_config(config_root)

    store = build_store(cfg.table("items"), cfg.data_root)

    assert store.sort.key == "value"
    assert [r["id"] for r in store.visible_data()] == [2, 1]


def test_build_store_validates_first(tmp_path):
    table = _table(columns=[{"field": "name", "label": "Name", "type": "sparkline"}])
    config_root = _write_config(tmp_path, table)
    cfg = load_global_config(config_root)

    with pytest.raises(ValidationError) as exc:
        build_store(cfg.table("items"), cfg.data_root)

    assert [i.code for i in exc.value.issues] == ["COLUMN_TYPE"]


def test_unknown_formatter_chains_lookup_error():
    column = ColumnConfig.from_raw({"field": "price", "formatter": "roman"})

    with pytest.raises(UnknownFormatterError) as exc_info:
        column.to_descriptor()

    assert isinstance(exc_info.value.__cause__, KeyError)
