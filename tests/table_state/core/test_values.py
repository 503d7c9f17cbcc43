from __future__ import annotations

import numpy as np
import pytest

from table_state.core.accessor import FieldAccessor
from table_state.core.columns import ColumnDescriptor
from table_state.core.values import cell_value, normalise_value, search_text


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, "Yes"),
        (False, "No"),
        (np.bool_(True), "Yes"),
        (None, ""),
        (float("nan"), ""),
        (0, "0"),
        (1.5, "1.5"),
        ("Fruit", "Fruit"),
    ],
)
def test_normalise_value(value, expected):
    assert normalise_value(value) == expected


def test_search_text_lower_cases_and_blanks_missing():
    assert search_text("Apple") == "apple"
    assert search_text(None) == ""
    assert search_text(200) == "200"


def test_accessor_reads_mappings_and_objects():
    class Row:
        name = "obj"

    assert FieldAccessor.get({"name": "dict"}, "name") == "dict"
    assert FieldAccessor.get(Row(), "name") == "obj"
    assert FieldAccessor.get({"name": "dict"}, "missing") is None
    assert FieldAccessor.get(Row(), "missing") is None


def test_accessor_knows_configured_fields_and_identifier():
    accessor = FieldAccessor(["name", "value"], identifier="id")

    assert accessor.knows("id")
    assert accessor.knows("name")
    assert not accessor.knows("colour")


def test_cell_value_placeholders_formatter_and_booleans():
    accessor = FieldAccessor()
    text = ColumnDescriptor(field="name", label="Name")
    date = ColumnDescriptor(field="when", label="When", type="date")
    salary = ColumnDescriptor(
        field="salary", label="Salary", type="number", formatter=lambda r: f"${r['salary']:,}"
    )
    flag = ColumnDescriptor(field="ext", label="External", type="boolean")

    row = {"name": "", "when": None, "salary": 120000, "ext": True}

    assert cell_value(row, text, accessor) == "--"
    assert cell_value(row, date, accessor) == "-:-"
    assert cell_value(row, salary, accessor) == "$120,000"
    assert cell_value(row, flag, accessor) == "Yes"
