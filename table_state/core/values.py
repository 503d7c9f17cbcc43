from __future__ import annotations

import math
from typing import Any, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from table_state.core.accessor import FieldAccessor
    from table_state.core.columns import ColumnDescriptor

EMPTY_CELL = "--"
EMPTY_DATE_CELL = "-:-"


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    return False


def normalise_value(value: Any) -> str:
    """
    Stringify a field value for criteria filtering and the filter options catalog.

    booleans -> "Yes"/"No", None/NaN -> "", everything else -> str(value)
    """
    if isinstance(value, (bool, np.bool_)):
        return "Yes" if value else "No"
    if is_missing(value):
        return ""
    return str(value)


def search_text(value: Any) -> str:
    """Lower-cased text the global filter matches against."""
    if is_missing(value):
        return ""
    return str(value).lower()


def cell_value(record: Any, column: ColumnDescriptor, accessor: FieldAccessor) -> str:
    """
    Display text for one cell.

    Empty values render as a placeholder, otherwise the column formatter wins,
    then booleans become Yes/No.
    """
    value = accessor.get(record, column.field)

    if is_missing(value) or value == "":
        return EMPTY_DATE_CELL if column.type == "date" else EMPTY_CELL

    if column.formatter is not None:
        return column.formatter(record)

    if isinstance(value, (bool, np.bool_)):
        return "Yes" if value else "No"

    return str(value)
