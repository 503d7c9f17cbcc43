from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from table_state.core.accessor import FieldAccessor
from table_state.core.columns import ColumnDescriptor
from table_state.core.state import FilterState
from table_state.core.values import normalise_value, search_text


class FrameIndex:
    """
    Column-wise view of one dataset, built once per configuration.

    Includes:
    - raw field values (for sorting)
    - pre-normalised string Series (for criteria filters and option catalogs)
    - pre-lower-cased search Series for searchable columns (for the global filter)

    Fields that are not configured columns are materialised lazily the first time
    a filter or sort asks for them.
    """

    def __init__(
        self,
        records: Sequence[Any],
        columns: Iterable[ColumnDescriptor],
        accessor: FieldAccessor,
    ) -> None:
        self._records = records
        self._accessor = accessor
        self.size = len(records)

        columns = list(columns)
        self.searchable_fields: Tuple[str, ...] = tuple(
            dict.fromkeys(c.field for c in columns if c.searchable is not False)
        )

        self._raw: Dict[str, List[Any]] = {}
        self._normalised: Dict[str, pd.Series] = {}
        self._search: Dict[str, pd.Series] = {}

        for col in columns:
            self.raw(col.field)
        for name in self.searchable_fields:
            self.search_series(name)

    def raw(self, field: str) -> List[Any]:
        values = self._raw.get(field)
        if values is None:
            values = self._accessor.column(self._records, field)
            self._raw[field] = values
        return values

    def normalised_series(self, field: str) -> pd.Series:
        series = self._normalised.get(field)
        if series is None:
            series = pd.Series([normalise_value(v) for v in self.raw(field)], dtype=object)
            self._normalised[field] = series
        return series

    def search_series(self, field: str) -> pd.Series:
        series = self._search.get(field)
        if series is None:
            series = pd.Series([search_text(v) for v in self.raw(field)], dtype=object)
            self._search[field] = series
        return series


# -------------------------------------------------------------------------
# Masks
# -------------------------------------------------------------------------
def global_filter_mask(index: FrameIndex, query: str) -> np.ndarray:
    """
    Rows where ANY searchable column contains ``query`` (already lower-cased).
    An empty query keeps every row.
    """
    if not query:
        return np.ones(index.size, dtype=bool)

    mask = np.zeros(index.size, dtype=bool)
    if index.size == 0:
        return mask

    for name in index.searchable_fields:
        mask |= index.search_series(name).str.contains(query, regex=False).to_numpy(dtype=bool)
    return mask


def criteria_filter_mask(index: FrameIndex, criteria: dict[str, Sequence[str]]) -> np.ndarray:
    """AND across fields, OR across the selected values of one field."""
    mask = np.ones(index.size, dtype=bool)
    if index.size == 0:
        return mask

    for name, selected in criteria.items():
        if not selected:
            continue
        mask &= index.normalised_series(name).isin(list(selected)).to_numpy(dtype=bool)
    return mask


def filter_positions(index: FrameIndex, filters: FilterState) -> np.ndarray:
    """
    Positions (into the configured dataset) of rows passing the global filter
    followed by the criteria filters.
    """
    mask = global_filter_mask(index, filters.global_filter)
    mask &= criteria_filter_mask(index, dict(filters.criteria_filters))
    return np.flatnonzero(mask)
