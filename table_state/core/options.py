from __future__ import annotations

from typing import Dict, Iterable, Tuple

from table_state.core.columns import ColumnDescriptor
from table_state.core.filtering import FrameIndex


def derive_available_filter_options(
    index: FrameIndex,
    columns: Iterable[ColumnDescriptor],
) -> Dict[str, Tuple[str, ...]]:
    """
    Distinct normalised values per ``filterable_by_criteria`` column, sorted.

    Always computed from the full dataset, so the catalog never shrinks when
    filters narrow the visible rows.
    """
    options: Dict[str, Tuple[str, ...]] = {}
    for col in columns:
        if not col.filterable_by_criteria:
            continue
        series = index.normalised_series(col.field)
        options[col.field] = tuple(sorted(series.unique())) if index.size else ()
    return options
