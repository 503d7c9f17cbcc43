from __future__ import annotations

import logging
from typing import Any, Iterable, List, Sequence

from table_state.core.state import SortState
from table_state.core.values import is_missing

logger = logging.getLogger(__name__)


def sort_positions(positions: Iterable[int], values: Sequence[Any], sort: SortState) -> List[int]:
    """
    Stable-sort row positions by ``values[position]``.

    - Inactive sort returns the positions in their incoming order.
    - Ties keep their incoming relative order in both directions.
    - Missing values (None / NaN) go last in both directions.
    - Values that cannot be compared with each other leave the order untouched
      and log a warning.
    """
    positions = list(positions)
    if not sort.is_active:
        return positions

    present = [p for p in positions if not is_missing(values[p])]
    missing = [p for p in positions if is_missing(values[p])]

    try:
        ordered = sorted(present, key=values.__getitem__, reverse=sort.direction == "desc")
    except TypeError as e:
        logger.warning(
            "Cannot sort by field; values are not comparable",
            extra={"sort_key": sort.key, "error": str(e)},
        )
        return positions

    return ordered + missing
