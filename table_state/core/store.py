from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from table_state.core.accessor import FieldAccessor
from table_state.core.columns import ColumnDescriptor, MenuItem
from table_state.core.filtering import FrameIndex, filter_positions
from table_state.core.options import derive_available_filter_options
from table_state.core.selection import (
    RowContext,
    SelectionExport,
    ToggleResult,
    cleared,
    find_selected,
    toggle,
)
from table_state.core.sorting import sort_positions
from table_state.core.state import (
    FilterState,
    SelectionState,
    SortState,
    TableState,
    frozen_options,
    initial_visibility,
    normalise_direction,
    with_visibility,
)
from table_state.core.values import cell_value

logger = logging.getLogger(__name__)

Listener = Callable[[TableState], None]


class TableStateStore:
    """
    Single source of truth for one table.

    Holds the canonical TableState and exposes:
    - mutators (configure, update_global_filter, update_criteria_filter,
      update_sort, toggle_column_visibility, toggle_row_selection, ...)
    - derived views recomputed from the current state (visible_data,
      visible_columns, available_filter_options)

    Design Notes:
    - Every mutator swaps in a new frozen TableState; snapshots handed out are
      never modified afterwards.
    - Derived views are memoised, keyed by the filter / sort state they depend on.
      configure() drops every cache, so a view is never stale.
    - Listeners are notified after each mutation that changed state (configure
      and accepted toggles always count as a change); inside
      ``batch()`` they are notified once, with the final state.
    - Not thread-safe: mutate from one thread only.

    Caller responsibilities (not validated):
    - identifier values are unique across the dataset
    - sort keys / criteria fields name real record fields. Unknown names log a
      warning and simply match nothing (filters) or leave order unchanged (sort).
    """

    MAX_VIEW_CACHE = 64

    # -------------------------------------------------------------------------
    # Constructor
    # -------------------------------------------------------------------------
    def __init__(self, table_id: str = "default-table") -> None:
        self._state = TableState(table_id=table_id)
        self._accessor = FieldAccessor()
        self._index = FrameIndex((), (), self._accessor)
        self._by_id: Dict[Any, Any] = {}

        # Caches of derived views
        self._filter_cache: Dict[Tuple[Any, ...], np.ndarray] = {}
        self._view_cache: Dict[Tuple[Any, ...], Tuple[Any, ...]] = {}
        self._columns_cache: Optional[Tuple[Any, Tuple[ColumnDescriptor, ...]]] = None

        # Change notification
        self._listeners: List[Listener] = []
        self._batch_depth = 0
        self._dirty = False

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------
    @property
    def state(self) -> TableState:
        """Current snapshot. Immutable; re-read after every mutation."""
        return self._state

    @property
    def table_id(self) -> str:
        return self._state.table_id

    @property
    def filters(self) -> FilterState:
        return self._state.filters

    @property
    def sort(self) -> SortState:
        return self._state.sort

    @property
    def selection(self) -> SelectionState:
        return self._state.selection

    @property
    def selected_rows(self) -> Tuple[Any, ...]:
        return self._state.selection.selected_rows

    @property
    def current_selection(self) -> Any:
        return self._state.selection.current_selection

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------
    def configure(
        self,
        data: Iterable[Any],
        columns: Iterable[ColumnDescriptor],
        identifier: str,
        multi_select: bool = False,
        max_selection_limit: Optional[int] = None,
        *,
        table_id: Optional[str] = None,
        row_context_menu: Iterable[MenuItem] = (),
    ) -> None:
        """
        Replace dataset and columns and reset every user-controlled piece of state.

        - column visibility is rebuilt from each column's ``visible`` flag
        - the filter options catalog is rebuilt from the full ``data``
        - global filter, criteria filters, sort and selection are cleared
        - selection policy is taken from ``multi_select`` / ``max_selection_limit``

        :param data: records; mappings or objects exposing the column fields
        :param columns: column descriptors, in display order
        :param identifier: field used for row identity in selection
        :param multi_select: allow more than one selected row
        :param max_selection_limit: selection ceiling for multi-select (None/0 = unlimited)
        """
        records = tuple(data)
        cols = tuple(columns)

        self._accessor = FieldAccessor((c.field for c in cols), identifier=identifier)
        self._index = FrameIndex(records, cols, self._accessor)
        self._by_id = {FieldAccessor.get(r, identifier): r for r in records}
        self.clear_cache()

        options = derive_available_filter_options(self._index, cols)

        self._commit(
            TableState(
                table_id=table_id or self._state.table_id,
                loading=self._state.loading,
                data=records,
                columns=cols,
                identifier=identifier,
                filters=FilterState(),
                sort=SortState(),
                selection=SelectionState(
                    multi_select=bool(multi_select),
                    max_selection_limit=max_selection_limit,
                ),
                column_visibility=initial_visibility(cols),
                available_filter_options=frozen_options(options),
                row_context_menu=tuple(row_context_menu),
            )
        )

        logger.info(
            "Table configured",
            extra={
                "table_id": self._state.table_id,
                "n_rows": len(records),
                "n_columns": len(cols),
                "identifier": identifier,
                "multi_select": bool(multi_select),
                "max_selection_limit": max_selection_limit,
            },
        )

    def configure_from_frame(
        self,
        df: pd.DataFrame,
        columns: Iterable[ColumnDescriptor],
        identifier: str,
        multi_select: bool = False,
        max_selection_limit: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """
        Convenience wrapper around configure() for a pandas DataFrame.
        Each row becomes a dict record; NaN cells become None.
        """
        records = df.astype(object).where(df.notna(), None).to_dict("records")
        self.configure(records, columns, identifier, multi_select, max_selection_limit, **kwargs)

    def set_loading(self, is_loading: bool) -> None:
        if bool(is_loading) != self._state.loading:
            self._commit(replace(self._state, loading=bool(is_loading)))

    # -------------------------------------------------------------------------
    # Filters & sort
    # -------------------------------------------------------------------------
    def update_global_filter(self, query: str) -> None:
        """
        Set the free-text query (trimmed, lower-cased).

        Selection is kept: rows filtered out of view stay selected.
        """
        filters = self._state.filters.with_global_filter(query)
        logger.debug("Global filter updated", extra={"table_id": self.table_id, "query": filters.global_filter})
        self._commit_filters(filters)

    def update_criteria_filter(self, field: str, selected_values: Sequence[Any]) -> None:
        """
        Restrict ``field`` to ``selected_values``; an empty list removes the
        field's filter entirely. The options catalog is left untouched.
        """
        if not self._accessor.knows(field):
            logger.warning(
                "Criteria filter on unknown field",
                extra={"table_id": self.table_id, "field": field},
            )
        filters = self._state.filters.with_criteria(field, selected_values)
        logger.debug(
            "Criteria filter updated",
            extra={"table_id": self.table_id, "field": field, "values": list(filters.criteria_filters.get(field, ()))},
        )
        self._commit_filters(filters)

    def clear_filters(self) -> None:
        self._commit_filters(FilterState())

    def update_sort(self, key: Optional[str], direction: Optional[str]) -> None:
        """Set sort verbatim. Sortability of ``key`` is the caller's concern."""
        if key and not self._accessor.knows(key):
            logger.warning("Sort on unknown field", extra={"table_id": self.table_id, "field": key})
        sort = SortState(key=key or None, direction=normalise_direction(direction))
        logger.debug("Sort updated", extra={"table_id": self.table_id, **sort.to_dict()})
        if sort != self._state.sort:
            self._commit(replace(self._state, sort=sort))

    # -------------------------------------------------------------------------
    # Column visibility
    # -------------------------------------------------------------------------
    def toggle_column_visibility(self, field: str, visible: bool) -> None:
        visibility = with_visibility(self._state.column_visibility, field, visible)
        if visibility != self._state.column_visibility:
            self._commit(replace(self._state, column_visibility=visibility))

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------
    def toggle_row_selection(self, row: Any) -> ToggleResult:
        """
        Toggle ``row`` by identifier.

        :return ToggleResult: selected | deselected | limitReached. On
            limitReached state is left exactly as it was.
        """
        selection, result = toggle(self._state.selection, row, self._state.identifier)

        if result is ToggleResult.LIMIT_REACHED:
            logger.debug(
                "Selection limit reached",
                extra={"table_id": self.table_id, "limit": selection.max_selection_limit},
            )
            return result

        self._commit(replace(self._state, selection=selection))
        return result

    def clear_selection(self) -> None:
        selection = self._state.selection
        if selection.selected_rows or selection.current_selection is not None or selection.last_toggle is not None:
            self._commit(replace(self._state, selection=cleared(selection)))

    def is_row_selected(self, row: Any) -> bool:
        return find_selected(self._state.selection, row, self._state.identifier) != -1

    def row_by_id(self, key: Any) -> Any:
        """Record whose identifier equals ``key`` (None if absent)."""
        return self._by_id.get(key)

    def selection_export(self) -> SelectionExport:
        selection = self._state.selection
        return SelectionExport(
            selected_rows=selection.selected_rows,
            current_selection=selection.current_selection,
            toggle_state=selection.last_toggle,
        )

    def row_context(self, row: Any) -> RowContext:
        identifier = self._state.identifier
        current = self._state.selection.current_selection
        return RowContext(
            row=row,
            is_selected=self.is_row_selected(row),
            is_current=current is not None
            and FieldAccessor.get(current, identifier) == FieldAccessor.get(row, identifier),
            selection_count=self._state.selection.count,
        )

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------
    def visible_data(self) -> Tuple[Any, ...]:
        """
        Rows after global filter, then criteria filters, then stable sort.
        Column visibility has no effect here.
        """
        filters = self._state.filters
        sort = self._state.sort
        key = (filters.cache_key(), sort.cache_key())

        cached = self._view_cache.get(key)
        if cached is not None:
            return cached

        positions = self._filtered_positions(filters)
        if sort.is_active:
            positions = sort_positions(positions, self._index.raw(sort.key), sort)

        data = self._state.data
        view = tuple(data[int(p)] for p in positions)

        self._view_cache[key] = view
        if len(self._view_cache) > self.MAX_VIEW_CACHE:
            self._view_cache.clear()

        return view

    def visible_columns(self) -> Tuple[ColumnDescriptor, ...]:
        """Configured columns whose visibility flag is on, in configured order."""
        state = self._state
        if self._columns_cache is not None and self._columns_cache[0] is state.column_visibility:
            return self._columns_cache[1]

        columns = tuple(c for c in state.columns if state.is_column_visible(c.field))
        self._columns_cache = (state.column_visibility, columns)
        return columns

    def available_filter_options(self) -> Dict[str, List[str]]:
        """Fresh copy of the options catalog: field -> sorted distinct values."""
        return {k: list(v) for k, v in self._state.available_filter_options.items()}

    def column_visibility(self) -> Dict[str, bool]:
        return dict(self._state.column_visibility)

    def cell_value(self, row: Any, column: ColumnDescriptor) -> str:
        return cell_value(row, column, self._accessor)

    def _filtered_positions(self, filters: FilterState) -> np.ndarray:
        key = filters.cache_key()
        cached = self._filter_cache.get(key)
        if cached is not None:
            return cached

        positions = filter_positions(self._index, filters)
        self._filter_cache[key] = positions
        if len(self._filter_cache) > self.MAX_VIEW_CACHE:
            self._filter_cache.clear()
        return positions

    # -------------------------------------------------------------------------
    # Cache management
    # -------------------------------------------------------------------------
    def clear_cache(self) -> None:
        self._filter_cache.clear()
        self._view_cache.clear()
        self._columns_cache = None

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call ``listener(state)`` after every completed change.

        :return: a callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def batch(self) -> Iterator[TableStateStore]:
        """
        Group several mutations; listeners are notified once on exit of the
        outermost batch, and only if something changed.
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self._dirty = False
                self._notify()

    def _commit_filters(self, filters: FilterState) -> None:
        if filters != self._state.filters:
            self._commit(replace(self._state, filters=filters))

    def _commit(self, state: TableState) -> None:
        # Callers decide whether anything changed. Records are opaque and are
        # never compared by value.
        self._state = state
        if self._batch_depth:
            self._dirty = True
            return
        self._notify()

    def _notify(self) -> None:
        state = self._state
        for listener in list(self._listeners):
            listener(state)

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------
    def menu_items_for(self, row: Any) -> List[Tuple[MenuItem, bool]]:
        """Row context menu entries paired with their disabled flag for ``row``."""
        return [(item, item.is_disabled(row)) for item in self._state.row_context_menu]

