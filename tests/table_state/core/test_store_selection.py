from __future__ import annotations

import numpy as np
import pytest

from table_state.core.columns import ColumnDescriptor, MenuItem
from table_state.core.selection import ToggleResult
from table_state.core.store import TableStateStore

APPLE = {"id": 1, "name": "Apple", "value": 100, "category": "Fruit"}
BANANA = {"id": 2, "name": "Banana", "value": 50, "category": "Fruit"}
CARROT = {"id": 3, "name": "Carrot", "value": 200, "category": "Vegetable"}


def _make_store(multi_select=False, max_selection_limit=None, **kwargs):
    columns = [
        ColumnDescriptor(field="name", label="Name"),
        ColumnDescriptor(field="value", label="Value", type="number"),
        ColumnDescriptor(field="category", label="Category", filterable_by_criteria=True),
    ]
    store = TableStateStore()
    store.configure(
        [APPLE, BANANA, CARROT],
        columns,
        "id",
        multi_select=multi_select,
        max_selection_limit=max_selection_limit,
        **kwargs,
    )
    return store


def test_limit_scenario():
    store = _make_store(multi_select=True, max_selection_limit=1)

    assert store.toggle_row_selection(APPLE) is ToggleResult.SELECTED
    assert store.selected_rows == (APPLE,)

    assert store.toggle_row_selection(BANANA) is ToggleResult.LIMIT_REACHED
    assert store.selected_rows == (APPLE,)

    assert store.toggle_row_selection(APPLE) is ToggleResult.DESELECTED
    assert store.selected_rows == ()


def test_limit_reached_leaves_state_untouched():
    store = _make_store(multi_select=True, max_selection_limit=1)
    store.toggle_row_selection(APPLE)
    before = store.state

    store.toggle_row_selection(BANANA)

    assert store.state is before


def test_selection_never_exceeds_limit():
    store = _make_store(multi_select=True, max_selection_limit=2)

    for row in [APPLE, BANANA, CARROT, APPLE, CARROT, BANANA, CARROT]:
        store.toggle_row_selection(row)
        assert len(store.selected_rows) <= 2


def test_multi_select_without_limit_appends_in_order():
    store = _make_store(multi_select=True)

    store.toggle_row_selection(CARROT)
    store.toggle_row_selection(APPLE)
    store.toggle_row_selection(BANANA)

    assert store.selected_rows == (CARROT, APPLE, BANANA)
    assert store.current_selection == BANANA


@pytest.mark.parametrize("limit", [None, 0])
def test_missing_or_zero_limit_means_unlimited(limit):
    store = _make_store(multi_select=True, max_selection_limit=limit)

    for row in [APPLE, BANANA, CARROT]:
        assert store.toggle_row_selection(row) is ToggleResult.SELECTED

    assert len(store.selected_rows) == 3


def test_single_select_replaces_instead_of_appending():
    store = _make_store(multi_select=False)

    store.toggle_row_selection(APPLE)
    result = store.toggle_row_selection(BANANA)

    assert result is ToggleResult.SELECTED
    assert store.selected_rows == (BANANA,)
    assert store.current_selection == BANANA


def test_single_select_ignores_limit():
    store = _make_store(multi_select=False, max_selection_limit=1)

    store.toggle_row_selection(APPLE)

    assert store.toggle_row_selection(BANANA) is ToggleResult.SELECTED
    assert store.selected_rows == (BANANA,)


def test_single_select_toggle_same_row_deselects():
    store = _make_store(multi_select=False)
    store.toggle_row_selection(APPLE)

    result = store.toggle_row_selection(APPLE)

    assert result is ToggleResult.DESELECTED
    assert store.selected_rows == ()
    assert store.current_selection == APPLE


def test_identity_is_by_identifier_not_object():
    store = _make_store(multi_select=True)
    store.toggle_row_selection(APPLE)

    copy_of_apple = dict(APPLE, name="Apple (edited)")

    assert store.is_row_selected(copy_of_apple)
    assert store.toggle_row_selection(copy_of_apple) is ToggleResult.DESELECTED


def test_global_filter_keeps_selection():
    store = _make_store(multi_select=True)
    store.toggle_row_selection(APPLE)

    store.update_global_filter("carrot")

    assert store.selected_rows == (APPLE,)


def test_configure_resets_selection_and_filters():
    store = _make_store(multi_select=True)
    store.toggle_row_selection(APPLE)
    store.update_global_filter("apple")
    store.update_criteria_filter("category", ["Fruit"])
    store.update_sort("value", "asc")

    store.configure([APPLE], [ColumnDescriptor(field="name", label="Name")], "id")

    state = store.state
    assert state.selected_rows == ()
    assert state.current_selection is None
    assert state.global_filter == ""
    assert dict(state.criteria_filters) == {}
    assert not state.sort.is_active
    assert state.selection.multi_select is False


def test_clear_selection():
    store = _make_store(multi_select=True)
    store.toggle_row_selection(APPLE)
    store.toggle_row_selection(BANANA)

    store.clear_selection()

    assert store.selected_rows == ()
    assert store.current_selection is None


def test_selection_export_reports_last_toggle():
    store = _make_store(multi_select=True, max_selection_limit=1)
    store.toggle_row_selection(APPLE)
    store.toggle_row_selection(BANANA)

    export = store.selection_export()

    assert export.selected_rows == (APPLE,)
    assert export.current_selection == APPLE
    assert export.toggle_state is ToggleResult.SELECTED


def test_row_by_id_and_row_context():
    store = _make_store(multi_select=True)
    store.toggle_row_selection(BANANA)

    assert store.row_by_id(3) is CARROT
    assert store.row_by_id(99) is None

    ctx = store.row_context(BANANA)
    assert ctx.is_selected and ctx.is_current
    assert ctx.selection_count == 1

    other = store.row_context(APPLE)
    assert not other.is_selected and not other.is_current


def test_menu_items_for_row_evaluates_disabled_predicate():
    menu = [
        MenuItem(label="Promote", disabled=lambda row: row["value"] > 150),
        MenuItem(label="Profile"),
    ]
    store = _make_store(row_context_menu=menu)

    flags = [(item.label, disabled) for item, disabled in store.menu_items_for(CARROT)]

    assert flags == [("Promote", True), ("Profile", False)]
    assert ToggleResult.LIMIT_REACHED == "limitReached"


def test_single_select_with_array_valued_records():
    first = {"id": 1, "name": "Apple", "vec": np.array([1, 2])}
    second = {"id": 2, "name": "Banana", "vec": np.array([3, 4])}
    store = TableStateStore()
    store.configure([first, second], [ColumnDescriptor(field="name", label="Name")], "id")

    assert store.toggle_row_selection(first) is ToggleResult.SELECTED
    assert store.toggle_row_selection(second) is ToggleResult.SELECTED
    assert len(store.selected_rows) == 1 and store.selected_rows[0] is second
    assert store.current_selection is second

    assert store.toggle_row_selection(second) is ToggleResult.DESELECTED
    assert store.selected_rows == ()

    store.clear_selection()
    assert store.current_selection is None
