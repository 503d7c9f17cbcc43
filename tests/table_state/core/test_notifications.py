from __future__ import annotations

from table_state.core.columns import ColumnDescriptor
from table_state.core.store import TableStateStore


def _make_store():
    store = TableStateStore()
    store.configure(
        [{"id": 1, "name": "Apple"}, {"id": 2, "name": "Banana"}],
        [ColumnDescriptor(field="name", label="Name", filterable_by_criteria=True)],
        "id",
    )
    return store


def test_listener_called_after_each_change():
    store = _make_store()
    seen = []
    store.subscribe(lambda state: seen.append(state.global_filter))

    store.update_global_filter("app")
    store.update_global_filter("ban")

    assert seen == ["app", "ban"]


def test_no_notification_when_state_unchanged():
    store = _make_store()
    seen = []
    store.subscribe(seen.append)

    store.update_global_filter("")
    store.update_criteria_filter("name", [])
    store.toggle_column_visibility("name", True)

    assert seen == []


def test_batch_notifies_once_with_final_state():
    store = _make_store()
    seen = []
    store.subscribe(seen.append)

    with store.batch():
        store.update_global_filter("a")
        store.update_criteria_filter("name", ["Banana"])
        with store.batch():
            store.update_sort("name", "desc")
        assert seen == []

    assert len(seen) == 1
    final = seen[0]
    assert final is store.state
    assert final.global_filter == "a"
    assert final.sort.key == "name"
    assert [r["name"] for r in store.visible_data()] == ["Banana"]


def test_unsubscribe_stops_notifications():
    store = _make_store()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    unsubscribe()
    store.update_global_filter("x")
    unsubscribe()

    assert seen == []


def test_views_never_stale_after_mutation():
    store = _make_store()
    views = []
    store.subscribe(lambda _state: views.append([r["name"] for r in store.visible_data()]))

    store.update_global_filter("apple")
    store.update_global_filter("")
    store.update_global_filter("apple")

    assert views == [["Apple"], ["Apple", "Banana"], ["Apple"]]


def test_configure_from_frame_maps_nan_to_none():
    import pandas as pd

    df = pd.DataFrame({"id": [1, 2], "name": ["Apple", None], "value": [1.0, float("nan")]})
    store = TableStateStore()

    store.configure_from_frame(df, [ColumnDescriptor(field="name", label="Name", filterable_by_criteria=True)], "id")

    assert store.state.data[1]["name"] is None
    assert store.state.data[1]["value"] is None
    assert store.available_filter_options() == {"name": ["", "Apple"]}


def test_reconfigure_with_equal_records_swaps_in_new_objects():
    store = _make_store()
    seen = []
    store.subscribe(seen.append)
    fresh = [{"id": 1, "name": "Apple"}, {"id": 2, "name": "Banana"}]

    store.configure(fresh, store.state.columns, "id")

    assert len(seen) == 1
    assert store.visible_data()[0] is fresh[0]
    assert store.row_by_id(1) is fresh[0]
