from __future__ import annotations

__all__ = ["IDs", "criteria_select_id"]


class IDs:
    class Control:
        GLOBAL_FILTER = "global-filter-input"
        COLUMN_TOGGLE = "column-toggle-checklist"
        CLEAR_SELECTION_BTN = "clear-selection-btn"

        # Table
        MAIN_TABLE = "main-table"

        # Status / feedback
        STATUS_BAR = "status-bar"
        SELECTION_SUMMARY = "selection-summary"
        SELECTION_ALERT = "selection-alert"

    class Pattern:
        # pattern-matching "type" strings
        CRITERIA_SELECT = "criteria-select"


def criteria_select_id(field: str) -> dict:
    return {"type": IDs.Pattern.CRITERIA_SELECT, "field": field}
