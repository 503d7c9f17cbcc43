"""
Named cell formatters that JSON table configs can refer to.

Each entry is a factory: given the column field it returns a ``record -> str``
callable, which is what ColumnDescriptor.formatter expects.
"""
from __future__ import annotations

from typing import Any, Callable, Dict

import pandas as pd

from table_state.core.accessor import FieldAccessor
from table_state.core.values import normalise_value

Formatter = Callable[[Any], str]
FormatterFactory = Callable[[str], Formatter]


def _currency(field: str) -> Formatter:
    def fmt(record: Any) -> str:
        return f"${float(FieldAccessor.get(record, field)):,.0f}"
    return fmt


def _upper(field: str) -> Formatter:
    def fmt(record: Any) -> str:
        return str(FieldAccessor.get(record, field)).upper()
    return fmt


def _yes_no(field: str) -> Formatter:
    def fmt(record: Any) -> str:
        return normalise_value(bool(FieldAccessor.get(record, field)))
    return fmt


def _iso_date(field: str) -> Formatter:
    def fmt(record: Any) -> str:
        return pd.Timestamp(FieldAccessor.get(record, field)).strftime("%Y-%m-%d %H:%M")
    return fmt


FORMATTERS: Dict[str, FormatterFactory] = {
    "currency": _currency,
    "upper": _upper,
    "yes_no": _yes_no,
    "iso_date": _iso_date,
}
