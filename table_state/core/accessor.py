from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional


class FieldAccessor:
    """
    Reads a named field from a record.

    Records may be mappings (dicts, pandas row dicts) or plain objects
    (dataclasses, namedtuples, ...). A field the record does not carry reads as None.

    The accessor also knows which fields were configured, so callers can check a
    field name before using it for sort / filter.
    """

    def __init__(self, fields: Iterable[str] = (), identifier: Optional[str] = None) -> None:
        known = list(fields)
        if identifier is not None:
            known.append(identifier)
        self._fields: frozenset[str] = frozenset(known)

    @property
    def fields(self) -> frozenset[str]:
        return self._fields

    def knows(self, field: str) -> bool:
        return field in self._fields

    @staticmethod
    def get(record: Any, field: str) -> Any:
        if isinstance(record, Mapping):
            return record.get(field)
        return getattr(record, field, None)

    def column(self, records: Iterable[Any], field: str) -> list[Any]:
        """Values of one field across all records, in record order."""
        return [self.get(r, field) for r in records]
