from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional, Tuple

ColumnType = Literal["text", "number", "boolean", "date", "icon", "button", "menu", "custom"]

COLUMN_TYPES: frozenset[str] = frozenset(
    {"text", "number", "boolean", "date", "icon", "button", "menu", "custom"}
)

TOOLTIP_POSITIONS: frozenset[str] = frozenset(
    {"above", "below", "left", "right", "before", "after"}
)


@dataclass(frozen=True)
class MenuItem:
    """
    One entry of a row-scoped action menu.

    The store never runs ``action``; it only hands the record to whoever renders
    the menu. ``children`` turns the entry into a submenu.
    """
    label: str
    action: Optional[Callable[[Any], None]] = None
    icon: Optional[str] = None
    disabled: Optional[Callable[[Any], bool]] = None
    children: Tuple["MenuItem", ...] = ()

    def is_disabled(self, row: Any) -> bool:
        if self.disabled is None:
            return False
        return bool(self.disabled(row))

    @property
    def has_children(self) -> bool:
        return bool(self.children)


@dataclass(frozen=True)
class Tooltip:
    content: Callable[[Any], str]
    position: str = "above"
    disabled: Optional[Callable[[Any], bool]] = None

    def text_for(self, row: Any) -> str:
        return self.content(row)

    def is_disabled(self, row: Any) -> bool:
        if self.disabled is None:
            return False
        return bool(self.disabled(row))


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Immutable description of one table column.

    Fields:

    - field: record field the column reads (also the column id)
    - label: header text
    - type: one of COLUMN_TYPES
    - sortable: whether the UI should offer sorting (not enforced by the store)
    - searchable: included in the global filter unless explicitly False
    - filterable_by_criteria: gets an entry in the available filter options catalog
    - formatter: record -> display string, used only for presentation
    - visible: initial visibility

    The remaining fields are presentation hints passed through untouched.
    """
    field: str
    label: str
    type: ColumnType = "text"
    sortable: bool = False
    searchable: bool = True
    filterable_by_criteria: bool = False
    formatter: Optional[Callable[[Any], str]] = None
    visible: bool = True

    sticky: bool = False
    alignment: Optional[str] = None
    css_classes: Optional[str] = None
    tooltip: Optional[Tooltip] = None
    menu_items: Tuple[MenuItem, ...] = field(default_factory=tuple)
