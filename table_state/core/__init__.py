"""
Core domain layer: column descriptors, state snapshots, the filter / sort /
selection algorithms and the TableStateStore that ties them together
"""

from .columns import ColumnDescriptor, MenuItem, Tooltip
from .selection import RowContext, SelectionExport, ToggleResult
from .state import FilterState, SelectionState, SortState, TableState
from .store import TableStateStore

__all__ = [
    "ColumnDescriptor",
    "MenuItem",
    "Tooltip",
    "RowContext",
    "SelectionExport",
    "ToggleResult",
    "FilterState",
    "SelectionState",
    "SortState",
    "TableState",
    "TableStateStore",
]
