from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from table_state.core.accessor import FieldAccessor
from table_state.core.columns import ColumnDescriptor, Tooltip
from table_state.core.exceptions import UnknownFormatterError
from table_state.config.formatters import FORMATTERS, FormatterFactory


@dataclass(frozen=True)
class ColumnConfig:
    """
    One column as written in a table config file (snake_case keys).
    Formatters and tooltips are referenced by name / field and resolved in
    to_descriptor().
    """
    field: str
    label: str
    type: str = "text"
    sortable: bool = False
    searchable: bool = True
    filterable_by_criteria: bool = False
    formatter: Optional[str] = None
    visible: bool = True
    sticky: bool = False
    alignment: Optional[str] = None
    css_classes: Optional[str] = None
    tooltip_field: Optional[str] = None
    tooltip_position: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> ColumnConfig:
        field = str(raw.get("field", ""))
        return cls(
            field=field,
            label=raw.get("label", field),
            type=raw.get("type", "text"),
            sortable=bool(raw.get("sortable", False)),
            searchable=raw.get("searchable", True) is not False,
            filterable_by_criteria=bool(raw.get("filterable_by_criteria", False)),
            formatter=raw.get("formatter"),
            visible=raw.get("visible", True) is not False,
            sticky=bool(raw.get("sticky", False)),
            alignment=raw.get("alignment"),
            css_classes=raw.get("css_classes"),
            tooltip_field=raw.get("tooltip_field"),
            tooltip_position=raw.get("tooltip_position"),
        )

    def to_descriptor(self, formatters: Optional[Mapping[str, FormatterFactory]] = None) -> ColumnDescriptor:
        registry = FORMATTERS if formatters is None else formatters

        formatter = None
        if self.formatter:
            try:
                formatter = registry[self.formatter](self.field)
            except KeyError as e:
                raise UnknownFormatterError(f"Formatter '{self.formatter}' not registered") from e

        tooltip = None
        if self.tooltip_field:
            tooltip_field = self.tooltip_field
            tooltip = Tooltip(
                content=lambda row: str(FieldAccessor.get(row, tooltip_field) or ""),
                position=self.tooltip_position or "above",
            )

        return ColumnDescriptor(
            field=self.field,
            label=self.label,
            type=self.type,  # type: ignore[arg-type]
            sortable=self.sortable,
            searchable=self.searchable,
            filterable_by_criteria=self.filterable_by_criteria,
            formatter=formatter,
            visible=self.visible,
            sticky=self.sticky,
            alignment=self.alignment,
            css_classes=self.css_classes,
            tooltip=tooltip,
        )


@dataclass
class TableConfig:
    """
    Parsed config entry for a single table.
    """
    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def id(self) -> str:
        return self.raw.get("id", f"table-{self.index}")

    @property
    def title(self) -> str:
        return self.raw.get("title", self.id)

    @property
    def data(self) -> Optional[str]:
        return self.raw.get("data")

    @property
    def identifier(self) -> str:
        return self.raw.get("identifier", "")

    @property
    def multi_select(self) -> bool:
        return bool(self.raw.get("multi_select", False))

    @property
    def max_selection_limit(self) -> Optional[int]:
        return self.raw.get("max_selection_limit")

    @property
    def sort(self) -> Optional[Dict[str, Any]]:
        return self.raw.get("sort")

    @property
    def columns(self) -> List[ColumnConfig]:
        return [ColumnConfig.from_raw(c) for c in self.raw.get("columns", [])]

    def column_descriptors(self, formatters: Optional[Mapping[str, FormatterFactory]] = None) -> List[ColumnDescriptor]:
        return [c.to_descriptor(formatters) for c in self.columns]

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Path, index: int) -> TableConfig:
        return cls(raw=raw, source_path=source_path, index=index)


@dataclass
class GlobalConfig:
    ui_title: str
    default_table: Optional[str]
    tables: List[TableConfig]
    data_root: Optional[Path] = None
    log_level: str = "INFO"

    def table(self, table_id: str) -> TableConfig:
        for cfg in self.tables:
            if cfg.id == table_id:
                return cfg
        raise KeyError(f"Table '{table_id}' not found")
