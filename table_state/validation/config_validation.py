from __future__ import annotations

from typing import Iterable, Optional

from table_state.config.formatters import FORMATTERS
from table_state.config.model import TableConfig
from table_state.core.columns import COLUMN_TYPES, TOOLTIP_POSITIONS
from table_state.validation.errors import ValidationIssue, ValidationError


def validate_table_config(cfg: TableConfig, formatter_names: Optional[Iterable[str]] = None) -> None:
    """
    Check a parsed table config before it is turned into a store.

    Only structural problems are reported; data-dependent contracts (unique
    identifier values, fields present on every record) stay with the caller.

    :raises ValidationError: with one ValidationIssue per problem found
    """
    issues: list[ValidationIssue] = []
    known_formatters = set(formatter_names if formatter_names is not None else FORMATTERS)

    if not cfg.identifier:
        issues.append(ValidationIssue("TABLE_IDENTIFIER", f"Table '{cfg.id}' has no identifier field."))

    limit = cfg.max_selection_limit
    if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit < 0):
        issues.append(
            ValidationIssue("TABLE_SELECTION_LIMIT", f"max_selection_limit must be a non-negative int, got {limit!r}.")
        )

    if not cfg.columns:
        issues.append(ValidationIssue("TABLE_NO_COLUMNS", f"Table '{cfg.id}' defines no columns."))

    seen: set[str] = set()
    for col in cfg.columns:
        if not col.field:
            issues.append(ValidationIssue("COLUMN_FIELD", "Column without a 'field'."))
            continue

        if col.field in seen:
            issues.append(ValidationIssue("COLUMN_DUPLICATE", f"Column '{col.field}' is defined more than once."))
        seen.add(col.field)

        if col.type not in COLUMN_TYPES:
            issues.append(
                ValidationIssue("COLUMN_TYPE", f"Column '{col.field}' has unknown type '{col.type}'.")
            )

        if col.formatter and col.formatter not in known_formatters:
            issues.append(
                ValidationIssue("COLUMN_FORMATTER", f"Column '{col.field}' uses unknown formatter '{col.formatter}'.")
            )

        if col.tooltip_position and col.tooltip_position not in TOOLTIP_POSITIONS:
            issues.append(
                ValidationIssue(
                    "COLUMN_TOOLTIP_POSITION",
                    f"Column '{col.field}' has unknown tooltip position '{col.tooltip_position}'.",
                )
            )

    if issues:
        raise ValidationError(issues)
