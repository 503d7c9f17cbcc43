from __future__ import annotations

from dataclasses import dataclass

from table_state.core.exceptions import TableStateError


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str


class ValidationError(TableStateError):
    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__("\n".join(f"{i.code}: {i.message}" for i in issues))
