from .errors import ValidationError, ValidationIssue
from .config_validation import validate_table_config

__all__ = ["ValidationError", "ValidationIssue", "validate_table_config"]
