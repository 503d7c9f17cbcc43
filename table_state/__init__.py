"""
Top-level package for the table state engine.

This package exposes the core state engine plus its collaborators.
Most code should import from submodules such as:
    table_state.core
    table_state.config
    table_state.ui
"""

__all__: list[str] = []
