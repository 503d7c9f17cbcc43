"""
UI adapters for the table state engine.

Currently provides a Dash-based web UI via create_dash_app(). The UI only reads
derived views and calls store mutators; it holds no table logic of its own.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]
