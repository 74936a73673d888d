"""
curator — ChartMuseum client and CLI.

Packages Helm chart directories and pushes/deletes them
against a ChartMuseum server.
"""

from curator.chartmuseum import (
    Client,
    Response,
    ChartInfo,
    ChartService,
    Context,
    ChartMuseumError,
    APIError,
    ValidationError,
    background,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Response",
    "ChartInfo",
    "ChartService",
    "Context",
    "ChartMuseumError",
    "APIError",
    "ValidationError",
    "background",
]
