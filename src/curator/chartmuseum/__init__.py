"""curator.chartmuseum — ChartMuseum API client."""

from curator.chartmuseum.context import (
    Context, ContextError, Canceled, DeadlineExceeded, background,
)
from curator.chartmuseum.client import (
    Client, Response, ChartMuseumError, APIError,
    USER_AGENT, MEDIA_TYPE,
)
from curator.chartmuseum.charts import (
    ChartInfo, ChartService, ValidationError, detect_content_type,
)

__all__ = [
    "Context", "ContextError", "Canceled", "DeadlineExceeded", "background",
    "Client", "Response", "ChartMuseumError", "APIError",
    "USER_AGENT", "MEDIA_TYPE",
    "ChartInfo", "ChartService", "ValidationError", "detect_content_type",
]
