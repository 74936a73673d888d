"""curator.chart — Chart directory packaging."""

from curator.chart.package import (
    Chart, ChartMetadata, ChartError,
    is_chart_dir, load_chart, save_chart,
)

__all__ = [
    "Chart", "ChartMetadata", "ChartError",
    "is_chart_dir", "load_chart", "save_chart",
]
