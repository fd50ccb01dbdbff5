"""Projections, exports and charts for yield pools."""

from .charts import create_liability_chart, create_rate_chart
from .export import export_json, export_positions_csv, positions_frame
from .projection import liability_projection

__all__ = [
    "create_liability_chart",
    "create_rate_chart",
    "export_json",
    "export_positions_csv",
    "liability_projection",
    "positions_frame",
]
