"""
Row-level detection for questionnaire worksheets.

  - ``classify_row``   find and classify the tag marker of a row
  - ``scan_header``    rediscover field columns from header labels
  - ``extract_fields`` read the discovered fields of a row
"""

from detection.columns import extract_fields, field_value, scan_header
from detection.markers import classify_row, marker_kind

__all__ = [
    "classify_row",
    "marker_kind",
    "scan_header",
    "extract_fields",
    "field_value",
]
