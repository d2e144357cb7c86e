import os

from typing import Dict, FrozenSet, Tuple

# Markers are only looked for in columns 1..SCAN_WINDOW
SCAN_WINDOW: int = int(os.getenv("ESPD_SCAN_WINDOW", "17"))

# Field name -> header label, matched exactly against trimmed cell text
FIELD_LABELS: Dict[str, str] = {
    "name": "Name",
    "description": "Description",
    "buyer_value": "Buyer Value (example)",
    "seller_value": "Seller Value (example)",
    "cardinality": "Cardinality",
    "property_data_type": "PropertyDataType",
    "element_uuid": "ElementUUID",
    "element_code": "Element Code",
    "code_list": "Code List",
    "comment": "Comment",
    "request_path": "XML PATH Like VARIANT ID Request",
    "response_path": "XML PATH LIKE VARIANT ID Response Structure",
    "response_content_1": "XML PATH LIKE VARIANT ID Response Contents (1)",
    "response_content_2": "XML PATH LIKE VARIANT ID Response Contents (2)",
    "response_content_3": "XML PATH LIKE VARIANT ID Response Contents (3)",
}

# CRITERION numbers that were withdrawn and must never be issued
INVALID_CRITERION_NUMBERS: FrozenSet[int] = frozenset({33, 62, 64})

# Sheet-name prefix -> namespace code of the criterion root path segment.
# Checked in order; the first matching prefix wins.
NAMESPACE_CODES: Tuple[Tuple[str, str], ...] = (
    ("EG-", "_EG_"),
    ("SC-", "_SC_"),
    ("SC_", "_SC_"),
    ("OTHER-", "_OT_"),
    ("OTHER.", "_OT_"),
)
