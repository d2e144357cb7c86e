"""
ESPD XML rendering.

Turns the criterion forest into the two UBL-2.3 documents:
  1. ``build_request_document``   QualificationApplicationRequest
  2. ``build_response_document``  QualificationApplicationResponse
"""

from render.document import build_request_document, build_response_document, write_document
from render.request import RequestRenderer
from render.response import ResponseRenderer, select_branch

__all__ = [
    "build_request_document",
    "build_response_document",
    "write_document",
    "RequestRenderer",
    "ResponseRenderer",
    "select_branch",
]
