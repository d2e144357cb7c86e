"""
Document assembly.

    Request  = preamble + request walk
    Response = preamble (+ economic operator, lot) + request walk
               + response walk + evidence blocks
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from lxml import etree

from dto.element import ElementNode
from render.constants import REQUEST_EXTRA_NAMESPACES, REQUEST_NS, RESPONSE_NS
from render.header import add_evidence, add_preamble
from render.request import RequestRenderer
from render.response import ResponseRenderer
from render.xml import new_root, to_bytes

logger = logging.getLogger(__name__)


def build_request_document(
    forest: Mapping[str, ElementNode],
    issued_at: Optional[datetime.datetime] = None,
) -> etree._Element:
    root = new_root("QualificationApplicationRequest", REQUEST_NS, REQUEST_EXTRA_NAMESPACES)
    add_preamble(root, is_response=False, issued_at=issued_at)
    RequestRenderer().render(forest, root)
    return root


def build_response_document(
    forest: Mapping[str, ElementNode],
    issued_at: Optional[datetime.datetime] = None,
) -> Tuple[etree._Element, List[str]]:
    """Return the response root and the evidence identifiers it references."""
    root = new_root("QualificationApplicationResponse", RESPONSE_NS)
    add_preamble(root, is_response=True, issued_at=issued_at)

    RequestRenderer().render(forest, root)

    responses = ResponseRenderer()
    responses.render(forest, root)
    count = add_evidence(root, responses.evidence_ids)
    logger.info("  -> %d evidence block(s)", count)

    return root, responses.evidence_ids


def write_document(root: etree._Element, output_path: str) -> None:
    Path(output_path).write_bytes(to_bytes(root))
    logger.info("Output written to %s", output_path)
