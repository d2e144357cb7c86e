"""
Thin lxml helpers shared by the request and response renderers.

Element names are written ``"cac:TenderingCriterion"`` and resolved against
``render.constants.NAMESPACES``.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from lxml import etree

from render.constants import NAMESPACES, SCHEMA_LOCATIONS

# Characters lxml refuses in text nodes
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def qname(name: str) -> str:
    """``"cbc:ID"`` -> ``"{urn:...CommonBasicComponents-2}ID"``."""
    prefix, _, local = name.partition(":")
    if not local:
        return name
    return f"{{{NAMESPACES[prefix]}}}{local}"


def _text(value) -> Optional[str]:
    if value is None:
        return None
    return _CONTROL_CHARS_RE.sub("", str(value))


def new_root(
    local_name: str,
    default_ns: str,
    extra_namespaces: Optional[Dict[str, str]] = None,
) -> etree._Element:
    nsmap = {None: default_ns, **NAMESPACES, **(extra_namespaces or {})}
    root = etree.Element(f"{{{default_ns}}}{local_name}", nsmap=nsmap)
    root.set(qname("xsi:schemaLocation"), SCHEMA_LOCATIONS[default_ns])
    return root


def sub(
    parent: etree._Element,
    name: str,
    text=None,
    attrs: Optional[Dict[str, str]] = None,
) -> etree._Element:
    """Append a child element, optionally with text and attributes."""
    element = etree.SubElement(parent, qname(name))
    for key, value in (attrs or {}).items():
        element.set(key, str(value))
    element.text = _text(text)
    return element


def comment(parent: etree._Element, text: str) -> etree._Element:
    """Append an XML comment; ``--`` is not allowed inside comments."""
    body = (_text(text) or "").replace("--", "- -")
    if body.endswith("-"):
        body += " "
    node = etree.Comment(body)
    parent.append(node)
    return node


def to_bytes(root: etree._Element) -> bytes:
    return etree.tostring(
        root,
        pretty_print=True,
        xml_declaration=True,
        encoding="UTF-8",
    )
