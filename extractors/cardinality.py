"""
Cardinality text helpers.

Cardinality cells are free text: ``1``, ``0..1``, ``1..n``, or a variant
marker such as ``(2)`` naming the second repetition of an element.
"""

from __future__ import annotations

import re
from typing import Optional

_VARIANT_RE = re.compile(r"\((\d)\)")

# Variants that only exist in the response; the request renders variant 1
ALTERNATE_VARIANTS = ("(2)", "(3)", "(4)")


def has_parenthetical(cardinality: Optional[str]) -> bool:
    return "(" in (cardinality or "")


def variant_number(cardinality: Optional[str]) -> Optional[int]:
    """Return N for a ``(N)`` variant marker, else ``None``."""
    match = _VARIANT_RE.search(cardinality or "")
    return int(match.group(1)) if match else None


def names_alternate_variant(cardinality: Optional[str]) -> bool:
    text = cardinality or ""
    return any(v in text for v in ALTERNATE_VARIANTS)


def response_suffix(cardinality: Optional[str]) -> str:
    """
    Path suffix contributed by a repeatable group.

    ``(N)`` -> ``/RN``, ``..n`` -> ``/R1``; ``1``, ``0..1`` and anything
    else contribute nothing.
    """
    text = cardinality or ""
    if has_parenthetical(text):
        number = variant_number(text)
        return f"/R{number}" if number is not None else ""
    if "..n" in text:
        return "/R1"
    return ""


def leaf_suffix(cardinality: Optional[str]) -> str:
    """Suffix of a REQUIREMENT leaf: ``(N)`` -> ``/RN``, otherwise ``/R1``."""
    number = variant_number(cardinality)
    return f"/R{number}" if number is not None else "/R1"
