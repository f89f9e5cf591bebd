"""
Request validation for the document generator.

Two stages:
- ``find_missing_fields`` checks presence of the required top-level keys and
  drives the 400 ``required`` list.
- ``parse_payload`` coerces a body that passed the presence check into a
  ``LiturgyRequest``; type errors surface as pydantic ``ValidationError``.
"""
from __future__ import annotations

import logging
from typing import Any, List

from pydantic import ValidationError

from app.models.schemas import LiturgyRequest

logger = logging.getLogger(__name__)

# title is optional; a document without one starts at the subtitle
REQUIRED_FIELDS = ("subtitle", "sections")


def _is_missing(data: dict, field: str) -> bool:
    value = data.get(field)
    if value is None:
        return True
    return isinstance(value, str) and value == ""


def find_missing_fields(data: Any) -> List[str]:
    """
    Return the required top-level fields absent from *data*.

    Args:
        data: Decoded JSON body; anything other than a dict counts as empty.

    Returns:
        Missing field names in ``REQUIRED_FIELDS`` order (empty when valid).
    """
    if not isinstance(data, dict):
        logger.debug("Request body is %s, not an object", type(data).__name__)
        return list(REQUIRED_FIELDS)
    return [f for f in REQUIRED_FIELDS if _is_missing(data, f)]


def parse_payload(data: dict) -> LiturgyRequest:
    """Coerce a decoded body into a ``LiturgyRequest`` (raises ``ValidationError``)."""
    return LiturgyRequest.model_validate(data)


def describe_validation_error(exc: ValidationError) -> List[str]:
    """Flatten pydantic errors into ``"sections.0.name: <msg>"`` strings."""
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        details.append(f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", ""))
    return details
