"""
Generation step: validate → compose → serialize.

Returns a GenerationResult instead of raising, so the HTTP layer maps
outcomes to status codes in one place:

    result = await generate_document(body)
    if result.status is GenerationStatus.OK:
        ...  # result.content, result.filename
"""
from __future__ import annotations

import dataclasses
import enum
import logging
import time
from typing import Any, Tuple

from pydantic import ValidationError

from app.config import Settings, settings
from app.services.composer import compose_document
from app.services.docx_writer import serialize_docx
from app.services.validator import (
    REQUIRED_FIELDS,
    describe_validation_error,
    find_missing_fields,
    parse_payload,
)
from app.utils.helpers import sanitize_filename

logger = logging.getLogger(__name__)


class GenerationStatus(str, enum.Enum):
    OK = "ok"
    INVALID = "invalid"
    FAILED = "failed"


@dataclasses.dataclass(frozen=True)
class GenerationResult:
    status: GenerationStatus
    content: bytes = b""
    filename: str = ""
    missing: Tuple[str, ...] = ()
    details: Tuple[str, ...] = ()
    message: str = ""

    @classmethod
    def invalid(cls, missing, details=()) -> "GenerationResult":
        return cls(
            status=GenerationStatus.INVALID,
            missing=tuple(missing),
            details=tuple(details),
        )

    @classmethod
    def failed(cls, message: str) -> "GenerationResult":
        return cls(status=GenerationStatus.FAILED, message=message)


async def generate_document(data: Any, cfg: Settings = settings) -> GenerationResult:
    """
    Turn a decoded JSON body into DOCX bytes.

    Args:
        data: Decoded request body (anything; non-objects are invalid).
        cfg:  Settings used for layout and the default filename.

    Returns:
        GenerationResult with status OK (content + filename), INVALID
        (missing fields and/or type details) or FAILED (error message).
    """
    missing = find_missing_fields(data)
    if missing:
        logger.info("Rejected request: missing %s", ", ".join(missing))
        return GenerationResult.invalid(missing)

    try:
        request = parse_payload(data)
    except ValidationError as exc:
        details = describe_validation_error(exc)
        logger.info("Rejected request: %s", "; ".join(details))
        return GenerationResult.invalid(REQUIRED_FIELDS, details)

    t0 = time.monotonic()
    try:
        tree = compose_document(request, cfg)
        content = await serialize_docx(tree)
    except Exception as exc:
        logger.exception("Document generation failed: %s", exc)
        return GenerationResult.failed(str(exc))

    filename = sanitize_filename(request.filename, cfg.DEFAULT_FILENAME)
    logger.info(
        "Generated %r: %d sections, %d bytes (%.2f ms)",
        filename,
        len(request.sections),
        len(content),
        (time.monotonic() - t0) * 1000,
    )
    return GenerationResult(
        status=GenerationStatus.OK,
        content=content,
        filename=filename,
    )
