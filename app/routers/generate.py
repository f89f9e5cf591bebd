"""
Document generation endpoint.

POST    / : JSON liturgy payload in, .docx attachment out.
OPTIONS / : CORS preflight, 200 with an empty body.
anything else → 405.

This route answers CORS itself: every response it produces carries the CORS
headers, and preflights reach the handler instead of a middleware. Methods
outside ``ALL_METHODS`` are rejected by the router; ``app.main`` turns that
405 into the same body via ``method_not_allowed``.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from app.config import settings
from app.models.schemas import (
    GenerationFailedResponse,
    InvalidRequestResponse,
    MethodNotAllowedResponse,
)
from app.services.docx_writer import DOCX_MIME_TYPE
from app.services.generator import GenerationResult, GenerationStatus, generate_document
from app.utils.helpers import content_disposition

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _allowed_origin(request: Request) -> Optional[str]:
    """``*`` when any origin is allowed, the caller's Origin when listed, else None."""
    origins = settings.get_allowed_origins()
    if not origins or "*" in origins:
        return "*"
    origin = request.headers.get("origin")
    return origin if origin in origins else None


def cors_headers(request: Request) -> Dict[str, str]:
    headers = {
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Expose-Headers": "Content-Disposition",
    }
    origin = _allowed_origin(request)
    if origin is not None:
        headers["Access-Control-Allow-Origin"] = origin
        if origin != "*":
            headers["Vary"] = "Origin"
    return headers


def method_not_allowed(request: Request) -> JSONResponse:
    """405 body shared by the handler and the app-level HTTPException handler."""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=MethodNotAllowedResponse().model_dump(),
        headers={**cors_headers(request), "Allow": "POST, OPTIONS"},
    )


def _to_response(request: Request, result: GenerationResult) -> Response:
    """Map a GenerationResult onto 200 / 400 / 500."""
    headers = cors_headers(request)

    if result.status is GenerationStatus.OK:
        headers["Content-Disposition"] = content_disposition(
            result.filename, settings.DEFAULT_FILENAME
        )
        return Response(
            content=result.content,
            media_type=DOCX_MIME_TYPE,
            headers=headers,
        )

    if result.status is GenerationStatus.INVALID:
        body = InvalidRequestResponse(
            required=list(result.missing),
            details=list(result.details) or None,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(exclude_none=True),
            headers=headers,
        )

    body = GenerationFailedResponse(message=result.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
        headers=headers,
    )


@router.api_route("", methods=ALL_METHODS, include_in_schema=False)
@router.api_route("/", methods=ALL_METHODS)
async def generate(request: Request) -> Response:
    """
    Render a bilingual (Latin / Slovenian) liturgy as a two-column .docx.

    ### Body
    | field     | required | notes                                          |
    |-----------|----------|------------------------------------------------|
    | title     | no       | bold heading; omitted when empty               |
    | subtitle  | yes      | centered line under the title                  |
    | filename  | no       | attachment name, default `liturgy.docx`        |
    | sections  | yes      | `[{name, latin: {reference, text}, slovenian}]` |

    Within `text`, a blank line starts a new paragraph and a single newline
    is an inline line break.
    """
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=cors_headers(request))

    if request.method != "POST":
        return method_not_allowed(request)

    try:
        data = await request.json()
    except ValueError as exc:
        logger.info("Request body is not valid JSON: %s", exc)
        data = {}

    result = await generate_document(data)
    return _to_response(request, result)
