"""
Shared fixtures for the liturgy DOCX service tests.

The service is stateless, so the client fixture simply wraps the FastAPI app
in an httpx AsyncClient over ASGITransport. Generated documents are reopened
with python-docx for inspection.
"""
from __future__ import annotations

import io
from typing import Any, AsyncGenerator, Dict

import pytest
import pytest_asyncio
from docx import Document as DocxDocument
from httpx import ASGITransport, AsyncClient

from app.main import app


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient wired to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def intro_payload() -> Dict[str, Any]:
    """One section with a Latin-only reference and two Latin paragraphs."""
    return {
        "subtitle": "S",
        "filename": "x.docx",
        "sections": [
            {
                "name": "Intro",
                "latin": {"reference": "Ps 1", "text": "a\nb\n\nc"},
                "slovenian": {"reference": "", "text": "č"},
            }
        ],
    }


@pytest.fixture
def mass_payload() -> Dict[str, Any]:
    """Three sections, only the middle one cited."""
    return {
        "title": "Missa in Dominica Paschae",
        "subtitle": "Velikonočna nedelja",
        "sections": [
            {
                "name": "Kyrie",
                "latin": {"text": "Kyrie eleison.\nChriste eleison.\nKyrie eleison."},
                "slovenian": {"text": "Gospod, usmili se.\nKristus, usmili se.\nGospod, usmili se."},
            },
            {
                "name": "Lectio",
                "latin": {"reference": "Act 10, 34a. 37-43", "text": "In diebus illis.\n\nVerbum Domini."},
                "slovenian": {"reference": "Apd 10,34a.37-43", "text": "Tiste dni.\n\nBeseda Gospodova."},
            },
            {
                "name": "Sanctus",
                "latin": {"text": "Sanctus, Sanctus, Sanctus"},
                "slovenian": {"text": ""},
            },
        ],
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def open_docx(content: bytes):
    """Reopen generated bytes as a python-docx Document."""
    return DocxDocument(io.BytesIO(content))
