"""
Document composer: turns a validated LiturgyRequest into a DocumentTree.

Layout per section:
- centered bold heading with the section name
- optional reference row (italic citations), present when either side has one
- mandatory text row, Latin left / Slovenian right, 50/50 borderless columns

Composition is pure: the same request always yields an equal tree.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Tuple

from app.config import Settings, settings
from app.models.document_tree import (
    NO_BORDERS,
    Alignment,
    DocumentTree,
    PageMargins,
    Paragraph,
    RowKind,
    Table,
    TableCell,
    TableRow,
    TextRun,
)
from app.models.schemas import LiturgyRequest, LiturgySection

logger = logging.getLogger(__name__)

# Spacing in points
TITLE_SPACE_AFTER = 20.0
SECTION_SPACE_BEFORE = 15.0
SECTION_SPACE_AFTER = 10.0
REFERENCE_SPACE_AFTER = 5.0
TEXT_SPACE_AFTER = 5.0


# ---------------------------------------------------------------------------
# Text-to-paragraph transform
# ---------------------------------------------------------------------------

def split_paragraph_blocks(text: str) -> List[List[str]]:
    """
    Split *text* into paragraph blocks of lines.

    A line that is empty or whitespace-only (``str.isspace`` rules, so NBSP and
    form feed count) closes the current block; other lines join it. Kept lines
    lose trailing whitespace but keep their indentation.
    """
    blocks: List[List[str]] = []
    current: List[str] = []
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    for line in normalized.split("\n"):
        if line.strip():
            current.append(line.rstrip())
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def text_to_paragraphs(
    text: str,
    size: float | None = None,
    space_after: float | None = TEXT_SPACE_AFTER,
) -> Tuple[Paragraph, ...]:
    """
    Render body text as paragraphs joined internally by inline breaks.

    Always returns at least one paragraph so the enclosing table cell is valid.
    """
    blocks = split_paragraph_blocks(text)
    if not blocks:
        return (Paragraph(runs=(TextRun(text="", size=size),), space_after=space_after),)

    paragraphs = []
    for lines in blocks:
        last = len(lines) - 1
        runs = tuple(
            TextRun(text=line, size=size, break_after=i < last)
            for i, line in enumerate(lines)
        )
        paragraphs.append(Paragraph(runs=runs, space_after=space_after))
    return tuple(paragraphs)


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

def _has_reference(section: LiturgySection) -> bool:
    return bool(section.latin.reference or section.slovenian.reference)


def _reference_cell(reference: str, cfg: Settings) -> TableCell:
    run = TextRun(text=reference, italic=True, size=cfg.REFERENCE_FONT_SIZE)
    return TableCell(
        paragraphs=(Paragraph(runs=(run,), space_after=REFERENCE_SPACE_AFTER),),
        borders=NO_BORDERS,
    )


def _text_cell(text: str, cfg: Settings) -> TableCell:
    return TableCell(
        paragraphs=text_to_paragraphs(text, size=cfg.TEXT_FONT_SIZE),
        borders=NO_BORDERS,
    )


def _reference_row(section: LiturgySection, cfg: Settings) -> TableRow:
    return TableRow(
        kind=RowKind.REFERENCE,
        cells=(
            _reference_cell(section.latin.reference, cfg),
            _reference_cell(section.slovenian.reference, cfg),
        ),
    )


def _text_row(section: LiturgySection, cfg: Settings) -> TableRow:
    return TableRow(
        kind=RowKind.TEXT,
        cells=(
            _text_cell(section.latin.text, cfg),
            _text_cell(section.slovenian.text, cfg),
        ),
    )


_ROW_BUILDERS: Dict[RowKind, Callable[[LiturgySection, Settings], TableRow]] = {
    RowKind.REFERENCE: _reference_row,
    RowKind.TEXT: _text_row,
}


def build_section_rows(section: LiturgySection, cfg: Settings = settings) -> List[TableRow]:
    """Return the rows for *section*: reference row when cited, then text row."""
    wanted = [
        (RowKind.REFERENCE, _has_reference(section)),
        (RowKind.TEXT, True),
    ]
    return [_ROW_BUILDERS[kind](section, cfg) for kind, present in wanted if present]


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

def _centered(text: str, *, size: float, bold: bool = False,
              space_before: float | None = None,
              space_after: float | None = None) -> Paragraph:
    return Paragraph(
        runs=(TextRun(text=text, bold=bold, size=size),),
        alignment=Alignment.CENTER,
        space_before=space_before,
        space_after=space_after,
    )


def compose_document(request: LiturgyRequest, cfg: Settings = settings) -> DocumentTree:
    """
    Build the full document tree for *request*.

    Args:
        request: Validated payload.
        cfg:     Settings supplying fonts, sizes, margins and column widths.

    Returns:
        DocumentTree with title/subtitle paragraphs followed by a heading and
        a two-column table per section, in input order.
    """
    blocks: list = []

    if request.title:
        blocks.append(_centered(
            request.title, size=cfg.TITLE_FONT_SIZE, bold=True,
            space_after=TITLE_SPACE_AFTER,
        ))
    blocks.append(_centered(
        request.subtitle, size=cfg.SUBTITLE_FONT_SIZE,
        space_after=TITLE_SPACE_AFTER,
    ))

    column_widths = (cfg.COLUMN_WIDTH_TWIPS, cfg.COLUMN_WIDTH_TWIPS)
    for section in request.sections:
        blocks.append(_centered(
            section.name, size=cfg.SECTION_FONT_SIZE, bold=True,
            space_before=SECTION_SPACE_BEFORE, space_after=SECTION_SPACE_AFTER,
        ))
        blocks.append(Table(
            rows=tuple(build_section_rows(section, cfg)),
            column_widths=column_widths,
        ))

    margin = cfg.PAGE_MARGIN_TWIPS
    tree = DocumentTree(
        blocks=tuple(blocks),
        body_font=cfg.BODY_FONT,
        body_size=cfg.BODY_FONT_SIZE,
        margins=PageMargins(top=margin, right=margin, bottom=margin, left=margin),
    )
    logger.debug("Composed %d blocks for %d sections", len(tree.blocks), len(request.sections))
    return tree
