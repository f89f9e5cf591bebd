"""
DOCX serialization of a DocumentTree using python-docx.

``render_docx`` is synchronous and CPU-bound; ``serialize_docx`` runs it in a
worker thread so request handlers can await it without blocking the loop.

python-docx has no API for cell borders or percentage table widths, so those
are written directly as OOXML (``w:tcBorders``, ``w:tblBorders``, ``w:tblW``).
"""
from __future__ import annotations

import asyncio
import io
import logging
from typing import Dict

from docx import Document as DocxDocument
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from app.models.document_tree import (
    Alignment,
    CellBorders,
    DocumentTree,
    Paragraph,
    Table,
)

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

_ALIGNMENTS: Dict[Alignment, WD_ALIGN_PARAGRAPH] = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
}

# Elements that follow w:tcBorders / w:tblBorders in the OOXML schema sequence
_TC_BORDERS_SUCCESSORS = (
    "w:shd", "w:noWrap", "w:tcMar", "w:textDirection", "w:tcFitText",
    "w:vAlign", "w:hideMark", "w:headers", "w:cellIns", "w:cellDel",
    "w:cellMerge", "w:tcPrChange",
)
_TBL_BORDERS_SUCCESSORS = (
    "w:shd", "w:tblLayout", "w:tblCellMar", "w:tblLook", "w:tblCaption",
    "w:tblDescription", "w:tblPrChange",
)


# ---------------------------------------------------------------------------
# OOXML helpers
# ---------------------------------------------------------------------------

def _border_element(tag: str, edges, borders: CellBorders):
    element = OxmlElement(tag)
    for edge in edges:
        border = OxmlElement(f"w:{edge}")
        border.set(qn("w:val"), borders.style.value)
        border.set(qn("w:sz"), str(borders.size))
        border.set(qn("w:space"), "0")
        border.set(qn("w:color"), "auto")
        element.append(border)
    return element


def _set_cell_borders(cell, borders: CellBorders) -> None:
    tcPr = cell._tc.get_or_add_tcPr()
    existing = tcPr.find(qn("w:tcBorders"))
    if existing is not None:
        tcPr.remove(existing)
    element = _border_element("w:tcBorders", ("top", "left", "bottom", "right"), borders)
    tcPr.insert_element_before(element, *_TC_BORDERS_SUCCESSORS)


def _set_table_borders(table, borders: CellBorders) -> None:
    tblPr = table._tbl.tblPr
    existing = tblPr.find(qn("w:tblBorders"))
    if existing is not None:
        tblPr.remove(existing)
    element = _border_element(
        "w:tblBorders",
        ("top", "left", "bottom", "right", "insideH", "insideV"),
        borders,
    )
    tblPr.insert_element_before(element, *_TBL_BORDERS_SUCCESSORS)


def _set_table_width_pct(table, width_pct: int) -> None:
    """Set w:tblW as a percentage (OOXML stores fiftieths of a percent)."""
    tblPr = table._tbl.tblPr
    tblW = tblPr.find(qn("w:tblW"))
    if tblW is None:
        tblW = OxmlElement("w:tblW")
        tblPr.insert_element_before(
            tblW, "w:jc", "w:tblCellSpacing", "w:tblInd", "w:tblBorders",
            *_TBL_BORDERS_SUCCESSORS,
        )
    tblW.set(qn("w:w"), str(width_pct * 50))
    tblW.set(qn("w:type"), "pct")


# ---------------------------------------------------------------------------
# Block writers
# ---------------------------------------------------------------------------

def _fill_paragraph(paragraph, node: Paragraph) -> None:
    if node.alignment is not Alignment.LEFT:
        paragraph.alignment = _ALIGNMENTS[node.alignment]
    fmt = paragraph.paragraph_format
    if node.space_before is not None:
        fmt.space_before = Pt(node.space_before)
    if node.space_after is not None:
        fmt.space_after = Pt(node.space_after)

    for run_node in node.runs:
        run = paragraph.add_run(run_node.text)
        if run_node.bold:
            run.bold = True
        if run_node.italic:
            run.italic = True
        if run_node.size is not None:
            run.font.size = Pt(run_node.size)
        if run_node.break_after:
            run.add_break()


def _write_table(doc, node: Table) -> None:
    table = doc.add_table(rows=0, cols=len(node.column_widths))
    table.autofit = False
    for column, width in zip(table.columns, node.column_widths):
        column.width = Twips(width)
    _set_table_width_pct(table, node.width_pct)

    grid_total = sum(node.column_widths)
    for row_node in node.rows:
        row = table.add_row()
        for cell, cell_node in zip(row.cells, row_node.cells):
            cell.width = Twips(grid_total * cell_node.width_pct // 100)
            _set_cell_borders(cell, cell_node.borders)
            cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.TOP

            # A fresh cell already holds one empty paragraph
            _fill_paragraph(cell.paragraphs[0], cell_node.paragraphs[0])
            for para_node in cell_node.paragraphs[1:]:
                _fill_paragraph(cell.add_paragraph(), para_node)

    if node.rows:
        _set_table_borders(table, node.rows[0].cells[0].borders)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_docx(tree: DocumentTree) -> bytes:
    """
    Serialize *tree* to the bytes of a .docx package.

    Args:
        tree: Composed document tree.

    Returns:
        Complete DOCX file content.
    """
    doc = DocxDocument()

    normal = doc.styles["Normal"]
    normal.font.name = tree.body_font
    normal.font.size = Pt(tree.body_size)

    for section in doc.sections:
        section.top_margin = Twips(tree.margins.top)
        section.right_margin = Twips(tree.margins.right)
        section.bottom_margin = Twips(tree.margins.bottom)
        section.left_margin = Twips(tree.margins.left)

    for block in tree.blocks:
        if isinstance(block, Table):
            _write_table(doc, block)
        else:
            _fill_paragraph(doc.add_paragraph(), block)

    buffer = io.BytesIO()
    doc.save(buffer)
    content = buffer.getvalue()
    logger.debug("Rendered %d blocks into %d bytes", len(tree.blocks), len(content))
    return content


async def serialize_docx(tree: DocumentTree) -> bytes:
    """Render *tree* in a worker thread and return the DOCX bytes."""
    return await asyncio.to_thread(render_docx, tree)
