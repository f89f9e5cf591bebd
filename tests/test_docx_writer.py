"""Tests for DOCX serialization of composed document trees."""
import pytest
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from app.models.schemas import LiturgyRequest
from app.services.composer import compose_document
from app.services.docx_writer import render_docx, serialize_docx
from tests.conftest import open_docx


def _render(payload) -> bytes:
    return render_docx(compose_document(LiturgyRequest.model_validate(payload)))


def test_output_is_a_zip_package(intro_payload):
    assert _render(intro_payload)[:2] == b"PK"


def test_body_font_and_margins(intro_payload):
    doc = open_docx(_render(intro_payload))
    normal = doc.styles["Normal"]
    assert normal.font.name == "Times New Roman"
    assert normal.font.size == Pt(12)
    section = doc.sections[0]
    for margin in (section.top_margin, section.right_margin,
                   section.bottom_margin, section.left_margin):
        assert margin == Twips(1440)


def test_headings_are_centered(mass_payload):
    doc = open_docx(_render(mass_payload))
    for paragraph in doc.paragraphs:
        assert paragraph.alignment == WD_ALIGN_PARAGRAPH.CENTER
    title, subtitle = doc.paragraphs[:2]
    assert title.runs[0].font.size == Pt(16)
    assert subtitle.runs[0].font.size == Pt(12)
    assert doc.paragraphs[2].runs[0].font.size == Pt(14)


def test_inline_breaks_are_line_breaks_not_paragraphs(mass_payload):
    doc = open_docx(_render(mass_payload))
    kyrie_text_row = doc.tables[0].rows[0]
    left = kyrie_text_row.cells[0]
    assert len(left.paragraphs) == 1
    assert len(left.paragraphs[0]._p.xpath("./w:r/w:br")) == 2


def test_blank_line_becomes_second_paragraph(mass_payload):
    doc = open_docx(_render(mass_payload))
    lectio_text_row = doc.tables[1].rows[1]
    assert [p.text for p in lectio_text_row.cells[1].paragraphs] == [
        "Tiste dni.",
        "Beseda Gospodova.",
    ]


def test_empty_text_cell_holds_one_paragraph(mass_payload):
    doc = open_docx(_render(mass_payload))
    sanctus_right = doc.tables[2].rows[0].cells[1]
    assert len(sanctus_right.paragraphs) == 1
    assert sanctus_right.paragraphs[0].text == ""


def test_indented_line_keeps_leading_spaces():
    payload = {
        "subtitle": "S",
        "sections": [{"name": "Gloria", "latin": {"text": "Gloria Patri,\n    et Filio"}}],
    }
    doc = open_docx(_render(payload))
    left = doc.tables[0].rows[0].cells[0]
    texts = left.paragraphs[0]._p.xpath("./w:r/w:t")
    assert texts[1].text == "    et Filio"
    assert texts[1].get(qn("xml:space")) == "preserve"


def test_reference_runs_are_small_italic(intro_payload):
    doc = open_docx(_render(intro_payload))
    run = doc.tables[0].rows[0].cells[0].paragraphs[0].runs[0]
    assert run.italic is True
    assert run.font.size == Pt(10)


def test_table_layout(intro_payload):
    doc = open_docx(_render(intro_payload))
    table = doc.tables[0]

    tblW = table._tbl.tblPr.find(qn("w:tblW"))
    assert tblW.get(qn("w:type")) == "pct"
    assert tblW.get(qn("w:w")) == "5000"
    assert [c.width for c in table.columns] == [Twips(4680), Twips(4680)]

    for row in table.rows:
        for cell in row.cells:
            assert cell.width == Twips(4680)
            assert cell.vertical_alignment == WD_CELL_VERTICAL_ALIGNMENT.TOP
            borders = cell._tc.tcPr.find(qn("w:tcBorders"))
            assert borders is not None
            assert {b.get(qn("w:val")) for b in borders} == {"none"}


def test_cell_properties_keep_schema_order(intro_payload):
    """tcW must precede tcBorders, which must precede vAlign."""
    doc = open_docx(_render(intro_payload))
    tcPr = doc.tables[0].rows[0].cells[0]._tc.tcPr
    tags = [child.tag for child in tcPr]
    assert tags.index(qn("w:tcW")) < tags.index(qn("w:tcBorders")) < tags.index(qn("w:vAlign"))


@pytest.mark.asyncio
async def test_serialize_docx_matches_render(intro_payload):
    tree = compose_document(LiturgyRequest.model_validate(intro_payload))
    content = await serialize_docx(tree)
    doc = open_docx(content)
    assert [p.text for p in doc.paragraphs] == ["S", "Intro"]
