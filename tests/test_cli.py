"""Tests for the offline generate_doc.py renderer."""
import json

import generate_doc
from tests.conftest import open_docx


def test_cli_writes_document(tmp_path, intro_payload, capsys):
    payload_path = tmp_path / "payload.json"
    payload_path.write_text(json.dumps(intro_payload), encoding="utf-8")
    out_path = tmp_path / "out" / "intro.docx"

    assert generate_doc.main([str(payload_path), "-o", str(out_path)]) == 0

    doc = open_docx(out_path.read_bytes())
    assert [p.text for p in doc.paragraphs] == ["S", "Intro"]
    assert "Document saved as" in capsys.readouterr().out


def test_cli_rejects_invalid_payload(tmp_path):
    payload_path = tmp_path / "payload.json"
    payload_path.write_text(json.dumps({"title": "only a title"}), encoding="utf-8")

    assert generate_doc.main([str(payload_path), "-o", str(tmp_path / "x.docx")]) == 2
    assert not (tmp_path / "x.docx").exists()
