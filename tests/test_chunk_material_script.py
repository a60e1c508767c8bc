"""Tests for scripts/chunk_material.py."""

import importlib.util
import json
import logging
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "chunk_material.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("chunk_material", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module
    for name in ("course_rag", "chunking", "extraction", "retrieval"):
        for handler in logging.getLogger(name).handlers:
            handler.close()
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestChunkMaterialScript:
    def test_missing_file(self, script, tmp_path):
        assert script.main([str(tmp_path / "missing.pdf"), "--no-ocr"]) == 1

    def test_unreadable_pdf_logs_error_chain(self, script, tmp_path, caplog):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"")

        with caplog.at_level(logging.ERROR):
            assert script.main([str(broken), "--no-ocr"]) == 1

        assert "Extraction failed for broken.pdf" in caplog.text
        assert "ExtractionError: PDF is corrupted or unreadable" in caplog.text
        assert "└─ " in caplog.text

    def test_writes_chunks(self, script, tmp_path, png_bytes):
        image = tmp_path / "blank.png"
        image.write_bytes(png_bytes)
        output = tmp_path / "out.json"

        assert script.main([str(image), "--no-ocr", "-o", str(output)]) == 0

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["chunks"] == []
        assert data["stats"]["total_chunks"] == 0
