"""Tests for document files and PDF export."""

import json
import re

import pytest
from pydantic import ValidationError

from cvmaker.shared import DocumentFileError, ExportFailure, PaperSize
from cvmaker.cv.generator import CVExporter, CVGenerator, default_filename
from cvmaker.cv.io import dump_document, load_document
from cvmaker.cv.models import CVDocument
from cvmaker.cv.templates import get_template


def test_load_yaml(document_file, sample_document):
    assert load_document(document_file) == sample_document


@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_dump_then_load(tmp_path, sample_document, suffix):
    path = dump_document(sample_document, tmp_path / f"out{suffix}")

    assert load_document(path) == sample_document


def test_dump_uses_file_keys(tmp_path, sample_document):
    path = dump_document(sample_document, tmp_path / "cv.json")
    data = json.loads(path.read_text())

    assert data["personalInfo"]["fullName"] == "Jane Doe"
    assert data["education"][0]["fieldOfStudy"] == "CS"
    assert data["languages"][0]["proficiency"] == "Native/Fluent"


def test_load_errors(tmp_path):
    with pytest.raises(DocumentFileError, match="unsupported"):
        load_document(tmp_path / "cv.txt")
    with pytest.raises(DocumentFileError, match="not found"):
        load_document(tmp_path / "missing.yaml")

    not_text = tmp_path / "latin1.yaml"
    not_text.write_bytes(b"fullName: \xff\xfe")
    with pytest.raises(DocumentFileError, match="not UTF-8"):
        load_document(not_text)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(DocumentFileError, match="invalid JSON"):
        load_document(broken)

    bad_record = tmp_path / "bad.yaml"
    bad_record.write_text("education:\n  - institution: MIT\n")
    with pytest.raises(ValidationError):
        load_document(bad_record)


def test_empty_file_is_empty_document(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_document(path) == CVDocument()


@pytest.mark.parametrize("template_id", ["1", "2", "3"])
def test_generate_pdf(tmp_path, sample_document, template_id):
    output = tmp_path / "cv.pdf"
    CVGenerator().generate(sample_document, get_template(template_id), output)

    assert output.read_bytes().startswith(b"%PDF")


def test_generate_empty_document(tmp_path):
    output = tmp_path / "empty.pdf"
    CVGenerator(font_name="Times", paper_size=PaperSize.LETTER).generate(
        CVDocument(), get_template("1"), output
    )

    assert output.read_bytes().startswith(b"%PDF")


def test_unknown_font_falls_back():
    generator = CVGenerator(font_name="Comic Sans")

    assert generator.font == "Helvetica"
    assert generator.bold_font == "Helvetica-Bold"


def test_styles_exist_before_generate():
    assert {"name", "section_header", "body"} <= set(CVGenerator().styles)


def test_default_filename(sample_document):
    assert default_filename(sample_document, now_ms=1700000000000) == "CV_Jane_Doe_1700000000000.pdf"

    sample_document.personalInfo.fullName = "Ana  María / López"
    assert default_filename(sample_document, now_ms=1) == "CV_Ana_María___López_1.pdf"


def test_export_default_path(tmp_path, sample_document):
    exporter = CVExporter(tmp_path / "exports")

    path = exporter.export(sample_document, get_template("1"))

    assert path.parent == tmp_path / "exports"
    assert re.fullmatch(r"CV_Jane_Doe_\d+\.pdf", path.name)
    assert path.read_bytes().startswith(b"%PDF")


def test_export_given_path(tmp_path, sample_document):
    target = tmp_path / "nested" / "mine.pdf"

    assert CVExporter(tmp_path).export(sample_document, get_template("3"), target) == target
    assert target.exists()


class BrokenGenerator(CVGenerator):
    def generate(self, document, template, output_path):
        raise RuntimeError("renderer crashed")


def test_export_failure_wraps_errors(tmp_path, sample_document):
    before = sample_document.model_copy(deep=True)
    exporter = CVExporter(tmp_path, BrokenGenerator())

    with pytest.raises(ExportFailure, match="renderer crashed"):
        exporter.export(sample_document, get_template("1"))

    assert sample_document == before


def test_export_failure_on_unwritable_path(tmp_path, sample_document):
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory")

    with pytest.raises(ExportFailure):
        CVExporter(tmp_path).export(sample_document, get_template("1"), blocker / "cv.pdf")
