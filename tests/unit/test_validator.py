"""Unit tests for rendered PDF validation."""

import pytest
from PyPDF2 import PdfWriter

from optbook.contexts.authoring.front_matter import DocumentMetadata, parse_front_matter
from optbook.contexts.rendering.validator import validate_pdf
from optbook.exceptions import NotFoundError

pytestmark = pytest.mark.unit


def _write_pdf(path, title=None, pages=1):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    if title is not None:
        writer.add_metadata({"/Title": title})
    with open(path, "wb") as f:
        writer.write(f)
    return path


def test_valid_pdf_with_matching_title(tmp_path):
    """Test a readable PDF whose title matches the source metadata."""
    pdf = _write_pdf(tmp_path / "guide.pdf", title="Optimizing  Python", pages=3)

    result = validate_pdf(pdf, DocumentMetadata(title="optimizing python"))

    assert result.is_valid
    assert result.page_count == 3
    assert result.pdf_title == "Optimizing  Python"
    assert result.issues == []


def test_title_mismatch_reported(tmp_path):
    """Test a title mismatch is an issue, not an exception."""
    pdf = _write_pdf(tmp_path / "guide.pdf", title="Draft")

    result = validate_pdf(pdf, DocumentMetadata(title="Optimizing Python"))

    assert not result.is_valid
    assert len(result.issues) == 1
    assert "does not match" in result.issues[0]


def test_pdf_without_title_skips_title_check(tmp_path):
    """Test a PDF with no /Title still validates."""
    pdf = _write_pdf(tmp_path / "guide.pdf")

    result = validate_pdf(pdf, DocumentMetadata(title="Optimizing Python"))

    assert result.is_valid
    assert result.pdf_title is None


def test_empty_file(tmp_path):
    """Test an empty file is invalid."""
    pdf = tmp_path / "guide.pdf"
    pdf.write_bytes(b"")

    result = validate_pdf(pdf)

    assert not result.is_valid
    assert result.issues == ["PDF file is empty"]


def test_unparseable_file(tmp_path):
    """Test a non-PDF file is invalid."""
    pdf = tmp_path / "guide.pdf"
    pdf.write_text("not a pdf at all")

    result = validate_pdf(pdf)

    assert not result.is_valid
    assert "PDF could not be parsed" in result.issues


def test_missing_file(tmp_path):
    """Test a missing PDF raises NotFoundError."""
    with pytest.raises(NotFoundError):
        validate_pdf(tmp_path / "guide.pdf")


def test_markdown_title_matches_plain_pdf_title(tmp_path):
    """Test inline markup in the source title does not cause a mismatch."""
    pdf = _write_pdf(tmp_path / "guide.pdf", title="Optimizing Python")
    metadata = parse_front_matter('---\ntitle: "Optimizing *Python*"\n---\nx\n')

    result = validate_pdf(pdf, metadata)

    assert result.is_valid
    assert result.issues == []
