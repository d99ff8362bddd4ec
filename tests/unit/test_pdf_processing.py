"""Unit tests for PDF inspection helpers."""

import pytest
from PyPDF2 import PdfWriter

from optbook.utils.pdf_processing import normalize_title, page_count, pdf_title

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Optimizing Python", "optimizing python"),
        ("Optimizing *Python*", "optimizing python"),
        ("Optimizing **Python**", "optimizing python"),
        ("`timeit` tricks", "timeit tricks"),
        ("[Python](https://python.org) performance", "python performance"),
        (r"\LaTeX{} tips", "latex tips"),
        ("  Spaced \n  out  ", "spaced out"),
    ],
)
def test_normalize_title(title, expected):
    assert normalize_title(title) == expected


def test_normalize_title_is_symmetric_for_underscores():
    """Test identifiers compare equal whether or not they are emphasized."""
    assert normalize_title("Using __slots__") == normalize_title("Using slots")


def test_page_count_and_title(tmp_path):
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_blank_page(width=612, height=792)
    writer.add_metadata({"/Title": "Optimizing Python"})
    pdf = tmp_path / "guide.pdf"
    with open(pdf, "wb") as f:
        writer.write(f)

    assert page_count(pdf) == 2
    assert pdf_title(pdf) == "Optimizing Python"


def test_unreadable_pdf_returns_none(tmp_path):
    pdf = tmp_path / "guide.pdf"
    pdf.write_text("not a pdf")

    assert page_count(pdf) is None
    assert pdf_title(pdf) is None
