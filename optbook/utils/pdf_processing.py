"""
PDF inspection helpers for rendered documents.

Helper functions:
    page_count: Quick page count without full extraction.
    pdf_title: Title entry from the PDF document info dictionary.
    normalize_title: Markup-free, case-insensitive form of a title for comparison.
"""

import re
from pathlib import Path
from typing import Optional

from PyPDF2 import PdfReader

# [text](url) and ![alt](src)
LINK_PATTERN = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
# \command -> command (hyperref renders \LaTeX as "LaTeX")
LATEX_COMMAND_PATTERN = re.compile(r"\\([A-Za-z]+)")
# Emphasis, code, strikeout, super/subscript markers and TeX grouping braces
MARKUP_CHARS_PATTERN = re.compile(r"[*_`~^{}\\]")


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def pdf_title(pdf_path: Path) -> Optional[str]:
    """Return the /Title info entry, or None if absent or unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        info = reader.metadata
    except Exception:
        return None

    if info is None or not info.title:
        return None
    return str(info.title)


def normalize_title(text: str) -> str:
    r"""
    Reduce a title to plain lowercase words for lenient matching.

    Inline Markdown and LaTeX markup is dropped, since hyperref writes the plain-text
    title into the PDF info dictionary:

        normalize_title("Optimizing *Python*")        # "optimizing python"
        normalize_title("[Python](https://python.org)")  # "python"
        normalize_title(r"\LaTeX{} tricks")            # "latex tricks"
    """
    text = LINK_PATTERN.sub(r"\1", text)
    text = LATEX_COMMAND_PATTERN.sub(r"\1", text)
    text = MARKUP_CHARS_PATTERN.sub("", text)
    return " ".join(text.split()).lower()
