"""
Rendered PDF validation.

Checks that a generated PDF is readable, has pages, and carries the title
declared in the source's metadata header (eisvogel writes it to the PDF info
dictionary through hyperref).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from optbook.contexts.authoring.front_matter import DocumentMetadata
from optbook.contexts.rendering.logger import _log_error, _log_info, _log_success, _log_warning
from optbook.exceptions import NotFoundError
from optbook.utils.pdf_processing import normalize_title, page_count, pdf_title


@dataclass
class ValidationResult:
    """
    Result of PDF validation.

    Attributes:
        is_valid: Whether the PDF passes all checks
        pdf_path: Validated file
        page_count: Page count from PDF (None if unreadable)
        pdf_title: /Title from the PDF info dictionary, if any
        issues: Human-readable descriptions of failed checks
    """

    is_valid: bool
    pdf_path: Path
    page_count: Optional[int] = None
    pdf_title: Optional[str] = None
    issues: List[str] = field(default_factory=list)


def validate_pdf(pdf_path: Path, metadata: Optional[DocumentMetadata] = None) -> ValidationResult:
    """
    Validate a rendered PDF.

    Args:
        pdf_path: PDF to check
        metadata: Source metadata; when it has a title, the PDF title must match it

    Returns:
        ValidationResult (failed checks are reported as issues, not raised)

    Raises:
        NotFoundError: If pdf_path does not exist
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.is_file():
        raise NotFoundError("PDF not found", path=pdf_path)

    _log_info(f"Validating {pdf_path.name}")

    issues = []
    pages = None
    title = None

    if pdf_path.stat().st_size == 0:
        issues.append("PDF file is empty")
    else:
        pages = page_count(pdf_path)
        if pages is None:
            issues.append("PDF could not be parsed")
        elif pages == 0:
            issues.append("PDF has no pages")

        title = pdf_title(pdf_path)
        if metadata is not None and metadata.title and title is not None:
            if normalize_title(title) != normalize_title(metadata.title):
                issues.append(f"PDF title {title!r} does not match document title {metadata.title!r}")
        elif metadata is not None and metadata.title:
            _log_warning("PDF carries no title; skipping title check")

    result = ValidationResult(
        is_valid=not issues,
        pdf_path=pdf_path,
        page_count=pages,
        pdf_title=title,
        issues=issues,
    )

    if result.is_valid:
        _log_success(f"Validation passed ({pages} pages)")
    else:
        for issue in issues:
            _log_error(f"  {issue}")

    return result
