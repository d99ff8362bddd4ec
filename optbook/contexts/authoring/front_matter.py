"""
Markdown metadata header parsing.

Reads the YAML block at the top of a pandoc Markdown document:

    ---
    title: "Optimizing Python"
    author: [Jane Doe]
    date: "2019-01-06"
    subject: "Python"
    keywords: [Python, Profiling]
    colorlinks: true
    ...

The block must start on the first line and close with a line holding only
``---`` or ``...``. An opening ``---`` followed by a blank line is a horizontal
rule, not a header.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from optbook.exceptions import ConversionError

HEADER_OPEN = "---"
HEADER_CLOSE = ("---", "...")

# Header keys mapped onto DocumentMetadata fields; everything else lands in extra
KNOWN_KEYS = {"title", "author", "date", "subject", "keywords", "tags", "colorlinks"}


class FrontMatterError(ConversionError):
    """Exception raised when the metadata header is not a valid YAML mapping."""

    pass


@dataclass
class DocumentMetadata:
    """
    Metadata declared in a document's YAML header.

    Attributes:
        title: Document title
        author: Author names (a single string header value becomes one item)
        date: Date as written in the header
        subject: PDF subject
        keywords: PDF keywords (``tags`` is accepted as an alias)
        colorlinks: Whether the template should color hyperlinks
        extra: All remaining header keys
    """

    title: Optional[str] = None
    author: List[str] = field(default_factory=list)
    date: Optional[str] = None
    subject: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    colorlinks: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self == DocumentMetadata()


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def split_front_matter(text: str) -> Tuple[Optional[str], str]:
    """
    Split a Markdown document into its YAML header and body.

    Returns:
        Tuple of (header YAML or None, body text)
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != HEADER_OPEN:
        return None, text

    # "---" followed by a blank line is a horizontal rule
    if len(lines) < 2 or not lines[1].strip():
        return None, text

    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() in HEADER_CLOSE:
            return "".join(lines[1:i]), "".join(lines[i + 1 :])

    # Unterminated block: pandoc reads it as ordinary Markdown
    return None, text


def parse_front_matter(text: str, source: Optional[Path] = None) -> DocumentMetadata:
    """
    Parse the metadata header of a Markdown document.

    Args:
        text: Full Markdown document
        source: Path used in error messages

    Returns:
        DocumentMetadata (empty when the document has no header)

    Raises:
        FrontMatterError: If the header is not valid YAML or not a mapping
    """
    header, _ = split_front_matter(text)
    if header is None or not header.strip():
        return DocumentMetadata()

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Malformed metadata header: {e}", path=source) from e

    if not isinstance(data, dict):
        raise FrontMatterError("Metadata header must be a YAML mapping", path=source)

    keywords = _as_list(data.get("keywords")) or _as_list(data.get("tags"))

    extra = {key: value for key, value in data.items() if key not in KNOWN_KEYS}
    colorlinks = data.get("colorlinks")
    if colorlinks is not None and not isinstance(colorlinks, bool):
        # Only YAML booleans set the flag; a quoted "false" is a string to pandoc too
        extra["colorlinks"] = colorlinks

    return DocumentMetadata(
        title=str(data["title"]) if data.get("title") is not None else None,
        author=_as_list(data.get("author")),
        date=str(data["date"]) if data.get("date") is not None else None,
        subject=str(data["subject"]) if data.get("subject") is not None else None,
        keywords=keywords,
        colorlinks=colorlinks is True,
        extra=extra,
    )


def read_front_matter(source: Path) -> DocumentMetadata:
    """
    Read and parse the metadata header of a Markdown file.

    Raises:
        ConversionError: If the file is missing or unreadable
        FrontMatterError: If the header is malformed
    """
    source = Path(source)
    if not source.is_file():
        raise ConversionError("Source document not found", path=source)

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(f"Source document is not readable: {e}", path=source) from e

    return parse_front_matter(text, source=source)
