"""
Authoring Context

Responsibilities:
- Reads the guide's Markdown source
- Parses the YAML metadata header (title, author, date, subject, keywords)

Owns: Source document and its metadata
Never: Modifies the source or invokes the converter
"""

from optbook.contexts.authoring.front_matter import (
    DocumentMetadata,
    FrontMatterError,
    parse_front_matter,
    read_front_matter,
    split_front_matter,
)

__all__ = [
    "DocumentMetadata",
    "FrontMatterError",
    "parse_front_matter",
    "read_front_matter",
    "split_front_matter",
]
