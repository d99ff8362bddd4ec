"""
Rendering Context

Responsibilities:
- Converts the Markdown source to PDF through pandoc
- Manages the output file (create, replace, clean)
- Validates the generated PDF
- Reports converter errors and warnings

Owns: Converter invocation, PDF generation, output management
Never: Modifies the source document
"""

from optbook.contexts.rendering.build_config import RenderOptions, load_build_config
from optbook.contexts.rendering.renderer import (
    RenderResult,
    build_command,
    build_document,
    clean_output,
    render_document,
    resolve_template,
)
from optbook.contexts.rendering.validator import ValidationResult, validate_pdf

__all__ = [
    # Configuration
    "RenderOptions",
    "load_build_config",
    # Render / clean
    "RenderResult",
    "build_command",
    "build_document",
    "clean_output",
    "render_document",
    "resolve_template",
    # Validation
    "ValidationResult",
    "validate_pdf",
]
