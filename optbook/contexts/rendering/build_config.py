"""
Build Configuration for Document Rendering

Loads the fixed build settings (source, output, converter, template, listings)
from configs/build.yaml and validates them against the RenderOptions schema.

Examples:
    # Shipped configuration
    >>> options = load_build_config()

    # Alternate file, e.g. for a draft build without the eisvogel template
    >>> options = load_build_config(Path("configs/draft.yaml"))
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

load_dotenv()

PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path.cwd()))
BUILD_CONFIG_PATH = Path(os.getenv("BUILD_CONFIG_PATH", PROJECT_ROOT / "configs" / "build.yaml"))
PANDOC_BIN = os.getenv("PANDOC_BIN")


class RenderOptions(BaseModel):
    """Settings for one render of the guide."""

    model_config = ConfigDict(extra="forbid")

    source: str = Field("optimize-python.md", description="Markdown file to convert")
    output: str = Field("optimize-python.pdf", description="PDF file to produce")
    converter: str = Field("pandoc", description="Converter executable")
    from_format: str = Field("markdown", description="Input format passed to --from")
    template: Optional[str] = Field(
        "eisvogel.tex", description="Template name or path (None uses the converter's default)"
    )
    listings: bool = Field(True, description="Render code blocks with the LaTeX listings package")
    pdf_engine: Optional[str] = Field(None, description="LaTeX engine passed to --pdf-engine")
    extra_args: List[str] = Field(default_factory=list, description="Appended before -o")

    @property
    def source_path(self) -> Path:
        return _anchor(self.source)

    @property
    def output_path(self) -> Path:
        return _anchor(self.output)


def _anchor(path_str: str) -> Path:
    """Resolve relative paths against PROJECT_ROOT."""
    path = Path(path_str)
    return path if path.is_absolute() else PROJECT_ROOT / path


def load_build_config(config_path: Optional[Path] = None) -> RenderOptions:
    """
    Load build settings from YAML over the RenderOptions defaults.

    PANDOC_BIN from the environment overrides the configured converter.

    Args:
        config_path: Optional path to a YAML config (defaults to BUILD_CONFIG_PATH).
            A missing default file yields the defaults; a missing explicit file is an error.

    Returns:
        RenderOptions

    Raises:
        ValueError: If the file is missing, is not a YAML mapping, contains unknown keys,
            or has wrongly typed values
    """
    if config_path is None:
        config_path = BUILD_CONFIG_PATH
        if not config_path.exists():
            config_path = None
    elif not Path(config_path).exists():
        raise ValueError(f"Build config not found: {config_path}")

    data = {}
    if config_path is not None:
        try:
            data = yaml.safe_load(Path(config_path).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid build config {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid build config {config_path}: expected a mapping")

    try:
        options = RenderOptions(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid build config {config_path}: {e}") from e

    if PANDOC_BIN:
        options.converter = PANDOC_BIN

    return options
