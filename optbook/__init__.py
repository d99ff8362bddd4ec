"""
optbook - builds the "Optimizing Python" guide

Renders the guide's Markdown source to PDF through pandoc and the eisvogel
LaTeX template, and cleans up the generated artifact.

Architecture:
- Authoring Context: Markdown source and its metadata header
- Rendering Context: PDF conversion, output management and validation
"""

__version__ = "0.1.0"
