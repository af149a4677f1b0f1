"""
Rendering Context

Responsibilities:
- Measures and paginates a ResumeDocument into draw instructions
- Applies the fixed typographic ruleset and named layout presets
- Draws instructions to PDF and manages output files

Owns: Layout/pagination, typography, PDF export
Never: Modifies resume content or computes scores
"""

from resumecraft.contexts.rendering.defaults import PageGeometry, Typography
from resumecraft.contexts.rendering.exporter import ExportResult, derive_filename, export_resume
from resumecraft.contexts.rendering.layout_engine import (
    DrawInstruction,
    LayoutResult,
    build_blocks,
    layout_document,
    wrap_text,
)

__all__ = [
    "PageGeometry",
    "Typography",
    "DrawInstruction",
    "LayoutResult",
    "build_blocks",
    "layout_document",
    "wrap_text",
    "ExportResult",
    "derive_filename",
    "export_resume",
]
