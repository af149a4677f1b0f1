"""
PDF Export Module

Draws a LayoutResult onto a reportlab canvas and writes the PDF to disk.

The written file is all-or-nothing: bytes are rendered in memory, written to a
temporary file in the output directory, then moved into place. Any rendering
engine failure is reported as a single generic "Export failed" message.
"""

import os
import re
import shutil
import tempfile
import time
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from reportlab.pdfgen import canvas

from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.contexts.rendering.defaults import PageGeometry, Typography
from resumecraft.contexts.rendering.exceptions import ExportError
from resumecraft.contexts.rendering.layout_engine import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    KIND_RULE,
    LayoutResult,
    layout_document,
)
from resumecraft.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_export_result,
    log_export_start,
)
from resumecraft.utils.event_logging import log_event
from resumecraft.utils.pdf_processing import page_count

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))

EXPORT_FAILED_MESSAGE = "Export failed"
DEFAULT_FILENAME = "resume"

# Runs of anything other than word characters or hyphens
_FILENAME_UNSAFE = re.compile(r"[^\w\-]+")


@dataclass
class ExportResult:
    """
    Result of a PDF export.

    Attributes:
        success: Whether the PDF was written
        pdf_path: Path to the written PDF (None if failed)
        page_count: Number of pages (None if failed)
        errors: User-facing error messages
    """

    success: bool
    pdf_path: Optional[Path] = None
    page_count: Optional[int] = None
    errors: List[str] = field(default_factory=list)


def derive_filename(full_name: str) -> str:
    """
    Derive a filename base from a person's name.

    Whitespace and punctuation runs collapse to a single underscore; letters
    (including non-ASCII), digits, and hyphens are kept.

    Example:
        >>> derive_filename("Ana María Ruiz")
        'Ana_María_Ruiz'
    """
    return _FILENAME_UNSAFE.sub("_", full_name).strip("_") or DEFAULT_FILENAME


def render_pdf_bytes(layout: LayoutResult) -> bytes:
    """
    Draw layout instructions into an in-memory PDF.

    Raises:
        ExportError: If the rendering engine fails
    """
    geometry = layout.geometry
    buffer = BytesIO()

    try:
        pdf = canvas.Canvas(buffer, pagesize=(geometry.width, geometry.height))
        for page in range(layout.page_count):
            for instr in layout.on_page(page):
                # Instructions measure y down from the top; reportlab measures up from the bottom
                y = geometry.height - instr.y
                if instr.kind == KIND_RULE:
                    pdf.setLineWidth(instr.size)
                    pdf.line(instr.x, y, instr.x_end, y)
                    continue

                pdf.setFont(instr.font, instr.size)
                if instr.align == ALIGN_CENTER:
                    pdf.drawCentredString(instr.x, y, instr.text)
                elif instr.align == ALIGN_RIGHT:
                    pdf.drawRightString(instr.x, y, instr.text)
                else:
                    pdf.drawString(instr.x, y, instr.text)
            pdf.showPage()
        pdf.save()
    except Exception as e:
        raise ExportError("PDF rendering failed", original_error=e) from e

    return buffer.getvalue()


def _measure(document: ResumeDocument, geometry: PageGeometry, typography: Typography) -> LayoutResult:
    """
    Lay out a document, reporting font engine failures as ExportError.

    Text is measured with reportlab font metrics, so a font the engine does not
    know fails here rather than at drawing time.
    """
    try:
        return layout_document(document, geometry, typography)
    except Exception as e:
        raise ExportError("Layout measurement failed", original_error=e) from e


def _write_atomic(pdf_bytes: bytes, pdf_path: Path) -> None:
    """
    Write bytes to pdf_path via a temporary file in the same directory.

    Raises:
        ExportError: If the file cannot be written
    """
    temp_path = None
    try:
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(suffix=".pdf.tmp", dir=pdf_path.parent)
        with os.fdopen(temp_fd, "wb") as f:
            f.write(pdf_bytes)

        # Only replace the target once the full file is on disk
        shutil.move(temp_path, pdf_path)
    except OSError as e:
        if temp_path and os.path.exists(temp_path):
            os.unlink(temp_path)
        raise ExportError(f"Could not write {pdf_path}", original_error=e) from e


def export_resume(
    document: ResumeDocument,
    output_dir: Union[str, Path] = RESULTS_PATH,
    geometry: PageGeometry = None,
    typography: Typography = None,
) -> ExportResult:
    """
    Lay out a resume and export it as <derived name>.pdf.

    Args:
        document: Resume to export
        output_dir: Directory for the PDF (created if missing)
        geometry: Page geometry (default: A4, 15 mm margins)
        typography: Typographic ruleset (default: Typography())

    Returns:
        ExportResult; on failure errors == ["Export failed"] and no file is left
    """
    output_dir = Path(output_dir)
    resume_name = derive_filename(document.personal_info.full_name)
    pdf_path = output_dir / f"{resume_name}.pdf"

    log_export_start(resume_name, output_dir)
    start_time = time.time()

    try:
        layout = _measure(document, geometry, typography)
        pdf_bytes = render_pdf_bytes(layout)
        _write_atomic(pdf_bytes, pdf_path)
    except ExportError as e:
        _log_debug(f"  Engine error: {e}")
        result = ExportResult(success=False, errors=[EXPORT_FAILED_MESSAGE])
        log_export_result(resume_name, result, time.time() - start_time)
        log_event("export_failed", source="rendering", resume_name=resume_name)
        return result

    written_pages = page_count(pdf_bytes)
    if written_pages is not None and written_pages != layout.page_count:
        _log_warning(f"Layout planned {layout.page_count} page(s) but PDF has {written_pages}")

    result = ExportResult(success=True, pdf_path=pdf_path, page_count=layout.page_count)
    log_export_result(resume_name, result, time.time() - start_time)
    log_event(
        "export_completed",
        source="rendering",
        resume_name=resume_name,
        page_count=layout.page_count,
        pdf_path=str(pdf_path),
    )
    return result
