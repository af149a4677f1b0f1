"""
Integration tests for PDF export.

Tests: ResumeDocument -> layout -> reportlab PDF on disk, read back with
PyPDF2 (page count) and pdfplumber (text).
"""

import pytest
from PyPDF2 import PdfReader

from resumecraft.contexts.authoring import Experience
from resumecraft.contexts.rendering import Typography, exporter, export_resume, layout_document
from resumecraft.contexts.rendering.exceptions import ExportError
from resumecraft.contexts.rendering.exporter import EXPORT_FAILED_MESSAGE, render_pdf_bytes
from resumecraft.utils.event_logging import get_recent_events
from resumecraft.utils.pdf_processing import extract_page_texts, page_count


def add_experiences(document, n):
    for i in range(n):
        document.experience.append(
            Experience(
                company=f"Contract {i}",
                position="Consultant",
                start_date="2010",
                end_date="2011",
                description=["Delivered integration work for a regional retailer on a fixed timeline."] * 3,
            )
        )
    return document


@pytest.mark.integration
def test_export_writes_pdf(sample_document, tmp_path):
    """Exported PDF exists, is named after the person, and has the planned page count."""
    result = export_resume(sample_document, output_dir=tmp_path)

    assert result.success
    assert result.errors == []
    assert result.pdf_path == tmp_path / "Ana_María_Ruiz.pdf"
    assert result.pdf_path.exists()
    assert result.page_count == layout_document(sample_document).page_count
    assert len(PdfReader(str(result.pdf_path)).pages) == result.page_count


@pytest.mark.integration
def test_exported_text_is_extractable(sample_document, tmp_path):
    """Section titles and content survive as a real text layer."""
    result = export_resume(sample_document, output_dir=tmp_path)
    text = "\n".join(extract_page_texts(result.pdf_path))

    assert "Professional Experience" in text
    assert "Lumen Logistics" in text
    assert "Technical Skills" in text
    assert "tracekit" in text


@pytest.mark.integration
def test_multi_page_export(sample_document, tmp_path):
    """A long resume spills onto more pages and the PDF agrees with the layout."""
    document = add_experiences(sample_document, 15)
    result = export_resume(document, output_dir=tmp_path)

    assert result.page_count > 1
    assert page_count(result.pdf_path) == result.page_count


@pytest.mark.integration
def test_export_is_repeatable(sample_document, tmp_path):
    """Exporting twice overwrites the same file with the same page count."""
    first = export_resume(sample_document, output_dir=tmp_path)
    second = export_resume(sample_document, output_dir=tmp_path)

    assert first.pdf_path == second.pdf_path
    assert first.page_count == second.page_count
    assert sorted(p.name for p in tmp_path.glob("*.pdf")) == ["Ana_María_Ruiz.pdf"]


@pytest.mark.integration
def test_render_pdf_bytes(sample_document):
    pdf_bytes = render_pdf_bytes(layout_document(sample_document))
    assert pdf_bytes.startswith(b"%PDF")
    assert page_count(pdf_bytes) == layout_document(sample_document).page_count


@pytest.mark.integration
def test_rendering_failure_leaves_no_file(sample_document, tmp_path, monkeypatch):
    """Engine failures collapse to 'Export failed' and nothing is written."""

    def broken_render(layout):
        raise ExportError("PDF rendering failed", original_error=RuntimeError("font missing"))

    monkeypatch.setattr(exporter, "render_pdf_bytes", broken_render)
    result = export_resume(sample_document, output_dir=tmp_path)

    assert not result.success
    assert result.errors == [EXPORT_FAILED_MESSAGE]
    assert result.pdf_path is None
    assert list(tmp_path.glob("*.pdf")) == []
    assert get_recent_events(event_type="export_failed")[-1]["resume_name"] == "Ana_María_Ruiz"


@pytest.mark.integration
def test_write_failure_cleans_up_temp_file(sample_document, tmp_path, monkeypatch):
    """A failed move into place removes the temporary file."""
    output_dir = tmp_path / "results"

    def failing_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(exporter.shutil, "move", failing_move)
    result = export_resume(sample_document, output_dir=output_dir)

    assert result.errors == [EXPORT_FAILED_MESSAGE]
    assert list(output_dir.iterdir()) == []


@pytest.mark.integration
def test_export_records_event(sample_document, tmp_path):
    result = export_resume(sample_document, output_dir=tmp_path)

    event = get_recent_events(event_type="export_completed")[-1]
    assert event["resume_name"] == "Ana_María_Ruiz"
    assert event["page_count"] == result.page_count
    assert event["pdf_path"] == str(result.pdf_path)


@pytest.mark.integration
def test_unknown_font_reports_export_failed(sample_document, tmp_path):
    """A font the engine cannot measure fails the export instead of raising."""
    fonts = Typography().to_dict()["fonts"]
    fonts["body"]["name"] = "NoSuchFont"

    result = export_resume(sample_document, output_dir=tmp_path, typography=Typography(fonts=fonts))

    assert not result.success
    assert result.errors == [EXPORT_FAILED_MESSAGE]
    assert result.pdf_path is None
    assert list(tmp_path.glob("*.pdf")) == []
