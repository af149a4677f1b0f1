"""
Import an existing PDF resume into structured data.

Pipeline: validate upload → extract text (pdfplumber) → parse with an LLM into
a ResumeDocument. Validation happens before any processing; the LLM parse is
strict, a response that does not decode into the resume schema is an error.
"""

import json
from pathlib import Path
from typing import Optional, Union

from resumecraft.contexts.authoring.exceptions import AssistantError, UploadValidationError
from resumecraft.contexts.authoring.logger import _log_info, log_assistant_failure, log_import_result
from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.utils.llm import LLMProvider, get_provider, load_json_payload
from resumecraft.utils.pdf_processing import extract_page_texts
from resumecraft.utils.remote_errors import describe_remote_error

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MIN_EXTRACTED_CHARS = 50
PARSE_MAX_TOKENS = 3000
PARSE_TEMPERATURE = 0.1

_PARSE_SYSTEM_PROMPT = """\
You convert resume text into structured JSON. Return ONLY a JSON object with this shape:
{
  "personal_info": {"full_name": "", "email": "", "phone": "", "location": "",
                    "linkedin": "", "github": "", "website": "", "summary": ""},
  "experience": [{"company": "", "position": "", "start_date": "", "end_date": "",
                  "current": false, "description": [""], "achievements": [""]}],
  "education": [{"institution": "", "degree": "", "field_of_study": "",
                 "graduation_date": "", "gpa": "", "honors": [""]}],
  "skills": [{"name": "", "category": "technical|soft|language|certification",
              "proficiency": "beginner|intermediate|advanced|expert"}],
  "projects": [{"name": "", "description": "", "technologies": [""], "link": "", "github": ""}]
}
Use "" for unknown text fields and [] for empty lists. Put quantified results in
"achievements" and duties in "description". Do not invent content."""

_PARSE_USER_PROMPT_TEMPLATE = """\
Convert this resume text to the JSON structure:

---
{content}"""


def validate_upload(pdf_path: Path) -> None:
    """
    Reject files that are not PDFs or are larger than 10 MB.

    Raises:
        UploadValidationError: If the file is missing, not a PDF, or too large
    """
    if not pdf_path.exists():
        raise UploadValidationError(f"File not found: {pdf_path}")
    if pdf_path.suffix.lower() != ".pdf":
        raise UploadValidationError("Please upload a PDF file only.")
    if pdf_path.stat().st_size > MAX_UPLOAD_BYTES:
        raise UploadValidationError("File size must be less than 10MB.")


def extract_text_from_pdf(pdf_path: Path) -> str:
    """
    Extract the text of every page, one page per line block.

    Raises:
        UploadValidationError: If the file cannot be read as a PDF
    """
    try:
        pages = extract_page_texts(pdf_path)
    except Exception as e:
        raise UploadValidationError(
            "Failed to extract text from PDF. Please ensure the file is a valid PDF document."
        ) from e
    return "\n".join(pages).strip()


def parse_resume_text(text: str, provider: Optional[LLMProvider] = None) -> ResumeDocument:
    """
    Parse raw resume text into a ResumeDocument with an LLM.

    Raises:
        AssistantError: If the AI call fails or its response does not match the schema
    """
    try:
        llm = provider or get_provider()
        response = llm.generate(
            system_prompt=_PARSE_SYSTEM_PROMPT,
            user_prompt=_PARSE_USER_PROMPT_TEMPLATE.format(content=text[:12000]),
            max_tokens=PARSE_MAX_TOKENS,
            temperature=PARSE_TEMPERATURE,
        )
    except Exception as e:
        message = describe_remote_error(e)
        log_assistant_failure("Resume parsing", message, e)
        raise AssistantError(message, original_error=e) from e

    try:
        payload = load_json_payload(response.content)
    except json.JSONDecodeError as e:
        raise AssistantError("Failed to parse resume content: response was not valid JSON.", e)

    if not isinstance(payload, dict):
        raise AssistantError("Failed to parse resume content: expected a JSON object.")

    try:
        return ResumeDocument.from_dict(payload)
    except (ValueError, TypeError, AttributeError) as e:
        raise AssistantError(f"Failed to parse resume content: {e}", e)


def import_resume(
    pdf_path: Union[str, Path], provider: Optional[LLMProvider] = None
) -> ResumeDocument:
    """
    Validate, extract, and parse an uploaded PDF resume.

    Raises:
        UploadValidationError: Wrong type/size, unreadable PDF, or too little text
        AssistantError: If the AI parse fails
    """
    pdf_path = Path(pdf_path)
    validate_upload(pdf_path)

    _log_info(f"Extracting text from {pdf_path.name}")
    text = extract_text_from_pdf(pdf_path)
    if len(text) < MIN_EXTRACTED_CHARS:
        raise UploadValidationError(
            "Could not extract sufficient text from the PDF. "
            "Please ensure the PDF contains readable text."
        )

    document = parse_resume_text(text, provider=provider)
    log_import_result(pdf_path, document)
    return document
