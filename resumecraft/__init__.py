"""
resumecraft - Structured resume authoring, PDF layout, and ATS scoring

Users describe a resume as structured data; resumecraft paginates it into a
printable PDF and scores it for applicant-tracking-system compatibility.

Architecture:
- Authoring Context: Resume data model, record store, PDF import, AI-assisted editing
- Rendering Context: Layout/pagination engine and PDF export
- Scoring Context: Local heuristics blended with a remote language-model judgment
"""

__version__ = "0.1.0"
