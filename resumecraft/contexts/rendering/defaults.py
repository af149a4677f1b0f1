"""
Default typography and page geometry for resume rendering.

Provides the fixed typographic ruleset used by:
- layout_engine.py (measuring and placing blocks)
- config_resolver.py (presets override these values, never content)

Spacing is declared in millimetres and converted to points on use.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

# Section order is fixed: header → summary → experience → education → skills → projects
SECTION_TITLES = {
    "summary": "Professional Summary",
    "experience": "Professional Experience",
    "education": "Education",
    "skills": "Skills",
    "projects": "Projects",
}

SKILL_CATEGORY_LABELS = {
    "technical": "Technical Skills",
    "soft": "Soft Skills",
    "language": "Languages",
    "certification": "Certifications",
}

CONTACT_SEPARATOR = "  |  "
BULLET_CHAR = "•"

DEFAULT_PAGE_MARGIN_MM = 15

# Font name and size (points) per element role
DEFAULT_FONTS = {
    "name": {"name": "Helvetica-Bold", "size": 20},
    "contact": {"name": "Helvetica", "size": 9.5},
    "links": {"name": "Helvetica", "size": 9},
    "section_header": {"name": "Helvetica-Bold", "size": 12},
    "entry_title": {"name": "Helvetica-Bold", "size": 10.5},
    "entry_subtitle": {"name": "Helvetica-Oblique", "size": 10},
    "date": {"name": "Helvetica", "size": 9.5},
    "body": {"name": "Helvetica", "size": 10},
    "bullet": {"name": "Helvetica", "size": 10},
    "skill_label": {"name": "Helvetica-Bold", "size": 10},
    "skill_values": {"name": "Helvetica", "size": 10},
}

# Vertical space after a block of each role (mm)
DEFAULT_SPACING_MM = {
    "name": 2,
    "contact": 1,
    "links": 4,
    "section_header": 6,
    "entry_heading": 1.5,
    "body": 2,
    "bullet": 2,
    "skill_label": 1,
    "skill_values": 3,
    "section_gap": 4,
}


@dataclass(frozen=True)
class PageGeometry:
    """
    Page size and uniform margin, in PDF points.

    Attributes:
        width: Page width
        height: Page height
        margin: Margin on every side
    """

    width: float = A4[0]
    height: float = A4[1]
    margin: float = DEFAULT_PAGE_MARGIN_MM * mm

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def content_top(self) -> float:
        return self.margin

    @property
    def content_bottom(self) -> float:
        return self.height - self.margin


@dataclass(frozen=True)
class Typography:
    """
    Fixed typographic ruleset.

    Attributes:
        fonts: Role → {"name": font name, "size": points}
        spacing_mm: Role → spacing after a block of that role (mm)
        line_height: Line height as a multiple of font size
        bullet_indent_mm: Indent of bullet text relative to the bullet glyph
        rule_width: Stroke width of the rule under section headers (points)
    """

    fonts: Dict[str, Dict[str, Any]] = field(default_factory=lambda: _copy(DEFAULT_FONTS))
    spacing_mm: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_SPACING_MM))
    line_height: float = 1.25
    bullet_indent_mm: float = 4
    rule_width: float = 0.6

    def font(self, role: str) -> str:
        return self.fonts[role]["name"]

    def size(self, role: str) -> float:
        return float(self.fonts[role]["size"])

    def leading(self, role: str) -> float:
        """Height of one line of the given role (points)."""
        return self.size(role) * self.line_height

    def spacing_after(self, role: str) -> float:
        """Spacing after a block of the given role (points)."""
        return self.spacing_mm.get(role, 0) * mm

    @property
    def bullet_indent(self) -> float:
        return self.bullet_indent_mm * mm

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fonts": _copy(self.fonts),
            "spacing_mm": dict(self.spacing_mm),
            "line_height": self.line_height,
            "bullet_indent_mm": self.bullet_indent_mm,
            "rule_width": self.rule_width,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Typography":
        """
        Build a ruleset from a (possibly partial) dict.

        Raises:
            ValueError: If an unknown role, setting, or font is named
        """
        unknown = set(data) - {"fonts", "spacing_mm", "line_height", "bullet_indent_mm", "rule_width"}
        if unknown:
            raise ValueError(f"Unknown typography settings: {sorted(unknown)}")

        base = cls()
        fonts = _copy(base.fonts)
        for role, spec in (data.get("fonts") or {}).items():
            if role not in fonts:
                raise ValueError(f"Unknown font role: {role!r}. Known roles: {list(fonts)}")
            fonts[role].update(spec)
            if not _is_known_font(fonts[role]["name"]):
                raise ValueError(f"Unknown font for role {role!r}: {fonts[role]['name']!r}")

        spacing = dict(base.spacing_mm)
        for role, value in (data.get("spacing_mm") or {}).items():
            if role not in spacing:
                raise ValueError(f"Unknown spacing role: {role!r}. Known roles: {list(spacing)}")
            spacing[role] = value

        return cls(
            fonts=fonts,
            spacing_mm=spacing,
            line_height=data.get("line_height", base.line_height),
            bullet_indent_mm=data.get("bullet_indent_mm", base.bullet_indent_mm),
            rule_width=data.get("rule_width", base.rule_width),
        )


def _is_known_font(name: str) -> bool:
    return name in pdfmetrics.standardFonts or name in pdfmetrics.getRegisteredFontNames()


def _copy(fonts: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {role: dict(spec) for role, spec in fonts.items()}
