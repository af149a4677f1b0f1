"""
Resume Layout Engine

Turns a ResumeDocument into absolutely-positioned draw instructions on
fixed-size pages.

Pipeline:
1. build_blocks: walk the sections in fixed order and pre-measure every block
   (text wrapped greedily by whitespace against the content width)
2. layout_document: fold place_block over the blocks, carrying an immutable
   LayoutState (page index, vertical cursor, emitted instructions)

Page-break policy is block-level: a block that does not fit below the cursor
moves to a new page. Blocks marked keep_with_next (section headers, entry
headings) travel with at least the first line of the block after them. Only a
block taller than an empty page is split, and then only between whole lines.

Layout never fails on content shape; pathological content produces more pages.
"""

from dataclasses import dataclass, replace
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from reportlab.pdfbase.pdfmetrics import stringWidth

from resumecraft.contexts.authoring.resume_data_structure import ResumeDocument
from resumecraft.contexts.rendering.defaults import (
    BULLET_CHAR,
    CONTACT_SEPARATOR,
    SECTION_TITLES,
    SKILL_CATEGORY_LABELS,
    PageGeometry,
    Typography,
)
from resumecraft.utils.grouping import group_by

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"

KIND_TEXT = "text"
KIND_RULE = "rule"

# Horizontal gap between an entry title and its right-aligned date (points)
DATE_GAP = 12


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class Run:
    """A single piece of text on a line, anchored left, center, or right."""

    text: str
    font: str
    size: float
    align: str = ALIGN_LEFT
    indent: float = 0.0


@dataclass(frozen=True)
class Line:
    """One measured line: its runs share a baseline."""

    runs: Tuple[Run, ...]
    height: float
    rule_below: bool = False


@dataclass(frozen=True)
class Block:
    """
    A semantically distinct, pre-measured unit of layout content.

    Attributes:
        role: Semantic role (e.g., "section_header", "bullet")
        lines: Measured lines, top to bottom
        spacing_after: Vertical space after the block (points)
        keep_with_next: Never leave this block alone at the bottom of a page
    """

    role: str
    lines: Tuple[Line, ...]
    spacing_after: float
    keep_with_next: bool = False

    @property
    def height(self) -> float:
        return sum(line.height for line in self.lines)


@dataclass(frozen=True)
class DrawInstruction:
    """
    One absolutely-positioned drawing operation.

    Attributes:
        page: Zero-based page index
        kind: "text" or "rule"
        x: Anchor x (left edge, center, or right edge depending on align)
        y: Baseline (text) or stroke position (rule), measured down from the page top
        text: Text to draw ("" for rules)
        font: Font name ("" for rules)
        size: Font size in points (stroke width for rules)
        align: "left", "center", or "right"
        x_end: Right end of a rule (None for text)
    """

    page: int
    kind: str
    x: float
    y: float
    text: str = ""
    font: str = ""
    size: float = 0.0
    align: str = ALIGN_LEFT
    x_end: Optional[float] = None


@dataclass(frozen=True)
class LayoutState:
    """
    Accumulator threaded through block placement.

    pending holds keep_with_next blocks waiting for the block they belong to.
    """

    geometry: PageGeometry
    page_index: int
    cursor_y: float
    instructions: Tuple[DrawInstruction, ...] = ()
    pending: Tuple[Block, ...] = ()
    rule_width: float = 0.6


@dataclass(frozen=True)
class LayoutResult:
    """
    Finalized layout ready for export.

    Attributes:
        instructions: Draw instructions in placement order
        page_count: Number of pages (at least 1)
        geometry: Page geometry used
    """

    instructions: Tuple[DrawInstruction, ...]
    page_count: int
    geometry: PageGeometry

    def on_page(self, page: int) -> List[DrawInstruction]:
        return [instr for instr in self.instructions if instr.page == page]

    def texts(self) -> List[str]:
        return [instr.text for instr in self.instructions if instr.kind == KIND_TEXT]


# =============================================================================
# TEXT MEASUREMENT
# =============================================================================


def text_width(text: str, font: str, size: float) -> float:
    return stringWidth(text, font, size)


def wrap_text(text: str, font: str, size: float, width: float) -> List[str]:
    """
    Greedy whitespace line fill.

    Never hyphenates: a word wider than the line stays whole on its own line.
    Blank text yields no lines.

    Example:
        >>> wrap_text("one two three", "Helvetica", 10, 40)
        ['one two', 'three']
    """
    lines = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and text_width(candidate, font, size) > width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


# =============================================================================
# BLOCK CONSTRUCTION
# =============================================================================


class _BlockBuilder:
    """Measures document content into blocks for one geometry/typography pair."""

    def __init__(self, geometry: PageGeometry, typography: Typography):
        self.geometry = geometry
        self.typography = typography

    def _lines(self, text: str, role: str, align: str = ALIGN_LEFT, indent: float = 0.0) -> List[Line]:
        font = self.typography.font(role)
        size = self.typography.size(role)
        width = self.geometry.content_width - indent
        return [
            Line(runs=(Run(text=line, font=font, size=size, align=align, indent=indent),),
                 height=self.typography.leading(role))
            for line in wrap_text(text, font, size, width)
        ]

    def paragraph(self, text: str, role: str, align: str = ALIGN_LEFT, keep_with_next: bool = False) -> Optional[Block]:
        lines = self._lines(text, role, align)
        if not lines:
            return None
        return Block(
            role=role,
            lines=tuple(lines),
            spacing_after=self.typography.spacing_after(role),
            keep_with_next=keep_with_next,
        )

    def section_header(self, title: str) -> Block:
        role = "section_header"
        line = Line(
            runs=(Run(text=title, font=self.typography.font(role), size=self.typography.size(role)),),
            height=self.typography.leading(role),
            rule_below=True,
        )
        return Block(role=role, lines=(line,), spacing_after=self.typography.spacing_after(role), keep_with_next=True)

    def entry_heading(self, title: str, date: str, subtitle: str, keep_with_next: bool) -> Optional[Block]:
        """Bold title with a right-aligned date on its first line, then an italic subtitle."""
        typo = self.typography
        title_font, title_size = typo.font("entry_title"), typo.size("entry_title")
        date_font, date_size = typo.font("date"), typo.size("date")

        date_width = text_width(date, date_font, date_size) + DATE_GAP if date else 0
        title_lines = wrap_text(title, title_font, title_size, self.geometry.content_width - date_width)
        height = max(typo.leading("entry_title"), typo.leading("date") if date else 0)

        lines = []
        for i, text in enumerate(title_lines or [""]):
            runs = [Run(text=text, font=title_font, size=title_size)] if text else []
            if i == 0 and date:
                runs.append(Run(text=date, font=date_font, size=date_size, align=ALIGN_RIGHT))
            if runs:
                lines.append(Line(runs=tuple(runs), height=height if i == 0 else typo.leading("entry_title")))
        lines.extend(self._lines(subtitle, "entry_subtitle"))

        if not lines:
            return None
        return Block(
            role="entry_heading",
            lines=tuple(lines),
            spacing_after=typo.spacing_after("entry_heading"),
            keep_with_next=keep_with_next,
        )

    def bullet(self, text: str) -> Optional[Block]:
        typo = self.typography
        lines = self._lines(text, "bullet", indent=typo.bullet_indent)
        if not lines:
            return None
        glyph = Run(text=BULLET_CHAR, font=typo.font("bullet"), size=typo.size("bullet"))
        first = replace(lines[0], runs=(glyph,) + lines[0].runs)
        return Block(
            role="bullet",
            lines=(first,) + tuple(lines[1:]),
            spacing_after=typo.spacing_after("bullet"),
        )


def _join(*parts: str) -> str:
    return CONTACT_SEPARATOR.join(part for part in parts if part)


def _with_section_gap(blocks: List[Block], typography: Typography) -> List[Block]:
    """Widen the spacing after the last block of a section."""
    if not blocks:
        return blocks
    last = blocks[-1]
    gap = max(last.spacing_after, typography.spacing_after("section_gap"))
    return blocks[:-1] + [replace(last, spacing_after=gap)]


def _header_blocks(document: ResumeDocument, builder: _BlockBuilder) -> List[Block]:
    info = document.personal_info
    blocks = [
        builder.paragraph(info.full_name, "name", ALIGN_CENTER),
        builder.paragraph(_join(info.email, info.phone, info.location), "contact", ALIGN_CENTER),
        builder.paragraph(_join(info.linkedin, info.github, info.website), "links", ALIGN_CENTER),
    ]
    return [block for block in blocks if block is not None]


def _summary_blocks(document: ResumeDocument, builder: _BlockBuilder) -> List[Block]:
    body = builder.paragraph(document.personal_info.summary, "body")
    if body is None:
        return []
    return [builder.section_header(SECTION_TITLES["summary"]), body]


def _experience_blocks(document: ResumeDocument, builder: _BlockBuilder) -> List[Block]:
    if not document.experience:
        return []
    blocks = [builder.section_header(SECTION_TITLES["experience"])]
    for exp in document.experience:
        bullets = [builder.bullet(text) for text in exp.description + exp.achievements]
        bullets = [b for b in bullets if b is not None]
        heading = builder.entry_heading(exp.position, exp.date_range, exp.company, keep_with_next=bool(bullets))
        blocks.extend(b for b in [heading, *bullets] if b is not None)
    return blocks


def _education_blocks(document: ResumeDocument, builder: _BlockBuilder) -> List[Block]:
    if not document.education:
        return []
    blocks = [builder.section_header(SECTION_TITLES["education"])]
    for edu in document.education:
        details = []
        if edu.gpa:
            details.append(builder.paragraph(f"GPA: {edu.gpa}", "body"))
        details.extend(builder.bullet(honor) for honor in edu.honors)
        details = [d for d in details if d is not None]
        heading = builder.entry_heading(edu.title, edu.graduation_date, edu.institution, keep_with_next=bool(details))
        blocks.extend(b for b in [heading, *details] if b is not None)
    return blocks


def _skills_blocks(document: ResumeDocument, builder: _BlockBuilder) -> List[Block]:
    if not document.skills:
        return []
    blocks = [builder.section_header(SECTION_TITLES["skills"])]
    for category, skills in group_by(document.skills, key=lambda s: s.category).items():
        values = builder.paragraph(", ".join(s.name for s in skills if s.name), "skill_values")
        label = builder.paragraph(SKILL_CATEGORY_LABELS[category], "skill_label", keep_with_next=values is not None)
        blocks.extend(b for b in [label, values] if b is not None)
    return blocks


def _projects_blocks(document: ResumeDocument, builder: _BlockBuilder) -> List[Block]:
    if not document.projects:
        return []
    blocks = [builder.section_header(SECTION_TITLES["projects"])]
    for project in document.projects:
        details = [builder.paragraph(project.description, "body")]
        if project.technologies:
            details.append(builder.paragraph(f"Technologies: {', '.join(project.technologies)}", "body"))
        details = [d for d in details if d is not None]
        heading = builder.entry_heading(
            project.name, "", _join(project.link, project.github), keep_with_next=bool(details)
        )
        blocks.extend(b for b in [heading, *details] if b is not None)
    return blocks


SECTION_BUILDERS = (
    _header_blocks,
    _summary_blocks,
    _experience_blocks,
    _education_blocks,
    _skills_blocks,
    _projects_blocks,
)


def build_blocks(
    document: ResumeDocument,
    geometry: PageGeometry = None,
    typography: Typography = None,
) -> List[Block]:
    """
    Measure a document into an ordered block list.

    Sections appear in fixed order (header, summary, experience, education,
    skills, projects). Sections without entries produce no blocks at all, so no
    empty header is ever rendered.
    """
    geometry = geometry or PageGeometry()
    typography = typography or Typography()
    builder = _BlockBuilder(geometry, typography)

    blocks: List[Block] = []
    for build_section in SECTION_BUILDERS:
        blocks.extend(_with_section_gap(build_section(document, builder), typography))
    return blocks


# =============================================================================
# PLACEMENT
# =============================================================================


def _new_page(state: LayoutState) -> LayoutState:
    return replace(state, page_index=state.page_index + 1, cursor_y=state.geometry.content_top)


def _at_page_top(state: LayoutState) -> bool:
    return state.cursor_y <= state.geometry.content_top


def _line_instructions(state: LayoutState, line: Line) -> Tuple[DrawInstruction, ...]:
    geometry = state.geometry
    baseline = state.cursor_y + max(run.size for run in line.runs)
    anchors = {
        ALIGN_LEFT: geometry.margin,
        ALIGN_CENTER: geometry.width / 2,
        ALIGN_RIGHT: geometry.width - geometry.margin,
    }

    drawn = tuple(
        DrawInstruction(
            page=state.page_index,
            kind=KIND_TEXT,
            x=anchors[run.align] + run.indent,
            y=baseline,
            text=run.text,
            font=run.font,
            size=run.size,
            align=run.align,
        )
        for run in line.runs
    )
    if line.rule_below:
        drawn += (
            DrawInstruction(
                page=state.page_index,
                kind=KIND_RULE,
                x=geometry.margin,
                y=state.cursor_y + line.height,
                size=state.rule_width,
                x_end=geometry.width - geometry.margin,
            ),
        )
    return drawn


def _place_line(state: LayoutState, line: Line) -> LayoutState:
    # Split point for blocks taller than a page; a line is never divided
    if state.cursor_y + line.height > state.geometry.content_bottom and not _at_page_top(state):
        state = _new_page(state)
    return replace(
        state,
        cursor_y=state.cursor_y + line.height,
        instructions=state.instructions + _line_instructions(state, line),
    )


def _write_block(state: LayoutState, block: Block) -> LayoutState:
    state = reduce(_place_line, block.lines, state)
    return replace(state, cursor_y=state.cursor_y + block.spacing_after)


def _place_group(state: LayoutState, group: Sequence[Block]) -> LayoutState:
    """
    Place blocks that must start on the same page.

    A group that does not fit in the space left on a page starts a new page.
    If it is taller than a whole page it then flows over page breaks between
    whole lines.
    """
    group_height = sum(b.height + b.spacing_after for b in group[:-1]) + group[-1].height
    available = state.geometry.content_bottom - state.cursor_y

    if not _at_page_top(state) and group_height > available:
        state = _new_page(state)

    return reduce(_write_block, group, state)


def place_block(state: LayoutState, block: Block) -> LayoutState:
    """
    Place one block, returning the advanced state.

    Breaks to a new page when cursor_y + block height exceeds the bottom
    margin. keep_with_next blocks are deferred until the block they precede.
    """
    if block.keep_with_next:
        return replace(state, pending=state.pending + (block,))
    group = state.pending + (block,)
    return _place_group(replace(state, pending=()), group)


def _flush(state: LayoutState) -> LayoutState:
    if not state.pending:
        return state
    return _place_group(replace(state, pending=()), state.pending)


def layout_document(
    document: ResumeDocument,
    geometry: PageGeometry = None,
    typography: Typography = None,
) -> LayoutResult:
    """
    Lay out a document into paginated draw instructions.

    Deterministic: the same document, geometry, and typography always produce
    the same instructions and page count. Never raises on content shape.

    Args:
        document: Resume to lay out
        geometry: Page geometry (default: A4, 15 mm margins)
        typography: Typographic ruleset (default: Typography())

    Returns:
        LayoutResult with instructions and page count
    """
    geometry = geometry or PageGeometry()
    typography = typography or Typography()

    initial = LayoutState(
        geometry=geometry,
        page_index=0,
        cursor_y=geometry.content_top,
        rule_width=typography.rule_width,
    )
    final = _flush(reduce(place_block, build_blocks(document, geometry, typography), initial))

    return LayoutResult(
        instructions=final.instructions,
        page_count=final.page_index + 1,
        geometry=geometry,
    )
