"""Unit tests for the resume layout engine."""

import pytest

from resumecraft.contexts.authoring import (
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeDocument,
    Skill,
)
from resumecraft.contexts.rendering import PageGeometry, build_blocks, layout_document, wrap_text
from resumecraft.contexts.rendering.defaults import BULLET_CHAR, SECTION_TITLES
from resumecraft.contexts.rendering.layout_engine import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    KIND_RULE,
    KIND_TEXT,
)


def make_document(n_experiences: int) -> ResumeDocument:
    """Resume with n identical-shaped experiences plus education, skills, and a project."""
    return ResumeDocument(
        personal_info=PersonalInfo(
            full_name="Test Person",
            email="test@example.com",
            summary="Engineer who writes a fair amount of summary text for layout purposes.",
        ),
        experience=[
            Experience(
                company=f"Company {i}",
                position="Engineer",
                start_date="2019-01",
                end_date="2020-01",
                description=[
                    "Designed and operated services that handled a steady stream of requests.",
                    "Reviewed code and mentored colleagues across two product teams.",
                ],
                achievements=["Reduced costs by 20% through capacity planning."],
            )
            for i in range(n_experiences)
        ],
        education=[Education(institution="State University", degree="B.S.", field_of_study="Physics")],
        skills=[Skill(name="Python"), Skill(name="Writing", category="soft")],
        projects=[Project(name="side-project", description="A small tool.", technologies=["Python"])],
    )


def text_instructions(layout):
    return [instr for instr in layout.instructions if instr.kind == KIND_TEXT]


# =============================================================================
# wrap_text
# =============================================================================


@pytest.mark.unit
def test_wrap_text_blank_yields_no_lines():
    """Blank text produces no lines at all."""
    assert wrap_text("", "Helvetica", 10, 100) == []
    assert wrap_text("   ", "Helvetica", 10, 100) == []


@pytest.mark.unit
def test_wrap_text_greedy_fill():
    """Words are added to a line until the next one would overflow."""
    assert wrap_text("one two three", "Helvetica", 10, 40) == ["one two", "three"]


@pytest.mark.unit
def test_wrap_text_wide_line_keeps_text_on_one_line():
    """Text narrower than the width is a single line with whitespace collapsed."""
    assert wrap_text("one   two\nthree", "Helvetica", 10, 1000) == ["one two three"]


@pytest.mark.unit
def test_wrap_text_never_breaks_a_word():
    """A word wider than the line stays whole on its own line."""
    long_word = "x" * 200
    lines = wrap_text(f"a {long_word} b", "Helvetica", 10, 50)
    assert lines == ["a", long_word, "b"]


# =============================================================================
# build_blocks
# =============================================================================


@pytest.mark.unit
def test_build_blocks_empty_document():
    """An empty document produces no blocks."""
    assert build_blocks(ResumeDocument()) == []


@pytest.mark.unit
def test_build_blocks_summary_only():
    """A summary alone yields its header and a body block, and nothing else."""
    document = ResumeDocument(personal_info=PersonalInfo(summary="Short summary."))
    roles = [block.role for block in build_blocks(document)]
    assert roles == ["section_header", "body"]


@pytest.mark.unit
def test_build_blocks_section_headers_keep_with_next(sample_document):
    """Section headers and entry headings are marked keep_with_next."""
    blocks = build_blocks(sample_document)
    assert blocks[0].role == "name"
    for block in blocks:
        if block.role == "section_header":
            assert block.keep_with_next
    assert any(block.role == "entry_heading" and block.keep_with_next for block in blocks)


# =============================================================================
# layout_document: content placement
# =============================================================================


@pytest.mark.unit
def test_empty_document_is_one_blank_page():
    """An empty document lays out to a single page with no instructions."""
    layout = layout_document(ResumeDocument())
    assert layout.page_count == 1
    assert layout.instructions == ()


@pytest.mark.unit
def test_name_is_centered_on_first_line(sample_document):
    """The name is the first instruction, centered on the page."""
    layout = layout_document(sample_document)
    first = layout.instructions[0]

    assert first.text == "Ana María Ruiz"
    assert first.page == 0
    assert first.align == ALIGN_CENTER
    assert first.x == pytest.approx(layout.geometry.width / 2)


@pytest.mark.unit
def test_contact_and_links_lines(sample_document):
    """Contact details and links are joined with separators; blank fields are skipped."""
    texts = layout_document(sample_document).texts()
    assert "ana.ruiz@example.com  |  +34 612 345 678  |  Madrid, Spain" in texts
    assert "https://linkedin.com/in/anaruiz  |  https://github.com/anaruiz" in texts


@pytest.mark.unit
def test_dates_are_right_aligned(sample_document):
    """Entry dates are anchored to the right margin."""
    layout = layout_document(sample_document)
    geometry = layout.geometry

    dates = [instr for instr in layout.instructions if instr.text == "2018-06 - 2021-02"]
    assert len(dates) == 1
    assert dates[0].align == ALIGN_RIGHT
    assert dates[0].x == pytest.approx(geometry.width - geometry.margin)


@pytest.mark.unit
def test_current_position_shows_present(sample_document):
    """A current position renders its range as 'start - Present'."""
    assert "2021-03 - Present" in layout_document(sample_document).texts()


@pytest.mark.unit
def test_education_entry_text(sample_document):
    """Education shows degree with field of study, institution, and GPA."""
    texts = layout_document(sample_document).texts()
    assert "B.Sc. in Computer Science" in texts
    assert "Universidad Politécnica de Madrid" in texts
    assert "GPA: 3.7" in texts


@pytest.mark.unit
def test_section_without_entries_is_omitted(sample_document):
    """Empty sections produce no header."""
    sample_document.education = []
    sample_document.projects = []
    texts = layout_document(sample_document).texts()

    assert SECTION_TITLES["education"] not in texts
    assert SECTION_TITLES["projects"] not in texts
    assert SECTION_TITLES["experience"] in texts
    assert SECTION_TITLES["skills"] in texts


@pytest.mark.unit
def test_name_only_document():
    """A document with only a name renders only the name."""
    document = ResumeDocument(personal_info=PersonalInfo(full_name="Solo Name"))
    layout = layout_document(document)
    assert layout.texts() == ["Solo Name"]


@pytest.mark.unit
def test_skills_grouped_by_category_in_first_seen_order():
    """Skills group by category; groups appear in the order categories are first seen."""
    document = ResumeDocument(
        skills=[
            Skill(name="Python", category="technical"),
            Skill(name="Teamwork", category="soft"),
            Skill(name="Go", category="technical"),
            Skill(name="German", category="language"),
        ]
    )
    texts = layout_document(document).texts()

    labels = [t for t in texts if t in ("Technical Skills", "Soft Skills", "Languages")]
    assert labels == ["Technical Skills", "Soft Skills", "Languages"]
    assert "Python, Go" in texts
    assert "Teamwork" in texts
    assert texts.index("Technical Skills") < texts.index("Python, Go") < texts.index("Soft Skills")


@pytest.mark.unit
def test_bullets_have_glyph_and_indented_text(sample_document):
    """Each bullet draws a glyph at the margin and its text indented past it."""
    layout = layout_document(sample_document)
    instructions = list(layout.instructions)
    margin = layout.geometry.margin

    glyph_index = next(i for i, instr in enumerate(instructions) if instr.text == BULLET_CHAR)
    glyph, text = instructions[glyph_index], instructions[glyph_index + 1]

    assert glyph.x == pytest.approx(margin)
    assert text.x > glyph.x
    assert text.y == glyph.y
    assert text.text == "Own the shipment tracking API serving 40 partner integrations."


@pytest.mark.unit
def test_section_header_has_rule_below(sample_document):
    """A rule spanning the content width follows each section header."""
    layout = layout_document(sample_document)
    instructions = list(layout.instructions)
    geometry = layout.geometry

    header_index = next(
        i for i, instr in enumerate(instructions) if instr.text == SECTION_TITLES["experience"]
    )
    rule = instructions[header_index + 1]
    assert rule.kind == KIND_RULE
    assert rule.x == pytest.approx(geometry.margin)
    assert rule.x_end == pytest.approx(geometry.width - geometry.margin)
    assert rule.y > instructions[header_index].y


@pytest.mark.unit
def test_long_word_is_never_split():
    """A single unbreakable word wider than the page is drawn whole."""
    long_word = "Supercalifragilistic" * 20
    document = ResumeDocument(personal_info=PersonalInfo(summary=f"Intro {long_word} outro"))
    texts = layout_document(document).texts()

    assert long_word in texts
    assert "Intro" in texts
    assert "outro" in texts


# =============================================================================
# layout_document: pagination
# =============================================================================


@pytest.mark.unit
def test_layout_is_deterministic(sample_document):
    """Laying out the same document twice gives identical results."""
    first = layout_document(sample_document)
    second = layout_document(sample_document)
    assert first.instructions == second.instructions
    assert first.page_count == second.page_count


def make_growing_document(summary_words: int = 12, n_bullets: int = 3) -> ResumeDocument:
    """Resume with one experience entry whose summary and bullet list can be grown."""
    return ResumeDocument(
        personal_info=PersonalInfo(
            full_name="Test Person",
            summary=" ".join(["word"] * summary_words),
        ),
        experience=[
            Experience(
                company="Company",
                position="Engineer",
                start_date="2019-01",
                end_date="2020-01",
                description=[f"Shipped improvement number {i} to the billing service." for i in range(n_bullets)],
            )
        ],
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "grow, sizes",
    [
        (make_document, range(0, 26)),
        (lambda n: make_growing_document(summary_words=n), range(0, 1501, 10)),
        (lambda n: make_growing_document(n_bullets=n), range(0, 121, 2)),
    ],
    ids=["experience_entries", "summary_words", "bullets"],
)
def test_adding_content_never_reduces_page_count(grow, sizes):
    """Page count is non-decreasing as experience entries, summary words, or bullets are added."""
    page_counts = [layout_document(grow(n)).page_count for n in sizes]

    assert page_counts == sorted(page_counts)
    assert page_counts[0] == 1
    assert page_counts[-1] > 1


@pytest.mark.unit
def test_oversized_group_below_page_top_starts_new_page():
    """A keep-together group taller than a page starts on a fresh page when content precedes it."""
    summary = " ".join(["lorem ipsum dolor sit amet"] * 60)
    document = make_growing_document(summary_words=0)
    document.personal_info.summary = summary
    geometry = PageGeometry(height=200)

    layout = layout_document(document, geometry=geometry)
    texts = text_instructions(layout)

    name = next(t for t in texts if t.text == "Test Person")
    header = next(t for t in texts if t.text == SECTION_TITLES["summary"])
    assert name.page == 0
    assert header.page == 1
    assert layout.page_count > 2


@pytest.mark.unit
def test_instructions_stay_inside_content_area():
    """Every baseline and rule lies between the top and bottom margins."""
    layout = layout_document(make_document(20))
    geometry = layout.geometry

    assert layout.page_count > 1
    for instr in layout.instructions:
        assert geometry.content_top < instr.y <= geometry.content_bottom + 1e-6
        assert 0 <= instr.page < layout.page_count


@pytest.mark.unit
def test_every_page_has_content():
    """Pages are numbered contiguously and none is left blank."""
    layout = layout_document(make_document(20))
    assert {instr.page for instr in layout.instructions} == set(range(layout.page_count))


@pytest.mark.unit
def test_section_header_never_stranded_at_page_bottom():
    """Each section header shares its page with the text that follows it."""
    for n in range(1, 21):
        layout = layout_document(make_document(n))
        texts = text_instructions(layout)
        for i, instr in enumerate(texts[:-1]):
            if instr.text in SECTION_TITLES.values() and instr.font == "Helvetica-Bold":
                assert texts[i + 1].page == instr.page, f"{instr.text} stranded with {n} entries"


@pytest.mark.unit
def test_entry_heading_stays_with_first_bullet():
    """An experience title is never the last thing on a page."""
    for n in range(1, 21):
        layout = layout_document(make_document(n))
        texts = text_instructions(layout)
        for i, instr in enumerate(texts):
            if instr.text == "Engineer":
                first_bullet = next(t for t in texts[i:] if t.text == BULLET_CHAR)
                assert first_bullet.page == instr.page


@pytest.mark.unit
def test_smaller_page_needs_more_pages(sample_document):
    """Shrinking the page height increases the page count."""
    default_pages = layout_document(sample_document).page_count
    short_pages = layout_document(sample_document, geometry=PageGeometry(height=300)).page_count
    assert short_pages > default_pages


@pytest.mark.unit
def test_block_taller_than_page_is_split_between_lines():
    """A paragraph taller than a page continues on the next page."""
    summary = " ".join(["lorem ipsum dolor sit amet"] * 60)
    document = ResumeDocument(personal_info=PersonalInfo(summary=summary))
    geometry = PageGeometry(height=200)

    layout = layout_document(document, geometry=geometry)

    assert layout.page_count > 1
    drawn = " ".join(t for t in layout.texts() if t != SECTION_TITLES["summary"])
    assert drawn == summary
