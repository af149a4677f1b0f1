"""Unit tests for the starter template gallery."""

import pytest

from resumecraft.contexts.authoring import TemplateGallery, TemplateNotFoundError
from resumecraft.contexts.authoring.template_gallery import TEMPLATE_CATEGORIES, TEMPLATE_LEVELS


@pytest.fixture
def gallery(templates_dir):
    return TemplateGallery(templates_dir)


def write_template(directory, filename, template_id, category="technology", level="mid"):
    (directory / filename).write_text(
        f"id: {template_id}\n"
        f"name: {template_id}\n"
        "description: Test template\n"
        f"category: {category}\n"
        f"level: {level}\n"
        "resume:\n"
        "  personal_info: {full_name: Pat Example}\n",
        encoding="utf-8",
    )


# =============================================================================
# Loading
# =============================================================================


@pytest.mark.unit
def test_shipped_templates_load(gallery):
    """Every shipped template parses and uses a known category and level."""
    templates = gallery.list()

    assert [t.id for t in templates] == [
        "entry-level-developer",
        "marketing-manager-mid",
        "product-manager-senior",
        "software-engineer-senior",
    ]
    for template in templates:
        assert template.category in TEMPLATE_CATEGORIES
        assert template.level in TEMPLATE_LEVELS
        assert template.tags


@pytest.mark.unit
def test_get_unknown_template(gallery):
    with pytest.raises(TemplateNotFoundError, match="Starter template not found: designer-lead"):
        gallery.get("designer-lead")


@pytest.mark.unit
def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError, match="Template directory not found"):
        TemplateGallery(tmp_path / "nowhere").list()


@pytest.mark.unit
def test_rejects_unknown_level(tmp_path):
    write_template(tmp_path, "a.yaml", "a", level="intern")
    with pytest.raises(ValueError, match="level 'intern' must be one of"):
        TemplateGallery(tmp_path).list()


@pytest.mark.unit
def test_rejects_duplicate_ids(tmp_path):
    write_template(tmp_path, "a.yaml", "same")
    write_template(tmp_path, "b.yaml", "same")
    with pytest.raises(ValueError, match="Duplicate template id 'same'"):
        TemplateGallery(tmp_path).list()


@pytest.mark.unit
def test_templates_are_cached_until_cleared(tmp_path):
    write_template(tmp_path, "a.yaml", "a")
    gallery = TemplateGallery(tmp_path)
    assert len(gallery.list()) == 1

    write_template(tmp_path, "b.yaml", "b")
    assert len(gallery.list()) == 1

    gallery.clear_cache()
    assert len(gallery.list()) == 2


# =============================================================================
# Search and filter
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "query, expected",
    [
        ("", 4),
        ("MARKETING", 1),  # name, case-insensitive
        ("first developer role", 1),  # description
        ("react", 1),  # tag
        ("kubernetes", 0),
    ],
)
def test_filter_by_query(gallery, query, expected):
    assert len(gallery.filter(query)) == expected


@pytest.mark.unit
def test_filter_by_category_and_level(gallery):
    assert {t.id for t in gallery.filter(category="business")} == {
        "marketing-manager-mid",
        "product-manager-senior",
    }
    assert [t.id for t in gallery.filter(category="technology", level="senior")] == [
        "software-engineer-senior"
    ]
    assert gallery.filter(category="healthcare") == []


@pytest.mark.unit
def test_filter_all_keeps_everything(gallery):
    assert gallery.filter(category="all", level="all") == gallery.list()


@pytest.mark.unit
def test_filter_combines_query_with_filters(gallery):
    assert [t.id for t in gallery.filter("engineer", level="senior")] == ["software-engineer-senior"]


@pytest.mark.unit
def test_filter_rejects_unknown_category(gallery):
    with pytest.raises(ValueError, match="Unknown template category"):
        gallery.filter(category="finance")


# =============================================================================
# Instantiate
# =============================================================================


@pytest.mark.unit
def test_instantiate_clears_contact_details(gallery):
    """The example person's contact details are blanked; the summary is kept."""
    document = gallery.instantiate("software-engineer-senior")
    info = document.personal_info

    assert info.full_name == ""
    assert info.email == ""
    assert info.phone == ""
    assert info.linkedin == ""
    assert info.github == ""
    assert info.summary.startswith("Senior software engineer")
    assert document.experience[0].company == "Northwind Services"
    assert document.experience[0].current


@pytest.mark.unit
def test_instantiate_gives_fresh_ids(gallery):
    """Two documents started from one template share no entry ids."""
    first = gallery.instantiate("product-manager-senior")
    second = gallery.instantiate("product-manager-senior")

    def ids(document):
        return {e.id for e in [*document.experience, *document.education, *document.skills, *document.projects]}

    assert len(ids(first)) == len(first.experience) + len(first.education) + len(first.skills)
    assert ids(first).isdisjoint(ids(second))


@pytest.mark.unit
def test_instantiate_leaves_template_unchanged(gallery):
    gallery.instantiate("marketing-manager-mid").experience[0].company = "Edited"
    assert gallery.get("marketing-manager-mid").resume["experience"][0]["company"] == "Trailhead Outfitters"
    assert gallery.instantiate("marketing-manager-mid").experience[0].company == "Trailhead Outfitters"


@pytest.mark.unit
def test_instantiated_document_is_not_empty(gallery):
    document = gallery.instantiate("entry-level-developer")
    assert not document.is_empty()
    assert document.experience[0].end_date == "2023-08"
