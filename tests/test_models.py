"""Tests des modèles — texte bilingue, sections, pages, alias JSON."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from droit.models import BilingualText, Page, Resource, Section, StoreMetadata, slugify, to_wire


def _title():
    return {"fr": "Accueil", "ar": "الرئيسية"}


# ── BilingualText ─────────────────────────────────────────────────────────────

class TestBilingualText:
    def test_complete(self):
        t = BilingualText(fr="Bonjour", ar="مرحبا")
        assert t.fr == "Bonjour" and t.ar == "مرحبا"

    def test_missing_locale_rejected(self):
        with pytest.raises(PydanticValidationError) as exc:
            BilingualText.model_validate({"fr": "texte"})
        assert exc.value.errors()[0]["loc"] == ("ar",)

    def test_extra_locale_rejected(self):
        with pytest.raises(PydanticValidationError):
            BilingualText.model_validate({"fr": "a", "ar": "b", "en": "c"})

    def test_empty_default(self):
        assert BilingualText.empty().model_dump() == {"fr": "", "ar": ""}


# ── Section ───────────────────────────────────────────────────────────────────

class TestSection:
    def test_mixed_content_accepted(self):
        s = Section(id="home-hero", type="hero", content={
            "title": {"fr": "Titre", "ar": "عنوان"},
            "image": "/img.jpg",
            "cta":   {"label": {"fr": "Voir", "ar": "عرض"}, "href": "/programs"},
        })
        assert s.content["cta"]["href"] == "/programs"

    def test_partial_bilingual_rejected(self):
        with pytest.raises(PydanticValidationError) as exc:
            Section(id="s", type="hero", content={"title": {"fr": "Titre"}})
        err = exc.value.errors()[0]
        assert err["ctx"]["locale"] == "ar"
        assert err["ctx"]["path"] == "title"

    def test_partial_bilingual_in_list_rejected(self):
        with pytest.raises(PydanticValidationError) as exc:
            Section(id="s", type="values", content={"items": [{"fr": "a", "ar": "b"}, {"ar": "ج"}]})
        assert exc.value.errors()[0]["ctx"]["path"] == "items.1"

    def test_non_string_locale_rejected(self):
        with pytest.raises(PydanticValidationError):
            Section(id="s", type="hero", content={"title": {"fr": "a", "ar": 3}})


# ── Page ──────────────────────────────────────────────────────────────────────

class TestPage:
    def test_sections_sorted_by_order(self):
        page = Page(id="home", slug="home", title=_title(), template="home", sections=[
            Section(id="b", type="cta", order=2),
            Section(id="a", type="hero", order=0),
        ])
        assert [s.id for s in page.sections] == ["a", "b"]

    def test_duplicate_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            Page(id="home", slug="home", title=_title(), sections=[
                Section(id="a", type="hero", order=0),
                Section(id="b", type="hero", order=1),
            ])

    def test_duplicate_section_id_rejected(self):
        with pytest.raises(PydanticValidationError):
            Page(id="home", slug="home", title=_title(), sections=[
                Section(id="a", type="hero", order=0),
                Section(id="a", type="cta", order=1),
            ])

    @pytest.mark.parametrize("slug", ["Home", "a b", "-home", "home-", "é", ""])
    def test_slug_must_be_url_safe(self, slug):
        with pytest.raises(PydanticValidationError):
            Page(id="x", slug=slug, title=_title())

    def test_wire_format_uses_enum_values(self):
        wire = to_wire(Page(id="about", slug="about", title=_title(), template="about"))
        assert wire["template"] == "about"


# ── Alias et helpers ──────────────────────────────────────────────────────────

def test_resource_file_ref_alias():
    r = Resource(id=1, title=_title(), description=_title(), fileRef="/doc.pdf")
    assert r.file_ref == "/doc.pdf"
    assert to_wire(r)["fileRef"] == "/doc.pdf"


def test_store_metadata_alias():
    assert to_wire(StoreMetadata(initialized=True)) == {"initialized": True, "schemaVersion": 1}


def test_slugify():
    assert slugify("Table ronde : réformes juridiques") == "table-ronde-reformes-juridiques"
    assert slugify("الحقوق") == ""
