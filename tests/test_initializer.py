"""Tests bootstrap — idempotence, réinitialisation forcée, reset avec liste préservée."""
import pytest

from droit import catalog
from droit.database import build_context
from droit.errors import StorageError
from droit.models import LOCALES, to_wire
from droit.store import AUTH_KEY, INIT_KEY, LANGUAGE_KEY, MemoryKeyValueStore

from conftest import news_payload


def snapshot(ctx):
    repo = ctx.repository
    return (
        [to_wire(p) for p in repo.pages.list()],
        [to_wire(n) for n in repo.news.list()],
        [to_wire(r) for r in repo.resources.list()],
    )


def _walk(value):
    if isinstance(value, dict):
        if any(loc in value for loc in LOCALES):
            yield value
        else:
            for v in value.values():
                yield from _walk(v)
    elif isinstance(value, list):
        for v in value:
            yield from _walk(v)


# ── bootstrap ─────────────────────────────────────────────────────────────────

class TestBootstrap:
    def test_first_call_seeds(self, ctx, store):
        assert ctx.initializer.is_initialized() is False
        assert ctx.initializer.bootstrap() is True
        assert ctx.initializer.is_initialized() is True
        assert store.get(INIT_KEY) == {"initialized": True, "schemaVersion": catalog.CATALOG_SCHEMA_VERSION}

    def test_repeated_calls_identical(self, ctx):
        ctx.initializer.bootstrap()
        first = snapshot(ctx)
        for _ in range(3):
            assert ctx.initializer.bootstrap() is False
        assert snapshot(ctx) == first

    def test_noop_keeps_edits(self, seeded):
        seeded.repository.news.create(news_payload())
        seeded.initializer.bootstrap()
        assert seeded.repository.news.count() == 3

    def test_pages_have_full_section_sets(self, seeded):
        for page in seeded.repository.get_all_pages():
            assert [s.type for s in page.sections] == catalog.section_types(page.template)

    def test_ensure_initialized(self, ctx):
        assert ctx.initializer.ensure_initialized() is True
        assert ctx.initializer.ensure_initialized() is False

    def test_legacy_flag_counts_as_initialized(self, ctx, store):
        store.set(INIT_KEY, "true")
        assert ctx.initializer.bootstrap() is False

    def test_corrupt_metadata_reseeds(self, ctx, store):
        store.set(INIT_KEY, {"initialized": "peut-être"})
        assert ctx.initializer.bootstrap() is True

    def test_bilingual_completeness_of_store(self, seeded, store):
        found = 0
        for key in ("pages", "news", "resources"):
            for text in _walk(store.get(key)):
                found += 1
                assert isinstance(text.get("fr"), str) and isinstance(text.get("ar"), str)
        assert found > 0


# ── Échec de stockage ─────────────────────────────────────────────────────────

class FlakyStore(MemoryKeyValueStore):
    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = fail_on

    def set(self, key, value):
        if key == self.fail_on:
            raise StorageError(f"écriture {key} impossible")
        super().set(key, value)


@pytest.mark.parametrize("fail_on", ["pages", "news", "resources", INIT_KEY])
def test_storage_error_leaves_uninitialized(fail_on):
    ctx = build_context(FlakyStore(fail_on))
    with pytest.raises(StorageError):
        ctx.initializer.bootstrap()
    assert ctx.initializer.is_initialized() is False


# ── Réinitialisation ──────────────────────────────────────────────────────────

class TestForceReinitialize:
    def test_restores_seed_and_is_not_additive(self, seeded):
        expected = snapshot(seeded)
        seeded.repository.news.create(news_payload())
        seeded.repository.pages.update_section("home", "home-hero", {"title": {"fr": "x", "ar": "y"}})
        seeded.initializer.force_reinitialize()
        seeded.initializer.force_reinitialize()
        assert snapshot(seeded) == expected
        assert seeded.initializer.is_initialized()


class TestResetAll:
    def test_preserves_auth_and_language(self, seeded, store):
        store.set(AUTH_KEY, "jeton-admin")
        store.set(LANGUAGE_KEY, "ar")
        store.set("brouillon", {"x": 1})
        seeded.repository.news.create(news_payload())

        seeded.initializer.reset_all({AUTH_KEY, LANGUAGE_KEY})

        assert store.get(AUTH_KEY) == "jeton-admin"
        assert store.get(LANGUAGE_KEY) == "ar"
        assert store.get("brouillon") is None
        assert seeded.repository.news.count() == 2

    def test_protected_keys_always_kept(self, seeded, store):
        store.set(AUTH_KEY, "jeton")
        store.set(LANGUAGE_KEY, "fr")
        seeded.initializer.reset_all()
        assert store.get(AUTH_KEY) == "jeton"
        assert store.get(LANGUAGE_KEY) == "fr"

    def test_extra_preserved_key(self, seeded, store):
        store.set("theme", "sombre")
        seeded.initializer.reset_all({"theme"})
        assert store.get("theme") == "sombre"

    def test_pages_match_catalog(self, seeded):
        seeded.repository.pages.create({"slug": "ephemere", "title": {"fr": "É", "ar": "ع"}})
        seeded.initializer.reset_all()
        pages = seeded.repository.get_all_pages()
        expected = {p.slug for p in catalog.default_pages()}
        assert {p.slug for p in pages} == expected
        for page in pages:
            assert [s.type for s in page.sections] == catalog.section_types(page.template)
