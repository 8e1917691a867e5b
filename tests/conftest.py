"""Fixtures communes — stockage en mémoire, contexte assemblé, horloge figée."""
import os
import sys
import tempfile
from datetime import date
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Avant tout import de droit.api.main (qui ouvre DB_PATH au chargement)
os.environ.setdefault("DB_PATH", str(Path(tempfile.mkdtemp()) / "droit-test.db"))

import pytest

from droit.database import build_context
from droit.notifier import CollectingNotifier
from droit.store import MemoryKeyValueStore

TODAY = date(2024, 3, 15)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def ctx(store, notifier):
    context = build_context(store, notifier)
    context.edit_log.today = lambda: TODAY
    return context


@pytest.fixture
def seeded(ctx):
    ctx.initializer.bootstrap()
    return ctx


def news_payload(**overrides) -> dict:
    data = {
        "title":    {"fr": "Atelier juridique", "ar": "ورشة قانونية"},
        "date":     {"fr": "1 mars 2024", "ar": "1 مارس 2024"},
        "author":   {"fr": "Équipe DROIT", "ar": "فريق الحقوق"},
        "category": {"fr": "Formation", "ar": "تدريب"},
        "excerpt":  {"fr": "Un atelier ouvert à tous.", "ar": "ورشة مفتوحة للجميع."},
        "image":    "/images/news/atelier.jpg",
        "content":  "Programme détaillé de l'atelier.",
    }
    data.update(overrides)
    return data
