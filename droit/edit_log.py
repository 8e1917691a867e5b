"""
Journal des modifications récentes — affiché dans le tableau de bord admin.

Dérivé et non autoritaire : une entrée peut référencer une page supprimée depuis.
Un journal stocké illisible est régénéré (jamais d'erreur côté utilisateur).
"""
import logging
from datetime import date
from typing import Callable, List

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .catalog import default_edits
from .models import EditEntry, to_wire
from .store import LANGUAGE_KEY, RECENT_EDITS_KEY, KeyValueStore

log = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(List[EditEntry])


class EditSessionLog:
    def __init__(self, store: KeyValueStore, today: Callable[[], date] = date.today, max_entries: int = 20):
        self.store = store
        self.today = today
        self.max_entries = max_entries

    def _load(self) -> List[EditEntry]:
        raw = self.store.get(RECENT_EDITS_KEY)
        if raw is None:
            return self.reset(self._language())
        try:
            return _ENTRIES.validate_python(raw)
        except PydanticValidationError as e:
            log.warning("Journal des modifications illisible — régénéré (%s)", e.errors()[0]["msg"])
            return self.reset(self._language())

    def _language(self) -> str:
        lang = self.store.get(LANGUAGE_KEY)
        return lang if lang in ("fr", "ar") else "fr"

    def _save(self, entries: List[EditEntry]) -> None:
        self.store.set(RECENT_EDITS_KEY, [to_wire(e) for e in entries])

    def record(self, page_label: str, user: str = "admin") -> EditEntry:
        entries = self._load()
        entry = EditEntry(
            id=max((e.id for e in entries), default=0) + 1,
            page=page_label,
            date=self.today().isoformat(),
            user=user,
        )
        entries.append(entry)
        self._save(entries[-self.max_entries:])
        return entry

    def list(self) -> List[EditEntry]:
        """Plus récente en premier."""
        return sorted(self._load(), key=lambda e: e.id, reverse=True)

    def reset(self, language: str = "fr") -> List[EditEntry]:
        entries = default_edits(language, self.today())
        self._save(entries)
        return entries
