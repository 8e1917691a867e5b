"""
Actions admin du tableau de bord — synchroniser, forcer l'initialisation, tout réinitialiser.

Chaque action signale son issue via le Notifier, dans la locale active ;
aucune n'échoue silencieusement.
"""
import logging
from typing import Iterable, List, Optional

from .edit_log import EditSessionLog
from .errors import ContentError
from .initializer import Initializer
from .models import EditEntry
from .notifier import LoggingNotifier, Notifier, message
from .repository import ContentRepository
from .store import KeyValueStore
from .synchronizer import SectionSynchronizer

log = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        store: KeyValueStore,
        repository: ContentRepository,
        initializer: Initializer,
        synchronizer: SectionSynchronizer,
        edit_log: EditSessionLog,
        notifier: Optional[Notifier] = None,
    ):
        self.store = store
        self.repository = repository
        self.initializer = initializer
        self.synchronizer = synchronizer
        self.edit_log = edit_log
        self.notifier = notifier or LoggingNotifier()

    def sync_content(self, language: str = "fr", notifier: Optional[Notifier] = None) -> bool:
        notifier = notifier or self.notifier
        try:
            self.synchronizer.synchronize_all()
        except ContentError as e:
            log.error("Synchronisation du contenu : %s", e)
            notifier.notify(message("sync_failed", language))
            return False
        notifier.notify(message("sync_ok", language))
        return True

    def force_initialization(self, language: str = "fr", notifier: Optional[Notifier] = None) -> bool:
        notifier = notifier or self.notifier
        try:
            self.initializer.force_reinitialize()
            self.edit_log.reset(language)
        except ContentError as e:
            log.error("Initialisation forcée : %s", e)
            notifier.notify(message("init_failed", language, error=e))
            return False
        notifier.notify(message("init_ok", language))
        return True

    def reset_content(self, language: str = "fr", preserve: Iterable[str] = (),
                      notifier: Optional[Notifier] = None) -> bool:
        notifier = notifier or self.notifier
        try:
            self.initializer.reset_all(preserve)
            self.edit_log.reset(language)
        except ContentError as e:
            log.error("Réinitialisation complète : %s", e)
            notifier.notify(message("reset_failed", language, error=e))
            return False
        notifier.notify(message("reset_ok", language))
        notifier.reload()
        return True

    def record_edit(self, page_label: str, user: str = "admin") -> EditEntry:
        return self.edit_log.record(page_label, user)

    def recent_edits(self) -> List[EditEntry]:
        return self.edit_log.list()

    def dashboard(self) -> dict:
        return {
            "stats":        self.repository.stats(),
            "initialized":  self.initializer.is_initialized(),
            "recent_edits": [e.model_dump() for e in self.recent_edits()],
        }
