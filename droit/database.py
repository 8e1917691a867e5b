"""SQLite — ouverture du stockage + assemblage des composants du noyau de contenu"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .admin import AdminService
from .edit_log import EditSessionLog
from .initializer import Initializer
from .notifier import Notifier
from .repository import ContentRepository
from .store import KeyValueStore, SqlKeyValueStore
from .synchronizer import SectionSynchronizer

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"


def db_path() -> str:
    return os.getenv("DB_PATH", str(DATA_DIR / "droit.db"))


def open_store(path: Optional[str] = None) -> SqlKeyValueStore:
    """Stockage durable d'un « site » : un fichier SQLite."""
    path = path or db_path()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    log.info("Stockage SQLite : %s", path)
    return SqlKeyValueStore(f"sqlite:///{path}")


@dataclass
class ContentContext:
    store:        KeyValueStore
    repository:   ContentRepository
    synchronizer: SectionSynchronizer
    initializer:  Initializer
    edit_log:     EditSessionLog
    admin:        AdminService


def build_context(store: KeyValueStore, notifier: Optional[Notifier] = None) -> ContentContext:
    """Assemble les composants autour d'un stockage injecté (aucun état global)."""
    repository   = ContentRepository(store)
    synchronizer = SectionSynchronizer(repository)
    initializer  = Initializer(store, repository, synchronizer)
    edit_log     = EditSessionLog(store)
    admin        = AdminService(store, repository, initializer, synchronizer, edit_log, notifier)
    return ContentContext(store, repository, synchronizer, initializer, edit_log, admin)
