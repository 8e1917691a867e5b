"""
Initialisation du stockage — seed idempotent depuis le catalogue par défaut.

États : Uninitialized → Initialized (drapeau StoreMetadata sous la clé dbInitialized).
Le drapeau est écrit EN DERNIER : une StorageError en cours de seed laisse le
stockage « non initialisé », donc réessayable.
"""
import logging
from typing import Iterable

from pydantic import ValidationError as PydanticValidationError

from . import catalog
from .models import StoreMetadata, to_wire
from .repository import ContentRepository
from .store import INIT_KEY, PROTECTED_KEYS, KeyValueStore
from .synchronizer import SectionSynchronizer

log = logging.getLogger(__name__)


class Initializer:
    def __init__(self, store: KeyValueStore, repository: ContentRepository, synchronizer: SectionSynchronizer):
        self.store = store
        self.repository = repository
        self.synchronizer = synchronizer

    def metadata(self) -> StoreMetadata:
        raw = self.store.get(INIT_KEY)
        if isinstance(raw, dict):
            try:
                return StoreMetadata.model_validate(raw)
            except PydanticValidationError:
                log.warning("Métadonnées de stockage illisibles — considéré non initialisé")
                return StoreMetadata()
        # Ancien format : "true" posé directement
        return StoreMetadata(initialized=raw in (True, "true"))

    def is_initialized(self) -> bool:
        return self.metadata().initialized

    def bootstrap(self) -> bool:
        """Seed le stockage si nécessaire. True si un seed a eu lieu, False si déjà initialisé."""
        if self.is_initialized():
            return False
        self.repository.replace_all(
            catalog.default_pages(),
            catalog.default_news(),
            catalog.default_resources(),
        )
        self.synchronizer.synchronize_all()
        meta = StoreMetadata(initialized=True, schema_version=catalog.CATALOG_SCHEMA_VERSION)
        self.store.set(INIT_KEY, to_wire(meta))
        log.info("Stockage initialisé (schéma v%d)", meta.schema_version)
        return True

    def ensure_initialized(self) -> bool:
        """Appel unique au démarrage de l'application."""
        seeded = self.bootstrap()
        if not seeded:
            log.info("Stockage déjà initialisé — aucun seed")
        return seeded

    def force_reinitialize(self) -> None:
        """Réécrit le seed quoi qu'il arrive — même résultat à chaque appel (non additif)."""
        self.store.remove(INIT_KEY)
        self.bootstrap()

    def reset_all(self, preserve: Iterable[str] = ()) -> None:
        """Efface le stockage (sauf jeton admin + langue + preserve) puis réinitialise."""
        keep = set(preserve) | PROTECTED_KEYS
        self.store.clear(keep)
        self.force_reinitialize()
