"""
Stockage clé/valeur durable — valeurs JSON opaques, aucune validation de schéma.

SqlKeyValueStore  : SQLite via SQLAlchemy (survit au redémarrage)
MemoryKeyValueStore : dict en mémoire (tests, brouillon)
"""
import copy
import json
import logging
from typing import Any, Iterable, List, Optional, Protocol

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import StorageError
from .models import Base, KeyValueDB

log = logging.getLogger(__name__)

# ── Clés persistées (noms stables entre versions) ──
INIT_KEY         = "dbInitialized"
AUTH_KEY         = "adminAuth"
LANGUAGE_KEY     = "language"
RECENT_EDITS_KEY = "recentEdits"
PAGES_KEY        = "pages"
NEWS_KEY         = "news"
RESOURCES_KEY    = "resources"

# Jamais effacées par une réinitialisation (sinon l'admin est déconnecté / la langue change)
PROTECTED_KEYS = frozenset({AUTH_KEY, LANGUAGE_KEY})


class KeyValueStore(Protocol):
    """Contrat minimal du stockage : get/set/remove/clear sur des clés chaîne."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def clear(self, except_keys: Iterable[str] = ()) -> List[str]:
        ...

    def keys(self) -> List[str]:
        ...


def jd(o: Any) -> str:
    return json.dumps(o, ensure_ascii=False)


class SqlKeyValueStore:
    """Une ligne par clé dans la table kv_entries ; valeur = JSON texte."""

    def __init__(self, db_url: str = "sqlite://", **engine_kwargs):
        if db_url.startswith("sqlite"):
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        self.engine = create_engine(db_url, **engine_kwargs)
        self._session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(bind=self.engine)

    def get(self, key: str) -> Optional[Any]:
        try:
            with self._session() as db:
                row = db.get(KeyValueDB, key)
                raw = row.value if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"lecture {key!r} impossible : {e}") from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            log.warning("Valeur JSON illisible pour la clé %r — ignorée", key)
            return None

    def set(self, key: str, value: Any) -> None:
        try:
            payload = jd(value)
        except (TypeError, ValueError) as e:
            raise StorageError(f"valeur non sérialisable pour {key!r} : {e}") from e
        with self._session() as db:
            try:
                row = db.get(KeyValueDB, key)
                if row:
                    row.value = payload
                else:
                    db.add(KeyValueDB(key=key, value=payload))
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"écriture {key!r} impossible : {e}") from e

    def remove(self, key: str) -> None:
        with self._session() as db:
            try:
                db.query(KeyValueDB).filter_by(key=key).delete()
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"suppression {key!r} impossible : {e}") from e

    def clear(self, except_keys: Iterable[str] = ()) -> List[str]:
        """
        Supprime toutes les clés hors except_keys dans UNE transaction.
        En cas d'échec : rollback, store intact, StorageError (réessayable).
        """
        keep = set(except_keys)
        with self._session() as db:
            try:
                removed = [k for (k,) in db.query(KeyValueDB.key).all() if k not in keep]
                if removed:
                    db.query(KeyValueDB).filter(KeyValueDB.key.in_(removed)).delete(
                        synchronize_session=False
                    )
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"effacement du stockage interrompu : {e}") from e
        log.info("Stockage effacé — %d clé(s) supprimée(s), %d préservée(s)", len(removed), len(keep))
        return removed

    def keys(self) -> List[str]:
        try:
            with self._session() as db:
                return sorted(k for (k,) in db.query(KeyValueDB.key).all())
        except SQLAlchemyError as e:
            raise StorageError(f"liste des clés impossible : {e}") from e


class MemoryKeyValueStore:
    """Même contrat que SqlKeyValueStore, en mémoire. Copie profonde en entrée/sortie."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict = {}
        for k, v in (initial or {}).items():
            self.set(k, v)

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        try:
            # Même garantie que le stockage SQL : JSON ou rien
            self._data[key] = json.loads(jd(value))
        except (TypeError, ValueError) as e:
            raise StorageError(f"valeur non sérialisable pour {key!r} : {e}") from e

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self, except_keys: Iterable[str] = ()) -> List[str]:
        keep = set(except_keys)
        removed = [k for k in self._data if k not in keep]
        for k in removed:
            del self._data[k]
        return removed

    def keys(self) -> List[str]:
        return sorted(self._data)
