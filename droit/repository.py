"""
Dépôt de contenu — CRUD typé sur les collections Pages / Actualités / Ressources.

Chaque collection est stockée sous une seule clé du KeyValueStore (liste JSON).
Le dépôt possède l'attribution des IDs et les invariants de collection :
unicité id/slug, textes bilingues complets, aucune écriture partielle.
"""
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import NotFoundError, ValidationError
from .models import LOCALES, TEMPLATE_RANK, NewsItem, Page, Resource, Template, slugify, to_wire
from .store import NEWS_KEY, PAGES_KEY, RESOURCES_KEY, KeyValueStore

log = logging.getLogger(__name__)


class IdGenerator:
    """
    IDs entiers dérivés de l'horloge (ms), strictement croissants dans le processus :
    deux créations dans la même milliseconde obtiennent des IDs distincts.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def next(self, taken: Iterable[int] = ()) -> int:
        taken = set(taken)
        candidate = max(int(self._clock() * 1000), self._last + 1)
        while candidate in taken:
            candidate += 1
        self._last = candidate
        return candidate


def _to_validation_error(exc: PydanticValidationError, label: str) -> ValidationError:
    """Traduit la première erreur pydantic en ValidationError nommant le champ et la locale."""
    err = exc.errors()[0]
    loc = [str(p) for p in err["loc"]]
    ctx = err.get("ctx") or {}
    if ctx.get("path"):
        loc.append(ctx["path"])

    locale = ctx.get("locale")
    if locale is None and err["type"] == "missing" and loc and loc[-1] in LOCALES:
        locale = loc[-1]
    if locale and not (loc and loc[-1] == locale):
        loc.append(locale)

    field = ".".join(loc) or None
    if locale:
        message = f"{label} invalide — {field} manquant ou invalide (locale « {locale} »)"
    else:
        message = f"{label} invalide — {field or 'données'} : {err['msg']}"
    return ValidationError(message, field=field, locale=locale)


def _merge(base: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """Fusion sur un niveau : {"title": {"ar": …}} conserve title.fr."""
    merged = dict(base)
    for k, v in patch.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = {**merged[k], **v}
        else:
            merged[k] = v
    return merged


class _Collection:
    key: str = ""
    model: Type[BaseModel] = BaseModel
    label: str = ""
    aliases: Dict[str, str] = {}

    def __init__(self, store: KeyValueStore, ids: IdGenerator):
        self._store = store
        self._ids = ids

    # ── lecture / écriture brute ──

    def _load(self) -> list:
        raw = self._store.get(self.key)
        if not isinstance(raw, list):
            return []
        items = []
        for record in raw:
            try:
                items.append(self.model.model_validate(record))
            except PydanticValidationError as e:
                log.warning("%s : enregistrement ignoré (%s)", self.key, e.errors()[0]["msg"])
        return items

    def _save(self, items: list) -> None:
        self._store.set(self.key, [to_wire(i) for i in items])

    def _normalize(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {self.aliases.get(k, k): v for k, v in data.items()}

    def _build(self, data: Dict[str, Any]):
        try:
            return self.model.model_validate(data)
        except PydanticValidationError as e:
            raise _to_validation_error(e, self.label) from e

    def _check_unique(self, item, others: list) -> None:
        if any(o.id == item.id for o in others):
            raise ValidationError(f"{self.label} : id déjà utilisé ({item.id!r})", field="id")

    # ── API publique ──

    def list(self) -> list:
        return self._load()

    def get(self, entity_id):
        for item in self._load():
            if item.id == entity_id:
                return item
        return None

    def require(self, entity_id):
        item = self.get(entity_id)
        if item is None:
            raise NotFoundError(self.key, entity_id)
        return item

    def update(self, entity_id, patch: Dict[str, Any]):
        """Fusionne patch dans l'entité ; l'id ne change jamais. None si inconnue."""
        items = self._load()
        for i, item in enumerate(items):
            if item.id != entity_id:
                continue
            merged = _merge(to_wire(item), self._normalize(patch))
            merged["id"] = item.id
            updated = self._build(merged)
            self._check_unique(updated, items[:i] + items[i + 1:])
            items[i] = updated
            self._save(items)
            return updated
        return None

    def replace(self, items: Iterable) -> None:
        self._save(list(items))

    def count(self) -> int:
        return len(self._load())


class _DeletableCollection(_Collection):
    """Actualités / Ressources : ID entier horodaté, suppression autorisée."""

    def _prepare(self, data: Dict[str, Any], new_id: int) -> Dict[str, Any]:
        return data

    def create(self, data: Dict[str, Any]):
        items = self._load()
        data = self._normalize(dict(data))
        data.pop("id", None)
        new_id = self._ids.next(i.id for i in items)
        data = self._prepare(data, new_id)
        data["id"] = new_id
        item = self._build(data)
        self._check_unique(item, items)
        items.append(item)
        self._save(items)
        log.info("%s créé(e) — id=%s", self.label, item.id)
        return item

    def delete(self, entity_id: int) -> bool:
        items = self._load()
        kept = [i for i in items if i.id != entity_id]
        if len(kept) == len(items):
            return False
        self._save(kept)
        log.info("%s supprimé(e) — id=%s", self.label, entity_id)
        return True


class NewsCollection(_DeletableCollection):
    key = NEWS_KEY
    model = NewsItem
    label = "actualité"

    def _prepare(self, data: Dict[str, Any], new_id: int) -> Dict[str, Any]:
        if not data.get("slug"):
            title = data.get("title")
            derived = slugify(title.get("fr", "")) if isinstance(title, dict) else ""
            data["slug"] = derived or f"actualite-{new_id}"
        return data

    def _check_unique(self, item: NewsItem, others: list) -> None:
        super()._check_unique(item, others)
        if any(o.slug == item.slug for o in others):
            raise ValidationError(f"actualité : slug déjà utilisé ({item.slug!r})", field="slug")

    def get_by_slug(self, slug: str) -> Optional[NewsItem]:
        return next((n for n in self._load() if n.slug == slug), None)


class ResourceCollection(_DeletableCollection):
    key = RESOURCES_KEY
    model = Resource
    label = "ressource"
    aliases = {"file_ref": "fileRef"}


class PageCollection(_Collection):
    """Pages : ID chaîne fourni ou dérivé du slug ; jamais supprimées, seulement réinitialisées."""
    key = PAGES_KEY
    model = Page
    label = "page"

    def _check_unique(self, item: Page, others: list) -> None:
        super()._check_unique(item, others)
        if any(o.slug == item.slug for o in others):
            raise ValidationError(f"page : slug déjà utilisé ({item.slug!r})", field="slug")

    def list(self) -> List[Page]:
        return sorted(self._load(), key=lambda p: (TEMPLATE_RANK[Template(p.template)], p.slug))

    def get_by_slug(self, slug: str) -> Optional[Page]:
        return next((p for p in self._load() if p.slug == slug), None)

    def create(self, data: Dict[str, Any]) -> Page:
        data = dict(data)
        title = data.get("title")
        if not data.get("slug"):
            derived = slugify(title.get("fr", "")) if isinstance(title, dict) else ""
            data["slug"] = data.get("id") or derived
        data.setdefault("id", data["slug"])
        if not data["id"]:
            raise ValidationError("page : id ou slug requis", field="slug")
        items = self._load()
        page = self._build(data)
        self._check_unique(page, items)
        items.append(page)
        self._save(items)
        log.info("Page créée — %s (%s)", page.id, page.template.value)
        return page

    def save(self, page: Page) -> Page:
        """Remplace la page de même id (ou l'ajoute) — utilisé après synchronisation."""
        page = self._build(to_wire(page))
        items = self._load()
        others = [p for p in items if p.id != page.id]
        self._check_unique(page, others)
        if len(others) == len(items):
            items.append(page)
        else:
            items = [page if p.id == page.id else p for p in items]
        self._save(items)
        return page

    def update_section(self, page_id: str, section_id: str, content: Dict[str, Any]) -> Optional[Page]:
        """Édition d'une section : fusion champ par champ du contenu. None si page/section inconnue."""
        page = self.get(page_id)
        if page is None:
            return None
        data = to_wire(page)
        for section in data["sections"]:
            if section["id"] == section_id:
                section["content"] = _merge(section["content"], content)
                break
        else:
            return None
        return self.save(self._build(data))


class ContentRepository:
    """Point d'entrée unique des lectures/écritures d'entités."""

    def __init__(self, store: KeyValueStore, clock: Callable[[], float] = time.time):
        self.store = store
        self._ids = IdGenerator(clock)
        self.pages = PageCollection(store, self._ids)
        self.news = NewsCollection(store, self._ids)
        self.resources = ResourceCollection(store, self._ids)

    def get_all_pages(self) -> List[Page]:
        return self.pages.list()

    def replace_all(self, pages: List[Page], news: List[NewsItem], resources: List[Resource]) -> None:
        """Écrase les trois collections (seed non additif)."""
        self.pages.replace(pages)
        self.news.replace(news)
        self.resources.replace(resources)

    def stats(self) -> Dict[str, int]:
        return {
            "pages":     self.pages.count(),
            "news":      self.news.count(),
            "resources": self.resources.count(),
        }
