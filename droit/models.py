"""
Modèles de données — Page, Section, NewsItem, Resource, StoreMetadata, EditEntry
Pydantic v2 (entités bilingues fr/ar) + SQLAlchemy (table clé/valeur SQLite) + Enums
"""
import re
import unicodedata
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


LOCALES = ("fr", "ar")

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


# ── ENUMS ──────────────────────────────────────────────────────────────

class Template(str, Enum):
    HOME     = "home"
    ABOUT    = "about"
    PROGRAMS = "programs"
    GENERIC  = "generic"


class SectionType(str, Enum):
    HERO              = "hero"
    INTRO             = "intro"
    MISSION           = "mission"
    VISION            = "vision"
    VALUES            = "values"
    HISTORY           = "history"
    TEAM              = "team"
    PROGRAMS_OVERVIEW = "programs_overview"
    PROGRAM_LIST      = "program_list"
    NEWS_HIGHLIGHT    = "news_highlight"
    PARTNERS          = "partners"
    CTA               = "cta"
    BODY              = "body"
    CONTACT           = "contact"


# Pages liées à un template géré (synchronisées par « Synchroniser le contenu »)
MANAGED_TEMPLATES = (Template.HOME, Template.ABOUT, Template.PROGRAMS)

# Ordre d'affichage des pages dans l'admin
TEMPLATE_RANK = {t: i for i, t in enumerate(Template)}


def slugify(text: str) -> str:
    """« Table ronde : réformes » → « table-ronde-reformes ». Vide si rien de latin."""
    ascii_text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")


# ── TEXTE BILINGUE ─────────────────────────────────────────────────────

class BilingualText(BaseModel):
    """Texte garanti en français ET en arabe — jamais partiel."""
    model_config = ConfigDict(extra="forbid")

    fr: str
    ar: str

    @classmethod
    def empty(cls) -> "BilingualText":
        return cls(fr="", ar="")


def _check_bilingual(value: Any, path: str) -> None:
    """
    Parcourt un contenu de section : tout dict portant une clé fr ou ar
    est un texte bilingue et doit porter les deux, en chaînes.
    """
    if isinstance(value, dict):
        if any(loc in value for loc in LOCALES):
            for loc in LOCALES:
                if loc not in value:
                    raise PydanticCustomError(
                        "bilingual_incomplete",
                        "texte bilingue incomplet : {path}.{locale} manquant",
                        {"path": path, "locale": loc},
                    )
                if not isinstance(value[loc], str):
                    raise PydanticCustomError(
                        "bilingual_type",
                        "texte bilingue invalide : {path}.{locale} doit être une chaîne",
                        {"path": path, "locale": loc},
                    )
            return
        for k, v in value.items():
            _check_bilingual(v, f"{path}.{k}")
    elif isinstance(value, list):
        for i, v in enumerate(value):
            _check_bilingual(v, f"{path}.{i}")


# ── ENTITÉS ────────────────────────────────────────────────────────────

class Section(BaseModel):
    """Bloc de contenu ordonné d'une page, éditable indépendamment."""
    id: str
    type: str
    order: int = 0
    content: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("content")
    @classmethod
    def _content_bilingual(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in v.items():
            _check_bilingual(value, key)
        return v


class Page(BaseModel):
    id: str
    slug: str
    title: BilingualText
    template: Template = Template.GENERIC
    sections: List[Section] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def _slug_url_safe(cls, v: str) -> str:
        if not _SLUG_RE.match(v):
            raise ValueError(f"slug non conforme : {v!r}")
        return v

    @model_validator(mode="after")
    def _sections_consistent(self) -> "Page":
        self.sections = sorted(self.sections, key=lambda s: s.order)
        ids, types = set(), set()
        for s in self.sections:
            if s.id in ids:
                raise ValueError(f"section en double (id) : {s.id!r}")
            if s.type in types:
                raise ValueError(f"section en double (type) : {s.type!r}")
            ids.add(s.id)
            types.add(s.type)
        return self


class NewsItem(BaseModel):
    id: int
    title: BilingualText
    date: BilingualText
    author: BilingualText
    category: BilingualText
    excerpt: BilingualText
    image: str = ""
    slug: str
    content: str = ""


class Resource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: BilingualText
    description: BilingualText
    file_ref: str = Field(default="", alias="fileRef")
    category: str = ""


class StoreMetadata(BaseModel):
    """Drapeau d'initialisation — gouverne l'idempotence du bootstrap."""
    model_config = ConfigDict(populate_by_name=True)

    initialized: bool = False
    schema_version: int = Field(default=1, alias="schemaVersion")


class EditEntry(BaseModel):
    """Entrée du journal des modifications récentes (non autoritaire)."""
    id: int
    page: str
    date: str
    user: str = "admin"


def to_wire(entity: BaseModel) -> dict:
    """Forme JSON persistée / exposée (alias camelCase, enums en valeur)."""
    return entity.model_dump(mode="json", by_alias=True)


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class KeyValueDB(Base):
    __tablename__ = "kv_entries"
    key:        Mapped[str]      = mapped_column(sa.String, primary_key=True)
    value:      Mapped[str]      = mapped_column(sa.Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
