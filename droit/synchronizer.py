"""
Synchronisation des sections — recompose la liste canonique des sections d'une page.

Règle de fusion (par type de section) :
  1. une section personnalisée remplace, champ par champ, la section par défaut de même type
  2. un type présent dans le catalogue mais absent de la page est inséré avec le contenu par défaut
  3. tri par (order, rang catalogue) puis renumérotation contiguë 0..n-1

Les sections « orphelines » (type absent du catalogue courant) sont conservées,
placées selon leur order, après les types du catalogue à order égal.
"""
import logging
from typing import List, Optional

from . import catalog
from .models import MANAGED_TEMPLATES, Page, Section, Template
from .repository import ContentRepository

log = logging.getLogger(__name__)


def _free_id(section_id: str, taken: set) -> str:
    """Id libre pour une section par défaut insérée : home-hero → home-hero-2, -3…"""
    candidate, n = section_id, 1
    while candidate in taken:
        n += 1
        candidate = f"{section_id}-{n}"
    return candidate


def synchronize(page: Page) -> Page:
    """Fonction pure : même page en entrée → même liste de sections en sortie."""
    template = Template(page.template)
    defaults = catalog.default_sections(template, page_id=page.id)
    custom_by_type = {s.type: s for s in page.sections}
    known_types = {d.type for d in defaults}
    taken = {s.id for s in page.sections}

    ranked = []  # (order, rang, section)
    for rank, default in enumerate(defaults):
        custom = custom_by_type.get(default.type)
        if custom is None:
            # Une section personnalisée d'un autre type peut déjà porter l'id par défaut
            section_id = _free_id(default.id, taken)
            taken.add(section_id)
            ranked.append((default.order, rank, default.model_copy(update={"id": section_id})))
            continue
        content = {**default.content, **custom.content}
        ranked.append((custom.order, rank, Section(id=custom.id, type=custom.type,
                                                   order=custom.order, content=content)))

    orphans = [s for s in page.sections if s.type not in known_types]
    for offset, orphan in enumerate(orphans):
        log.warning("Page %s : section orpheline conservée (type=%r)", page.id, orphan.type)
        ranked.append((orphan.order, len(defaults) + offset, orphan.model_copy(deep=True)))

    ranked.sort(key=lambda r: (r[0], r[1]))
    sections = [
        section.model_copy(update={"order": i}) for i, (_, _, section) in enumerate(ranked)
    ]
    return page.model_copy(update={"sections": sections})


class SectionSynchronizer:
    """Applique synchronize() aux pages liées à un template géré et persiste le résultat."""

    def __init__(self, repository: ContentRepository, templates=MANAGED_TEMPLATES):
        self.repository = repository
        self.templates = tuple(Template(t) for t in templates)

    def synchronize_page(self, page_id: str) -> Optional[Page]:
        page = self.repository.pages.get(page_id)
        if page is None:
            return None
        return self.repository.pages.save(synchronize(page))

    def synchronize_all(self) -> List[Page]:
        """« Synchroniser tout le contenu » — home, about, programs."""
        pages = self.repository.pages.list()
        result = []
        for template in self.templates:
            bound = [p for p in pages if Template(p.template) == template]
            if not bound:
                occupant = (self.repository.pages.get(template.value)
                            or self.repository.pages.get_by_slug(template.value))
                if occupant is not None:
                    # L'éditeur a changé le template de cette page : jamais écrasée
                    log.warning("Page %s : id/slug occupé par une page %s — non recréée",
                                template.value, Template(occupant.template).value)
                    continue
                # Page de template disparue du stockage : recréée depuis le catalogue
                log.info("Page %s absente — recréée depuis le catalogue", template.value)
                bound = [catalog.default_page(template)]
            for page in bound:
                result.append(self.repository.pages.save(synchronize(page)))
        log.info("Synchronisation terminée — %d page(s)", len(result))
        return result
