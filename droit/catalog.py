"""
Catalogue du contenu par défaut — pages, sections, actualités, ressources.

Données pures et déterministes : chaque appel construit des objets neufs,
aucune mutation partagée, aucune E/S. Utilisé par l'Initializer et le
SectionSynchronizer uniquement.
"""
from datetime import date
from typing import Dict, List

from .models import EditEntry, NewsItem, Page, Resource, Section, SectionType, Template

CATALOG_SCHEMA_VERSION = 1


def _t(fr: str, ar: str) -> dict:
    return {"fr": fr, "ar": ar}


# ── Sections par template ──────────────────────────────────────────────────────
# (type, contenu) dans l'ordre d'affichage par défaut

_HERO_HOME = {
    "title":    _t("Promouvoir et défendre les droits fondamentaux",
                   "تعزيز الحقوق الأساسية والدفاع عنها"),
    "subtitle": _t("Formation, recherche et plaidoyer au service de l'État de droit.",
                   "التدريب والبحث والمناصرة في خدمة دولة القانون."),
    "image":    "/images/hero/home.jpg",
    "cta":      {"label": _t("Découvrir nos programmes", "اكتشف برامجنا"), "href": "/programs"},
}

_SECTIONS: Dict[Template, list] = {
    Template.HOME: [
        (SectionType.HERO, _HERO_HOME),
        (SectionType.INTRO, {
            "title": _t("Qui sommes-nous ?", "من نحن؟"),
            "text":  _t("DROIT est une association engagée pour l'accès au droit et la formation juridique.",
                        "الحقوق جمعية ملتزمة بالوصول إلى القانون والتكوين القانوني."),
            "link":  "/about",
        }),
        (SectionType.PROGRAMS_OVERVIEW, {
            "title": _t("Nos programmes", "برامجنا"),
            "items": [
                {"title": _t("Formation", "التدريب"),
                 "text":  _t("Ateliers et sessions sur les droits fondamentaux.", "ورشات ودورات حول الحقوق الأساسية.")},
                {"title": _t("Recherche", "البحث"),
                 "text":  _t("Études et publications juridiques.", "دراسات ومنشورات قانونية.")},
                {"title": _t("Plaidoyer", "المناصرة"),
                 "text":  _t("Dialogue avec les institutions.", "الحوار مع المؤسسات.")},
            ],
        }),
        (SectionType.NEWS_HIGHLIGHT, {
            "title": _t("Actualités", "الأخبار"),
            "limit": "3",
        }),
        (SectionType.PARTNERS, {
            "title": _t("Nos partenaires", "شركاؤنا"),
            "logos": [],
        }),
        (SectionType.CTA, {
            "title":  _t("Rejoignez-nous", "انضم إلينا"),
            "button": _t("Nous contacter", "اتصل بنا"),
            "href":   "/contact",
        }),
    ],
    Template.ABOUT: [
        (SectionType.HERO, {
            "title":    _t("À propos", "من نحن"),
            "subtitle": _t("Notre histoire, notre mission, notre équipe.", "تاريخنا، مهمتنا، فريقنا."),
            "image":    "/images/hero/about.jpg",
        }),
        (SectionType.MISSION, {
            "title": _t("Notre mission", "مهمتنا"),
            "text":  _t("Rendre le droit accessible à toutes et à tous.", "جعل القانون في متناول الجميع."),
        }),
        (SectionType.VISION, {
            "title": _t("Notre vision", "رؤيتنا"),
            "text":  _t("Une société où chacun connaît et exerce ses droits.", "مجتمع يعرف فيه الجميع حقوقهم ويمارسونها."),
        }),
        (SectionType.VALUES, {
            "title": _t("Nos valeurs", "قيمنا"),
            "items": [_t("Indépendance", "الاستقلالية"), _t("Intégrité", "النزاهة"), _t("Solidarité", "التضامن")],
        }),
        (SectionType.HISTORY, {
            "title": _t("Notre histoire", "تاريخنا"),
            "text":  _t("Fondée par des juristes et des militants des droits humains.",
                        "أسسها حقوقيون ونشطاء في مجال حقوق الإنسان."),
        }),
        (SectionType.TEAM, {
            "title":   _t("Notre équipe", "فريقنا"),
            "members": [],
        }),
    ],
    Template.PROGRAMS: [
        (SectionType.HERO, {
            "title":    _t("Nos programmes", "برامجنا"),
            "subtitle": _t("Former, informer, accompagner.", "التكوين، الإعلام، المرافقة."),
            "image":    "/images/hero/programs.jpg",
        }),
        (SectionType.PROGRAMS_OVERVIEW, {
            "title": _t("Vue d'ensemble", "نظرة عامة"),
            "text":  _t("Trois axes d'intervention complémentaires.", "ثلاثة محاور تدخل متكاملة."),
        }),
        (SectionType.PROGRAM_LIST, {
            "title": _t("Programmes en cours", "البرامج الجارية"),
            "items": [
                {"title": _t("Droits fondamentaux", "الحقوق الأساسية"),
                 "text":  _t("Cycle de formation pour les acteurs associatifs.", "دورة تدريبية لفاعلي المجتمع المدني.")},
                {"title": _t("Réformes juridiques", "الإصلاحات القانونية"),
                 "text":  _t("Suivi et analyse des réformes.", "متابعة الإصلاحات وتحليلها.")},
            ],
        }),
        (SectionType.CTA, {
            "title":  _t("Participer à un programme", "المشاركة في برنامج"),
            "button": _t("S'inscrire", "التسجيل"),
            "href":   "/contact",
        }),
    ],
    Template.GENERIC: [
        (SectionType.HERO, {
            "title":    _t("", ""),
            "subtitle": _t("", ""),
        }),
        (SectionType.BODY, {
            "text": _t("", ""),
        }),
    ],
}

_GENERIC_PAGES = [
    # (slug, titre, surcharges de contenu par type de section)
    ("contact", _t("Contact", "اتصل بنا"), {
        SectionType.HERO: {"title": _t("Contactez-nous", "اتصل بنا"),
                           "subtitle": _t("Une question ? Écrivez-nous.", "هل لديك سؤال؟ راسلنا.")},
        SectionType.BODY: {"text": _t("Adresse, téléphone et formulaire de contact.",
                                      "العنوان والهاتف واستمارة الاتصال."),
                           "email": "contact@droit.org"},
    }),
]

_PAGE_TITLES = {
    Template.HOME:     _t("Accueil", "الرئيسية"),
    Template.ABOUT:    _t("À propos", "من نحن"),
    Template.PROGRAMS: _t("Programmes", "البرامج"),
}


def _deep_copy(value):
    if isinstance(value, dict):
        return {k: _deep_copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deep_copy(v) for v in value]
    return value


def section_types(template: Template) -> List[str]:
    """Types de section éditables pour un template, dans l'ordre du catalogue."""
    return [stype.value for stype, _ in _SECTIONS[Template(template)]]


def default_sections(template: Template, page_id: str = None) -> List[Section]:
    """Jeu de sections canonique d'un template (ordre 0..n-1)."""
    template = Template(template)
    prefix = page_id or template.value
    return [
        Section(id=f"{prefix}-{stype.value}", type=stype.value, order=i, content=_deep_copy(content))
        for i, (stype, content) in enumerate(_SECTIONS[template])
    ]


def default_page(template: Template) -> Page:
    """Page par défaut d'un template géré (home, about, programs)."""
    template = Template(template)
    return Page(
        id=template.value,
        slug=template.value,
        title=_deep_copy(_PAGE_TITLES[template]),
        template=template,
        sections=default_sections(template),
    )


def default_pages() -> List[Page]:
    pages = [default_page(t) for t in _PAGE_TITLES]
    for slug, title, overrides in _GENERIC_PAGES:
        sections = default_sections(Template.GENERIC, page_id=slug)
        for s in sections:
            s.content.update(_deep_copy(overrides.get(SectionType(s.type), {})))
        pages.append(Page(id=slug, slug=slug, title=_deep_copy(title),
                          template=Template.GENERIC, sections=sections))
    return pages


def default_news() -> List[NewsItem]:
    return [
        NewsItem(
            id=1,
            title=_t("Formation sur les droits fondamentaux", "تدريب على الحقوق الأساسية"),
            date=_t("24 juin 2023", "24 يونيو 2023"),
            author=_t("Équipe DROIT", "فريق الحقوق"),
            category=_t("Formation", "تدريب"),
            excerpt=_t("Un nouveau programme de formation sur les droits fondamentaux.",
                       "برنامج تدريبي جديد عن الحقوق الأساسية."),
            image="/images/news/formation.jpg",
            slug="formation-droits-fondamentaux",
            content="Contenu détaillé sur la formation.",
        ),
        NewsItem(
            id=2,
            title=_t("Table ronde sur les réformes juridiques", "مائدة مستديرة حول الإصلاحات القانونية"),
            date=_t("15 mai 2023", "15 مايو 2023"),
            author=_t("Mohamed Hassan", "محمد حسن"),
            category=_t("Événements", "الأحداث"),
            excerpt=_t("Discussions importantes sur les réformes juridiques récentes.",
                       "مناقشات مهمة حول الإصلاحات القانونية الأخيرة."),
            image="/images/news/evenements.jpg",
            slug="table-ronde-reformes-juridiques",
            content="Détails de la table ronde.",
        ),
    ]


def default_resources() -> List[Resource]:
    return [
        Resource(
            id=1,
            title=_t("Guide des droits fondamentaux", "دليل الحقوق الأساسية"),
            description=_t("Synthèse pratique des droits garantis par la Constitution.",
                           "ملخص عملي للحقوق التي يضمنها الدستور."),
            file_ref="/resources/guide-droits-fondamentaux.pdf",
            category="guide",
        ),
        Resource(
            id=2,
            title=_t("Rapport annuel 2022", "التقرير السنوي 2022"),
            description=_t("Bilan des activités de l'association.", "حصيلة أنشطة الجمعية."),
            file_ref="/resources/rapport-annuel-2022.pdf",
            category="rapport",
        ),
        Resource(
            id=3,
            title=_t("Kit de formation", "حقيبة تدريبية"),
            description=_t("Supports pédagogiques pour les formateurs.", "مواد تعليمية للمدربين."),
            file_ref="/resources/kit-formation.zip",
            category="formation",
        ),
    ]


_DEFAULT_EDIT_LABELS = [
    _t("Page d'accueil", "الصفحة الرئيسية"),
    _t("Actualités", "الأخبار"),
    _t("À propos", "من نحن"),
]


def default_edits(language: str = "fr", today: date = None) -> List[EditEntry]:
    """Journal de départ (évite une vue admin vide au premier lancement)."""
    lang = language if language in ("fr", "ar") else "fr"
    day = (today or date.today()).isoformat()
    return [
        EditEntry(id=i, page=label[lang], date=day, user="admin")
        for i, label in enumerate(_DEFAULT_EDIT_LABELS, start=1)
    ]
