"""Hiérarchie d'erreurs du noyau de contenu DROIT."""
from typing import Optional


class ContentError(Exception):
    """Erreur de base du noyau de contenu."""


class ValidationError(ContentError):
    """
    Écriture refusée : texte bilingue incomplet, slug/ID en double, champ invalide.
    Aucune écriture partielle n'a eu lieu.
    """

    def __init__(self, message: str, field: Optional[str] = None, locale: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.locale = locale

    def to_dict(self) -> dict:
        return {"error": self.message, "field": self.field, "locale": self.locale}


class NotFoundError(ContentError):
    def __init__(self, collection: str, entity_id):
        super().__init__(f"{collection} introuvable : {entity_id!r}")
        self.collection = collection
        self.entity_id = entity_id


class StorageError(ContentError):
    """Échec de lecture/écriture dans le stockage durable."""


class MalformedPayloadError(ContentError):
    """Corps de requête JSON illisible (→ HTTP 400)."""


class UnknownRouteError(ContentError):
    """Route inconnue (→ HTTP 404)."""


class ApiError(ContentError):
    """Réponse non-2xx ou échec réseau côté client API distant."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
