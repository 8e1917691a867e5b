"""
Notifications admin — remplace les alert()/reload() du navigateur par une capacité injectée.
"""
import logging
from typing import List, Protocol

log = logging.getLogger(__name__)


MESSAGES = {
    "sync_ok": {
        "fr": "Contenu synchronisé avec succès pour l'édition!",
        "ar": "تم مزامنة المحتوى بنجاح للتحرير!",
    },
    "sync_failed": {
        "fr": "Erreur lors de la synchronisation du contenu!",
        "ar": "خطأ في مزامنة المحتوى!",
    },
    "init_ok": {
        "fr": "Base de données réinitialisée avec succès!",
        "ar": "تمت إعادة تعيين قاعدة البيانات بنجاح!",
    },
    "init_failed": {
        "fr": "Erreur lors de la réinitialisation de la base de données : {error}",
        "ar": "خطأ أثناء إعادة تعيين قاعدة البيانات: {error}",
    },
    "reset_ok": {
        "fr": "Tout le contenu a été réinitialisé aux valeurs par défaut.",
        "ar": "تمت إعادة تعيين كل المحتوى إلى القيم الافتراضية.",
    },
    "reset_failed": {
        "fr": "Erreur lors de la réinitialisation du contenu : {error}",
        "ar": "خطأ أثناء إعادة تعيين المحتوى: {error}",
    },
}


def message(key: str, language: str = "fr", **params) -> str:
    """Message dans la locale active (repli sur le français)."""
    variants = MESSAGES[key]
    return variants.get(language, variants["fr"]).format(**params)


class Notifier(Protocol):
    def notify(self, message: str) -> None:
        ...

    def reload(self) -> None:
        ...


class LoggingNotifier:
    """Notifier par défaut hors HTTP : journalise simplement."""

    def notify(self, message: str) -> None:
        log.info("Notification admin : %s", message)

    def reload(self) -> None:
        log.info("Rechargement de l'interface demandé")


class CollectingNotifier:
    """Accumule les notifications pour les renvoyer dans la réponse HTTP."""

    def __init__(self):
        self.messages: List[str] = []
        self.reloads = 0

    def notify(self, message: str) -> None:
        log.info("Notification admin : %s", message)
        self.messages.append(message)

    def reload(self) -> None:
        self.reloads += 1
