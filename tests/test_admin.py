"""Tests actions admin — notifications localisées, chemin d'échec, rechargement après reset."""
from unittest.mock import patch

from droit.errors import StorageError
from droit.notifier import CollectingNotifier, message
from droit.store import AUTH_KEY, LANGUAGE_KEY


# ── Succès ────────────────────────────────────────────────────────────────────

class TestActions:
    def test_sync_notifies(self, seeded, notifier):
        assert seeded.admin.sync_content() is True
        assert notifier.messages == ["Contenu synchronisé avec succès pour l'édition!"]
        assert notifier.reloads == 0

    def test_sync_in_arabic(self, seeded, notifier):
        seeded.admin.sync_content("ar")
        assert notifier.messages == ["تم مزامنة المحتوى بنجاح للتحرير!"]

    def test_force_initialization_resets_edit_log(self, seeded, notifier):
        seeded.admin.record_edit("Programmes")
        assert seeded.admin.force_initialization() is True
        assert [e.id for e in seeded.admin.recent_edits()] == [3, 2, 1]
        assert notifier.messages == [message("init_ok")]

    def test_reset_requests_reload(self, seeded, notifier, store):
        store.set(AUTH_KEY, "jeton")
        store.set(LANGUAGE_KEY, "ar")
        assert seeded.admin.reset_content("ar") is True
        assert notifier.messages == [message("reset_ok", "ar")]
        assert notifier.reloads == 1
        assert store.get(AUTH_KEY) == "jeton"

    def test_per_call_notifier(self, seeded, notifier):
        other = CollectingNotifier()
        seeded.admin.sync_content(notifier=other)
        assert len(other.messages) == 1
        assert notifier.messages == []


# ── Échecs ────────────────────────────────────────────────────────────────────

class TestFailures:
    def test_sync_failure_reported(self, seeded, notifier):
        with patch.object(seeded.synchronizer, "synchronize_all", side_effect=StorageError("disque plein")):
            assert seeded.admin.sync_content() is False
        assert notifier.messages == ["Erreur lors de la synchronisation du contenu!"]

    def test_init_failure_includes_error(self, seeded, notifier):
        with patch.object(seeded.initializer, "force_reinitialize", side_effect=StorageError("disque plein")):
            assert seeded.admin.force_initialization() is False
        assert "disque plein" in notifier.messages[0]

    def test_reset_failure_no_reload(self, seeded, notifier):
        with patch.object(seeded.initializer, "reset_all", side_effect=StorageError("verrou")):
            assert seeded.admin.reset_content("ar") is False
        assert notifier.reloads == 0
        assert "verrou" in notifier.messages[0]


# ── Tableau de bord ───────────────────────────────────────────────────────────

def test_dashboard(seeded):
    seeded.admin.record_edit("Accueil")
    board = seeded.admin.dashboard()
    assert board["stats"] == {"pages": 4, "news": 2, "resources": 3}
    assert board["initialized"] is True
    assert board["recent_edits"][0]["page"] == "Accueil"
    assert board["recent_edits"][0]["date"] == "2024-03-15"


def test_message_falls_back_to_french():
    assert message("sync_ok", "en") == message("sync_ok", "fr")
