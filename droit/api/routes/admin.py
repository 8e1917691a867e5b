"""
Actions du tableau de bord admin.
GET  /api/admin/dashboard   → statistiques + modifications récentes
GET  /api/admin/edits       → journal des modifications
POST /api/admin/sync        → synchroniser le contenu
POST /api/admin/initialize  → forcer l'initialisation
POST /api/admin/reset       → tout réinitialiser (jeton admin + langue préservés)
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...database import ContentContext
from ...errors import ValidationError
from ...notifier import CollectingNotifier
from ..deps import active_language, check_token, get_content, read_json_object

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(check_token)])


def _outcome(ok: bool, notifier: CollectingNotifier) -> JSONResponse:
    return JSONResponse(
        {"ok": ok, "notifications": notifier.messages, "reload": notifier.reloads > 0},
        status_code=200 if ok else 500,
    )


@router.get("/dashboard")
def admin_dashboard(ctx: ContentContext = Depends(get_content)):
    return ctx.admin.dashboard()


@router.get("/edits")
def admin_edits(ctx: ContentContext = Depends(get_content)):
    return [e.model_dump() for e in ctx.admin.recent_edits()]


@router.post("/sync")
def admin_sync(request: Request, ctx: ContentContext = Depends(get_content)):
    notifier = CollectingNotifier()
    ok = ctx.admin.sync_content(active_language(request), notifier=notifier)
    return _outcome(ok, notifier)


@router.post("/initialize")
def admin_initialize(request: Request, ctx: ContentContext = Depends(get_content)):
    notifier = CollectingNotifier()
    ok = ctx.admin.force_initialization(active_language(request), notifier=notifier)
    return _outcome(ok, notifier)


@router.post("/reset")
async def admin_reset(request: Request, ctx: ContentContext = Depends(get_content)):
    body = await request.body()
    preserve = []
    if body:
        data = await read_json_object(request)
        preserve = data.get("preserve", [])
        if not isinstance(preserve, list) or not all(isinstance(k, str) for k in preserve):
            raise ValidationError("preserve doit être une liste de clés (chaînes)", field="preserve")
    language = active_language(request)
    notifier = CollectingNotifier()
    ok = ctx.admin.reset_content(language, preserve=preserve, notifier=notifier)
    return _outcome(ok, notifier)
