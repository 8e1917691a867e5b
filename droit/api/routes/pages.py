"""
Pages du site et leurs sections.
GET  /api/pages                              → toutes les pages
GET  /api/pages/{slug}                       → une page
POST /api/pages                              → création (admin)
PUT  /api/pages/{page_id}                    → mise à jour (admin)
PUT  /api/pages/{page_id}/sections/{sid}     → édition d'une section (admin)
POST /api/pages/{page_id}/sync               → recomposition des sections (admin)
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...database import ContentContext
from ...errors import NotFoundError
from ...models import to_wire
from ..deps import active_language, check_token, get_content, read_json_object

router = APIRouter(prefix="/api/pages", tags=["Pages"])


@router.get("")
def pages_list(ctx: ContentContext = Depends(get_content)):
    return [to_wire(p) for p in ctx.repository.pages.list()]


@router.get("/{slug}")
def pages_detail(slug: str, ctx: ContentContext = Depends(get_content)):
    page = ctx.repository.pages.get_by_slug(slug)
    if page is None:
        raise NotFoundError("pages", slug)
    return to_wire(page)


@router.post("", dependencies=[Depends(check_token)])
async def pages_create(request: Request, ctx: ContentContext = Depends(get_content)):
    page = ctx.repository.pages.create(await read_json_object(request))
    ctx.edit_log.record(getattr(page.title, active_language(request)))
    return JSONResponse(to_wire(page), status_code=201)


@router.put("/{page_id}", dependencies=[Depends(check_token)])
async def pages_update(page_id: str, request: Request, ctx: ContentContext = Depends(get_content)):
    page = ctx.repository.pages.update(page_id, await read_json_object(request))
    if page is None:
        raise NotFoundError("pages", page_id)
    ctx.edit_log.record(getattr(page.title, active_language(request)))
    return to_wire(page)


@router.put("/{page_id}/sections/{section_id}", dependencies=[Depends(check_token)])
async def pages_update_section(page_id: str, section_id: str, request: Request,
                               ctx: ContentContext = Depends(get_content)):
    content = await read_json_object(request)
    page = ctx.repository.pages.update_section(page_id, section_id, content)
    if page is None:
        raise NotFoundError("sections", f"{page_id}/{section_id}")
    ctx.edit_log.record(getattr(page.title, active_language(request)))
    return to_wire(page)


@router.post("/{page_id}/sync", dependencies=[Depends(check_token)])
def pages_sync(page_id: str, ctx: ContentContext = Depends(get_content)):
    page = ctx.synchronizer.synchronize_page(page_id)
    if page is None:
        raise NotFoundError("pages", page_id)
    return to_wire(page)
