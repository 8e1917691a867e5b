"""
Actualités.
GET    /api/news           → liste
GET    /api/news/{id}      → détail
POST   /api/news           → création (201) ; 400 si JSON illisible
PUT    /api/news/{id}      → mise à jour (admin)
DELETE /api/news/{id}      → suppression (admin)
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...database import ContentContext
from ...errors import NotFoundError
from ...models import to_wire
from ..deps import active_language, check_token, get_content, read_json_object

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api/news", tags=["News"])


@router.get("")
def news_list(ctx: ContentContext = Depends(get_content)):
    return [to_wire(n) for n in ctx.repository.news.list()]


@router.get("/{news_id}")
def news_detail(news_id: int, ctx: ContentContext = Depends(get_content)):
    return to_wire(ctx.repository.news.require(news_id))


@router.post("")
async def news_create(request: Request, ctx: ContentContext = Depends(get_content)):
    data = await read_json_object(request)
    item = ctx.repository.news.create(data)
    return JSONResponse(to_wire(item), status_code=201)


@router.put("/{news_id}", dependencies=[Depends(check_token)])
async def news_update(news_id: int, request: Request, ctx: ContentContext = Depends(get_content)):
    patch = await read_json_object(request)
    item = ctx.repository.news.update(news_id, patch)
    if item is None:
        raise NotFoundError("news", news_id)
    ctx.edit_log.record(getattr(item.title, active_language(request)))
    return to_wire(item)


@router.delete("/{news_id}", dependencies=[Depends(check_token)])
def news_delete(news_id: int, ctx: ContentContext = Depends(get_content)):
    if not ctx.repository.news.delete(news_id):
        raise NotFoundError("news", news_id)
    return {"ok": True, "id": news_id}
