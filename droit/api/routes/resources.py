"""Ressources (documents téléchargeables) — lecture publique, écriture admin."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...database import ContentContext
from ...errors import NotFoundError
from ...models import to_wire
from ..deps import active_language, check_token, get_content, read_json_object

router = APIRouter(prefix="/api/resources", tags=["Resources"])


@router.get("")
def resources_list(ctx: ContentContext = Depends(get_content)):
    return [to_wire(r) for r in ctx.repository.resources.list()]


@router.get("/{resource_id}")
def resources_detail(resource_id: int, ctx: ContentContext = Depends(get_content)):
    return to_wire(ctx.repository.resources.require(resource_id))


@router.post("", dependencies=[Depends(check_token)])
async def resources_create(request: Request, ctx: ContentContext = Depends(get_content)):
    item = ctx.repository.resources.create(await read_json_object(request))
    ctx.edit_log.record(getattr(item.title, active_language(request)))
    return JSONResponse(to_wire(item), status_code=201)


@router.put("/{resource_id}", dependencies=[Depends(check_token)])
async def resources_update(resource_id: int, request: Request, ctx: ContentContext = Depends(get_content)):
    item = ctx.repository.resources.update(resource_id, await read_json_object(request))
    if item is None:
        raise NotFoundError("resources", resource_id)
    ctx.edit_log.record(getattr(item.title, active_language(request)))
    return to_wire(item)


@router.delete("/{resource_id}", dependencies=[Depends(check_token)])
def resources_delete(resource_id: int, ctx: ContentContext = Depends(get_content)):
    if not ctx.repository.resources.delete(resource_id):
        raise NotFoundError("resources", resource_id)
    return {"ok": True, "id": resource_id}
