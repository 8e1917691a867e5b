"""Dépendances partagées des routes : contexte de contenu, jeton admin, corps JSON."""
import json
import os
from typing import Any

from fastapi import HTTPException, Request

from ..database import ContentContext
from ..errors import MalformedPayloadError
from ..store import LANGUAGE_KEY


def get_content(request: Request) -> ContentContext:
    return request.app.state.content


def check_token(request: Request) -> str:
    """Jeton admin : ?token=… ou Authorization: Bearer …"""
    auth = request.headers.get("authorization", "")
    token = (request.query_params.get("token")
             or (auth[7:] if auth.lower().startswith("bearer ") else ""))
    if token != os.getenv("ADMIN_TOKEN", "changeme"):
        raise HTTPException(403, "Accès refusé")
    return token


def active_language(request: Request) -> str:
    """?language=… sinon la préférence stockée, sinon fr."""
    lang = request.query_params.get("language") or get_content(request).store.get(LANGUAGE_KEY)
    return lang if lang in ("fr", "ar") else "fr"


async def read_json(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body)
    except ValueError as e:
        raise MalformedPayloadError("Invalid JSON data") from e


async def read_json_object(request: Request) -> dict:
    data = await read_json(request)
    if not isinstance(data, dict):
        raise MalformedPayloadError("Invalid JSON data")
    return data
