"""
DROIT — API FastAPI (contenu bilingue fr/ar)
Démarrer : uvicorn droit.api.main:app --reload --port 8787
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..database import build_context, open_store
from ..errors import MalformedPayloadError, NotFoundError, StorageError, UnknownRouteError, ValidationError
from ..store import KeyValueStore
from .routes import admin, news, pages, resources, status

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin":  "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

_ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD"]


def create_app(store: Optional[KeyValueStore] = None) -> FastAPI:
    """Construit l'application autour d'un stockage injecté (SQLite DB_PATH par défaut)."""
    app = FastAPI(title="DROIT — API contenu", version=status.API_VERSION, docs_url="/docs")
    app.state.content = build_context(store if store is not None else open_store())

    @app.middleware("http")
    async def cors(request: Request, call_next):
        """Préflight OPTIONS sur tout chemin → 200 vide ; en-têtes CORS partout."""
        if request.method == "OPTIONS":
            return Response(status_code=200, media_type="application/json", headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.on_event("startup")
    def startup():
        app.state.content.initializer.ensure_initialized()

    # ── Erreurs → JSON {"error": …} ──

    @app.exception_handler(MalformedPayloadError)
    async def malformed_payload(request: Request, exc: MalformedPayloadError):
        return JSONResponse({"error": "Invalid JSON data"}, status_code=400)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(exc.to_dict(), status_code=400)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse({"error": "Not Found"}, status_code=404)

    @app.exception_handler(UnknownRouteError)
    async def unknown_route(request: Request, exc: UnknownRouteError):
        return JSONResponse({"error": "Not Found"}, status_code=404)

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        log.error("Stockage : %s", exc)
        return JSONResponse({"error": "Storage failure"}, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"error": "Requête invalide", "details": jsonable_encoder(exc.errors())},
            status_code=422,
        )

    for module in (status, news, resources, pages, admin):
        app.include_router(module.router)

    # Dernière route : tout chemin non reconnu → 404 {"error": "Not Found"}
    @app.api_route("/{path:path}", methods=_ALL_METHODS, include_in_schema=False)
    def unknown(path: str):
        raise UnknownRouteError(path)

    return app


app = create_app()
