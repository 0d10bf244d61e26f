"""
Application principale : gestion des inscriptions de candidats
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from .core.config import settings
from .core.database import create_db_and_tables, engine, get_store, test_db_connection
from .core.exceptions import ErreurPersistance
from .routers import router_configs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    if test_db_connection():
        logger.info("✅ Connexion à la base OK (%s)", engine.url)
    if settings.SEED_DEMO:
        get_store().seed_demo()
    yield


def create_app() -> FastAPI:
    """Construit l'application FastAPI"""
    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Registre, recherche, statistiques et exports des candidats",
        version=settings.VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Settings accessibles partout
    app.state.settings = settings

    # ----------------------------
    # Gestion des erreurs
    # ----------------------------
    @app.exception_handler(ErreurPersistance)
    async def erreur_persistance_handler(request: Request, exc: ErreurPersistance):
        logger.error("❌ Erreur de stockage sur %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Erreur de stockage : l'opération n'a pas été enregistrée"},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": jsonable_encoder(exc.errors(include_url=False, include_context=False))},
        )

    # ----------------------------
    # Routers
    # ----------------------------
    for router, prefix, tags in router_configs:
        app.include_router(router, prefix=prefix, tags=tags)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/dashboard/stats")

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": settings.VERSION, "environment": settings.ENVIRONMENT}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app_inscriptions.main:app", host="127.0.0.1", port=8000, reload=settings.DEBUG)
