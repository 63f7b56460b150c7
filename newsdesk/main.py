from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from loguru import logger

from newsdesk import __version__
from newsdesk.api.admin import ADMIN_PREFIX, router as admin_router, templates
from newsdesk.core.cache import PageCache
from newsdesk.core.config import Settings
from newsdesk.core.db import Database
from newsdesk.core.log import configure_logger
from newsdesk.core.security import BasicAuthGate, StaticCredentialChecker
from newsdesk.services.news import NewsService
from newsdesk.services.repository import NewsRepository

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logger(settings)

    # Fails fast when DATABASE_URL is missing
    database = Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.uses_default_credentials:
            logger.warning("Admin panel is using the default Basic-Auth credentials; set BASIC_USER and BASIC_PASS")
        if settings.create_tables:
            await database.create_tables()
        yield
        await database.dispose()

    app = FastAPI(title="News Admin", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.news_service = NewsService(
        NewsRepository(database),
        PageCache(settings.listing_cache_seconds),
        settings.tzinfo(),
    )

    app.add_middleware(
        BasicAuthGate,
        checker=StaticCredentialChecker.from_settings(settings),
        prefix=ADMIN_PREFIX,
        realm=settings.auth_realm,
    )
    app.include_router(admin_router)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        return templates.TemplateResponse(request, "index.html", {"admin_url": ADMIN_PREFIX})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app

def run() -> None:
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
