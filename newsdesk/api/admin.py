from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from newsdesk.models import NewsStatus, TargetSite
from newsdesk.services.news import (
    ADMIN_LISTING_KEY,
    ActionResult,
    Found,
    NewsRetrievalError,
    NewsService,
    NotFound,
    Outcome,
)

ADMIN_PREFIX = "/admin"

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(prefix=ADMIN_PREFIX, tags=["admin"])

_STATUS_CODES = {
    Outcome.OK: 200,
    Outcome.INVALID: 422,
    Outcome.NOT_FOUND: 404,
    Outcome.FAILED: 500,
}

def get_news_service(request: Request) -> NewsService:
    return request.app.state.news_service

def _result_response(result: ActionResult) -> JSONResponse:
    return JSONResponse(result.to_dict(), status_code=_STATUS_CODES[result.outcome])

class MalformedBody(Exception):
    pass

def _malformed_response(e: MalformedBody) -> JSONResponse:
    return JSONResponse({"success": False, "message": str(e)}, status_code=400)

async def _submitted_fields(request: Request) -> dict:
    # The admin form posts multipart/urlencoded; scripts may send JSON
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise MalformedBody("Invalid JSON body")
        if not isinstance(body, dict):
            raise MalformedBody("Expected a JSON object")
        return body
    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}

@router.get("", response_class=HTMLResponse)
async def admin_page(request: Request, service: NewsService = Depends(get_news_service)):
    cached = service.cache.get(ADMIN_LISTING_KEY)
    if cached is not None:
        return HTMLResponse(cached)

    error = None
    try:
        items = [n.to_dict() for n in await service.list_news()]
    except NewsRetrievalError as e:
        items, error = [], str(e)

    html = templates.get_template("admin.html").render(
        items=items,
        error=error,
        target_sites=[t.value for t in TargetSite],
        statuses=[s.value for s in NewsStatus],
        prefix=ADMIN_PREFIX,
    )
    if error is None:
        service.cache.set(ADMIN_LISTING_KEY, html)
    return HTMLResponse(html)

@router.get("/news")
async def list_news(service: NewsService = Depends(get_news_service)):
    try:
        items = await service.list_news()
    except NewsRetrievalError as e:
        return JSONResponse({"success": False, "message": str(e)}, status_code=503)
    return [n.to_dict() for n in items]

@router.get("/news/{news_id}")
async def get_news(news_id: int, service: NewsService = Depends(get_news_service)):
    lookup = await service.get_news(news_id)
    if isinstance(lookup, Found):
        return lookup.news.to_dict()
    if isinstance(lookup, NotFound):
        return JSONResponse({"success": False, "message": "Article not found"}, status_code=404)
    return JSONResponse({"success": False, "message": "Failed to fetch article"}, status_code=503)

@router.post("/news")
async def create_news(request: Request, service: NewsService = Depends(get_news_service)):
    try:
        fields = await _submitted_fields(request)
    except MalformedBody as e:
        return _malformed_response(e)
    return _result_response(await service.create_news(fields))

@router.put("/news/{news_id}")
async def update_news(news_id: int, request: Request, service: NewsService = Depends(get_news_service)):
    try:
        fields = await _submitted_fields(request)
    except MalformedBody as e:
        return _malformed_response(e)
    return _result_response(await service.update_news(news_id, fields))

@router.delete("/news/{news_id}")
async def delete_news(news_id: int, service: NewsService = Depends(get_news_service)):
    return _result_response(await service.delete_news(news_id))
