"""
FastAPI application for the Thread Scraper service.

This module builds the HTTP surface: the scrape endpoint, the health check,
the visitor counter hook and the private stats page.
"""

import hmac
import os
from typing import Optional

from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from api.schemas import ErrorOut, HealthOut, ScrapeRequest, ThreadOut
from config import settings
from data.visitor_stats import VisitorStats
from services.protocols import StatsStore
from services.scrape_service import ScrapeService
from utils.exceptions import (
    ThreadScraperError, ScrapeRequestError, UpstreamError
)
from utils.logger import get_logger

logger = get_logger(__name__)

STATS_PAGE = """
<html>
  <head>
    <title>Admin Stats</title>
    <style>
      body {{ font-family: sans-serif; background: #0b0f19; color: #fff; display: flex; justify-content: center; align-items: center; height: 100vh; }}
      .card {{ background: rgba(255,255,255,0.05); padding: 40px; border-radius: 12px; border: 1px solid rgba(255,255,255,0.1); text-align: center; }}
      h1 {{ color: #6366f1; margin-bottom: 10px; }}
      .count {{ font-size: 3rem; font-weight: bold; }}
    </style>
  </head>
  <body>
    <div class="card">
      <h1>Total Visitors</h1>
      <div class="count">{count}</div>
    </div>
  </body>
</html>
"""


def error_response(exc: ThreadScraperError) -> JSONResponse:
    """
    Map an application error to a JSON error response.

    Request problems are 400s, upstream failures keep Reddit's status code
    (502 when Reddit was unreachable), everything else is a 500.
    """
    if isinstance(exc, ScrapeRequestError):
        status_code = 400
        body = ErrorOut(error=str(exc))
    elif isinstance(exc, UpstreamError):
        status_code = exc.status_code or 502
        body = ErrorOut(error=str(exc), status_code=exc.status_code)
    else:
        status_code = 500
        body = ErrorOut(error=str(exc) or "Internal server error")

    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def validation_message(exc: RequestValidationError) -> str:
    """Condense FastAPI validation errors into one readable message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def get_scrape_service(request: Request) -> ScrapeService:
    return request.app.state.scrape_service


def get_visitor_stats(request: Request) -> StatsStore:
    return request.app.state.visitor_stats


def create_app(scrape_service: Optional[ScrapeService] = None,
               visitor_stats: Optional[StatsStore] = None,
               admin_key: Optional[str] = None,
               public_dir: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        scrape_service: Service used by /api/scrape. Built from settings if omitted.
        visitor_stats: Visitor counter store. File-backed store if omitted.
        admin_key: Key required by /admin/stats. Defaults to ADMIN_STATS_KEY;
            an empty key disables the page.
        public_dir: Directory of static front-end files served at "/".

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Scrape a Reddit thread into a flat, ordered list of comments."
    )

    app.state.scrape_service = scrape_service or ScrapeService.from_settings()
    app.state.visitor_stats = visitor_stats or VisitorStats()
    admin_key = settings.ADMIN_STATS_KEY if admin_key is None else admin_key
    public_dir = settings.PUBLIC_DIR if public_dir is None else public_dir

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def track_visits(request: Request, call_next):
        """Count one visit per GET of the root page."""
        if request.method == "GET" and request.url.path == "/":
            await run_in_threadpool(request.app.state.visitor_stats.increment)
        return await call_next(request)

    @app.exception_handler(ThreadScraperError)
    async def handle_scraper_error(request: Request, exc: ThreadScraperError):
        if isinstance(exc, ScrapeRequestError):
            logger.warning(f"Rejected scrape request: {exc}")
        else:
            logger.error(f"Scrape error: {exc}")
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        message = validation_message(exc)
        logger.warning(f"Rejected invalid request body: {message}")
        return JSONResponse(status_code=400, content=ErrorOut(error=message).model_dump(exclude_none=True))

    @app.get("/api/health", response_model=HealthOut)
    def health_check():
        """Deployment check: status, version and environment."""
        return HealthOut(status="ok", version=settings.APP_VERSION, env=settings.DEPLOY_ENV)

    @app.post("/api/scrape", response_model=ThreadOut,
              responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}, 502: {"model": ErrorOut}})
    def scrape(payload: Optional[ScrapeRequest] = Body(default=None),
               service: ScrapeService = Depends(get_scrape_service)):
        """Scrape the thread at `url` and return its comments in reading order."""
        url = payload.url if payload else None
        try:
            result = service.scrape(url)
        except ThreadScraperError:
            raise
        except Exception as e:
            logger.error(f"Unexpected scrape error: {e}", exc_info=True)
            raise ThreadScraperError(str(e) or "Internal server error") from e

        return result.to_dict()

    @app.get("/admin/stats", response_class=HTMLResponse)
    def admin_stats(key: Optional[str] = Query(default=None),
                    stats: StatsStore = Depends(get_visitor_stats)):
        """Private visitor count page."""
        if not admin_key or not key or not hmac.compare_digest(key.encode(), admin_key.encode()):
            return PlainTextResponse("Unauthorized Access Denied.", status_code=401)

        return HTMLResponse(STATS_PAGE.format(count=stats.read()["visitorCount"]))

    # Mounted last so the API routes take precedence over static files
    if public_dir and os.path.isdir(public_dir):
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    else:
        logger.debug(f"No static front-end directory at {public_dir}")

    return app
