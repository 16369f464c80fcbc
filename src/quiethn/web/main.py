"""
FastAPI application serving the quiet Hacker News front page.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, Dict, Optional
from uuid import uuid4

import structlog
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from quiethn import __version__
from quiethn.config import Config
from quiethn.errors import StoryFetchError
from quiethn.hn import HNClient
from quiethn.observability.metrics import METRICS
from quiethn.protocols import ItemSource
from quiethn.stories import fetch_top_stories

logger = structlog.get_logger(__name__)

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def get_item_source(request: Request) -> ItemSource:
    """Return the item source opened by the application lifespan."""
    return request.app.state.item_source


def get_config(request: Request) -> Config:
    return request.app.state.config


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the web application around ``config``."""
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        client = HNClient(config.hn)
        await client.initialize()
        app.state.item_source = client
        logger.info("quiethn web server starting", num_stories=config.fetcher.num_stories)

        yield

        await client.close()
        logger.info("quiethn web server stopped")

    app = FastAPI(title="quiethn", version=__version__, lifespan=lifespan)
    app.state.config = config

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next: Callable) -> Any:
        """Bind a request ID to every log line emitted while serving the request."""
        request_id = str(uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/", response_class=HTMLResponse)
    async def index(
        request: Request,
        source: ItemSource = Depends(get_item_source),
        settings: Config = Depends(get_config),
    ) -> Response:
        """Render the top stories."""
        start_time = time.perf_counter()
        try:
            stories = await fetch_top_stories(
                source,
                settings.fetcher.num_stories,
                deadline=settings.fetcher.deadline_seconds,
            )
        except StoryFetchError as e:
            METRICS["page_requests"].labels(outcome="error").inc()
            logger.error("Failed to build front page", error=str(e))
            return PlainTextResponse(str(e), status_code=500)

        elapsed = time.perf_counter() - start_time
        METRICS["page_requests"].labels(outcome="ok").inc()
        METRICS["fetch_cycle_seconds"].observe(elapsed)
        METRICS["stories_served"].set(len(stories))

        return TEMPLATES.TemplateResponse(
            request,
            "index.html",
            {"stories": stories, "elapsed": elapsed},
        )

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        return {"status": "healthy", "timestamp": time.time(), "version": __version__}

    @app.get("/metrics")
    async def get_prometheus_metrics() -> Response:
        """Endpoint for Prometheus to scrape."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


def run_web_server(config: Config) -> None:
    """Serve the front page with uvicorn until interrupted."""
    uvicorn.run(
        create_app(config),
        host=config.web.host,
        port=config.web.port,
        log_level=config.monitoring.log_level.lower(),
        log_config=None,
    )
