"""FastAPI application exposing the finance analysis endpoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finance_chart_analyst import __version__
from finance_chart_analyst.l4_frameworks_and_drivers.container import DependencyContainer

log = logging.getLogger('fca.server')

NO_CACHE_HEADERS = {'Cache-Control': 'no-cache'}


def create_app(container_factory: Callable[[], DependencyContainer]) -> FastAPI:
    """Build the app; the container (and its client handle) lives for the app's lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container = container_factory()
        app.state.container = container
        log.info('event=app-startup version=%s', __version__)
        try:
            yield
        finally:
            await container.aclose()
            log.info('event=app-shutdown')

    app = FastAPI(title='Finance Chart Analyst', version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=['*'],
        allow_credentials=False,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.get('/health')
    async def health() -> dict[str, str]:
        return {'status': 'ok'}

    @app.post('/api/finance')
    async def finance(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={'error': 'Invalid JSON body'})

        container: DependencyContainer = request.app.state.container
        status, content = await container.controller.handle(body)
        headers = NO_CACHE_HEADERS if status == 200 else None
        return JSONResponse(status_code=status, content=content, headers=headers)

    return app
