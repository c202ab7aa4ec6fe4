"""FastAPI application exposing the search route.

Run with:
  python -m atlas_search_gateway
or:
  uvicorn atlas_search_gateway.app:create_app --factory
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from bson.errors import BSONError
from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from pymongo.errors import PyMongoError

from . import __version__
from .config import Cfg, load_cfg
from .db import CollectionHandle, connect
from .envelope import CONTENT_TYPE, build_envelope, dumps
from .executor import explain_pipeline, run_pipeline
from .pipeline import build_pipeline
from .request_parser import SearchRequestError, parse_request

logger = logging.getLogger(__name__)


def get_handle(request: Request) -> CollectionHandle:
    return request.app.state.handle


def search(request: Request, handle: CollectionHandle = Depends(get_handle)) -> Response:
    """
    /search?q=<query>
           &search=<fields to search>
           [&skip=N]
           [&limit=X]
           [&project=<fields to return>]
           [&filter=genres:Adventure&filter=<field_name>:<field_value>]
           [&debug=true]
    """
    try:
        req = parse_request(request.query_params)
    except SearchRequestError as exc:
        logger.info("Rejected search request: %s", exc)
        return PlainTextResponse(str(exc), status_code=400)

    pipeline = build_pipeline(req, handle.index_name)
    logger.debug("q=%r search=%s filters=%d debug=%s", req.q, req.search_fields, len(req.filters), req.debug)

    try:
        explain = explain_pipeline(handle.collection, pipeline) if req.debug else None
        result = run_pipeline(handle.collection, pipeline)
    except (PyMongoError, BSONError) as exc:
        logger.warning("Search on %s failed: %s", handle.namespace, exc)
        return PlainTextResponse(str(exc), status_code=400)

    return Response(content=dumps(build_envelope(req, result, explain)), media_type=CONTENT_TYPE)


def create_app(cfg: Optional[Cfg] = None, handle: Optional[CollectionHandle] = None) -> FastAPI:
    """Build the app; pass `handle` to reuse an existing collection handle."""
    if cfg is None:
        cfg = load_cfg()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.handle is None
        if owned:
            app.state.handle = connect(cfg)
        try:
            yield
        finally:
            if owned:
                try:
                    app.state.handle.close()
                except Exception as exc:  # noqa: BLE001
                    logger.warning("Error closing MongoDB client: %s", exc)
                app.state.handle = None

    app = FastAPI(title="Atlas Search Gateway", version=__version__, lifespan=lifespan)
    app.state.handle = handle

    @app.get("/health")
    def health():
        return {"ok": True}

    app.add_api_route(cfg.route, search, methods=["GET"])
    return app
