# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: main.py
# -----------------------------------------------------------------------------
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import chat, embeddings, health, inventory, products, search
from api.schemas.common import ErrorResponse

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("SHOP_API_BASE_URL", "http://127.0.0.1:8000")


def _mount_ui_enabled() -> bool:
    return os.getenv("SHOP_MOUNT_UI", "1").strip().lower() in ("1", "true", "yes", "y")


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    body = ErrorResponse(error=f"Invalid request: {problems}")
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app(mount_ui: Optional[bool] = None) -> FastAPI:
    app = FastAPI(title="Shop Assistant API")
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)

    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(search.router)
    app.include_router(inventory.router)
    app.include_router(embeddings.router)
    app.include_router(products.router)

    if mount_ui is None:
        mount_ui = _mount_ui_enabled()
    if mount_ui:
        # Gradio is served by the same uvicorn process/port
        import gradio as gr
        from ui.gradio_app import build_gradio_app

        app = gr.mount_gradio_app(app, build_gradio_app(api_base_url=API_BASE_URL), path="/ui")
        logger.info("Gradio UI mounted at /ui (api=%s)", API_BASE_URL)

    return app


app = create_app()
