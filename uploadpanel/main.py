from __future__ import annotations
import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from uploadpanel.config import PUBLIC_UPLOADS_PREFIX, Settings, load_settings
from uploadpanel.errors import ApiError, http_status_for
from uploadpanel.models.responses import fail
from uploadpanel.routers import auth, diagnostics, upload
from uploadpanel.services.credentials import CredentialChecker
from uploadpanel.services.storage import Storage
from uploadpanel.services.tokens import TokenService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(fail(exc.message, exc.code), status_code=http_status_for(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        status = exc.status_code if 400 <= exc.status_code < 600 else 500
        return JSONResponse(fail(str(exc.detail)), status_code=status, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = f"Invalid input: {where}" if where else "Invalid input"
        return JSONResponse(fail(msg), status_code=422)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(fail("Internal Server Error"), status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = FastAPI(
        title="Upload Panel API",
        description="Admin → cartelle → file caricati, con storage su filesystem e JWT.",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # servizi condivisi in sola lettura (nessuno stato tra richieste)
    app.state.settings = settings
    app.state.tokens = TokenService(settings.jwt_secret)
    app.state.credentials = CredentialChecker(settings.admin_username, settings.admin_password)
    app.state.storage = Storage(settings.upload_base_dir, timezone=settings.timezone)

    _register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(upload.router)
    app.include_router(diagnostics.router)

    if settings.serve_uploads:
        if settings.upload_base_dir.is_dir():
            app.mount(PUBLIC_UPLOADS_PREFIX, StaticFiles(directory=str(settings.upload_base_dir)), name="uploads")
        else:
            logger.warning("SERVE_UPLOADS set but %s does not exist", settings.upload_base_dir)

    @app.get("/ping")
    def ping(): return {"status": "ok"}

    logger.info("upload base dir: %s", settings.upload_base_dir)
    return app


def run() -> None:
    uvicorn.run(
        "uploadpanel.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
