"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from profilehub.api import router as api_router
from profilehub.core.config import settings
from profilehub.core.database import dispose_engine
from profilehub.core.logging import ACCESS_LOGGER_NAME, configure_logging

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER_NAME)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def _error_path(loc: tuple | list) -> str:
    # Drop FastAPI's leading "body"/"path"/"query" segment.
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "path", "query", "header"):
        parts = parts[1:]
    return ".".join(parts)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed payloads as 400 with one message per field."""
    errors = [
        {"path": _error_path(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log with context and return a generic 500; no internals leak to the caller."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings)
    logger.info("Starting profilehub (env=%s, store=%s)", settings.APP_ENV, settings.USER_STORE)
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Profilehub API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log_and_headers(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            # Unhandled errors still get security headers and an access line.
            response = await unhandled_exception_handler(request, exc)
        elapsed_ms = (time.perf_counter() - start) * 1000
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        access_logger.info(
            '%s "%s %s" %s %.1fms',
            request.client.host if request.client else "-",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)

    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
    app.mount("/files", StaticFiles(directory=settings.FILES_DIR, check_dir=False), name="files")
    app.mount("/covers", StaticFiles(directory=settings.COVERS_DIR, check_dir=False), name="covers")

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Profilehub API"}

    return app


app = create_app()


def main() -> None:
    """Run with uvicorn: python -m profilehub.main"""
    import uvicorn

    uvicorn.run("profilehub.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
