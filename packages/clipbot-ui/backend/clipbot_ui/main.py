"""FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clipbot_ui import __version__
from clipbot_ui.api import exports_router, media_router, stream_router
from clipbot_ui.dependencies import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    Path(settings.media_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.scratch_dir).mkdir(parents=True, exist_ok=True)
    yield


async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same failure shape as rejected exports."""
    return JSONResponse(
        {
            "success": False,
            "error": "Invalid request body",
            "category": "InvalidRequest",
            "details": str(exc.errors()),
        },
        status_code=400,
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="ClipBot API",
        description="Turn moments of live streams into clips, GIFs and vertical exports",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, invalid_body)

    # Include routers
    app.include_router(exports_router)
    app.include_router(stream_router)
    app.include_router(media_router)

    @app.get("/health")
    def health():
        """Health check."""
        return {"status": "healthy"}

    return app


app = create_app()
