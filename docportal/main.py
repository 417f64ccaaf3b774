import logging
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from docportal.core.config import Settings, settings as default_settings
from docportal.core.middleware import RequestSizeLimitMiddleware
from docportal.db.sessions import build_engine, build_session_factory, init_db
from docportal.routes import documents, web
from docportal.routes.web import PACKAGE_DIR
from docportal.services.document_service import MAX_UPLOAD_SIZE

logger = logging.getLogger(__name__)

# room for multipart boundaries and headers around the file itself
MULTIPART_OVERHEAD = 64 * 1024


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around its own database engine.

    The schema is created before the app is returned, so no request can
    arrive ahead of the store being ready.
    """
    settings = settings or default_settings

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        description="Upload, list, download and delete PDF documents",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=MAX_UPLOAD_SIZE + MULTIPART_OVERHEAD,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"error": message})

    # Register routers
    app.include_router(documents.router)
    app.include_router(web.router)
    app.mount("/static", StaticFiles(directory=str(PACKAGE_DIR / "static")), name="static")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("%s v%s ready (uploads in %s)", settings.APP_NAME, settings.APP_VERSION, settings.UPLOAD_DIR)
    return app
