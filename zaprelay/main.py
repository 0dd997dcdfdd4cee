from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from zaprelay import __version__
from zaprelay.config import Settings
from zaprelay.config import settings as default_settings
from zaprelay.database import Database
from zaprelay.logging_config import get_logger, setup_logging
from zaprelay.routers import auth, bot, contacts, messages, webhook
from zaprelay.services.errors import RelayError

logger = get_logger("main")

MSG_INVALID_FIELDS = "Dados inválidos"


def _invalid_field_names(exc: RequestValidationError) -> list[str]:
    names = set()
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        names.add(".".join(loc[1:]) or ".".join(loc) or "body")
    return sorted(names)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(app_settings.database_url, echo=app_settings.debug)
        database.create_all()
        app.state.database = database
        logger.info("Database ready", extra={"context": {"url": database.engine.url.render_as_string()}})
        try:
            yield
        finally:
            database.dispose()
            logger.info("Database disposed")

    app = FastAPI(
        title="zaprelay",
        description="WhatsApp webhook relay between the UAZAPI gateway and n8n, with a dashboard API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={"context": {"path": request.url.path, "error": exc.message, "type": type(exc).__name__}},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = _invalid_field_names(exc)
        logger.info("Request validation failed", extra={"context": {"path": request.url.path, "fields": fields}})
        return JSONResponse(status_code=400, content={"error": f"{MSG_INVALID_FIELDS}: {', '.join(fields)}"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"context": {"path": request.url.path, "error": str(exc)}})
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.include_router(auth.router)
    app.include_router(webhook.router)
    app.include_router(messages.router)
    app.include_router(contacts.router)
    app.include_router(bot.router)

    @app.get("/ping")
    async def ping():
        return {"message": "pong"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
