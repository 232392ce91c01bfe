# ticketdesk/main.py
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from ticketdesk.auth.passwords import PasswordHasher
from ticketdesk.auth.routes import router as auth_router
from ticketdesk.auth.tokens import TokenService
from ticketdesk.core.config import Settings, get_settings
from ticketdesk.core.database import Database
from ticketdesk.core.errors import AppError
from ticketdesk.core.logging import setup_logging
from ticketdesk.core.telemetry import add_breadcrumb, capture_exception
from ticketdesk.ticket.routes import router as ticket_router


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.TELEMETRY_LOG_PATH)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings.DATABASE_URL)
        db.create_all()
        app.state.db = db
        logger.info("Database ready at {url}", url=db.engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            db.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.tokens = TokenService(
        secret=settings.JWT_SECRET,
        ttl=timedelta(days=settings.SESSION_TTL_DAYS),
        cookie_name=settings.SESSION_COOKIE_NAME,
        cookie_secure=settings.COOKIE_SECURE,
    )

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentialed requests to a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Revalidate"],
    )

    register_error_handlers(app)

    # Routers
    app.include_router(auth_router)
    app.include_router(ticket_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    return app


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            capture_exception(exc, category="request", data={"path": request.url.path})
        else:
            add_breadcrumb(
                "request",
                exc.message,
                level="warning",
                data={"path": request.url.path, "code": exc.code},
            )
        # Server-side failures keep their detail in telemetry only
        detail = exc.message if exc.status_code < 500 else "Internal server error"
        return JSONResponse(status_code=exc.status_code, content={"detail": detail, "code": exc.code})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        add_breadcrumb("request", "Invalid request body", level="info", data={"path": request.url.path})
        return JSONResponse(
            status_code=422,
            content={"detail": jsonable_encoder(exc.errors()), "code": "validation_error"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        capture_exception(exc, category="request", data={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "code": "internal_error"},
        )


app = create_app()
