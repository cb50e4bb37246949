from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from herdcycle.config.settings import Settings, get_settings
from herdcycle.infrastructure.auth.context import RoleResolver, membership_role_resolver
from herdcycle.infrastructure.auth.jwt_service import JWTService
from herdcycle.infrastructure.db.session import create_engine, create_session_factory
from herdcycle.interfaces.http.deps import get_app_settings
from herdcycle.interfaces.http.routers import alerts, calves, confirmations, cows
from herdcycle.interfaces.http.routers import settings as settings_router
from herdcycle.interfaces.middleware.auth_middleware import AuthMiddleware
from herdcycle.interfaces.middleware.error_handler import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    jwt_service: JWTService | None = None,
    role_resolver: RoleResolver | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="HerdCycle Backend",
        version="0.1.0",
        description="Multi-tenant reproductive cycle and calendar API for dairy herds",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.default_tz = settings.timezone_info
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.jwt_service = jwt_service or JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        leeway_seconds=settings.jwt_leeway_seconds,
    )
    app.state.role_resolver = role_resolver or membership_role_resolver(
        app.state.session_factory
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(alerts.router)
    api.include_router(confirmations.router)
    api.include_router(cows.router)
    api.include_router(calves.router)
    api.include_router(settings_router.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    # Add Auth first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
