from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timezone, tzinfo

from fastapi import Request

from herdcycle.application.errors import AuthError
from herdcycle.config.settings import Settings, get_settings
from herdcycle.infrastructure.auth.context import AuthContext
from herdcycle.infrastructure.db.session import SQLAlchemyUnitOfWork


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_default_tz(request: Request) -> tzinfo:
    """Zone assumed for naive datetimes sent by clients of this app."""
    return getattr(request.app.state, "default_tz", None) or timezone.utc
