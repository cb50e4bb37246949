from __future__ import annotations

from typing import Iterable
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from herdcycle.application.errors import AuthError, PermissionDenied
from herdcycle.config.settings import Settings
from herdcycle.infrastructure.auth.context import AuthContext, resolve_role

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        try:
            authorization = request.headers.get("Authorization")
            if not authorization:
                raise AuthError("Missing Authorization header")
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            tenant_value = request.headers.get(self.settings.tenant_header)
            if not tenant_value:
                raise PermissionDenied("Missing tenant header")
            try:
                tenant_id = UUID(tenant_value)
            except ValueError as exc:
                raise PermissionDenied("Invalid tenant identifier") from exc
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            claims = jwt_service.decode(token)

            subject = claims.get("sub")
            if not subject:
                raise AuthError("Token missing subject")
            try:
                user_id = UUID(str(subject))
            except ValueError as exc:
                raise AuthError("Token subject is not a valid UUID") from exc
            role_resolver = getattr(request.app.state, "role_resolver", None)
            if role_resolver is None:
                raise RuntimeError("Role resolver not configured")
            role = await resolve_role(role_resolver, user_id, tenant_id, claims)
            request.state.auth_context = AuthContext(
                user_id=user_id,
                tenant_id=tenant_id,
                role=role,
                claims=claims,
            )
            return await call_next(request)
        except (AuthError, PermissionDenied) as exc:
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
