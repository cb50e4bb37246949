from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping
from uuid import UUID

from jose import jwt
from jose.exceptions import JWTError

from herdcycle.application.errors import AuthError


class JWTService:
    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str,
        access_token_expires_minutes: int,
        issuer: str | None = None,
        audience: str | None = None,
        leeway_seconds: int = 0,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expires_minutes = access_token_expires_minutes
        self.issuer = issuer
        self.audience = audience
        self.leeway_seconds = leeway_seconds

    def create_access_token(
        self,
        *,
        subject: UUID,
        extra_claims: Mapping[str, Any] | None = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        to_encode: dict[str, Any] = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=self.access_token_expires_minutes)).timestamp()),
            "typ": "access",
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience
        if extra_claims:
            to_encode.update(extra_claims)
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"verify_aud": self.audience is not None, "leeway": self.leeway_seconds},
            )
        except JWTError as exc:
            raise AuthError("Token validation failed") from exc
        if claims.get("typ", "access") != "access":
            raise AuthError("Invalid access token")
        return claims
