"""
Boundary adapter from bearer tokens to CallerIdentity.

Decodes and verifies the JWT carried in the Authorization header,
then maps its loosely-typed claims onto a CallerIdentity once per request.
"""

from __future__ import annotations

import logging
from typing import Any

import jwt

from ..config import Settings
from ..errors import Unauthorized
from .models import CallerIdentity

logger = logging.getLogger(__name__)

SCOPE_CLAIM = "scp"
ROLES_CLAIM = "roles"
OID_CLAIM = "oid"
NAME_CLAIMS = ("name", "preferred_username")


def _as_strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def identity_from_claims(claims: dict[str, Any]) -> CallerIdentity:
    """Build a CallerIdentity from a decoded claims mapping."""
    scopes: set[str] = set()
    for raw in _as_strings(claims.get(SCOPE_CLAIM)):
        scopes.update(s for s in raw.split(" ") if s)

    name = ""
    for claim in NAME_CLAIMS:
        if claims.get(claim):
            name = str(claims[claim])
            break

    oid = claims.get(OID_CLAIM)
    return CallerIdentity(
        name=name,
        object_id=str(oid) if oid is not None else None,
        scopes=frozenset(scopes),
        roles=frozenset(_as_strings(claims.get(ROLES_CLAIM))),
    )


def extract_bearer_token(header: str | None) -> str:
    """Pull the raw token out of an ``Authorization: Bearer`` header."""
    if not header:
        raise Unauthorized("missing bearer token")
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("authorization header must use the Bearer scheme")
    return token.strip()


def decode_bearer_token(header: str | None, settings: Settings) -> dict[str, Any]:
    """Verify the bearer token and return its claims."""
    token = extract_bearer_token(header)
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=list(settings.jwt_algorithms),
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options=options,
        )
    except jwt.InvalidTokenError as exc:
        logger.warning("bearer_token_rejected error=%s", exc)
        raise Unauthorized("invalid bearer token") from exc


def authenticate(header: str | None, settings: Settings) -> CallerIdentity:
    """Header -> verified claims -> CallerIdentity."""
    return identity_from_claims(decode_bearer_token(header, settings))


def issue_token(
    secret: str,
    name: str = "",
    oid: str | None = None,
    scopes: list[str] | None = None,
    roles: list[str] | None = None,
    algorithm: str = "HS256",
    **extra: Any,
) -> str:
    """Mint a signed token carrying the claims this service reads."""
    claims: dict[str, Any] = dict(extra)
    if name:
        claims["name"] = name
    if oid is not None:
        claims[OID_CLAIM] = oid
    if scopes:
        claims[SCOPE_CLAIM] = " ".join(scopes)
    if roles:
        claims[ROLES_CLAIM] = list(roles)
    return jwt.encode(claims, secret, algorithm=algorithm)
