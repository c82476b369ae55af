"""
Authentication module for Auth0 access tokens.
Provides FastAPI dependencies for securing endpoints.

Tokens are RS256 JWTs validated against the tenant JWKS with issuer and
audience checks. Custom claims are namespaced with the API audience:
- "<audience>/permissions": list of permission strings (falls back to the
  standard "permissions" claim added by Auth0 RBAC)
- "<audience>/role": "USER" or "ADMIN"
- "<audience>/email", "<audience>/email_verified": used when the access
  token does not carry the standard claims
"""
import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header, HTTPException

from application.use_cases.users import IdentityClaims
from backend.settings import Settings, get_settings
from domain.models import UserRole

logger = logging.getLogger(__name__)

ALGORITHMS = ["RS256"]

_jwks_client: Optional[jwt.PyJWKClient] = None
_jwks_url: Optional[str] = None


def get_jwks_client(settings: Settings) -> Optional[jwt.PyJWKClient]:
    """Get or create the JWKS client for the configured Auth0 tenant."""
    global _jwks_client, _jwks_url
    if not settings.auth0_domain:
        return None
    if _jwks_client is None or _jwks_url != settings.auth0_jwks_url:
        _jwks_client = jwt.PyJWKClient(settings.auth0_jwks_url)
        _jwks_url = settings.auth0_jwks_url
    return _jwks_client


def _claim(payload: Dict[str, Any], audience: str, name: str) -> Any:
    if audience and f"{audience}/{name}" in payload:
        return payload[f"{audience}/{name}"]
    return payload.get(name)


def claims_from_payload(payload: Dict[str, Any], audience: str) -> IdentityClaims:
    """
    Map a verified token payload onto IdentityClaims.

    Raises:
        HTTPException: 401 if the subject is missing
    """
    subject = payload.get("sub")
    if not subject:
        raise HTTPException(status_code=401, detail="Token missing user ID")

    raw_permissions = _claim(payload, audience, "permissions")
    if not isinstance(raw_permissions, (list, tuple)):
        logger.warning(f"No permissions found in token for {subject}")
        raw_permissions = []
    permissions = frozenset(p for p in raw_permissions if isinstance(p, str))

    role = None
    raw_role = _claim(payload, audience, "role")
    if isinstance(raw_role, str):
        try:
            role = UserRole(raw_role.upper())
        except ValueError:
            logger.warning(f"Ignoring unknown role claim {raw_role!r} for {subject}")

    return IdentityClaims(
        subject=subject,
        email=_claim(payload, audience, "email"),
        email_verified=_claim(payload, audience, "email_verified") is True,
        nickname=payload.get("nickname"),
        preferred_username=payload.get("preferred_username"),
        given_name=payload.get("given_name"),
        family_name=payload.get("family_name"),
        name=payload.get("name"),
        role=role,
        permissions=permissions,
    )


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature, expiry, issuer and audience; return the payload."""
    jwks_client = get_jwks_client(settings)

    if not jwks_client:
        raise HTTPException(
            status_code=500,
            detail="JWT validation not configured (missing AUTH0_DOMAIN)",
        )

    try:
        signing_key = jwks_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=ALGORITHMS,
            audience=settings.auth0_audience or None,
            issuer=settings.auth0_issuer,
            options={"verify_aud": bool(settings.auth0_audience), "require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWKClientError as e:
        logger.warning(f"Signing key lookup failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token: signing key not found")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT: {e}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")


def validate_jwt(authorization: str, settings: Settings) -> IdentityClaims:
    """Validate an ``Authorization: Bearer`` header value."""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1].strip()
    payload = decode_token(token, settings)
    claims = claims_from_payload(payload, settings.auth0_audience)
    logger.debug(f"JWT validated for subject: {claims.subject}")
    return claims


def get_current_identity(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> IdentityClaims:
    """
    Authenticate via Auth0 bearer token.
    Returns the verified identity claims.

    Usage:
        @app.get("/protected")
        def protected_route(identity: IdentityClaims = Depends(get_current_identity)):
            return {"sub": identity.subject}
    """
    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Missing authentication. Provide Authorization header.",
        )
    return validate_jwt(authorization, settings)
