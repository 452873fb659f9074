"""Bearer-token authentication against the identity provider, and capability dependencies.

Access tokens are JWTs signed by the identity provider. They are checked
locally against its published JWKS; the service never calls the provider
per request. Settings:

- IDENTITY_PROVIDER_URL: provider base URL (required).
- JWT_AUDIENCE: the audience tokens must be minted for (required).
- JWT_ISSUER: expected `iss`, defaulting to the provider URL.
- JWKS_URL: key set location, defaulting to <provider>/.well-known/jwks.json.
- JWT_ALGORITHMS: comma-separated accepted algorithms, default ES256,RS256.
"""

import os
import time
import logging
from typing import Callable, Coroutine, Optional, Dict, Any
from uuid import UUID

import jwt
from jwt import PyJWKClient
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from knowledge.access import require_capability, SHARED_RESOURCE_CAPABILITY
from knowledge.models.capabilities import Capability
from knowledge.models.user import User
from knowledge.db.users import get_or_create_user

logger = logging.getLogger(__name__)
bearer_scheme = HTTPBearer(auto_error=False)

KEY_SET_TTL_SECONDS = 3600
DEFAULT_JWT_ALGORITHMS = "ES256,RS256"
REQUIRED_CLAIMS = ["exp", "iss", "sub", "aud"]

_jwks_client: Optional[PyJWKClient] = None
_jwks_cache_time: float = 0


def get_identity_provider_url() -> str:
    return os.getenv("IDENTITY_PROVIDER_URL", "http://localhost:8080").rstrip("/")


def get_jwt_issuer() -> str:
    return os.getenv("JWT_ISSUER") or get_identity_provider_url()


def get_jwks_url() -> str:
    return os.getenv("JWKS_URL") or f"{get_identity_provider_url()}/.well-known/jwks.json"


def get_jwt_audience() -> str:
    # Checked at startup by env_loader.
    return os.environ["JWT_AUDIENCE"]


def get_jwt_algorithms() -> list[str]:
    raw = os.getenv("JWT_ALGORITHMS", DEFAULT_JWT_ALGORITHMS)
    return [alg.strip() for alg in raw.split(",") if alg.strip()]


def get_jwks_client() -> PyJWKClient:
    """Get the key-set client, rebuilding it once its TTL has passed."""
    global _jwks_client, _jwks_cache_time

    now = time.time()
    if _jwks_client is None or (now - _jwks_cache_time) > KEY_SET_TTL_SECONDS:
        jwks_url = get_jwks_url()
        _jwks_client = PyJWKClient(jwks_url, cache_keys=True, lifespan=KEY_SET_TTL_SECONDS)
        _jwks_cache_time = now
        logger.info(f"Loaded signing keys from {jwks_url}")

    return _jwks_client


def validate_jwt_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a bearer token's signature, issuer, audience and expiry.

    Returns the decoded claims, or None if the token is not acceptable.
    """
    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=get_jwt_algorithms(),
            issuer=get_jwt_issuer(),
            audience=get_jwt_audience(),
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired access token")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected access token: {e}")
        return None
    except jwt.PyJWKClientError as e:
        logger.error(f"Could not fetch signing key: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the caller from their bearer token.

    The first request from a new subject creates their user record as a viewer.
    Later requests refresh the stored email and name from the token.

    Raises:
        HTTPException 401 if the token is missing, invalid or lacks a usable `sub`.
    """
    if not credentials:
        raise _unauthorized("Missing authorization header")

    claims = validate_jwt_token(credentials.credentials)
    if not claims:
        raise _unauthorized("Invalid or expired token")

    user_id = _subject_id(claims)
    full_name = claims.get("name") or claims.get("full_name")
    return get_or_create_user(user_id, claims.get("email"), full_name)


def _subject_id(claims: Dict[str, Any]) -> UUID:
    """The `sub` claim is the user's id and must be a UUID."""
    sub = claims.get("sub")
    if not sub:
        logger.error(f"Access token without sub claim: {claims}")
        raise _unauthorized("Token missing required claims")
    try:
        return UUID(sub)
    except ValueError:
        logger.error(f"Access token sub is not a UUID: {sub}")
        raise _unauthorized("Invalid token claims")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require(
    capability: Capability,
) -> Callable[..., Coroutine[Any, Any, User]]:
    """Dependency factory: require the current user's role to grant `capability`.

    Denials raise AuthorizationDenied, which the app turns into a 403.
    """

    async def _require(user: User = Depends(get_current_user)) -> User:
        require_capability(user, capability)
        return user

    _require.__name__ = f"require_{capability}"
    return _require


require_reader = require("can_read")
require_uploader = require("can_upload")
require_editor = require("can_edit")
require_deleter = require("can_delete")
require_user_manager = require("can_manage_users")
require_shared_resource_editor = require(SHARED_RESOURCE_CAPABILITY)
