"""Issuing and verifying signed access tokens.

Tokens are HMAC-signed JWTs whose ``sub`` claim is the caller identity.
Verification returns that identity as an opaque string; nothing downstream
decodes or interprets it further.
"""

from datetime import UTC, datetime, timedelta

import jwt
from loguru import logger

from src.core.config import AuthConfig
from src.core.constants import BEARER_SCHEME
from src.core.exceptions import UnauthorizedError
from src.core.types import Identity

IDENTITY_CLAIM = "sub"


def create_access_token(
    identity: Identity,
    auth_config: AuthConfig,
    now: datetime | None = None,
) -> str:
    """Issue a signed token for ``identity``.

    Args:
        identity: The caller identifier to embed.
        auth_config: Secret, algorithm and lifetime to use.
        now: Issue time, defaults to the current UTC time.

    Returns:
        str: Encoded JWT.
    """
    issued_at = now or datetime.now(UTC)
    claims = {
        IDENTITY_CLAIM: identity,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=auth_config.token_ttl_hours),
    }
    return jwt.encode(
        claims,
        auth_config.jwt_secret.get_secret_value(),
        algorithm=auth_config.jwt_algorithm,
    )


def decode_access_token(token: str, auth_config: AuthConfig) -> Identity:
    """Verify ``token`` and return the identity it carries.

    Raises:
        UnauthorizedError: If the token is expired, tampered with, signed with
            another key, or has no usable identity claim.
    """
    try:
        claims = jwt.decode(
            token,
            auth_config.jwt_secret.get_secret_value(),
            algorithms=[auth_config.jwt_algorithm],
            options={"require": ["exp", IDENTITY_CLAIM]},
        )
    except jwt.ExpiredSignatureError as e:
        raise UnauthorizedError("Token has expired", cause=e) from e
    except jwt.InvalidTokenError as e:
        logger.debug("Rejected access token: {}", type(e).__name__)
        raise UnauthorizedError("Invalid token", cause=e) from e

    identity = claims.get(IDENTITY_CLAIM)
    if not isinstance(identity, str) or not identity:
        raise UnauthorizedError("Invalid user ID")
    return identity


def extract_bearer_token(authorization: str | None) -> str:
    """Pull the token out of an ``Authorization`` header value.

    The scheme is matched case-insensitively; a bare token without the
    ``Bearer`` scheme is accepted as well.

    Raises:
        UnauthorizedError: If the header is missing or carries no token.
    """
    value = authorization.strip() if authorization else ""
    scheme, _, credentials = value.partition(" ")
    token = credentials.strip() if scheme.lower() == BEARER_SCHEME else value

    if not token:
        raise UnauthorizedError("Missing token")
    return token
