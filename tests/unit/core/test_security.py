"""Unit tests for src/core/security.py."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from pydantic import SecretStr

from src.core.config import AuthConfig
from src.core.exceptions import UnauthorizedError
from src.core.security import (
    create_access_token,
    decode_access_token,
    extract_bearer_token,
)


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(jwt_secret=SecretStr("unit-test-secret-0123456789abcdef"))


@pytest.mark.unit
class TestAccessTokens:
    """Issuing and verifying tokens."""

    def test_round_trip_returns_identity(self, auth_config: AuthConfig) -> None:
        token = create_access_token("11", auth_config)

        assert decode_access_token(token, auth_config) == "11"

    def test_token_expires_after_ttl(self, auth_config: AuthConfig) -> None:
        issued = datetime(2024, 1, 1, tzinfo=UTC)

        token = create_access_token("11", auth_config, now=issued)
        claims = jwt.decode(
            token,
            "unit-test-secret-0123456789abcdef",
            algorithms=["HS256"],
            options={"verify_exp": False},
        )

        assert claims["sub"] == "11"
        assert claims["exp"] - claims["iat"] == 24 * 3600

    def test_expired_token_is_rejected(self, auth_config: AuthConfig) -> None:
        issued = datetime.now(UTC) - timedelta(hours=25)
        token = create_access_token("11", auth_config, now=issued)

        with pytest.raises(UnauthorizedError, match="Token has expired"):
            decode_access_token(token, auth_config)

    def test_wrong_secret_is_rejected(self, auth_config: AuthConfig) -> None:
        other = AuthConfig(jwt_secret=SecretStr("someone-else-0123456789abcdefghij"))
        token = create_access_token("11", other)

        with pytest.raises(UnauthorizedError, match="Invalid token"):
            decode_access_token(token, auth_config)

    def test_garbage_is_rejected(self, auth_config: AuthConfig) -> None:
        with pytest.raises(UnauthorizedError, match="Invalid token"):
            decode_access_token("not-a-jwt", auth_config)

    def test_token_without_subject_is_rejected(self, auth_config: AuthConfig) -> None:
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(hours=1)},
            "unit-test-secret-0123456789abcdef",
            algorithm="HS256",
        )

        with pytest.raises(UnauthorizedError, match="Invalid token"):
            decode_access_token(token, auth_config)

    def test_empty_subject_is_rejected(self, auth_config: AuthConfig) -> None:
        token = jwt.encode(
            {"sub": "", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "unit-test-secret-0123456789abcdef",
            algorithm="HS256",
        )

        with pytest.raises(UnauthorizedError, match="Invalid user ID"):
            decode_access_token(token, auth_config)


@pytest.mark.unit
class TestExtractBearerToken:
    """Parsing the Authorization header."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc.def.ghi", "abc.def.ghi"),
            ("  Bearer   abc  ", "abc"),
            ("bearer abc.def.ghi", "abc.def.ghi"),
            ("abc.def.ghi", "abc.def.ghi"),
        ],
    )
    def test_extracts_token(self, header: str, expected: str) -> None:
        assert extract_bearer_token(header) == expected

    @pytest.mark.parametrize("header", [None, "", "   ", "Bearer ", "Bearer    "])
    def test_missing_token(self, header: str | None) -> None:
        with pytest.raises(UnauthorizedError, match="Missing token"):
            extract_bearer_token(header)
