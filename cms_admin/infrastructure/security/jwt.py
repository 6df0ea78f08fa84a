"""Bearer tokens carrying the caller id and materialised permission claims.

Tokens are issued elsewhere (sign-in is out of scope); this module issues tokens
for tooling and tests and decodes incoming ones into a CurrentUserContext.
"""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from cms_admin.core.config import get_settings
from cms_admin.core.constants import PERMISSIONS_CLAIM
from cms_admin.shared.context import CurrentUserContext


def create_access_token(
    subject: str,
    permissions: Iterable[str] = (),
    expires_delta: timedelta | None = None,
) -> str:
    """Encode a signed token with sub, permissions and exp.

    expires_delta defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": subject,
        PERMISSIONS_CLAIM: sorted(set(permissions)),
        "exp": datetime.now(UTC) + expires_delta,
    }
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a token. Requires exp and sub.

    Raises:
        ValueError: If the token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def context_from_token(token: str, ip_address: str | None = None) -> CurrentUserContext:
    """Build the caller context from a verified token. Raises ValueError like verify_token."""
    payload = verify_token(token)
    raw = payload.get(PERMISSIONS_CLAIM) or []
    if isinstance(raw, str):
        raw = [raw]
    permissions = [p for p in raw if isinstance(p, str)]
    return CurrentUserContext.authenticated(
        str(payload["sub"]), permissions, ip_address=ip_address
    )
