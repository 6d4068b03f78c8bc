# client/hooddeals/core/security.py

import time
from typing import Optional

import jwt

from hooddeals.core.config_loader import settings


# ---------------------------------------------------------------------------
# BEARER HEADER
# ---------------------------------------------------------------------------
def bearer_header(token: Optional[str]) -> dict:
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# TOKEN CLAIMS
# ---------------------------------------------------------------------------
def read_token_claims(token: str) -> Optional[dict]:
    """
    Claims of a JWT issued by the backend. The signing key lives server-side,
    so the signature is not verified here. Returns None for opaque tokens.
    """
    try:
        return jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
            algorithms=["HS256", "HS384", "HS512", "RS256"],
        )
    except jwt.PyJWTError:
        return None


def is_token_expired(token: Optional[str], now: Optional[float] = None) -> bool:
    if not token:
        return False

    claims = read_token_claims(token)
    if not claims or "exp" not in claims:
        return False

    try:
        exp = float(claims["exp"])
    except (TypeError, ValueError):
        return False

    now = time.time() if now is None else now
    return exp + settings.TOKEN_EXPIRY_LEEWAY_SECONDS < now
