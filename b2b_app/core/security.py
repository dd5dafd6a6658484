# b2b_app/core/security.py
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError

from b2b_app.core.config import settings
from b2b_app.schemas.session import SessionTokenData


def _shop_from_dest(dest: Optional[str]) -> Optional[str]:
    # "https://my-shop.myshopify.com" -> "my-shop.myshopify.com"
    if not dest:
        return None
    return dest.replace("https://", "").replace("http://", "").rstrip("/")


# Create Session Token (same claims App Bridge issues; used by tests and local tooling)
def create_session_token(
    shop: str,
    user_id: Optional[str] = None,
    expires_minutes: int = 1,
) -> str:
    now = datetime.utcnow()
    payload = {
        "iss": f"https://{shop}/admin",
        "dest": f"https://{shop}",
        "nbf": now,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    if settings.SHOPIFY_API_KEY:
        payload["aud"] = settings.SHOPIFY_API_KEY
    if user_id:
        payload["sub"] = user_id
    return jwt.encode(payload, settings.SHOPIFY_API_SECRET, algorithm=settings.ALGORITHM)


# Base decode
def _decode_raw(token: str):
    options = {"leeway": settings.SESSION_TOKEN_LEEWAY_SECONDS}
    if not settings.SHOPIFY_API_KEY:
        options["verify_aud"] = False
    try:
        return jwt.decode(
            token,
            settings.SHOPIFY_API_SECRET,
            algorithms=[settings.ALGORITHM],
            audience=settings.SHOPIFY_API_KEY or None,
            options=options,
        )
    except JWTError:
        return None


# Decode Session Token
def decode_session_token(token: str) -> SessionTokenData:
    payload = _decode_raw(token)
    if not payload:
        return SessionTokenData()

    shop = _shop_from_dest(payload.get("dest"))
    issuer_shop = _shop_from_dest((payload.get("iss") or "").replace("/admin", ""))
    # iss and dest must name the same shop
    if not shop or shop != issuer_shop:
        return SessionTokenData()
    return SessionTokenData(shop=shop, user_id=payload.get("sub"))
