# backend/tradelink/core/auth.py

import jwt
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from tradelink.core.config import settings

security = HTTPBearer()


# ------------------------------------------------
# BEARER TOKEN VERIFICATION
# ------------------------------------------------
def decode_token(token: str) -> dict:
    """Decode a backend-issued HS256 JWT carrying ``sub``, ``role`` and ``email``."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Token has no subject")

    return payload


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    return decode_token(credentials.credentials)


# ------------------------------------------------
# ROLE GUARD
# ------------------------------------------------
def require_roles(*roles: str):
    """
    Dependency factory enforcing that the caller's token role is one of ``roles``.

        @router.delete("/{id}", dependencies=[Depends(require_roles("ADMIN"))])
    """

    async def wrapper(user=Depends(get_current_user)):
        role = user.get("role")
        if role not in roles:
            raise HTTPException(
                403,
                f"Permission denied: requires one of {', '.join(roles)}",
            )
        return user

    return wrapper
