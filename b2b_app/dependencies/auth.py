from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from b2b_app.core.security import decode_session_token
from b2b_app.schemas.session import SessionTokenData

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_shop(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionTokenData:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data = decode_session_token(credentials.credentials)
    if not token_data.shop:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate session token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token_data


def require_admin(session: SessionTokenData = Depends(get_current_shop)) -> SessionTokenData:
    return session
