from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from app.core.security import Principal, decode_access_token, require_principal

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal | None:
    """Resolve the caller, or ``None`` when no credentials were sent.

    Missing credentials are left for the service layer to reject; a token
    that is present but unusable is rejected here.
    """
    # HTTPBearer also yields None for a non-Bearer scheme
    if credentials is None:
        return None

    try:
        user_id = decode_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        ) from None

    request.state.user_id = user_id
    return Principal(user_id=user_id)


def get_current_principal(
    principal: Principal | None = Depends(get_optional_principal),
) -> Principal:
    return require_principal(principal)
