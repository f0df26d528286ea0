from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from remotetrail.core import config
from remotetrail.core.security import ADMIN_ROLE

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_admin(token: str = Depends(oauth2_scheme)) -> str:
    """Get the admin email from a JWT token, rejecting anything else."""
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise _credentials_exception()

    email = payload.get("sub")
    if email is None or payload.get("role") != ADMIN_ROLE:
        raise _credentials_exception()

    if email.lower() != config.ADMIN_EMAIL.lower():
        raise _credentials_exception()

    return email
