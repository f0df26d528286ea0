import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from remotetrail.core.logging_config import sanitize_log_data
from remotetrail.core.rate_limit import login_rate_limit
from remotetrail.core.security import ADMIN_ROLE, authenticate_admin, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ ADMIN LOGIN (OAUTH2 PASSWORD FLOW, WORKS WITH SWAGGER)
@router.post("/login", dependencies=[Depends(login_rate_limit)])
def login(form_data: OAuth2PasswordRequestForm = Depends()):
    # Swagger sends "username", but we treat it as email
    if not authenticate_admin(form_data.username, form_data.password):
        logger.warning(
            "Admin login failed: %s",
            sanitize_log_data({"username": form_data.username, "password": form_data.password}),
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token({"sub": form_data.username.strip().lower(), "role": ADMIN_ROLE})
    logger.info(f"Admin logged in: {form_data.username}")

    return {
        "access_token": token,
        "token_type": "bearer"
    }
