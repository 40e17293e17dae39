import logging

from fastapi import APIRouter, HTTPException, Request, status

from schedule_server.core.config import settings
from schedule_server.core.limiter import limiter
from schedule_server.core.security import (
    create_access_token,
    create_refresh_token,
    verify_token,
)
from schedule_server.db import SessionDep
from schedule_server.schemas import RefreshTokenRequest, TokenPair, UserLogin
from schedule_server.services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenPair,
    summary="Login and obtain tokens",
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: UserLogin, session: SessionDep) -> TokenPair:
    user = UserService(session).authenticate(payload.login, payload.password)
    if user is None:
        logger.info(f"Failed login for {payload.login}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Incorrect username or password",
        )

    return TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh access token",
)
def refresh_tokens(payload: RefreshTokenRequest) -> TokenPair:
    try:
        refresh_payload = verify_token(payload.refresh_token, token_type="refresh")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        ) from None

    user_id = refresh_payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token payload",
        )

    return TokenPair(
        access_token=create_access_token(user_id),
        refresh_token=create_refresh_token(user_id),
    )
