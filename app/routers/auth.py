from fastapi import APIRouter, Depends, Response, status
from loguru import logger

from app import settings
from app.deps import CurrentUser, get_optional_user, get_session_token
from app.schemas import (
    SessionUser,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)
from app.services.auth import auth_service
from app.sessions import create_session, delete_session

router = APIRouter(prefix="/rpc", tags=["auth"])

# Plain HTTP endpoints the browser client posts to directly
http_router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE,
        value=token,
        max_age=settings.SESSION_TTL,
        httponly=True,
        samesite="lax",
        secure=settings.ENV == "production",
    )


@router.post(
    "/auth.signUp",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(payload: SignUpRequest) -> SignUpResponse:
    user = await auth_service.sign_up(payload)
    return SignUpResponse(user=user)


@router.post("/auth.signIn", response_model=SignInResponse)
async def sign_in(payload: SignInRequest, response: Response) -> SignInResponse:
    """Verify credentials, open a session and hand its token back as a cookie."""
    user, subdomain = await auth_service.sign_in(payload)

    session_user = CurrentUser(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        hotel_id=user.hotel_id,
        is_onboarded=user.is_onboarded,
    )
    token = await create_session(session_user.to_session())
    _set_session_cookie(response, token)

    logger.info("User {} signed in", user.id)
    return SignInResponse(user=SessionUser.model_validate(user), subdomain=subdomain)


@router.get("/auth.getSession", response_model=SessionUser | None)
async def get_session(
    current_user: CurrentUser | None = Depends(get_optional_user),
) -> SessionUser | None:
    if current_user is None:
        return None
    return SessionUser(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        role=current_user.role,
        hotel_id=current_user.hotel_id,
        is_onboarded=current_user.is_onboarded,
    )


@http_router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    response: Response,
    token: str | None = Depends(get_session_token),
) -> None:
    if token:
        await delete_session(token)
    response.delete_cookie(settings.SESSION_COOKIE)
