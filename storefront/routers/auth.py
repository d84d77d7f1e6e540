# storefront/routers/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from storefront.core.auth import login_session, logout_session
from storefront.core.config import Settings, get_app_settings
from storefront.database import get_session
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.content import MessageResponse
from storefront.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead
from storefront.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])

repo = UserRepository()
service = AuthService(repo)


@router.post(
    "/auth/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """
    Create an account and sign it in.

    - Returns a bearer token and also opens a cookie session.
    """
    user, token = service.register(session, payload, settings)
    login_session(request, user)
    return AuthResponse(
        message="Registration successful",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/auth/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    user, token = service.login(session, payload, settings)
    login_session(request, user)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
@router.post("/auth/logout", response_model=MessageResponse, include_in_schema=False)
def logout(request: Request):
    """
    Clear the cookie session.

    Bearer tokens are stateless; the client forgets its copy.
    """
    logout_session(request)
    return MessageResponse(message="Logged out")
