from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from app.core import response
from app.core.auth import get_current_user_id
from app.core.errors import bad_request
from app.core.rate_limiter import limiter
from app.dependencies import get_user_service
from app.schemas.user import UserCreate, UserLogin
from app.services.users import UserService

router = APIRouter(tags=["Authentication"])


# ---------------- REGISTER ----------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
def register(
    request: Request,
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    return response.success(service.register(user_data))


# ---------------- LOGIN (TOKEN-BASED) ----------------
@router.post("/login")
@limiter.limit("5/minute")
def login(
    request: Request,
    credentials: UserLogin,
    service: UserService = Depends(get_user_service),
):
    return response.success(service.login(credentials))


# ---------------- PROFILE ----------------
@router.get("/profile")
def profile(
    user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return response.success(service.profile(user_id))


@router.get("/profile/{user_id}")
def profile_by_user_id(
    user_id: UUID,
    _: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return response.success(service.profile(str(user_id)))


# ---------------- GOOGLE SIGN-IN ----------------
@router.get("/oauth/google/url")
def oauth_google_url(
    state: str = "/",
    service: UserService = Depends(get_user_service),
):
    return RedirectResponse(
        service.get_google_url(state),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@router.get("/signin/callback")
def signin_callback(
    code: str | None = None,
    state: str | None = None,
    service: UserService = Depends(get_user_service),
):
    if not code:
        raise bad_request("Invalid request")

    return response.success(service.sign_in_with_google(code))
