# =========================================================
# CREDENTIAL SERVICE
#
# - Register: bcrypt hash, unique email enforced by the database
# - Login: one generic message for unknown email and bad password
# - Google sign-in: existing accounts only, no auto-provisioning
# =========================================================

import logging

from app.core.errors import bad_request, not_found, unauthorized
from app.core.hashing import dummy_verify, hash_password, verify_password
from app.core.jwt import create_access_token
from app.database import transaction
from app.integrations.google_oauth import GoogleOAuthClient
from app.repositories.users import UserRecord, UserRepository
from app.schemas.user import (
    GoogleUserInfo,
    LoginResponse,
    ProfileResponse,
    RegisterResponse,
    UserCreate,
    UserLogin,
)

INVALID_CREDENTIALS = "Invalid email or password"


class UserService:
    def __init__(
        self,
        repo: UserRepository,
        logger: logging.Logger,
        oauth: GoogleOAuthClient | None = None,
    ):
        self.repo = repo
        self.logger = logger
        self.oauth = oauth

    def _issue_token(self, user: UserRecord) -> LoginResponse:
        token = create_access_token(data={"sub": user.id, "role": user.role})
        return LoginResponse(token=token)

    def register(self, data: UserCreate) -> RegisterResponse:
        password_hash = hash_password(data.password)

        with transaction(self.repo.db):
            user_id = self.repo.register(data.email, data.name, password_hash)

        self.logger.info(f"User {user_id} registered")

        return RegisterResponse(id=user_id, name=data.name)

    def login(self, data: UserLogin) -> LoginResponse:
        user = self.repo.find_by_email(data.email)

        if user is None:
            dummy_verify()
            raise unauthorized(INVALID_CREDENTIALS)

        if not verify_password(data.password, user.password_hash):
            self.logger.warning(f"service::login - Password mismatch for user {user.id}")
            raise unauthorized(INVALID_CREDENTIALS)

        return self._issue_token(user)

    def profile(self, user_id: str) -> ProfileResponse:
        user = self.repo.find_by_id(user_id)

        if user is None:
            raise not_found("User not found")

        return ProfileResponse(id=user.id, name=user.name, email=user.email)

    def get_google_url(self, state: str) -> str:
        return self._require_oauth().get_url(state)

    def login_google(self, info: GoogleUserInfo) -> LoginResponse:
        user = self.repo.find_by_email(info.email)

        if user is None:
            # Accounts are not created from Google sign-in
            self.logger.info(f"service::login_google - {info.email} is not registered")
            raise not_found("Email not registered")

        return self._issue_token(user)

    def sign_in_with_google(self, code: str) -> LoginResponse:
        oauth = self._require_oauth()

        token = oauth.exchange(code)
        oauth.verify_id_token(token.id_token, token.access_token)
        info = oauth.get_user_info(token.access_token)

        if not info.verified_email:
            raise bad_request("Google account email is not verified")

        return self.login_google(info)

    def _require_oauth(self) -> GoogleOAuthClient:
        if self.oauth is None:
            raise RuntimeError("Google OAuth client is not configured")
        return self.oauth
