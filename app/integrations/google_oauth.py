# =========================================================
# GOOGLE OAUTH2 / OIDC CLIENT
# - Builds the consent URL
# - Exchanges the authorization code for tokens
# - Verifies the ID token against Google's published keys
# - Reads the user's profile (email, name)
# =========================================================

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import requests
from jose import jwt, JWTError

from app.core.config import settings
from app.core.errors import AppError, ErrorKind, bad_request
from app.schemas.user import GoogleUserInfo

logger = logging.getLogger("app.integrations.google")

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_ISSUERS = ("https://accounts.google.com", "accounts.google.com")

SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]

REQUEST_TIMEOUT = 10


@dataclass
class GoogleToken:
    access_token: str
    id_token: str


class GoogleOAuthClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        http: requests.Session | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_url = redirect_url
        self.http = http or requests.Session()

    @classmethod
    def from_settings(cls):
        return cls(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            redirect_url=settings.GOOGLE_REDIRECT_URL,
        )

    def get_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_url,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    def exchange(self, code: str) -> GoogleToken:
        payload = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_url,
            "grant_type": "authorization_code",
        }

        data = self._request("POST", GOOGLE_TOKEN_URL, data=payload)

        if "access_token" not in data or "id_token" not in data:
            logger.error(f"Google token response is missing tokens: {list(data)}")
            raise bad_request("Invalid authorization code")

        return GoogleToken(access_token=data["access_token"], id_token=data["id_token"])

    def verify_id_token(self, id_token: str, access_token: str | None = None) -> dict:
        jwks = self._request("GET", GOOGLE_CERTS_URL)

        try:
            return jwt.decode(
                id_token,
                jwks,
                algorithms=["RS256"],
                audience=self.client_id,
                issuer=GOOGLE_ISSUERS,
                access_token=access_token,
            )
        except JWTError as exc:
            logger.warning(f"Google ID token rejected: {exc}")
            raise AppError(ErrorKind.UNAUTHORIZED, "Invalid Google ID token") from exc

    def get_user_info(self, access_token: str) -> GoogleUserInfo:
        data = self._request(
            "GET",
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return GoogleUserInfo.model_validate(data)

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = self.http.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Google connection error: {str(e)}")
            raise AppError(ErrorKind.INTERNAL, "Unable to connect to identity provider") from e

        if response.status_code >= 400:
            logger.error(
                f"Google request failed. Status: {response.status_code}, Body: {response.text}"
            )
            raise bad_request("Google sign-in failed")

        try:
            return response.json()
        except ValueError:
            logger.error("Google returned invalid JSON")
            raise AppError(ErrorKind.INTERNAL, "Invalid response from identity provider")
