from typing import Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

import config
from booking_schemas import CamelModel
from errors import AuthError
from logger_config import get_logger

logger = get_logger(__name__)


class User(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[Union[str, int]] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None


class SignUpProfile(CamelModel):
    first_name: str
    last_name: str
    email: str
    password: str = Field(repr=False)
    picture: Optional[str] = None


class AuthSession(BaseModel):
    token: str = Field(repr=False)
    user: User


def _server_error(response) -> Optional[str]:
    try:
        return (response.json() or {}).get("error")
    except ValueError:
        return None


class AuthClient:
    """
    Bearer-token auth against the app backend. The token is persisted through
    a token store exposing secure_get / secure_set / secure_clear.
    """

    def __init__(self, token_store, base_url: str = None, timeout: float = None, session=None,
                 token_key: str = None):
        self.token_store = token_store
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.token_key = token_key or config.TOKEN_KEY
        self.http = session or requests.Session()

    def _post(self, path: str, body: dict, default_error: str) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.http.post(url, json=body, headers={"Content-Type": "application/json"},
                                      timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = (_server_error(exc.response) if exc.response is not None else None) or default_error
            logger.warning("Auth request rejected", path=path, status=status, error=message)
            raise AuthError(message, status_code=status) from exc
        except (requests.RequestException, ValueError) as exc:
            logger.error("Auth request failed", path=path, error=str(exc))
            raise AuthError(default_error) from exc

    def _start_session(self, data: dict) -> AuthSession:
        token = data.get("token")
        if not token:
            raise AuthError("Authentication response did not include a token")
        session = AuthSession(token=token, user=User.model_validate(data.get("user") or {}))
        self.token_store.secure_set(self.token_key, token)
        logger.info("Signed in", user_id=session.user.id)
        return session

    def login(self, email: str, password: str) -> AuthSession:
        data = self._post(
            "/auth/login",
            {"email": email, "password": password},
            "Login failed. Please try again.",
        )
        return self._start_session(data)

    def sign_up(self, profile: Union[SignUpProfile, dict]) -> AuthSession:
        if not isinstance(profile, SignUpProfile):
            profile = SignUpProfile.model_validate(profile)
        data = self._post(
            "/auth/signup",
            profile.model_dump(by_alias=True, exclude_none=True),
            "Signup failed. Please try again.",
        )
        return self._start_session(data)

    def get_current_session(self) -> Optional[AuthSession]:
        """
        Restore the session from the stored token. A token the server refuses
        is cleared; a network failure leaves it in place.
        """
        token = self.token_store.secure_get(self.token_key)
        if not token:
            return None

        url = f"{self.base_url}/users/currentUser"
        try:
            response = self.http.get(url, headers={"Authorization": f"Bearer {token}"}, timeout=self.timeout)
            response.raise_for_status()
            user = User.model_validate(response.json())
        except requests.HTTPError as exc:
            logger.warning("Session expired. Please login again.",
                           status=exc.response.status_code if exc.response is not None else None)
            self.token_store.secure_clear(self.token_key)
            return None
        except (requests.RequestException, ValueError) as exc:
            logger.error("Current user lookup failed", error=str(exc))
            return None

        return AuthSession(token=token, user=user)

    def sign_out(self) -> None:
        self.token_store.secure_clear(self.token_key)
        logger.info("Signed out")
