"""
Backoffice API access: bearer-token session plus the request wrapper
every admin screen goes through.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import httpx

from .config import ClientConfig

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error occurred"


def normalize_error_message(raw: Any) -> str:
    """Validation errors arrive as a list of messages; show them as one line."""
    if isinstance(raw, (list, tuple)):
        return ". ".join(str(item) for item in raw)
    if isinstance(raw, str) and raw:
        return raw
    return DEFAULT_ERROR_MESSAGE


def error_from_response(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    return {
        "statusCode": response.status_code,
        "message": normalize_error_message(body.get("message") or response.reason_phrase),
        "error": body.get("error") or "Unknown error",
    }


class AuthSession:
    """Holds the access token and the signed-in user."""

    def __init__(self):
        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and self.user is not None

    def sign_in(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


class AdminApi:
    """
    Admin requests with shared loading/error state.

    ``request`` returns the decoded body or None. On failure ``error``
    holds ``{statusCode, message, error}``; a 401 also drops the session
    token.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[AuthSession] = None,
        http: Optional[httpx.Client] = None,
        name: str = "useApi",
    ):
        self.config = config or ClientConfig.from_env()
        self.session = session or AuthSession()
        self.http = http or httpx.Client(timeout=self.config.timeout)
        self.name = name
        self.loading = False
        self.error: Optional[Dict[str, Any]] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def clear_error(self) -> None:
        self.error = None

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Sequence[Tuple[str, Tuple[str, bytes, str]]]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        self.loading = True
        self.error = None
        url = f"{self.config.api_base}{path}"

        try:
            response = self.http.request(
                method,
                url,
                json=json,
                data=data,
                files=files,
                params=params,
                headers=self.session.headers(),
                timeout=self.config.timeout,
            )
        except httpx.HTTPError as exc:
            logger.error("[%s] Request to %s failed: %s", self.name, url, exc)
            self.error = {
                "statusCode": 500,
                "message": normalize_error_message(str(exc)),
                "error": "Unknown error",
            }
            return None
        finally:
            self.loading = False

        if response.is_error:
            if response.status_code == 401:
                logger.error("[%s] Unauthorized - token invalid/expired", self.name)
                self.session.clear()
            self.error = error_from_response(response)
            return None

        if response.status_code == 204 or not response.content:
            return True
        return response.json()

    def get(self, path: str, **params: Any) -> Any:
        return self.request("GET", path, params=params or None)

    def post(self, path: str, payload: Any = None) -> Any:
        return self.request("POST", path, json=payload)

    def patch(self, path: str, payload: Any = None) -> Any:
        return self.request("PATCH", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload(self, method: str, path: str, *, fields: Mapping[str, Any], files) -> Any:
        """Multipart request; the client sets the boundary header itself."""
        return self.request(method, path, data=fields, files=files)

    # -------------------------------------------------
    # Auth
    # -------------------------------------------------
    def login(self, username: str, password: str) -> bool:
        result = self.post("/auth/login", {"username": username, "password": password})
        if not result:
            return False
        self.session.sign_in(result["access_token"], result["user"])
        return True

    def logout(self) -> None:
        self.session.clear()

    def fetch_profile(self) -> Optional[Dict[str, Any]]:
        profile = self.get("/auth/profile")
        if profile:
            self.session.user = profile
        return profile

    def update_credentials(
        self,
        current_password: str,
        *,
        username: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        payload = {"currentPassword": current_password}
        if username:
            payload["username"] = username
        if new_password:
            payload["newPassword"] = new_password

        result = self.patch("/auth/credentials", payload)
        if not result:
            return None
        self.session.user = result["user"]
        return result["user"]
