"""
HTTP client for the Gift Planner REST API.
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

from gift_planner.config import settings
from gift_planner.store.storage import KeyValueStorage

logger = logging.getLogger(__name__)

AUTH_TOKEN_KEY = "gift-planner-auth-token"


class ApiError(RuntimeError):
    """Raised for non-2xx responses and transport failures; the message is safe to show to users."""

    def __init__(self, message: str, status_code: Optional[int] = None, original: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original = original


class ApiResponseParseError(ApiError):
    """Raised when a successful response does not carry valid JSON."""


def _error_message(response: requests.Response) -> str:
    fallback = f"HTTP {response.status_code}: {response.reason}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        # Gin-style {"error": ...} first, then FastAPI's {"detail": ...}
        message = body.get("error") or body.get("detail")
        if isinstance(message, str) and message:
            return message
        if message:
            return json.dumps(message)
    return "API request failed"


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        storage: Optional[KeyValueStorage] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.storage = storage
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.auth_token: Optional[str] = storage.get_item(AUTH_TOKEN_KEY) if storage is not None else None

    def set_auth_token(self, token: Optional[str]) -> None:
        self.auth_token = token
        if self.storage is not None:
            if token:
                self.storage.set_item(AUTH_TOKEN_KEY, token)
            else:
                self.storage.remove_item(AUTH_TOKEN_KEY)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def request(self, method: str, endpoint: str, data: Any = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        kwargs: Dict[str, Any] = {"headers": self._headers(), "timeout": self.timeout}
        if data is not None:
            kwargs["data"] = json.dumps(data)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Request to {endpoint} failed: {e}", original=e) from e

        if not response.ok:
            raise ApiError(_error_message(response), status_code=response.status_code)

        if response.status_code == 204 or response.headers.get("content-length") == "0" or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseParseError(
                f"Invalid JSON in response from {endpoint}", status_code=response.status_code, original=e
            ) from e

    def get(self, endpoint: str) -> Any:
        return self.request("GET", endpoint)

    def post(self, endpoint: str, data: Any = None) -> Any:
        return self.request("POST", endpoint, data)

    def put(self, endpoint: str, data: Any) -> Any:
        return self.request("PUT", endpoint, data)

    def patch(self, endpoint: str, data: Any) -> Any:
        return self.request("PATCH", endpoint, data)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)
