"""HTTP client for the storefront API."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import requests
import structlog

from storefront.errors import ApiError

if TYPE_CHECKING:
    from requests import Response

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


def default_api_url() -> str:
    return os.environ.get("SASYA_API_URL", DEFAULT_API_URL).rstrip("/")


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Handles FastAPI schema errors (``{"detail": [...]}``) and domain errors
    (``{"error": "msg"}`` or ``{"error": {"field": ["msg"]}}``).
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            parts = []
            for field, messages in error.items():
                if isinstance(messages, list):
                    messages = ", ".join(str(m) for m in messages)
                parts.append(f"{field}: {messages}")
            return " | ".join(parts)
        return str(error)

    return str(body)[:300]


class StorefrontClient:
    """Thin wrapper over the storefront's JSON endpoints.

    ``session`` may be any object with a requests-style ``request`` method,
    which lets tests drive the API in-process.
    """

    def __init__(self, base_url: str | None = None, session=None, token: str | None = None, timeout: float = 10.0):
        self.base_url = (base_url or default_api_url()).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.token = token
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _headers(self) -> dict:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("api_unreachable", method=method, path=path, error=str(exc))
            raise ApiError(None, f"Network error: {exc}") from exc

        if response.status_code >= 400:
            detail = extract_error_detail(response)
            logger.info("api_error", method=method, path=path, status=response.status_code, detail=detail)
            raise ApiError(response.status_code, detail)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def register(self, email: str, password: str, display_name: str | None = None) -> str:
        body = self._request(
            "POST",
            "/auth/register",
            json={"email": email, "password": password, "display_name": display_name},
        )
        return body["user_id"]

    def sign_in(self, email: str, password: str) -> dict:
        session = self._request("POST", "/auth/sign-in", json={"email": email, "password": password})
        self.token = session["access_token"]
        return session

    def sign_out(self) -> None:
        if self.token:
            self._request("POST", "/auth/sign-out")
        self.token = None

    def me(self) -> dict | None:
        return self._request("GET", "/auth/me")["user"]

    def list_users(self, search: str | None = None) -> list[dict]:
        params = {"search": search} if search else None
        return self._request("GET", "/users", params=params)

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def place_order(self, payload: dict) -> dict:
        return self._request("POST", "/orders", json=payload)

    def list_orders(self, user_id=None, tracking_number=None, status=None) -> list[dict]:
        params = {
            key: value
            for key, value in (("user_id", user_id), ("tracking_number", tracking_number), ("status", status))
            if value
        }
        return self._request("GET", "/orders", params=params or None)

    def get_order(self, order_id: str) -> dict:
        return self._request("GET", f"/orders/{order_id}")

    def update_order(self, order_id: str, **changes) -> dict:
        return self._request("PATCH", "/orders", json={"id": order_id, **changes})

    def delete_order(self, order_id: str) -> None:
        self._request("DELETE", "/orders", params={"id": order_id})

    def track_order(self, tracking_number: str, phone: str) -> dict:
        body = self._request("POST", "/track", json={"tracking_number": tracking_number, "phone": phone})
        return body["order"]
