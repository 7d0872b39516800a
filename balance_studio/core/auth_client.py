"""HTTP client for the hosted auth service.

Sign-in, sign-up, session refresh, sign-out and password recovery all happen
on the service; this module only forwards requests and normalises errors.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """The auth service rejected the request."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthUnavailableError(Exception):
    """The auth service could not be reached."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    for key in ("error_description", "msg", "message", "error"):
        value = body.get(key) if isinstance(body, dict) else None
        if value:
            return str(value)
    return response.reason_phrase


class AuthClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/auth/v1"
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self._api_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> Any:
        try:
            with httpx.Client(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = client.request(
                    method,
                    path,
                    json=json,
                    params=params,
                    headers=self._headers(access_token),
                )
        except httpx.HTTPError as exc:
            logger.exception("Auth service request failed", extra={"path": path})
            raise AuthUnavailableError("Auth service is unavailable") from exc
        if response.is_error:
            message = _error_message(response)
            logger.info(
                "Auth service rejected request",
                extra={"path": path, "status": response.status_code},
            )
            raise AuthError(message, status_code=response.status_code)
        if not response.content:
            return None
        return response.json()

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    def refresh_session(self, refresh_token: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    def sign_up(self, email: str, password: str, metadata: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata or {}},
        )

    def get_user(self, access_token: str) -> dict[str, Any]:
        return self._request("GET", "/user", access_token=access_token)

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/logout", access_token=access_token)

    def reset_password_for_email(self, email: str, redirect_to: str | None = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        self._request("POST", "/recover", json={"email": email}, params=params)


def get_auth_client() -> AuthClient:
    settings = get_settings()
    return AuthClient(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.auth_timeout_sec,
    )


__all__ = ["AuthClient", "AuthError", "AuthUnavailableError", "get_auth_client"]
