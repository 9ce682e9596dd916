"""Adaptador de autenticación (`/api/v1/auth`).

El backend devuelve el token en sitios distintos según el endpoint:
- login: `accessToken` en la raíz o en `data`
- register: `data.accessToken` o `token` en la raíz
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.envelope import first_match
from core.interfaces.transport import Transport
from core.session import SessionState


def _get(payload: Any, *keys: str) -> Any:
    current = payload
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current if isinstance(current, str) else None


def extract_login_token(payload: Any) -> str | None:
    return first_match(
        payload,
        (
            lambda p: _get(p, "accessToken"),
            lambda p: _get(p, "data", "accessToken"),
        ),
    )


def extract_signup_token(payload: Any) -> str | None:
    return first_match(
        payload,
        (
            lambda p: _get(p, "data", "accessToken"),
            lambda p: _get(p, "token"),
        ),
    )


class AuthService(BackendService):
    prefix = "/api/v1/auth"

    def __init__(self, transport: Transport, session: SessionState) -> None:
        super().__init__(transport)
        self._session = session

    async def login(self, email: str, password: str) -> Any:
        response = await self._post(
            "login",
            {"email": email, "password": password},
            required=("email", "password"),
            untrimmed=("password",),
        )
        token = extract_login_token(response)
        if token:
            self._session.set_token(token)
        return response

    async def send_otp(self, email: str) -> Any:
        return await self._post("send-otp", {"email": email}, required=("email",))

    async def signup(self, *, phone: str, email: str, password: str, role: str, otp: str) -> Any:
        response = await self._post(
            "register",
            {"phone": phone, "email": email, "password": password, "role": role, "otp": otp},
            required=("email", "password", "otp"),
            untrimmed=("password",),
        )
        token = extract_signup_token(response)
        if token:
            self._session.set_token(token)
        return response

    async def send_forgot_password_otp(self, email: str) -> Any:
        return await self._post("forgot-password", {"email": email}, required=("email",))

    async def verify_otp(self, email: str, otp: str) -> Any:
        return await self._post("verify-otp", {"email": email, "otp": otp}, required=("email", "otp"))

    async def reset_password(self, email: str, otp: str, new_password: str) -> Any:
        return await self._post(
            "reset-password",
            {"email": email, "otp": otp, "newPassword": new_password},
            required=("email", "otp", "newPassword"),
            untrimmed=("newPassword",),
        )

    def logout(self) -> None:
        self._session.clear()

    def get_token(self) -> str | None:
        return self._session.token

    def set_token(self, token: str | None) -> None:
        self._session.set_token(token)
