"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, autenticación y clasificación de errores.
- Es el único punto de I/O de red: los adaptadores de dominio solo ven
  `RequestDescriptor` -> payload | `ApiError`.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import DEFAULT_ERROR_MESSAGE, HttpError, TransportError
from core.interfaces.transport import RequestDescriptor
from core.logger import get_logger
from core.session import SessionState

logger = get_logger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/plain, */*",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers/base URL para todas las llamadas.
    - `transport` permite sustituir la red por un stub en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": DEFAULT_HEADERS["Accept"],
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def decode_body(response: httpx.Response) -> Any:
    """Decodifica el cuerpo sin lanzar nunca por JSON inválido.

    - 204 o cuerpo vacío -> `{}`
    - JSON válido -> el valor decodificado
    - texto no JSON -> `{"message": texto}` (algunos endpoints devuelven texto plano)
    """

    if response.status_code == 204:
        return {}
    raw = response.text
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return {"message": raw}


def _error_field(payload: Any, key: str) -> Any:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get(key)
    if value:
        return value
    nested = payload.get("error")
    if isinstance(nested, Mapping):
        return nested.get(key) or None
    return None


def build_http_error(status: int, payload: Any) -> HttpError:
    message = _error_field(payload, "message")
    code = _error_field(payload, "code")
    return HttpError(
        str(message) if message else DEFAULT_ERROR_MESSAGE,
        code=str(code) if code is not None else None,
        status=status,
    )


class TransportClient:
    """Cliente HTTP del backend (implementa `core.interfaces.transport.Transport`).

    - Inyecta `Authorization: Bearer <token>` solo si la sesión tiene token
      (leído una única vez por request).
    - No reintenta ni cachea.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        session: SessionState | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._session = session or SessionState(self._settings.access_token)
        self._client = client or build_async_client(self._settings, transport=transport)

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def base_url(self) -> str:
        return self._settings.api_base_url

    @property
    def host(self) -> str:
        return self._settings.api_host

    def _build_headers(self, descriptor: RequestDescriptor, token: str | None) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if descriptor.is_multipart:
            # httpx genera el Content-Type multipart con su boundary.
            headers.pop("Content-Type")
        if token:
            headers["Authorization"] = f"Bearer {token}"
        headers.update(descriptor.headers)
        return headers

    async def request(self, descriptor: RequestDescriptor) -> Any:
        token = self._session.token
        headers = self._build_headers(descriptor, token)
        params = (
            {k: v for k, v in descriptor.params.items() if v is not None}
            if descriptor.params
            else None
        )

        kwargs: dict[str, Any] = {"headers": headers, "params": params}
        if descriptor.upload is not None:
            upload = descriptor.upload
            kwargs["files"] = {
                upload.field_name: (upload.file_name, upload.path.read_bytes(), upload.content_type)
            }
        elif descriptor.body is not None:
            kwargs["json"] = descriptor.body

        logger.debug(
            "API request %s %s (token=%s)",
            descriptor.method,
            descriptor.path,
            "present" if token else "missing",
        )

        try:
            response = await self._client.request(descriptor.method, descriptor.path, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("API unreachable %s %s: %s", descriptor.method, descriptor.path, exc)
            raise TransportError(
                f"Cannot connect to server at {self.host}. "
                "Please check your internet connection or API URL."
            ) from exc

        payload = decode_body(response)
        if not response.is_success:
            error = build_http_error(response.status_code, payload)
            logger.warning("API error %s %s -> %s", descriptor.method, descriptor.path, error)
            raise error

        logger.debug("API response %s %s -> %s", descriptor.method, descriptor.path, response.status_code)
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TransportClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
