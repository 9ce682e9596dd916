"""Estado de sesión (token en memoria).

Por qué un objeto y no una variable global:
- Se inyecta en el `TransportClient`, lo que permite sustituirlo en tests.
- `set_token` es el único punto de escritura.

La persistencia entre reinicios no es responsabilidad de este módulo (la CLI
guarda el token en el `.env` de usuario y lo siembra al arrancar).
"""

from __future__ import annotations

from core.logger import get_logger

logger = get_logger(__name__)


class SessionState:
    """Holder del token de autenticación actual."""

    def __init__(self, token: str | None = None) -> None:
        self._token: str | None = (token or "").strip() or None

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def set_token(self, token: str | None) -> None:
        """Reemplaza el token; las requests posteriores leen el nuevo valor."""

        token = token.strip() if isinstance(token, str) else None
        self._token = token or None
        logger.debug("Session token %s", "set" if self._token else "cleared")

    def clear(self) -> None:
        self.set_token(None)
