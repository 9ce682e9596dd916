"""Taxonomía de errores del acceso a datos.

Por qué excepciones + descriptor:
- Los adaptadores propagan errores con `raise` (nunca los ocultan en escrituras).
- Los controladores de listas los convierten en estado visible mediante
  `ErrorDescriptor`, un valor inmutable que la UI puede renderizar.

Convención de `status`:
- 0 => no se obtuvo respuesta HTTP (host inalcanzable, timeout, DNS) o la
  llamada nunca salió del proceso.
- >= 1 => status HTTP devuelto realmente por el servidor.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ErrorDescriptor(BaseModel):
    """Error serializable y apto para UI (`message` siempre legible)."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., description="Mensaje legible para el usuario.")
    code: str | None = Field(default=None, description="Código de error del servidor (si lo hay).")
    status: int = Field(default=0, ge=0, le=599, description="Status HTTP o 0 si no hubo respuesta.")

    @property
    def is_transport(self) -> bool:
        return self.status == 0


class ApiError(Exception):
    """Base de todos los errores del acceso a datos."""

    def __init__(self, message: str, *, code: str | None = None, status: int = 0) -> None:
        super().__init__(message)
        self.message = message or DEFAULT_ERROR_MESSAGE
        self.code = code
        self.status = status

    @property
    def descriptor(self) -> ErrorDescriptor:
        return ErrorDescriptor(message=self.message, code=self.code, status=self.status)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.status}] {self.code}: {self.message}"
        return f"[{self.status}] {self.message}"


class TransportError(ApiError):
    """No se obtuvo respuesta HTTP (conexión rechazada, timeout, DNS...)."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message, code=code, status=0)


class HttpError(ApiError):
    """El servidor respondió con un status fuera del rango 2xx."""

    @property
    def is_unauthorized(self) -> bool:
        return self.status in (401, 403)


class NotWiredError(ApiError):
    """Lookup sin endpoint configurado: se reporta en vez de inventar datos."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="not_implemented", status=0)


class UnexpectedResponseError(ApiError):
    """Respuesta 2xx cuyo cuerpo no contiene lo que la operación necesita."""

    def __init__(self, message: str, *, status: int = 200) -> None:
        super().__init__(message, code="unexpected_response", status=status)
