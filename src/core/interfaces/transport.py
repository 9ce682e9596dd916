"""Contrato del transporte HTTP.

Por qué Protocol:
- Los adaptadores de dominio dependen de esta abstracción, no de httpx.
- Permite sustituir el cliente real por un stub en tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class UploadFile:
    """Fichero a enviar como multipart (`file` por defecto)."""

    path: Path
    content_type: str = "application/octet-stream"
    field_name: str = "file"

    @property
    def file_name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class RequestDescriptor:
    """Descripción inmutable de una request al backend."""

    method: str
    path: str
    params: Mapping[str, Any] | None = None
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    upload: UploadFile | None = None

    @classmethod
    def get(cls, path: str, params: Mapping[str, Any] | None = None) -> "RequestDescriptor":
        return cls(method="GET", path=path, params=params)

    @classmethod
    def post(
        cls,
        path: str,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> "RequestDescriptor":
        return cls(method="POST", path=path, params=params, body=body)

    @property
    def is_multipart(self) -> bool:
        return self.upload is not None


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo del cliente de transporte.

    Reglas de diseño:
    - `request` es asíncrono (I/O de red).
    - Devuelve el payload ya decodificado o lanza `ApiError`.
    """

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """Ejecuta la request y devuelve el payload decodificado."""

        ...
