"""Base común de los adaptadores de dominio.

Responsabilidad:
- Construir `RequestDescriptor`, invocar el `Transport` y normalizar el
  envelope con `core.domain.envelope`.
- Aplicar `LookupPolicy` de forma explícita en lookups de solo lectura.

Los adaptadores no guardan estado mutable propio: todo vive en la sesión o
en el controlador de la lista que los llama.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Iterable, TypeVar

from pydantic import BaseModel

from core.domain.envelope import parse_list, parse_record
from core.domain.errors import ApiError, NotWiredError
from core.domain.policies import LookupPolicy
from core.interfaces.transport import RequestDescriptor, Transport
from core.logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R")


def _clean_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Mapping):
        return clean_payload(value)
    if isinstance(value, (list, tuple)):
        return [_clean_value(item) for item in value]
    return value


def clean_payload(
    data: Mapping[str, Any] | BaseModel,
    required: Iterable[str] = (),
    untrimmed: Iterable[str] = (),
) -> dict[str, Any]:
    """Prepara el cuerpo de una escritura.

    - Recorta strings (también dentro de mappings y listas anidados).
    - Omite campos `None` o string vacío salvo que estén en `required`.
    - Las claves de `untrimmed` (contraseñas) se envían tal cual.
    - Los elementos de una lista no se omiten aunque queden vacíos.
    - El resto pasa sin cambios (números, booleanos).
    """

    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True, exclude_none=True)
    keep = set(required)
    raw_keys = set(untrimmed)
    out: dict[str, Any] = {}
    for key, raw in data.items():
        value = raw if key in raw_keys else _clean_value(raw)
        if key not in keep and (value is None or value == ""):
            continue
        out[key] = value
    return out


class BackendService:
    """Base de los adaptadores: wrappers de lectura/escritura sobre `Transport`."""

    prefix: str = "/api/v1"

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _path(self, action: str) -> str:
        return f"{self.prefix}/{action}"

    async def _get(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self._transport.request(RequestDescriptor.get(self._path(action), params))

    async def _get_list(self, action: str, model: type[M], params: Mapping[str, Any] | None = None) -> list[M]:
        return parse_list(await self._get(action, params), model)

    async def _get_record(self, action: str, model: type[M], params: Mapping[str, Any] | None = None) -> M | None:
        return parse_record(await self._get(action, params), model)

    async def _post(
        self,
        action: str,
        data: Mapping[str, Any] | BaseModel,
        *,
        required: Iterable[str] = (),
        untrimmed: Iterable[str] = (),
    ) -> Any:
        """Escritura: nunca hace fallback; cualquier `ApiError` se propaga."""

        body = clean_payload(data, required=required, untrimmed=untrimmed)
        return await self._transport.request(RequestDescriptor.post(self._path(action), body))

    async def _post_query(self, action: str, params: Mapping[str, Any]) -> Any:
        """Escritura sin cuerpo: el identificador viaja en la query string."""

        return await self._transport.request(RequestDescriptor.post(self._path(action), params=params))

    async def _lookup(
        self,
        policy: LookupPolicy,
        fetch: Callable[[], Awaitable[list[R]]],
        *,
        name: str,
    ) -> list[R]:
        """Ejecuta un lookup aplicando su política declarada.

        `NotWiredError` se propaga siempre: un lookup sin endpoint no debe
        parecer una lista vacía legítima.
        """

        try:
            return await fetch()
        except NotWiredError:
            raise
        except ApiError as exc:
            if not policy.allows_empty_fallback():
                raise
            logger.warning("Lookup %s failed (%s); returning empty list", name, exc)
            return []
