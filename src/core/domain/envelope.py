"""Normalización de envelopes de respuesta.

El backend envuelve sus payloads de forma inconsistente:
- lista desnuda: `[...]`
- `{"data": [...]}`
- `{"data": {"content": [...]}}` (paginado)
- `{"data": {...}}` o un objeto desnudo `{...}`

Todas las lecturas pasan por `classify_envelope`, con prioridad fija (la
primera coincidencia gana y las listas siempre preceden a la interpretación
como registro):

1. `data.content` es lista  -> PAGINATED
2. `data` es lista          -> DATA_LIST
3. el payload es lista      -> BARE_LIST
4. `data` es mapping no vacío -> RECORD
5. mapping no vacío sin clave `data` -> RECORD (objeto desnudo), salvo
   que solo tenga claves de estado (`success`, `code`, `message`...):
   esos cuerpos son respuestas de estado, no entidades
6. cualquier otra cosa      -> EMPTY
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

_STATUS_KEYS = frozenset({"success", "code", "message", "status", "error", "timestamp"})


class EnvelopeKind(str, Enum):
    PAGINATED = "paginated"
    DATA_LIST = "data_list"
    BARE_LIST = "bare_list"
    RECORD = "record"
    EMPTY = "empty"

    @property
    def is_list(self) -> bool:
        return self in (EnvelopeKind.PAGINATED, EnvelopeKind.DATA_LIST, EnvelopeKind.BARE_LIST)


@dataclass(frozen=True)
class NormalizedEnvelope:
    """Resultado canónico de clasificar un envelope."""

    kind: EnvelopeKind
    items: tuple[Any, ...] = field(default=())
    record: Mapping[str, Any] | None = None


EMPTY_ENVELOPE = NormalizedEnvelope(kind=EnvelopeKind.EMPTY)


def classify_envelope(payload: object) -> NormalizedEnvelope:
    """Clasifica `payload` en una de las formas conocidas (nunca lanza)."""

    data = payload.get("data") if isinstance(payload, Mapping) else None

    if isinstance(data, Mapping) and isinstance(data.get("content"), list):
        return NormalizedEnvelope(kind=EnvelopeKind.PAGINATED, items=tuple(data["content"]))
    if isinstance(data, list):
        return NormalizedEnvelope(kind=EnvelopeKind.DATA_LIST, items=tuple(data))
    if isinstance(payload, list):
        return NormalizedEnvelope(kind=EnvelopeKind.BARE_LIST, items=tuple(payload))
    if isinstance(data, Mapping) and data:
        return NormalizedEnvelope(kind=EnvelopeKind.RECORD, record=data)
    if isinstance(payload, Mapping) and payload and "data" not in payload and not payload.keys() <= _STATUS_KEYS:
        return NormalizedEnvelope(kind=EnvelopeKind.RECORD, record=payload)
    return EMPTY_ENVELOPE


def unwrap_list(payload: object) -> list[Any]:
    """Devuelve la secuencia del envelope o `[]` si no es una forma de lista."""

    envelope = classify_envelope(payload)
    if envelope.kind.is_list:
        return list(envelope.items)
    if envelope.kind is EnvelopeKind.RECORD:
        logger.debug("List read received a single record; treating as empty")
    return []


def unwrap_record(payload: object) -> Mapping[str, Any] | None:
    """Devuelve el registro del envelope o `None`."""

    envelope = classify_envelope(payload)
    if envelope.kind is EnvelopeKind.RECORD:
        return envelope.record
    return None


def parse_items(raw_items: Iterable[Any], model: type[T]) -> list[T]:
    """Valida cada elemento contra `model`, descartando los inválidos.

    Fail open en lecturas: un registro corrupto no tumba la lista entera.
    """

    parsed: list[T] = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            continue
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping invalid %s record: %s", model.__name__, exc.error_count())
    return parsed


def parse_list(payload: object, model: type[T]) -> list[T]:
    return parse_items(unwrap_list(payload), model)


def parse_record(payload: object, model: type[T]) -> T | None:
    record = unwrap_record(payload)
    if record is None:
        return None
    try:
        return model.model_validate(record)
    except ValidationError as exc:
        logger.warning("Invalid %s record: %s", model.__name__, exc.error_count())
        return None


def first_match(payload: object, extractors: Iterable[Callable[[Any], Any]]) -> Any:
    """Aplica extractores en orden y devuelve el primer valor no vacío."""

    for extract in extractors:
        value = extract(payload)
        if value:
            return value
    return None
