"""Políticas explícitas para lookups de solo lectura.

Centralizar la opción en un enum evita que cada adaptador decida de forma
implícita si un fallo de lookup es un error visible o una lista vacía.
"""

from __future__ import annotations

from enum import Enum


class LookupPolicy(str, Enum):
    """Qué hacer cuando falla un lookup de solo lectura."""

    PROPAGATE = "propagate"
    EMPTY_ON_ERROR = "empty_on_error"

    @classmethod
    def default(cls) -> "LookupPolicy":
        """Toda lectura propaga salvo que el adaptador declare lo contrario."""

        return cls.PROPAGATE

    def allows_empty_fallback(self) -> bool:
        return self is LookupPolicy.EMPTY_ON_ERROR
