"""Exportación JSON de listas.

Por qué JSON:
- Interoperabilidad con hojas de cálculo y pipelines externos.
- Permite guardar el resultado de una consulta sin depender del render Rich.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel


def dump_items(items: Sequence[BaseModel]) -> list[dict[str, Any]]:
    """Serializa modelos con sus alias camelCase (mismo formato que el backend)."""

    return [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items]


def export_items_json(*, items: Sequence[BaseModel], output_path: Path) -> Path:
    """Exporta una lista de entidades a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(dump_items(items), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
