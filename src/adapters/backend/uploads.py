"""Adaptador de subida de ficheros (`/api/v1/user`).

La referencia devuelta por el backend aparece en campos distintos según el
endpoint; `extract_upload_reference` prueba en orden fijo y la primera
coincidencia gana.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

from adapters.backend.base import BackendService
from core.domain.envelope import first_match
from core.domain.errors import ApiError, UnexpectedResponseError
from core.domain.models import UploadedDocument
from core.interfaces.transport import RequestDescriptor, UploadFile
from core.logger import get_logger

logger = get_logger(__name__)


def _field(*keys: str) -> Callable[[Any], str | None]:
    def extract(payload: Any) -> str | None:
        current = payload
        for key in keys:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        if isinstance(current, (str, int)) and not isinstance(current, bool):
            return str(current)
        return None

    return extract


def _data_as_string(payload: Any) -> str | None:
    if isinstance(payload, Mapping) and isinstance(payload.get("data"), str):
        return payload["data"]
    return None


_UPLOAD_REFERENCE_EXTRACTORS: tuple[Callable[[Any], str | None], ...] = (
    _field("id"),
    _field("filePath"),
    _data_as_string,
    _field("data", "id"),
    _field("data", "filePath"),
    _field("data", "path"),
)


def extract_upload_reference(payload: Any) -> str | None:
    """Id o ruta del fichero subido, o `None` si no aparece en ningún campo conocido."""

    return first_match(payload, _UPLOAD_REFERENCE_EXTRACTORS)


def _guess_content_type(path: Path, default: str) -> str:
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or default


class UploadService(BackendService):
    prefix = "/api/v1/user"

    def _upload_descriptor(self, action: str, path: Path, default_type: str) -> RequestDescriptor:
        return RequestDescriptor(
            method="POST",
            path=self._path(action),
            upload=UploadFile(path=path, content_type=_guess_content_type(path, default_type)),
        )

    async def upload_image(self, path: Path) -> str:
        """Sube una imagen y devuelve su referencia (id o ruta).

        Si `upload-document` falla se intenta una vez `uploads`; un fallo en el
        segundo endpoint se propaga.
        """

        try:
            payload = await self._transport.request(
                self._upload_descriptor("upload-document", path, "image/jpeg")
            )
        except ApiError as exc:
            logger.warning("Upload via upload-document failed (%s); trying uploads", exc)
            payload = await self._transport.request(self._upload_descriptor("uploads", path, "image/jpeg"))

        reference = extract_upload_reference(payload)
        if not reference:
            raise UnexpectedResponseError("Upload response did not include a file reference.")
        return reference

    async def upload_document(self, path: Path) -> UploadedDocument:
        payload = await self._transport.request(
            self._upload_descriptor("upload-document", path, "application/pdf")
        )
        for candidate in (payload, payload.get("data") if isinstance(payload, Mapping) else None):
            if (
                isinstance(candidate, Mapping)
                and candidate.get("id")
                and candidate.get("fileName")
                and candidate.get("filePath")
            ):
                return UploadedDocument.model_validate(candidate)
        raise UnexpectedResponseError("Upload response did not include the uploaded document.")
