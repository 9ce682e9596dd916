"""Configuración de bizdesk.

Dos fuentes, en este orden de prioridad:
- variables de entorno `BIZDESK_*`
- `.env` del proyecto y luego el `.env` por usuario (lo escribe la CLI:
  `doctor setup`, `login`, `logout`)

Adaptadores, sesión y controladores de listas reciben un `AppSettings`; nadie
lee `os.environ` directamente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "bizdesk"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (APPDATA, Application Support o XDG)."""

    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or Path.home())
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return root / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    """Parser mínimo de `.env`: `CLAVE=valor`, comentarios `#` y comillas simples/dobles."""

    parsed: dict[str, str] = {}
    for line in (raw.strip() for raw in text.splitlines()):
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            parsed[key] = value.strip().strip("\"'")
    return parsed


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Fusiona `values` en el .env por usuario y lo reescribe ordenado.

    Un valor `None` elimina la clave (p.ej. el token al hacer logout).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    current = _parse_env_lines(env_path.read_text(encoding="utf-8")) if env_path.is_file() else {}
    for key, value in values.items():
        if value is None:
            current.pop(key, None)
        else:
            current[key] = value

    body = "".join(f"{key}={current[key]}\n" for key in sorted(current))
    env_path.write_text(f"# {APP_DIR_NAME} user config\n{body}", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/controladores.
    """

    model_config = SettingsConfigDict(
        env_prefix="BIZDESK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:8080",
        min_length=8,
        description="Base URL del backend (sin el prefijo /api/v1).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="bizdesk/0.1",
        min_length=1,
        description="User-Agent de las peticiones al backend.",
    )
    access_token: str | None = Field(
        default=None,
        description="Token persistido por la CLI; siembra la sesión al arrancar.",
    )

    search_debounce_ms: int = Field(
        default=300,
        ge=0,
        le=10_000,
        description="Debounce de búsqueda por teclado (listas estándar).",
    )
    slow_search_debounce_ms: int = Field(
        default=500,
        ge=0,
        le=10_000,
        description="Debounce para listas con búsquedas costosas (deudas, contratos).",
    )
    supplier_lookup_path: str | None = Field(
        default="/api/v1/partners/get-suppliers",
        description="Endpoint para el filtro de proveedores; vacío = no cableado.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Ruta opcional para duplicar logs a fichero.",
    )

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("access_token", "supplier_lookup_path")
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def api_host(self) -> str:
        """Host configurado (para mensajes de error de transporte)."""

        parsed = urlparse(self.api_base_url)
        return parsed.netloc or self.api_base_url
