"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Las credenciales del nodo (URL base + API key) se resuelven una vez por
  batch a partir de esta configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigurationError
from core.domain.models import Credentials

NETWORKS: dict[str, str] = {
    "mainnet": "https://api.trongrid.io",
    "shasta": "https://api.shasta.trongrid.io",
    "nile": "https://nile.trongrid.io",
}


APP_DIR_NAME = "tron-node"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (Windows, macOS o XDG)."""

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    root = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(root) / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    """Lee pares KEY=VALUE; ignora comentarios y líneas sin '='."""

    parsed: dict[str, str] = {}
    for line in (raw.strip() for raw in text.splitlines()):
        if line.startswith("#") or "=" not in line:
            continue
        name, _, value = line.partition("=")
        name = name.strip()
        if name:
            parsed[name] = value.strip().strip("\"'")
    return parsed


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Fusiona ``values`` en el .env global del usuario (claves ordenadas)."""

    target = env_path or get_user_env_file()
    target.parent.mkdir(parents=True, exist_ok=True)

    merged = _parse_env_lines(target.read_text(encoding="utf-8")) if target.exists() else {}
    merged.update({name: value for name, value in values.items() if value is not None})

    body = "".join(f"{name}={merged[name]}\n" for name in sorted(merged))
    target.write_text("# tron-node user config (.env)\n" + body, encoding="utf-8")
    return target


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRON_NODE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    network: Literal["mainnet", "shasta", "nile", "custom"] = Field(
        default="mainnet",
        description="Red TRON a la que se conecta el nodo.",
    )
    base_url: str | None = Field(
        default=None,
        description="URL base explícita; tiene prioridad sobre `network`.",
    )
    custom_full_node: str | None = Field(
        default=None,
        description="URL del full node cuando `network=custom`.",
    )
    api_key: str = Field(
        default="",
        description="TronGrid API key (cabecera TRON-PRO-API-KEY, opcional).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="tron-node/0.1",
        min_length=1,
        description="User-Agent de las peticiones salientes.",
    )

    continue_on_fail: bool = Field(
        default=False,
        description="Registrar fallos por item en lugar de abortar el batch.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )
    log_format: Literal["rich", "plain"] = Field(
        default="rich",
        description="Formato de salida del logging.",
    )
    show_notice: bool = Field(
        default=True,
        description="Mostrar el aviso de licencia una vez por proceso.",
    )


def resolve_credentials(settings: AppSettings | None = None) -> Credentials:
    """Resuelve `Credentials` para un batch.

    Prioridad: `base_url` explícita > preset de red > `custom_full_node`.
    """

    settings = settings or AppSettings()

    if settings.base_url:
        base_url = settings.base_url
    elif settings.network == "custom":
        if not settings.custom_full_node:
            raise ConfigurationError("custom_full_node is required when network is 'custom'")
        base_url = settings.custom_full_node
    elif settings.network in NETWORKS:
        base_url = NETWORKS[settings.network]
    else:
        raise ConfigurationError(f"Unknown network: {settings.network}")

    return Credentials(base_url=base_url, api_key=settings.api_key or "")
