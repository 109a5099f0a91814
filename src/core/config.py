"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Resuelve la raíz de caché compartida (por usuario, independiente del proyecto).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


CACHE_SUBDIR = Path("spin") / "ai-models"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_user_cache_dir() -> Path:
    """Directorio de caché por usuario (cross-platform, sin dependencias).

    Reglas:
    - Windows: %LOCALAPPDATA% (o el home si no está definido).
    - macOS: ~/Library/Caches.
    - Resto: $XDG_CACHE_HOME, o ~/.cache.
    """

    if sys.platform.startswith("win"):
        return Path(os.environ.get("LOCALAPPDATA", str(Path.home())))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches"

    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".cache"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="SPIN_AI_MODELS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    cache_dir: Path | None = Field(
        default=None,
        description="Raíz de la caché compartida (por defecto <cache de usuario>/spin/ai-models).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos). Aplica a conexión y lectura, no a la descarga completa.",
    )
    user_agent: str = Field(
        default="spin-ai-models/0.1",
        min_length=1,
        description="User-Agent para las peticiones a los hosts de modelos.",
    )
    chunk_size: int = Field(
        default=1024 * 1024,
        ge=1024,
        description="Tamaño de bloque (bytes) al volcar la descarga a disco.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging para diagnóstico (DEBUG, INFO, WARNING...).",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    def resolved_cache_dir(self) -> Path:
        """Raíz efectiva de la caché: el override si existe, si no la del usuario."""

        if self.cache_dir is not None:
            return Path(self.cache_dir).expanduser()
        return get_user_cache_dir() / CACHE_SUBDIR
