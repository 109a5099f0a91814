"""Modelos del dominio (Pydantic v2).

- Estructuras inmutables: describen *qué* se instala, no *cómo* se descarga.
- El dominio no conoce HTTP, CLI ni el sistema de ficheros.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ModelArtifact(BaseModel):
    """Un fichero remoto y su ruta relativa dentro del directorio de modelos."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=8,
        description="URL de descarga (fijada a una revisión concreta).",
    )
    relative_path: str = Field(
        ...,
        min_length=1,
        description="Ruta relativa del destino, p.ej. 'llama2-chat' o 'all-minikm-16-v2/tokenizer.json'.",
    )

    @field_validator("relative_path")
    @classmethod
    def _relative_only(cls, value: str) -> str:
        path = PurePosixPath(value)
        if path.is_absolute() or ".." in path.parts:
            raise ValueError("relative_path must stay inside the models directory")
        return value


class ModelSpec(BaseModel):
    """Modelo con nombre y los artefactos que lo componen."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=128)
    artifacts: tuple[ModelArtifact, ...] = Field(..., min_length=1)
    description: str = Field(default="")

    @property
    def is_multi_artifact(self) -> bool:
        return len(self.artifacts) > 1


class ContentMetadata(BaseModel):
    """Identidad de contenido de un recurso remoto (etag normalizado) y tamaño opcional.

    El tamaño solo se usa para mostrar progreso; nunca para verificar integridad.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1)
    size: int | None = Field(default=None, ge=0)


class InstalledArtifact(BaseModel):
    """Resultado de instalar un artefacto: entrada de caché y enlace creado."""

    model_config = ConfigDict(frozen=True)

    model: str
    url: str
    identifier: str
    cache_path: Path
    destination: Path
    downloaded: bool = Field(
        default=False,
        description="True si hubo transferencia de red (fallo de caché).",
    )
    size: int | None = None
