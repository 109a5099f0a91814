"""Rutas derivadas del manifest de la aplicación.

Solo se usa el manifest para ubicar el directorio de destino; su contenido no
se interpreta.
"""

from __future__ import annotations

from pathlib import Path

from core.exceptions import ManifestNotFoundError

DEFAULT_MANIFEST_FILE = "spin.toml"
MODELS_SUBDIR = Path(".spin") / "ai-models"


def resolve_manifest_file_path(path: Path) -> Path:
    """Un directorio resuelve a `<dir>/spin.toml`; un fichero se usa tal cual.

    Lanza `ManifestNotFoundError` si el fichero resultante no existe.
    """

    path = Path(path)
    manifest_file = path / DEFAULT_MANIFEST_FILE if path.is_dir() else path
    if not manifest_file.is_file():
        raise ManifestNotFoundError(manifest_file)
    return manifest_file.resolve()


def models_dir_for(manifest_file: Path) -> Path:
    """Directorio de modelos del proyecto: `<dir del manifest>/.spin/ai-models`."""

    return Path(manifest_file).parent / MODELS_SUBDIR
