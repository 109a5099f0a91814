"""Caché de contenido compartida en disco.

Layout: `<raíz>/<identificador>`, un fichero plano por identificador, sin
subdirectorios por prefijo. La raíz es por usuario y compartida entre proyectos.

Escritura:
- Se escribe en un temporal único del mismo directorio y se renombra
  atómicamente (`os.replace`) a la ruta final.
- Si la escritura falla, el temporal se borra y la entrada sigue ausente.
- Con escritores concurrentes gana el último; ningún lector ve contenido parcial.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable

from core.exceptions import CacheWriteError
from core.interfaces.store import ContentStore

logger = logging.getLogger(__name__)

_TEMP_SUFFIX = ".part"


def is_safe_identifier(identifier: str) -> bool:
    """Un identificador debe ser un único componente de ruta."""

    if not identifier or identifier in (".", ".."):
        return False
    if identifier.startswith("."):
        return False
    return "/" not in identifier and "\\" not in identifier and "\x00" not in identifier


class ContentCache(ContentStore):
    """Implementación en disco de `ContentStore`."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def locate(self, identifier: str) -> Path:
        if not is_safe_identifier(identifier):
            raise ValueError(f"Unusable cache identifier: {identifier!r}")
        return self._root / identifier

    def contains(self, identifier: str) -> bool:
        return self.locate(identifier).is_file()

    def store(self, identifier: str, write: Callable[[BinaryIO], None]) -> Path:
        final_path = self.locate(identifier)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._root,
                prefix=f".{identifier}.",
                suffix=_TEMP_SUFFIX,
            )
        except OSError as exc:
            raise CacheWriteError(identifier, str(exc)) from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as stm:
                write(stm)
                stm.flush()
                os.fsync(stm.fileno())
            os.replace(tmp_path, final_path)
        except OSError as exc:
            _discard(tmp_path)
            raise CacheWriteError(identifier, str(exc)) from exc
        except BaseException:
            _discard(tmp_path)
            raise

        logger.debug("Stored cache entry %s", final_path)
        return final_path


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove temporary cache file %s", path)
