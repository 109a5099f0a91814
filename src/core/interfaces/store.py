"""Contrato de la caché de contenido.

La caché es un mapeo identificador -> ruta bajo una raíz compartida. Es de
escritura única: una entrada nunca se modifica ni se re-valida tras crearse.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable, Protocol, runtime_checkable


@runtime_checkable
class ContentStore(Protocol):
    """Contrato mínimo de almacenamiento direccionado por contenido.

    Reglas de diseño:
    - `locate` es puro (sin I/O).
    - `store` nunca deja un fichero parcial visible en la ruta final.
    """

    def locate(self, identifier: str) -> Path:
        """Ruta (determinista) de la entrada para `identifier`."""

        ...

    def contains(self, identifier: str) -> bool:
        """True si existe un fichero regular en `locate(identifier)`."""

        ...

    def store(self, identifier: str, write: Callable[[BinaryIO], None]) -> Path:
        """Materializa la entrada: `write` vuelca los bytes en el fichero abierto."""

        ...
