"""Descarga en streaming del cuerpo de una URL hacia un sink binario.

- GET siguiendo redirecciones (el cuerpo real suele vivir tras el 302 al CDN).
- Cualquier status no 2xx es fatal (`FetchFailedError`), sin reintentos.
- El cuerpo se vuelca por bloques: los artefactos pueden ocupar varios GB.
"""

from __future__ import annotations

from typing import BinaryIO, Callable

import httpx

from core.exceptions import FetchFailedError

ProgressCallback = Callable[[int], None]


def fetch_to(
    client: httpx.Client,
    url: str,
    sink: BinaryIO,
    *,
    chunk_size: int = 1024 * 1024,
    on_progress: ProgressCallback | None = None,
) -> int:
    """Transfiere el cuerpo de `url` a `sink` y devuelve los bytes escritos.

    `on_progress` recibe el número de bytes de cada bloque escrito.
    """

    written = 0
    try:
        with client.stream("GET", url, follow_redirects=True) as response:
            if not response.is_success:
                raise FetchFailedError(url, response.status_code)
            for chunk in response.iter_bytes(chunk_size):
                sink.write(chunk)
                written += len(chunk)
                if on_progress is not None:
                    on_progress(len(chunk))
    except httpx.HTTPError as exc:
        raise FetchFailedError(url, None, f"Making request to {url}: {exc}") from exc
    return written
