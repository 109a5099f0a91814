"""Resolución de identidad de contenido mediante una sonda HEAD.

Lógica:
- HEAD sin seguir redirecciones (no se transfiere cuerpo).
- Si la respuesta es 3xx, el host anuncia la identidad del destino en
  `x-linked-etag` / `x-linked-size` (p.ej. Hugging Face -> CDN).
- Si no, se usan `etag` / `content-length`.
- Sin etag en el namespace correspondiente: `MissingIdentityError`.
- El tamaño es best-effort: ausente o inválido -> desconocido.
"""

from __future__ import annotations

import logging

import httpx

from adapters.content_cache import is_safe_identifier
from core.domain.models import ContentMetadata
from core.exceptions import FetchFailedError, MissingIdentityError

logger = logging.getLogger(__name__)

REDIRECT_ETAG_HEADER = "x-linked-etag"
REDIRECT_SIZE_HEADER = "x-linked-size"
ETAG_HEADER = "etag"
SIZE_HEADER = "content-length"


def normalize_etag(raw: str | None) -> str | None:
    """Quita comillas alrededor (y el prefijo débil `W/`) de un etag.

    Devuelve None si el token resultante no sirve como clave de caché.
    """

    if raw is None:
        return None
    value = raw.strip()
    if value.startswith("W/"):
        value = value[2:]
    value = value.strip('"')
    if not is_safe_identifier(value):
        return None
    return value


def parse_size(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        size = int(raw.strip())
    except ValueError:
        return None
    return size if size >= 0 else None


def resolve_content_metadata(client: httpx.Client, url: str) -> ContentMetadata:
    """Sondea `url` y devuelve su `ContentMetadata` (identificador + tamaño)."""

    try:
        response = client.head(url, follow_redirects=False)
    except httpx.HTTPError as exc:
        raise FetchFailedError(url, None, f"Making request to {url}: {exc}") from exc

    if response.is_redirect:
        etag_key, size_key = REDIRECT_ETAG_HEADER, REDIRECT_SIZE_HEADER
    else:
        etag_key, size_key = ETAG_HEADER, SIZE_HEADER

    logger.debug("HEAD %s -> %s (reading %s)", url, response.status_code, etag_key)

    identifier = normalize_etag(response.headers.get(etag_key))
    if identifier is None:
        raise MissingIdentityError(url, response.status_code)

    size = parse_size(response.headers.get(size_key))
    return ContentMetadata(identifier=identifier, size=size)
