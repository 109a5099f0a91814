"""Wrapper de httpx.

- Estandariza timeouts y headers para sonda y descarga.
- Permite inyectar un transport (p.ej. `httpx.MockTransport`) en tests.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults del instalador.

    Reglas:
    - `follow_redirects=False`: la sonda necesita ver el 3xx y sus headers
      `x-linked-*`. La descarga activa redirecciones por petición.
    - El timeout aplica a cada operación de red, no a la transferencia completa.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
