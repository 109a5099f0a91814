"""Adaptadores de I/O: HTTP (httpx) y caché en disco."""
