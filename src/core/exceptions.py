"""Jerarquía de errores del instalador.

Cada error aborta la instalación completa; la CLI muestra el mensaje y
termina con código 1.
"""

from __future__ import annotations

from pathlib import Path


class ModelInstallError(Exception):
    """Base exception for all installer errors."""


class UnknownModelError(ModelInstallError):
    """The requested model is not in the built-in catalog."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown model {name}")


class MissingIdentityError(ModelInstallError):
    """The probe response carries no usable content identifier."""

    def __init__(self, url: str, status: int | None = None) -> None:
        self.url = url
        self.status = status
        detail = f" (HTTP {status})" if status is not None else ""
        super().__init__(f"No etag returned for {url}{detail}")


class FetchFailedError(ModelInstallError):
    """A request to the model host failed or returned a non-success status."""

    def __init__(self, url: str, status: int | None, message: str | None = None) -> None:
        self.url = url
        self.status = status
        if message is None:
            message = f"HTTP code {status} downloading from {url}"
        super().__init__(message)


class CacheWriteError(ModelInstallError):
    """Storing a downloaded artifact into the shared cache failed."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Failed to write cache entry '{identifier}': {reason}")


class LinkCollisionError(ModelInstallError):
    """The destination path already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Destination '{path}' already exists")


class FilesystemError(ModelInstallError):
    """Directory creation or linking failed for a reason other than a collision."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Filesystem error at '{path}': {reason}")


class ManifestNotFoundError(ModelInstallError):
    """The application manifest does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Manifest file '{path}' not found")
