"""Model installation orchestration.

Drives the resolve -> cache -> link pipeline for each artifact of each
requested model. Work is strictly sequential and the first error aborts the
whole run. UI concerns (printing, progress bars) stay out of this module:
callers observe the run through `InstallHooks`.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

import httpx

from adapters.fetcher import fetch_to
from adapters.metadata_resolver import resolve_content_metadata
from core.config import AppSettings
from core.domain.catalog import get_model_spec
from core.domain.models import InstalledArtifact, ModelArtifact
from core.exceptions import FilesystemError, LinkCollisionError
from core.interfaces.store import ContentStore

logger = logging.getLogger(__name__)


@dataclass
class InstallHooks:
    """Optional callbacks for UI layers (notices, progress)."""

    notice: Callable[[str], None] | None = None
    download_start: Callable[[str, int | None], None] | None = None
    download_progress: Callable[[int], None] | None = None
    download_done: Callable[[Path], None] | None = None
    linked: Callable[[InstalledArtifact], None] | None = None

    def emit(self, message: str) -> None:
        if self.notice is not None:
            self.notice(message)


@dataclass
class InstallResult:
    """Output of an install run."""

    artifacts: list[InstalledArtifact] = field(default_factory=list)

    @property
    def downloaded(self) -> list[InstalledArtifact]:
        return [a for a in self.artifacts if a.downloaded]

    @property
    def bytes_downloaded(self) -> int:
        return sum(a.size or 0 for a in self.downloaded)


def link_artifact(cache_path: Path, destination: Path, *, hooks: InstallHooks | None = None) -> None:
    """Expose `cache_path` at `destination` through a hard link.

    An existing destination is never overwritten. When the cache and the
    destination live on different filesystems the bytes are copied instead.
    """

    if destination.exists() or destination.is_symlink():
        raise LinkCollisionError(destination)
    try:
        os.link(cache_path, destination)
    except FileExistsError as exc:
        raise LinkCollisionError(destination) from exc
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise FilesystemError(destination, str(exc)) from exc
        if hooks is not None:
            hooks.emit(f"Cache and {destination.parent} are on different filesystems; copying instead of linking.")
        _copy_into_place(cache_path, destination)


def _copy_into_place(cache_path: Path, destination: Path) -> None:
    """Copy through a temporary file next to `destination`, then rename it in."""

    try:
        fd, tmp_name = tempfile.mkstemp(dir=destination.parent, prefix=f".{destination.name}.", suffix=".part")
    except OSError as exc:
        raise FilesystemError(destination, str(exc)) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as dst, open(cache_path, "rb") as src:
            shutil.copyfileobj(src, dst)
        os.replace(tmp_path, destination)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise FilesystemError(destination, str(exc)) from exc


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(path, f"Failed to create directory: {exc}") from exc


def install_artifact(
    model_name: str,
    artifact: ModelArtifact,
    destination_dir: Path,
    *,
    client: httpx.Client,
    cache: ContentStore,
    settings: AppSettings,
    hooks: InstallHooks,
) -> InstalledArtifact:
    """Resolve, cache (on miss) and link a single artifact."""

    url = artifact.url
    metadata = resolve_content_metadata(client, url)
    cache_path = cache.locate(metadata.identifier)
    downloaded = False

    if cache.contains(metadata.identifier):
        logger.debug("Cache hit for %s (%s)", url, metadata.identifier)
    else:
        size_info = "(unknown)" if metadata.size is None else f"{metadata.size}"
        hooks.emit(
            f"Model from {url} is not in cache. Downloading {size_info} bytes to cache at "
            f"{cache_path} - this may take a long time."
        )
        if hooks.download_start is not None:
            hooks.download_start(url, metadata.size)

        cache_path = cache.store(
            metadata.identifier,
            lambda sink: fetch_to(
                client,
                url,
                sink,
                chunk_size=settings.chunk_size,
                on_progress=hooks.download_progress,
            ),
        )
        downloaded = True
        if hooks.download_done is not None:
            hooks.download_done(cache_path)
        hooks.emit(f"Cached model at {cache_path}")

    destination = destination_dir / artifact.relative_path
    _ensure_dir(destination.parent)
    link_artifact(cache_path, destination, hooks=hooks)

    installed = InstalledArtifact(
        model=model_name,
        url=url,
        identifier=metadata.identifier,
        cache_path=cache_path,
        destination=destination,
        downloaded=downloaded,
        size=metadata.size,
    )
    if hooks.linked is not None:
        hooks.linked(installed)
    return installed


def install_model(
    model_name: str,
    destination_dir: Path,
    *,
    client: httpx.Client,
    cache: ContentStore,
    settings: AppSettings | None = None,
    hooks: InstallHooks | None = None,
) -> list[InstalledArtifact]:
    """Install every artifact of `model_name` under `destination_dir`."""

    settings = settings or AppSettings()
    hooks = hooks or InstallHooks()
    spec = get_model_spec(model_name)

    return [
        install_artifact(
            spec.name,
            artifact,
            Path(destination_dir),
            client=client,
            cache=cache,
            settings=settings,
            hooks=hooks,
        )
        for artifact in spec.artifacts
    ]


def install_models(
    model_names: Sequence[str],
    destination_dir: Path,
    *,
    client: httpx.Client,
    cache: ContentStore,
    settings: AppSettings | None = None,
    hooks: InstallHooks | None = None,
) -> InstallResult:
    """Install `model_names` in order, aborting on the first error.

    Every name is validated against the catalog before any network work.
    """

    for name in model_names:
        get_model_spec(name)

    destination_dir = Path(destination_dir)
    _ensure_dir(destination_dir)

    result = InstallResult()
    for name in model_names:
        result.artifacts.extend(
            install_model(
                name,
                destination_dir,
                client=client,
                cache=cache,
                settings=settings,
                hooks=hooks,
            )
        )
    return result
