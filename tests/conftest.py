"""Shared fixtures: isolated cache roots and a fake model host."""

from __future__ import annotations

import pytest

from adapters.content_cache import ContentCache
from core.config import AppSettings
from core.domain.catalog import CATALOG
from tests.fakes import FakeModelHost


@pytest.fixture
def cache(tmp_path):
    return ContentCache(tmp_path / "cache")


@pytest.fixture
def settings(tmp_path):
    return AppSettings(cache_dir=tmp_path / "cache", chunk_size=1024)


@pytest.fixture
def host():
    """Fake host serving every artifact of the built-in catalog."""

    fake = FakeModelHost()
    for spec in CATALOG.values():
        for index, artifact in enumerate(spec.artifacts):
            body = f"{spec.name}:{artifact.relative_path}".encode() * (index + 50)
            fake.add(artifact.url, body, etag=f"etag-{spec.name}-{index}")
    return fake


@pytest.fixture
def client(host):
    with host.client() as c:
        yield c
