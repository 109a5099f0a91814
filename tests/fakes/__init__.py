"""Shared test doubles: an in-memory model host served through httpx.MockTransport."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

import httpx

CDN = "https://cdn.test/"


@dataclass
class HostedFile:
    body: bytes
    etag: str
    redirect: bool = True
    advertise_size: bool = True


@dataclass
class FakeModelHost:
    """Serves files the way Hugging Face does.

    With `redirect=True` a HEAD/GET on the resolve URL answers 302 with
    `x-linked-etag`/`x-linked-size` and a Location on the CDN, which serves
    the bytes with a plain `etag`.
    """

    files: dict[str, HostedFile] = field(default_factory=dict)
    status_overrides: dict[str, int] = field(default_factory=dict)
    calls: Counter = field(default_factory=Counter)

    def add(self, url: str, body: bytes, etag: str, **kwargs) -> None:
        self.files[url] = HostedFile(body=body, etag=etag, **kwargs)

    def transfers(self) -> int:
        """Number of body downloads served by the CDN."""

        return sum(n for (method, url), n in self.calls.items() if method == "GET" and url.startswith(CDN))

    def requests(self) -> int:
        return sum(self.calls.values())

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport(), follow_redirects=False)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls[(request.method, url)] += 1

        if url in self.status_overrides:
            return httpx.Response(self.status_overrides[url])

        if url.startswith(CDN):
            hosted = self._by_etag(url.removeprefix(CDN))
            if hosted is None:
                return httpx.Response(404)
            return self._content(request, hosted)

        hosted = self.files.get(url)
        if hosted is None:
            return httpx.Response(404)
        if hosted.redirect:
            headers = {
                "location": f"{CDN}{hosted.etag}",
                "x-linked-etag": f'"{hosted.etag}"',
            }
            if hosted.advertise_size:
                headers["x-linked-size"] = str(len(hosted.body))
            return httpx.Response(302, headers=headers)
        return self._content(request, hosted)

    def _by_etag(self, etag: str) -> HostedFile | None:
        for hosted in self.files.values():
            if hosted.etag == etag:
                return hosted
        return None

    def _content(self, request: httpx.Request, hosted: HostedFile) -> httpx.Response:
        headers = {"etag": f'"{hosted.etag}"'}
        if request.method == "HEAD":
            if hosted.advertise_size:
                headers["content-length"] = str(len(hosted.body))
            return httpx.Response(200, headers=headers)
        return httpx.Response(200, headers=headers, content=hosted.body)
