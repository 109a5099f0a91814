"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from adapters.metadata_resolver import resolve_content_metadata
from cli.ui_components import load_settings
from core.domain.catalog import CATALOG
from core.exceptions import FetchFailedError, MissingIdentityError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics for model installs.")

_console = Console()


def check_cache_writable(cache_dir: Path) -> tuple[bool, str]:
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=cache_dir, prefix=".doctor.", suffix=".part"):
            pass
        return True, str(cache_dir)
    except OSError as exc:
        return False, str(exc)


def check_hard_links(cache_dir: Path, project_dir: Path) -> tuple[bool, str]:
    """Try to hard-link a scratch file from the cache into `project_dir`."""

    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(dir=project_dir, prefix=".spin-doctor-") as scratch:
            fd, src = tempfile.mkstemp(dir=cache_dir, prefix=".doctor.", suffix=".part")
            os.close(fd)
            try:
                os.link(src, Path(scratch) / "link")
            finally:
                Path(src).unlink(missing_ok=True)
        return True, "Installs share storage with the cache"
    except OSError as exc:
        return False, str(exc)


def check_probe(client: httpx.Client, url: str) -> tuple[bool, str]:
    """The host must answer the metadata probe with a usable content identifier."""

    try:
        metadata = resolve_content_metadata(client, url)
    except (MissingIdentityError, FetchFailedError) as exc:
        return False, str(exc)
    size = "unknown size" if metadata.size is None else f"{metadata.size} bytes"
    return True, f"etag {metadata.identifier} ({size})"


@app.command()
def run(
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        help="Directory where models would be installed.",
    ),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = load_settings(_console)
    cache_dir = settings.resolved_cache_dir()

    table = Table(title="AI models doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_cache, detail_cache = check_cache_writable(cache_dir)
    table.add_row("Cache directory", "OK" if ok_cache else "FAIL", detail_cache)

    ok_link, detail_link = check_hard_links(cache_dir, project_dir)
    table.add_row("Hard links", "OK" if ok_link else "WARN", detail_link)

    first_url = next(iter(CATALOG.values())).artifacts[0].url
    with build_client(settings) as client:
        ok_http, detail_http = check_probe(client, first_url)
    table.add_row("Model host", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_link:
        _console.print(
            "\n[yellow]Note:[/yellow] Without hard links, installs fall back to copying files out of the cache."
        )
    if not (ok_cache and ok_http):
        raise typer.Exit(code=1)
