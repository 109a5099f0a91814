"""Componentes de UI para CLI (Rich).

- Separa la presentación (tablas, prompt, barras de progreso) de los comandos.
- Todo se imprime en stderr: stdout queda libre para salidas como `cache-path`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from core.config import AppSettings
from core.domain.models import InstalledArtifact, ModelSpec
from core.services.installer import InstallHooks


def load_settings(console: Console) -> AppSettings:
    """Carga `AppSettings`; una configuración inválida termina con código 1."""

    try:
        return AppSettings()
    except ValidationError as exc:
        console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc


def build_catalog_table(specs: Sequence[ModelSpec]) -> Table:
    """Tabla Rich con el catálogo de modelos."""

    table = Table(title="Known models")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Files", style="white")
    table.add_column("Description", style="dim")
    for spec in specs:
        if spec.is_multi_artifact:
            files = "\n".join(Path(a.relative_path).name for a in spec.artifacts)
        else:
            files = "single file"
        table.add_row(spec.name, files, spec.description)
    return table


def parse_selection(raw: str, choices: Sequence[str]) -> list[str]:
    """Convierte '1,3' (índices 1-based) en nombres, sin duplicados y en orden.

    Lanza `typer.BadParameter` ante índices fuera de rango o no numéricos.
    """

    selected: list[str] = []
    for token in raw.replace(" ", ",").split(","):
        if not token:
            continue
        try:
            index = int(token)
        except ValueError:
            raise typer.BadParameter(f"'{token}' is not a number") from None
        if not 1 <= index <= len(choices):
            raise typer.BadParameter(f"{index} is out of range (1-{len(choices)})")
        name = choices[index - 1]
        if name not in selected:
            selected.append(name)
    return selected


def prompt_model_names(console: Console, choices: Sequence[str]) -> list[str]:
    """Pregunta qué modelos instalar. Entrada vacía = ninguno."""

    for index, name in enumerate(choices, start=1):
        console.print(f"  [cyan]{index}[/cyan]) {name}")
    raw = typer.prompt(
        "Select models by number (comma separated, empty to cancel)",
        default="",
        show_default=False,
        err=True,
    )
    return parse_selection(raw.strip(), choices)


class RichInstallHooks(InstallHooks):
    """`InstallHooks` conectado a una consola y barra de progreso Rich."""

    def __init__(self, console: Console) -> None:
        super().__init__(
            notice=self._notice,
            download_start=self._start,
            download_progress=self._advance,
            download_done=self._done,
            linked=self._linked,
        )
        self._console = console
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def _notice(self, message: str) -> None:
        self._console.print(message, highlight=False, soft_wrap=True)

    def _start(self, url: str, size: int | None) -> None:
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._task = self._progress.add_task(url.rsplit("/", 1)[-1], total=size)

    def _advance(self, nbytes: int) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, advance=nbytes)

    def _done(self, cache_path: Path) -> None:
        self.close()

    def _linked(self, artifact: InstalledArtifact) -> None:
        state = "downloaded" if artifact.downloaded else "cached"
        self._console.print(f"[green]✓[/green] {artifact.destination} [dim]({state})[/dim]")

    def close(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None
