"""CLI entry-point (Typer).

Commands:
- `install`: install one model (or a prompted selection) next to the manifest.
- `list`: show the built-in catalog.
- `cache-path`: print the shared cache directory.
- `doctor run`: check cache, hard-link support and host reachability.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.content_cache import ContentCache
from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.catalog import CATALOG, KNOWN_MODELS
from core.exceptions import ModelInstallError
from core.manifest import DEFAULT_MANIFEST_FILE, models_dir_for, resolve_manifest_file_path
from core.services.installer import install_models
from cli import doctor
from cli.ui_components import RichInstallHooks, build_catalog_table, load_settings, prompt_model_names

app = typer.Typer(
    no_args_is_help=True,
    help="Install AI models into a Spin application, through a shared download cache.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console(stderr=True)


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, show_path=False)],
        force=True,
    )


@app.command()
def install(
    model_name: Optional[str] = typer.Argument(
        None,
        help="Model to install. If omitted, you are prompted to pick from the catalog.",
        show_default=False,
    ),
    app_source: Path = typer.Option(
        Path(DEFAULT_MANIFEST_FILE),
        "-f",
        "--from",
        "--file",
        help="Application manifest (or its directory). Models go to <manifest dir>/.spin/ai-models.",
    ),
    target_spin_version: Optional[str] = typer.Option(
        None,
        "--target-spin-version",
        envvar="SPIN_VERSION",
        help="Spin version the models are installed for.",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Download models into the shared cache and link them into the application."""

    settings = load_settings(_console)
    _configure_logging(settings, verbose)
    logger = logging.getLogger(__name__)
    if target_spin_version:
        logger.debug("Target Spin version: %s", target_spin_version)

    try:
        manifest_file = resolve_manifest_file_path(app_source)
        model_names = [model_name] if model_name else prompt_model_names(_console, KNOWN_MODELS)
        if not model_names:
            _console.print("No models selected")
            return

        models_dir = models_dir_for(manifest_file)
        cache = ContentCache(settings.resolved_cache_dir())
        hooks = RichInstallHooks(_console)
        try:
            with build_client(settings) as client:
                result = install_models(
                    model_names,
                    models_dir,
                    client=client,
                    cache=cache,
                    settings=settings,
                    hooks=hooks,
                )
        finally:
            hooks.close()
    except ModelInstallError as exc:
        _console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    fresh = len(result.downloaded)
    _console.print(
        f"[green]Installed {len(model_names)} model(s)[/green] into {models_dir} "
        f"({fresh} downloaded, {len(result.artifacts) - fresh} from cache)",
        highlight=False,
        soft_wrap=True,
    )


@app.command(name="list")
def list_models() -> None:
    """Show the models that can be installed."""

    Console().print(build_catalog_table(list(CATALOG.values())))


@app.command(name="cache-path")
def cache_path() -> None:
    """Print the shared model cache directory."""

    typer.echo(str(load_settings(_console).resolved_cache_dir()))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
