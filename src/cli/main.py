"""CLI principal (Typer).

Comandos:
- `prune`: ejecuta una poda completa y publica el output del step.
- `doctor`: diagnóstico de configuración y conectividad.

La CLI solo cablea: carga settings, construye el gateway, llama al Core y
traduce `PruneError` a un mensaje + exit code 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.dry_run import DryRunGateway
from adapters.github_packages import GitHubPackagesGateway
from adapters.result_reporter import (
    export_result_json,
    format_set_output,
    write_github_output,
)
from cli import doctor
from cli.ui_components import build_removed_table, configure_logging, print_banner
from core.config import AppSettings, load_settings
from core.errors import PruneError
from core.interfaces.registry import RegistryGateway
from core.services import prune_pipeline

app = typer.Typer(
    no_args_is_help=True,
    help="Remove old versions of the packages published by a GitHub repository.",
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def build_gateway(settings: AppSettings) -> GitHubPackagesGateway:
    return GitHubPackagesGateway(settings)


def _report(settings: AppSettings, names: list[str]) -> None:
    if settings.github_output is not None:
        write_github_output(settings.github_output, names)
    else:
        typer.echo(format_set_output(names))


@app.command()
def prune(
    keep_versions: Optional[int] = typer.Option(
        None,
        "--keep-versions",
        min=0,
        help="Most recent versions to keep per package (overrides INPUT_KEEP_VERSIONS).",
    ),
    remove_semver: Optional[bool] = typer.Option(
        None,
        "--remove-semver/--keep-semver",
        help="Allow removing semantic versions beyond --keep-versions.",
    ),
    allow_public: Optional[bool] = typer.Option(
        None,
        "--allow-public/--no-allow-public",
        help="Allow pruning a public repository.",
    ),
    dry_run: Optional[bool] = typer.Option(
        None,
        "--dry-run/--no-dry-run",
        help="Report what would be removed without deleting anything.",
    ),
    export_json: Optional[Path] = typer.Option(
        None,
        "--export-json",
        help="Also write the run result to this JSON file.",
    ),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors."),
) -> None:
    """Prune old package versions of GITHUB_REPOSITORY."""

    configure_logging(_err_console, verbose=verbose, quiet=quiet)
    if banner:
        print_banner(_err_console)

    try:
        settings = load_settings(
            keep_versions=keep_versions,
            remove_semver=remove_semver,
            allow_public=allow_public,
            dry_run=dry_run,
        )
        repository = settings.repository_ref()

        with build_gateway(settings) as github:
            gateway: RegistryGateway = DryRunGateway(github) if settings.dry_run else github
            result = prune_pipeline.run(
                repository,
                settings.retention_policy(),
                gateway,
                allow_public=settings.allow_public,
            )
    except PruneError as exc:
        _err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if result.removed and not quiet:
        _err_console.print(build_removed_table(result, dry_run=settings.dry_run))

    _report(settings, result.qualified_names())
    if export_json is not None:
        path = export_result_json(result=result, output_path=export_json, dry_run=settings.dry_run)
        logger.info("Run result written to %s", path)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
