"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `prune` y `doctor`.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import RunResult


def configure_logging(console: Console, *, verbose: bool = False, quiet: bool = False) -> None:
    """Envía el logging estándar a `console` vía `RichHandler`."""

    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    # httpx loguea cada request a INFO; solo lo queremos en modo verbose.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("remove-package-versions", style="bold cyan")
    subtitle = Text("GitHub Packages • retention pruning", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_removed_table(result: RunResult, *, dry_run: bool = False) -> Table:
    """Tabla Rich con las versiones borradas (o que se borrarían)."""

    title = "Would remove" if dry_run else "Removed package versions"
    table = Table(title=f"{title} ({result.repository})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Version", style="magenta")
    for index, name in enumerate(result.removed, start=1):
        package, _, version = name.partition(":")
        table.add_row(str(index), package, version)
    return table
