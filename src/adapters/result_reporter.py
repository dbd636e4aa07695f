"""Salida del resultado para GitHub Actions.

Por qué está en adapters:
- El formato de outputs (`$GITHUB_OUTPUT` o `::set-output`) es un detalle del
  CI que hospeda la ejecución.
- El Core solo conoce `RunResult`.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from core.domain.models import RunResult

OUTPUT_NAME = "removed_package_versions"


def _encode(names: Sequence[str]) -> str:
    return json.dumps(list(names), ensure_ascii=False, separators=(",", ":"))


def format_set_output(names: Sequence[str], *, name: str = OUTPUT_NAME) -> str:
    """Workflow command legacy: `::set-output name=...::[...]`."""

    return f"::set-output name={name}::{_encode(names)}"


def write_github_output(path: Path, names: Sequence[str], *, name: str = OUTPUT_NAME) -> Path:
    """Añade `name=<json>` al fichero apuntado por `$GITHUB_OUTPUT`."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{name}={_encode(names)}\n")
    return path


def export_result_json(*, result: RunResult, output_path: Path, dry_run: bool = False) -> Path:
    """Exporta el `RunResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "repository": str(result.repository),
        "removed": result.qualified_names(),
        "dry_run": dry_run,
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
