"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_client, response_detail
from core.config import AppSettings, load_settings
from core.errors import ConfigurationError

app = typer.Typer(no_args_is_help=False, help="Environment diagnostics and configuration checks.")

_console = Console()

_VIEWER_QUERY = "query { viewer { login } }"


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.post("graphql", json={"query": _VIEWER_QUERY})
        if response.status_code >= 400:
            return False, response_detail(response)
        login = ((response.json().get("data") or {}).get("viewer") or {}).get("login")
        return True, f"HTTP {response.status_code}, authenticated as {login or '?'}"
    except (httpx.HTTPError, ValueError) as exc:
        return False, str(exc)


@app.callback(invoke_without_command=True)
def run() -> None:
    """Check configuration and API connectivity."""

    table = Table(title="remove-package-versions doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        table.add_row("Configuration", "FAIL", escape(str(exc)))
        _console.print(table)
        raise typer.Exit(code=1) from exc

    table.add_row("Repository", "OK", settings.github_repository)
    table.add_row("Token", "OK", "GITHUB_TOKEN set")
    policy = settings.retention_policy()
    table.add_row(
        "Retention",
        "OK",
        f"keep {policy.keep_count}, remove semver: {policy.remove_semantic_versions}",
    )
    table.add_row("Public repositories", "ALLOWED" if settings.allow_public else "BLOCKED", "")
    table.add_row("API base_url", "OK", settings.api_url)

    ok_api, detail_api = _check_api(settings)
    table.add_row("GraphQL API", "OK" if ok_api else "FAIL", escape(detail_api))

    _console.print(table)
    if not ok_api:
        raise typer.Exit(code=1)
