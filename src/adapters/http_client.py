"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts, headers de autenticación y reintentos de
  conexión para todas las llamadas a la API de GitHub.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

# Header requerido para que la API exponga `packages` en la consulta GraphQL.
PACKAGES_PREVIEW_ACCEPT = "application/vnd.github.packages-preview+json"
# Header requerido para que exista la mutación `deletePackageVersion`.
PACKAGE_DELETES_PREVIEW_ACCEPT = "application/vnd.github.package-deletes-preview+json"


def build_client(
    settings: AppSettings,
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que el gateway y `doctor` se comporten igual.
    - Los reintentos viven en el transporte (solo errores de conexión); el
      Core nunca reintenta un borrado.
    """

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": PACKAGES_PREVIEW_ACCEPT,
        "Authorization": f"Bearer {settings.github_token}",
    }
    if extra_headers:
        headers.update(extra_headers)
    if transport is None:
        transport = httpx.HTTPTransport(retries=settings.http_max_retries)
    return httpx.Client(
        base_url=settings.api_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


def response_detail(response: httpx.Response) -> str:
    """Texto corto del cuerpo de una respuesta de error, para mensajes."""

    try:
        text = response.text.strip()
    except httpx.ResponseNotRead:
        text = ""
    return text or f"HTTP {response.status_code}"
