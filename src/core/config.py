"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Acepta tanto los nombres que inyecta GitHub Actions (`GITHUB_TOKEN`,
  `GITHUB_REPOSITORY`, `INPUT_*`) como el prefijo propio `PRUNE_`.
- El Core nunca lee el entorno: recibe `RetentionPolicy` y `RepositoryRef`
  ya validados a través de `retention_policy()` / `repository_ref()`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import RepositoryRef, RetentionPolicy
from core.errors import ConfigurationError

__version__ = "0.2.0"

DEFAULT_CLIENT_ID = "remove-package-versions"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRUNE_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # En Actions los inputs no definidos llegan como cadena vacía.
        env_ignore_empty=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    github_token: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("GITHUB_TOKEN", "PRUNE_GITHUB_TOKEN"),
        description="Token con permisos read:packages y delete:packages.",
    )
    github_repository: str = Field(
        ...,
        validation_alias=AliasChoices("GITHUB_REPOSITORY", "PRUNE_GITHUB_REPOSITORY"),
        description="Repositorio objetivo en formato `owner/name`.",
    )

    keep_versions: int = Field(
        default=5,
        ge=0,
        validation_alias=AliasChoices("INPUT_KEEP_VERSIONS", "PRUNE_KEEP_VERSIONS"),
        description="Versiones más recientes a conservar por paquete.",
    )
    remove_semver: bool = Field(
        default=False,
        validation_alias=AliasChoices("INPUT_REMOVE_SEMVER", "PRUNE_REMOVE_SEMVER"),
        description="Permite borrar versiones SemVer más allá de keep_versions.",
    )
    allow_public: bool = Field(
        default=False,
        validation_alias=AliasChoices("INPUT_ALLOW_PUBLIC", "PRUNE_ALLOW_PUBLIC"),
        description="Permite podar repositorios públicos.",
    )
    dry_run: bool = Field(
        default=False,
        validation_alias=AliasChoices("INPUT_DRY_RUN", "PRUNE_DRY_RUN"),
        description="Lista lo que se borraría sin llamar a la mutación.",
    )
    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OUTPUT", "PRUNE_GITHUB_OUTPUT"),
        description="Fichero de outputs del step (GitHub Actions).",
    )

    api_url: str = Field(
        default="https://api.github.com/",
        min_length=8,
        description="Base URL de la API (GitHub Enterprise: https://host/api/).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    http_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Reintentos de conexión del transporte HTTP.",
    )
    user_agent: str = Field(
        default=f"remove-package-versions/{__version__}",
        min_length=1,
        description="User-Agent de las peticiones a la API.",
    )
    client_mutation_id: str = Field(
        default=DEFAULT_CLIENT_ID,
        min_length=1,
        description="clientMutationId enviado en deletePackageVersion.",
    )

    @field_validator("github_repository")
    @classmethod
    def _check_repository(cls, value: str) -> str:
        RepositoryRef.parse(value)
        return value.strip()

    def repository_ref(self) -> RepositoryRef:
        return RepositoryRef.parse(self.github_repository)

    def retention_policy(self) -> RetentionPolicy:
        return RetentionPolicy(
            keep_count=self.keep_versions,
            remove_semantic_versions=self.remove_semver,
        )


# Nombres de entorno mostrados en los mensajes de error.
_ENV_NAMES: dict[str, str] = {
    "github_token": "GITHUB_TOKEN",
    "github_repository": "GITHUB_REPOSITORY",
    "keep_versions": "INPUT_KEEP_VERSIONS",
    "remove_semver": "INPUT_REMOVE_SEMVER",
    "allow_public": "INPUT_ALLOW_PUBLIC",
    "dry_run": "INPUT_DRY_RUN",
    "github_output": "GITHUB_OUTPUT",
}


def _describe(error: dict[str, Any]) -> str:
    loc = error.get("loc") or ("?",)
    key = str(loc[0])
    name = _ENV_NAMES.get(key) or _ENV_NAMES.get(key.lower()) or key.upper()
    if error.get("type") == "missing":
        return f"Missing {name}"
    return f"Invalid {name}: {error.get('msg')}"


def load_settings(**overrides: Any) -> AppSettings:
    """Construye `AppSettings` y traduce errores de validación a `ConfigurationError`.

    `overrides` (p.ej. flags de la CLI) tienen prioridad sobre el entorno;
    los valores `None` se ignoran.
    """

    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = AppSettings()
        if values:
            # Revalida con los overrides por nombre de campo (sin releer el entorno).
            settings = AppSettings.model_validate({**settings.model_dump(), **values})
        return settings
    except ValidationError as exc:
        message = "; ".join(_describe(err) for err in exc.errors())
        raise ConfigurationError(message) from exc
