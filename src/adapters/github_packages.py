"""Registry gateway: GitHub Packages vía GraphQL.

Responsabilidades:
- Ejecutar la consulta `repository { packages { versions } }` (una sola página).
- Ejecutar la mutación `deletePackageVersion` por versión.
- Decodificar las respuestas a los modelos del dominio y traducir errores de
  transporte/HTTP/GraphQL al contrato de `RegistryGateway`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from adapters.http_client import (
    PACKAGE_DELETES_PREVIEW_ACCEPT,
    build_client,
    response_detail,
)
from core.config import AppSettings
from core.domain.models import (
    DeletionFailed,
    DeletionOutcome,
    DeletionSucceeded,
    Package,
    PackageVersion,
    Repository,
    RepositoryRef,
)
from core.errors import FetchError
from core.interfaces.registry import RegistryGateway

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "graphql"

LIST_PACKAGES_QUERY = """
query ($owner: String!, $name: String!, $packagesLimit: Int!, $versionsLimit: Int!) {
    repository(owner: $owner, name: $name) {
        isPrivate
        packages(first: $packagesLimit, orderBy: {field: CREATED_AT, direction: DESC}) {
            nodes {
                name
                versions(first: $versionsLimit, orderBy: {field: CREATED_AT, direction: DESC}) {
                    totalCount
                    nodes {
                        id
                        version
                    }
                }
            }
        }
    }
}
"""

DELETE_PACKAGE_VERSION_MUTATION = """
mutation ($packageVersionId: ID!, $clientMutationId: String) {
    deletePackageVersion(input: {clientMutationId: $clientMutationId, packageVersionId: $packageVersionId}) {
        success
    }
}
"""


class _VersionNode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    version: str


class _VersionConnection(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    total_count: int = Field(default=0, alias="totalCount")
    nodes: list[_VersionNode] = Field(default_factory=list)


class _PackageNode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    versions: _VersionConnection = Field(default_factory=_VersionConnection)


class _PackageConnection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    nodes: list[_PackageNode] = Field(default_factory=list)


class _RepositoryNode(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    is_private: bool = Field(..., alias="isPrivate")
    packages: _PackageConnection = Field(default_factory=_PackageConnection)

    def to_domain(self) -> Repository:
        return Repository(
            is_private=self.is_private,
            packages=[
                Package(
                    name=node.name,
                    total_version_count=node.versions.total_count,
                    versions=[
                        PackageVersion(id=version.id, version=version.version)
                        for version in node.versions.nodes
                    ],
                )
                for node in self.packages.nodes
            ],
        )


def _graphql_errors(payload: dict[str, Any]) -> str | None:
    errors = payload.get("errors")
    if not errors:
        return None
    messages = [
        str(err.get("message", err)) if isinstance(err, dict) else str(err)
        for err in errors
    ]
    return "; ".join(messages)


class GitHubPackagesGateway(RegistryGateway):
    """Implementación de `RegistryGateway` contra la API GraphQL de GitHub."""

    def __init__(self, settings: AppSettings, *, client: httpx.Client | None = None) -> None:
        self._settings = settings
        self._client = client or build_client(settings)

    def __enter__(self) -> "GitHubPackagesGateway":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_repository(
        self,
        repository: RepositoryRef,
        packages_limit: int,
        versions_limit: int,
    ) -> Repository:
        body = {
            "query": LIST_PACKAGES_QUERY,
            "variables": {
                "owner": repository.owner,
                "name": repository.name,
                "packagesLimit": packages_limit,
                "versionsLimit": versions_limit,
            },
        }
        try:
            response = self._client.post(GRAPHQL_PATH, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Request for packages failed: {response_detail(exc.response)}",
                repository=repository,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Request for packages failed: {exc}", repository=repository) from exc
        except ValueError as exc:
            raise FetchError(
                f"Request for packages returned invalid JSON: {exc}",
                repository=repository,
            ) from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        raw_repository = data.get("repository") if isinstance(data, dict) else None
        if raw_repository is None:
            errors = _graphql_errors(payload) if isinstance(payload, dict) else None
            if errors:
                raise FetchError(f"Request for packages failed: {errors}", repository=repository)
            raise FetchError("Repository not found", repository=repository)

        try:
            node = _RepositoryNode.model_validate(raw_repository)
        except ValidationError as exc:
            raise FetchError(f"Unexpected packages payload: {exc}", repository=repository) from exc

        snapshot = node.to_domain()
        logger.debug(
            "[%s] Fetched %d package(s) (private=%s)",
            repository,
            len(snapshot.packages),
            snapshot.is_private,
        )
        return snapshot

    def delete_package_version(self, version_id: str) -> DeletionOutcome:
        body = {
            "query": DELETE_PACKAGE_VERSION_MUTATION,
            "variables": {
                "packageVersionId": version_id,
                "clientMutationId": self._settings.client_mutation_id,
            },
        }
        try:
            response = self._client.post(
                GRAPHQL_PATH,
                json=body,
                headers={"Accept": PACKAGE_DELETES_PREVIEW_ACCEPT},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            return DeletionFailed(version_id=version_id, reason=response_detail(exc.response))
        except httpx.HTTPError as exc:
            return DeletionFailed(version_id=version_id, reason=str(exc) or type(exc).__name__)
        except ValueError as exc:
            return DeletionFailed(version_id=version_id, reason=f"invalid JSON response: {exc}")

        if not isinstance(payload, dict):
            return DeletionFailed(version_id=version_id, reason="unexpected response payload")

        errors = _graphql_errors(payload)
        if errors:
            return DeletionFailed(version_id=version_id, reason=errors)

        result = (payload.get("data") or {}).get("deletePackageVersion") or {}
        if result.get("success") is not True:
            return DeletionFailed(version_id=version_id, reason="deletePackageVersion reported success=false")
        return DeletionSucceeded(version_id=version_id)
