"""Contrato del registry de paquetes.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El orquestador no sabe nada de GraphQL/HTTP: un gateway real (GitHub), uno
  de dry-run o uno en memoria para tests son intercambiables.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DeletionOutcome, Repository, RepositoryRef


@runtime_checkable
class RegistryGateway(Protocol):
    """Operaciones remotas que necesita el Core.

    Reglas de diseño:
    - `fetch_repository` lanza `FetchError` ante cualquier fallo; es fatal.
    - `delete_package_version` nunca lanza por fallos remotos: devuelve
      `DeletionFailed` para que el orquestador decida (y aborte).
    """

    def fetch_repository(
        self,
        repository: RepositoryRef,
        packages_limit: int,
        versions_limit: int,
    ) -> Repository:
        """Devuelve una única página de paquetes, cada uno con una página de versiones."""

        ...

    def delete_package_version(self, version_id: str) -> DeletionOutcome:
        """Borra una versión concreta por su id opaco."""

        ...
