"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los registros son inmutables (`frozen=True`): se construyen una vez por
  ejecución a partir de un único snapshot del registry.

Nota:
- Estos modelos describen *qué* es un paquete/versión, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RepositoryRef(BaseModel):
    """Repositorio objetivo (`owner/name`)."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(
        ...,
        min_length=1,
        description="Usuario u organización dueña del repositorio.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del repositorio.",
    )

    @classmethod
    def parse(cls, value: str) -> "RepositoryRef":
        """Construye la referencia a partir de `owner/name` (p.ej. GITHUB_REPOSITORY)."""

        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name:
            raise ValueError(f"expected 'owner/name', got {value!r}")
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class PackageVersion(BaseModel):
    """Una revisión publicada de un paquete."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Identificador opaco; solo se usa para pedir el borrado.",
    )
    version: str = Field(
        ...,
        description="Versión legible; todas las decisiones de política se basan en ella.",
    )


class Package(BaseModel):
    """Paquete con sus versiones, de la más reciente a la más antigua.

    El orden de `versions` es parte del contrato: la retención conserva las
    primeras `keep_count` entradas.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Nombre del paquete.")
    versions: list[PackageVersion] = Field(
        default_factory=list,
        description="Versiones devueltas (truncadas al límite de página).",
    )
    total_version_count: int = Field(
        default=0,
        ge=0,
        description="Total real según el registry; puede superar len(versions).",
    )

    def qualified_name(self, version: PackageVersion) -> str:
        return f"{self.name}:{version.version}"


class Repository(BaseModel):
    """Snapshot del repositorio devuelto por la consulta de listado."""

    model_config = ConfigDict(frozen=True)

    is_private: bool = Field(..., description="Visibilidad del repositorio.")
    packages: list[Package] = Field(default_factory=list)


class RetentionPolicy(BaseModel):
    """Reglas de retención aplicadas a cada paquete."""

    model_config = ConfigDict(frozen=True)

    keep_count: int = Field(
        default=5,
        ge=0,
        description="Versiones más recientes que nunca se borran.",
    )
    remove_semantic_versions: bool = Field(
        default=False,
        description="Si es False, las versiones SemVer nunca se borran.",
    )


class DeletionSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    version_id: str


class DeletionFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    version_id: str
    reason: str = Field(..., description="Mensaje del registry o del transporte.")


DeletionOutcome = Union[DeletionSucceeded, DeletionFailed]


class RunResult(BaseModel):
    """Resultado de una ejecución completa (solo se construye si no hubo fallos)."""

    model_config = ConfigDict(frozen=True)

    repository: RepositoryRef
    removed: list[str] = Field(
        default_factory=list,
        description="`paquete:versión` en el orden en que se borraron.",
    )

    def qualified_names(self) -> list[str]:
        """Nombres completos `owner/repo/paquete:versión` para el reporter."""

        return [f"{self.repository}/{name}" for name in self.removed]
