"""Gateway de dry-run.

Delegates the listing query to a real gateway and pretends every deletion
succeeded, so a run reports exactly what it would remove.
"""

from __future__ import annotations

import logging

from core.domain.models import DeletionOutcome, DeletionSucceeded, Repository, RepositoryRef
from core.interfaces.registry import RegistryGateway

logger = logging.getLogger(__name__)


class DryRunGateway(RegistryGateway):
    def __init__(self, inner: RegistryGateway) -> None:
        self._inner = inner
        self.skipped: list[str] = []

    def fetch_repository(
        self,
        repository: RepositoryRef,
        packages_limit: int,
        versions_limit: int,
    ) -> Repository:
        return self._inner.fetch_repository(repository, packages_limit, versions_limit)

    def delete_package_version(self, version_id: str) -> DeletionOutcome:
        logger.debug("Dry run: not deleting package version %s", version_id)
        self.skipped.append(version_id)
        return DeletionSucceeded(version_id=version_id)
