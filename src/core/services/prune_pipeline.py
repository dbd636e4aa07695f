"""Package version pruning orchestration.

This module drives one pruning run: fetch a single snapshot of the
repository's packages, pick the versions to delete for each package and
delete them one by one through a `RegistryGateway`. It keeps side-effects
(printing, exit codes, workflow outputs) out of the core so the CLI, tests
and any future entry-point share the same flow.

A run is all-or-nothing: the first failed deletion raises `DeletionError`
and no partial `RunResult` is returned.
"""

from __future__ import annotations

import logging

from core.domain.models import (
    DeletionFailed,
    Package,
    RepositoryRef,
    RetentionPolicy,
    RunResult,
)
from core.errors import AuthorizationError, DeletionError
from core.interfaces.registry import RegistryGateway
from core.services.retention import select_for_deletion

logger = logging.getLogger(__name__)

# Hard page caps for the listing query. Anything beyond them is invisible to
# a run; there is no pagination.
PACKAGES_LIMIT = 100
VERSIONS_LIMIT = 100


def effective_version_count(package: Package, versions_limit: int = VERSIONS_LIMIT) -> int:
    """Number of versions the run may consider for `package`."""

    return min(versions_limit, package.total_version_count)


def _prune_package(
    *,
    repository: RepositoryRef,
    package: Package,
    policy: RetentionPolicy,
    gateway: RegistryGateway,
    versions_limit: int,
) -> list[str]:
    prefix = f"[{repository}] [{package.name}]"
    considered = effective_version_count(package, versions_limit)

    if considered <= policy.keep_count:
        logger.info(
            "%s Package has fewer than %d versions, no need for removal",
            prefix,
            policy.keep_count,
        )
        return []

    removed: list[str] = []
    selected = select_for_deletion(package.versions[:considered], policy, log_prefix=prefix)
    for version in selected:
        qualified = package.qualified_name(version)
        logger.info("[%s] [%s] Remove package version", repository, qualified)

        outcome = gateway.delete_package_version(version.id)
        if isinstance(outcome, DeletionFailed):
            raise DeletionError(
                f"Remove package version failed: {outcome.reason}",
                repository=repository,
                subject=qualified,
                version_id=version.id,
                reason=outcome.reason,
            )
        removed.append(qualified)
    return removed


def run(
    repository: RepositoryRef,
    policy: RetentionPolicy,
    gateway: RegistryGateway,
    *,
    allow_public: bool = False,
    packages_limit: int = PACKAGES_LIMIT,
    versions_limit: int = VERSIONS_LIMIT,
) -> RunResult:
    """Prune old package versions of `repository`.

    Raises:
        FetchError: the listing query failed (raised by the gateway).
        AuthorizationError: the repository is public and `allow_public` is off.
        DeletionError: a deletion failed; the run stops right there.
    """

    snapshot = gateway.fetch_repository(repository, packages_limit, versions_limit)

    if not snapshot.is_private and not allow_public:
        raise AuthorizationError(
            "Repository is public, unable to remove package versions",
            repository=repository,
        )

    if not snapshot.packages:
        logger.info("[%s] Repository has no packages", repository)
        return RunResult(repository=repository)

    removed: list[str] = []
    for package in snapshot.packages:
        removed.extend(
            _prune_package(
                repository=repository,
                package=package,
                policy=policy,
                gateway=gateway,
                versions_limit=versions_limit,
            )
        )

    logger.info("[%s] Removed %d package version(s)", repository, len(removed))
    return RunResult(repository=repository, removed=removed)
