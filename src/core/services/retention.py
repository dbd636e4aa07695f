"""Retention selection for a single package.

Pure: given the versions of one package (most recent first) and a
`RetentionPolicy`, decide which of them to delete. No I/O and no state, so
the same input always yields the same ordered output.
"""

from __future__ import annotations

import logging
from typing import Sequence

from core.domain.models import PackageVersion, RetentionPolicy
from core.domain.semver import is_semantic_version

logger = logging.getLogger(__name__)

# Conventional alias tag; it must survive pruning.
LATEST_VERSION = "latest"

# Deleting this version of a Docker package triggers a bug in GitHub Packages.
# Permanent workaround: never delete it. Exact match only.
DOCKER_BASE_LAYER_VERSION = "docker-base-layer"

PROTECTED_VERSIONS: frozenset[str] = frozenset({LATEST_VERSION, DOCKER_BASE_LAYER_VERSION})


def is_protected_version(version: str) -> bool:
    return version in PROTECTED_VERSIONS


def select_for_deletion(
    versions: Sequence[PackageVersion],
    policy: RetentionPolicy,
    *,
    log_prefix: str = "",
) -> list[PackageVersion]:
    """Return the versions to delete, in the order they were given.

    Rules, in order:
    - the `keep_count` most recent entries are always kept;
    - `latest` and `docker-base-layer` are never deleted;
    - semantic versions are kept unless the policy allows removing them.

    `log_prefix` only decorates the INFO line emitted for skipped semantic
    versions (e.g. `[owner/repo] [package]`).
    """

    if len(versions) <= policy.keep_count:
        return []

    selected: list[PackageVersion] = []
    for candidate in versions[policy.keep_count :]:
        if is_protected_version(candidate.version):
            continue
        if not policy.remove_semantic_versions and is_semantic_version(candidate.version):
            logger.info(
                "%sSemantic version %s will not be removed unless remove-semver is set to true",
                f"{log_prefix} " if log_prefix else "",
                candidate.version,
            )
            continue
        selected.append(candidate)
    return selected
