from __future__ import annotations

from typing import Iterable

import pytest

from core.domain.models import (
    DeletionFailed,
    DeletionOutcome,
    DeletionSucceeded,
    Package,
    PackageVersion,
    Repository,
    RepositoryRef,
)


def make_versions(*names: str) -> list[PackageVersion]:
    return [PackageVersion(id=f"id-{name}", version=name) for name in names]


def make_package(name: str, versions: Iterable[str], total: int | None = None) -> Package:
    built = make_versions(*versions)
    return Package(
        name=name,
        versions=built,
        total_version_count=len(built) if total is None else total,
    )


class FakeGateway:
    """In-memory registry that records every call."""

    def __init__(self, repository: Repository, fail_on: set[str] | None = None) -> None:
        self.repository = repository
        self.fail_on = fail_on or set()
        self.fetch_calls: list[tuple[RepositoryRef, int, int]] = []
        self.delete_calls: list[str] = []

    def fetch_repository(
        self, repository: RepositoryRef, packages_limit: int, versions_limit: int
    ) -> Repository:
        self.fetch_calls.append((repository, packages_limit, versions_limit))
        return self.repository

    def delete_package_version(self, version_id: str) -> DeletionOutcome:
        self.delete_calls.append(version_id)
        if version_id in self.fail_on:
            return DeletionFailed(version_id=version_id, reason="boom")
        return DeletionSucceeded(version_id=version_id)


@pytest.fixture
def repo_ref() -> RepositoryRef:
    return RepositoryRef(owner="acme", name="widgets")


@pytest.fixture
def github_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # Run from an empty dir so a developer's .env never leaks into tests.
    monkeypatch.chdir(tmp_path)
    for name in (
        "INPUT_KEEP_VERSIONS",
        "INPUT_REMOVE_SEMVER",
        "INPUT_ALLOW_PUBLIC",
        "INPUT_DRY_RUN",
        "GITHUB_OUTPUT",
        "PRUNE_KEEP_VERSIONS",
        "PRUNE_REMOVE_SEMVER",
        "PRUNE_ALLOW_PUBLIC",
        "PRUNE_DRY_RUN",
        "PRUNE_GITHUB_TOKEN",
        "PRUNE_GITHUB_REPOSITORY",
        "PRUNE_GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/widgets")
