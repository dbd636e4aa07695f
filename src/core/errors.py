"""Error taxonomy for a pruning run.

Every error is fatal for the run. The CLI catches `PruneError`, prints it
and exits non-zero. `str(error)` renders the `[owner/repo] [subject]` prefix
used by the log lines, so a message always names the repository and, where
there is one, the package or version.
"""

from __future__ import annotations

from core.domain.models import RepositoryRef


class PruneError(Exception):
    """Base class for fatal run errors."""

    def __init__(
        self,
        message: str,
        *,
        repository: RepositoryRef | str | None = None,
        subject: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.repository = repository
        self.subject = subject

    def __str__(self) -> str:
        parts: list[str] = []
        if self.repository is not None:
            parts.append(f"[{self.repository}]")
        if self.subject:
            parts.append(f"[{self.subject}]")
        parts.append(self.message)
        return " ".join(parts)


class ConfigurationError(PruneError):
    """Missing or malformed settings, raised before the core runs."""


class FetchError(PruneError):
    """The listing query failed or returned no repository."""


class AuthorizationError(PruneError):
    """The repository is not eligible for pruning."""


class DeletionError(PruneError):
    """A single deletion failed, which aborts the whole run."""

    def __init__(
        self,
        message: str,
        *,
        repository: RepositoryRef | str | None = None,
        subject: str | None = None,
        version_id: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message, repository=repository, subject=subject)
        self.version_id = version_id
        self.reason = reason
