"""
Publishing of translated documents.

Every file is written locally first. When a GitHub remote is configured, the
files that were written are then committed in a single commit. A failed commit
leaves the local files in place and is reported as ``committed=False``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from translate_cms_ai.errors import PublishConflictError, RemoteCommitError
from translate_cms_ai.publish.github import GitHubCommitter
from translate_cms_ai.publish.store import ContentStore, PublishFile, serialize_document

logger = logging.getLogger(__name__)


@dataclass
class PublishConflict:
    """A file that was not written because it already exists."""

    locale: str
    path: Path


@dataclass
class PublishFailure:
    """A file that could not be written."""

    locale: str
    path: Path
    error: str


@dataclass
class PublishReport:
    """Outcome of a publish call."""

    written: list[PublishFile] = field(default_factory=list)
    paths: list[Path] = field(default_factory=list)
    conflicts: list[PublishConflict] = field(default_factory=list)
    failures: list[PublishFailure] = field(default_factory=list)
    committed: bool = False
    commit_sha: str | None = None
    error: str | None = None

    @property
    def method(self) -> str:
        """Where the files ended up."""
        return "github+local" if self.committed else "local"

    @property
    def locales(self) -> list[str]:
        """Locales whose files were written."""
        return [file.locale for file in self.written]


def commit_message(files: list[PublishFile], source_path: str) -> str:
    """Message of the commit that adds translations."""
    locales = ", ".join(file.locale for file in files)
    if source_path:
        return f"Add translations to {locales}: {source_path}"
    return f"Add translations to {locales}"


class Publisher:
    """Writes translated documents locally and optionally commits them."""

    def __init__(self, store: ContentStore, committer: GitHubCommitter | None = None):
        """
        Initialize the publisher.

        Args:
            store: Local content store.
            committer: Remote committer; None publishes locally only.
        """
        self.store = store
        self.committer = committer

    async def publish(self, files: list[PublishFile], source_path: str = "") -> PublishReport:
        """
        Publish translated documents.

        Args:
            files: Documents to publish.
            source_path: Path of the source document, used in the commit message.

        Returns:
            PublishReport listing written files, conflicts, write failures
            and commit status.
        """
        start_time = time.perf_counter()
        report = PublishReport()

        for file in files:
            try:
                path = self.store.write(file)
            except PublishConflictError as e:
                logger.warning("Not overwriting existing translation: %s", e.path)
                report.conflicts.append(PublishConflict(locale=file.locale, path=e.path))
                continue
            except OSError as e:
                path = self.store.path_for(file.collection, file.locale, file.name)
                logger.error("Failed to write %s: %s", path, e)
                report.failures.append(
                    PublishFailure(locale=file.locale, path=path, error=str(e))
                )
                continue
            report.written.append(file)
            report.paths.append(path)

        local_ms = (time.perf_counter() - start_time) * 1000
        logger.info("Saved %d files locally in %.0fms", len(report.written), local_ms)

        if self.committer is None:
            logger.info("No remote configured, files saved locally only")
            return report
        if not report.written:
            return report

        remote_files = [
            (self.store.repo_path(file), serialize_document(file.document, file.name))
            for file in report.written
        ]
        try:
            report.commit_sha = await self.committer.commit_files(
                remote_files, commit_message(report.written, source_path)
            )
            report.committed = True
        except RemoteCommitError as e:
            report.error = str(e)
            logger.warning("Remote commit failed, files saved locally only: %s", e)

        return report
