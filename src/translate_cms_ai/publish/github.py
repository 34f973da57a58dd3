"""
GitHub git-data client for atomic multi-file commits.

One commit per publish: read the branch head, create a blob per file, create
one tree on top of the head's tree, create one commit, then move the branch
reference to it. Nothing is visible on the branch until the final step.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any

import httpx

from translate_cms_ai.config import GitHubConfig
from translate_cms_ai.errors import RemoteCommitError

logger = logging.getLogger(__name__)

FILE_MODE = "100644"


class GitHubCommitter:
    """Creates single commits containing many files."""

    def __init__(self, config: GitHubConfig, client: httpx.AsyncClient | None = None):
        """
        Initialize the committer.

        Args:
            config: GitHub section of the settings; must be ``configured``.
            client: HTTP client to use; one is created when None.
        """
        if not config.configured:
            raise ValueError("GitHub remote requires token, owner and repo")
        self.config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.api_url,
            timeout=httpx.Timeout(config.timeout),
        )
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    @property
    def _repo_url(self) -> str:
        return f"/repos/{self.config.owner}/{self.config.repo}/git"

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        response = await self._client.request(
            method, f"{self._repo_url}{path}", json=json, headers=self._headers
        )
        response.raise_for_status()
        return response.json()

    async def commit_files(self, files: list[tuple[str, str]], message: str) -> str:
        """
        Commit files to the configured branch in one commit.

        Args:
            files: (repository path, file content) pairs.
            message: Commit message.

        Returns:
            SHA of the new commit.

        Raises:
            RemoteCommitError: If any step fails; the branch is then unchanged
                unless the failing step was the final reference update.
        """
        if not files:
            raise RemoteCommitError("Nothing to commit")

        branch = self.config.branch
        try:
            ref = await self._request("GET", f"/ref/heads/{branch}")
            head_sha = ref["object"]["sha"]

            head_commit = await self._request("GET", f"/commits/{head_sha}")
            base_tree_sha = head_commit["tree"]["sha"]

            blobs = await asyncio.gather(
                *(
                    self._request(
                        "POST",
                        "/blobs",
                        {
                            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
                            "encoding": "base64",
                        },
                    )
                    for _, content in files
                )
            )

            tree = await self._request(
                "POST",
                "/trees",
                {
                    "base_tree": base_tree_sha,
                    "tree": [
                        {"path": path, "mode": FILE_MODE, "type": "blob", "sha": blob["sha"]}
                        for (path, _), blob in zip(files, blobs, strict=True)
                    ],
                },
            )

            commit = await self._request(
                "POST",
                "/commits",
                {
                    "message": message,
                    "tree": tree["sha"],
                    "parents": [head_sha],
                    "author": {
                        "name": self.config.author_name,
                        "email": self.config.author_email,
                    },
                },
            )

            await self._request("PATCH", f"/refs/heads/{branch}", {"sha": commit["sha"]})

        except httpx.HTTPStatusError as e:
            raise RemoteCommitError(
                f"GitHub API {e.request.method} {e.request.url.path} "
                f"returned {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            raise RemoteCommitError(f"GitHub commit failed: {type(e).__name__}: {e}") from e

        logger.info("Committed %d files to %s as %s", len(files), branch, commit["sha"])
        return commit["sha"]
