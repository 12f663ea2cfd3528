"""ReadmePublisher: commits a generated README back to the repository."""

from __future__ import annotations

import logging

from github import GithubException

from readmegen.vcs.base import VCSProvider
from readmegen.vcs.models import RepoRef

logger = logging.getLogger(__name__)

README_PATH = "README.md"
CREATE_MESSAGE = "Create README.md via AI Generator"
UPDATE_MESSAGE = "Update README.md via AI Generator"

_STATUS_MESSAGES: dict[int, str] = {
    403: "Permission denied. Please check repository access rights.",
    404: "Repository not found or access denied.",
    422: "Invalid content or repository state. Please try again.",
}


class PublishError(Exception):
    """Raised when README.md cannot be written to the repository."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class ReadmePublisher:
    """Read-then-write of README.md.

    The current blob sha is passed along with the update so GitHub rejects
    the write if the file changed in between; a missing README is created.
    """

    def __init__(self, provider: VCSProvider, path: str = README_PATH) -> None:
        self.provider = provider
        self.path = path

    async def commit_readme(self, repo: RepoRef | str, content: str) -> bool:
        """Write content to README.md. Returns True if an existing file was updated."""
        if isinstance(repo, str):
            repo = RepoRef.parse(repo)
        if not content or not content.strip():
            raise PublishError("README content is required")

        try:
            sha = await self.provider.get_file_sha(repo, self.path)
            message = UPDATE_MESSAGE if sha else CREATE_MESSAGE
            await self.provider.put_file(repo, self.path, content, message, sha=sha)
        except GithubException as e:
            logger.error("Error committing README to %s: %s", repo, e)
            raise PublishError(
                _STATUS_MESSAGES.get(e.status, "Failed to commit README"), e.status
            ) from e
        except Exception as e:
            logger.error("Error committing README to %s: %s", repo, e)
            raise PublishError("Failed to commit README") from e

        logger.info("%s %s in %s", "Updated" if sha else "Created", self.path, repo)
        return sha is not None
