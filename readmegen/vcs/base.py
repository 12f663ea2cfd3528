"""Abstract VCS interface for readmegen."""

from abc import ABC, abstractmethod

from readmegen.vcs.models import RepoMetadata, RepoRef, TreeEntry


class VCSProvider(ABC):
    """Abstract base class for VCS providers.

    Covers the calls the digest pipeline and README publisher need:
    one metadata lookup, one recursive tree listing, per-file content
    reads, and a read-then-write of a single file.
    """

    @abstractmethod
    async def list_user_repos(self) -> list[RepoMetadata]:
        """List repositories visible to the authenticated user."""
        ...

    @abstractmethod
    async def get_repo_metadata(self, repo: RepoRef) -> RepoMetadata:
        """Get metadata for a specific repository."""
        ...

    @abstractmethod
    async def get_tree(self, repo: RepoRef, ref: str | None = None) -> list[TreeEntry]:
        """List every file and directory in the repository with one recursive call.

        Args:
            repo: Repository to list.
            ref: Branch or commit; the default branch when omitted.
        """
        ...

    @abstractmethod
    async def get_file_content(self, repo: RepoRef, path: str) -> str:
        """Fetch decoded text content of a file."""
        ...

    @abstractmethod
    async def get_file_sha(self, repo: RepoRef, path: str) -> str | None:
        """Return the blob sha of a file, or None if it does not exist."""
        ...

    @abstractmethod
    async def put_file(
        self,
        repo: RepoRef,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> None:
        """Create a file, or update it when the current sha is given."""
        ...
