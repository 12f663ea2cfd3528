"""GitHub VCS provider using PyGithub."""

import asyncio
import os
from functools import cached_property

from github import Auth, Github, UnknownObjectException
from github.Repository import Repository

from readmegen.vcs.base import VCSProvider
from readmegen.vcs.models import RepoMetadata, RepoRef, TreeEntry

DEFAULT_API_URL = "https://api.github.com"


class GitHubProvider(VCSProvider):
    """GitHub implementation of VCSProvider using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    """

    def __init__(self, token: str | None = None, api_url: str = DEFAULT_API_URL):
        self._token = token or os.environ.get("GITHUB_TOKEN", "")
        if not self._token:
            raise ValueError(
                "GitHub token required. Pass token=, set GITHUB_TOKEN, "
                "or run `readmegen login`."
            )
        self._api_url = api_url.rstrip("/")

    @cached_property
    def _client(self) -> Github:
        auth = Auth.Token(self._token)
        return Github(auth=auth, base_url=self._api_url)

    def _get_repo(self, repo: RepoRef) -> Repository:
        """Get a PyGithub Repository object for a RepoRef."""
        return self._client.get_repo(repo.full_name)

    def _build_repo_metadata(self, repo: Repository) -> RepoMetadata:
        """Convert a PyGithub Repository to our RepoMetadata model."""
        license_ = repo.license
        return RepoMetadata(
            name=repo.name,
            full_name=repo.full_name,
            description=repo.description,
            language=repo.language,
            stars=repo.stargazers_count,
            forks=repo.forks_count,
            license=license_.name if license_ is not None else None,
            topics=list(repo.topics or []),
            default_branch=repo.default_branch,
            url=repo.html_url,
            private=repo.private,
            updated_at=repo.updated_at.isoformat() if repo.updated_at else None,
        )

    async def list_user_repos(self) -> list[RepoMetadata]:
        """List repositories for the authenticated user (PyGithub pages for us)."""

        def _sync() -> list[RepoMetadata]:
            repos = self._client.get_user().get_repos()
            return [self._build_repo_metadata(r) for r in repos]

        return await asyncio.to_thread(_sync)

    async def get_repo_metadata(self, repo: RepoRef) -> RepoMetadata:
        """Get metadata for a specific repository."""

        def _sync() -> RepoMetadata:
            return self._build_repo_metadata(self._get_repo(repo))

        return await asyncio.to_thread(_sync)

    async def get_tree(self, repo: RepoRef, ref: str | None = None) -> list[TreeEntry]:
        """List the whole repository with a single recursive git-tree call."""

        def _sync() -> list[TreeEntry]:
            gh_repo = self._get_repo(repo)
            tree = gh_repo.get_git_tree(ref or gh_repo.default_branch, recursive=True)
            # Submodule entries ("commit") have no content to read.
            return [
                TreeEntry(path=e.path, kind="dir" if e.type == "tree" else "file")
                for e in tree.tree
                if e.type in ("blob", "tree")
            ]

        return await asyncio.to_thread(_sync)

    async def get_file_content(self, repo: RepoRef, path: str) -> str:
        """Fetch decoded text content of a file from GitHub."""

        def _sync() -> str:
            content = self._get_repo(repo).get_contents(path)
            if isinstance(content, list):
                raise ValueError(f"Path '{path}' is a directory, not a file.")
            return content.decoded_content.decode("utf-8")

        return await asyncio.to_thread(_sync)

    async def get_file_sha(self, repo: RepoRef, path: str) -> str | None:
        """Return the current blob sha for path, or None when it does not exist."""

        def _sync() -> str | None:
            try:
                content = self._get_repo(repo).get_contents(path)
            except UnknownObjectException:
                return None
            if isinstance(content, list):
                raise ValueError(f"Path '{path}' is a directory, not a file.")
            return content.sha

        return await asyncio.to_thread(_sync)

    async def put_file(
        self,
        repo: RepoRef,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> None:
        """Create or update a file; PyGithub handles the base64 encoding."""

        def _sync() -> None:
            gh_repo = self._get_repo(repo)
            if sha is None:
                gh_repo.create_file(path, message, content)
            else:
                gh_repo.update_file(path, message, content, sha)

        await asyncio.to_thread(_sync)
