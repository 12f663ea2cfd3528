"""VCS providers for readmegen."""

import os

from readmegen.config.models import GitHubConfig
from readmegen.quota.storage import KeyValueStorage
from readmegen.vcs.auth import TOKEN_KEY, AuthError
from readmegen.vcs.base import VCSProvider
from readmegen.vcs.github import GitHubProvider
from readmegen.vcs.models import (
    InvalidRepoRefError,
    RepoMetadata,
    RepoRef,
    TreeEntry,
)


def create_provider(
    config: GitHubConfig, storage: KeyValueStorage | None = None
) -> VCSProvider:
    """Create a GitHub provider from config.

    Resolves the token from the environment variable named in config.token_env,
    falling back to the token saved by `readmegen login`.
    """
    token = os.environ.get(config.token_env, "")
    if not token and storage is not None:
        token = storage.get(TOKEN_KEY) or ""
    if not token:
        raise AuthError(
            f"GitHub token not found. Set the {config.token_env} environment "
            "variable or run `readmegen login`."
        )
    return GitHubProvider(token=token, api_url=config.api_url)


__all__ = [
    "AuthError",
    "GitHubProvider",
    "InvalidRepoRefError",
    "RepoMetadata",
    "RepoRef",
    "TreeEntry",
    "VCSProvider",
    "create_provider",
]
