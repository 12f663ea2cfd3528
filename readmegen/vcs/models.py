"""Pydantic models for VCS data."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class InvalidRepoRefError(ValueError):
    """Raised when a repository identifier is missing or malformed."""


class RepoRef(BaseModel):
    """An owner/name pair identifying a remote repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @classmethod
    def parse(cls, repo_id: str | None) -> "RepoRef":
        """Split an 'owner/repo' identifier, failing before any network call."""
        if not repo_id or not repo_id.strip():
            raise InvalidRepoRefError("Repository identifier is required")
        parts = repo_id.strip().split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidRepoRefError(
                f"Invalid repo identifier '{repo_id}': expected 'owner/repo'"
            )
        return cls(owner=parts[0], name=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


class RepoMetadata(BaseModel):
    """Metadata for a repository."""

    name: str
    full_name: str = Field(description="Full name including owner (e.g. owner/repo)")
    description: str | None = None
    language: str | None = Field(default=None, description="Primary language")
    stars: int = 0
    forks: int = 0
    license: str | None = Field(default=None, description="License display name")
    topics: list[str] = Field(default_factory=list)
    default_branch: str = "main"
    url: str = ""
    private: bool = False
    updated_at: str | None = None


class TreeEntry(BaseModel):
    """A file or directory from a recursive repository listing."""

    path: str
    kind: Literal["file", "dir"]
