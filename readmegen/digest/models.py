"""Pydantic models for the digest pipeline."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from readmegen.vcs.models import RepoMetadata, TreeEntry

TRUNCATION_MARKER = "...[truncated]"
NO_TECHNOLOGIES = "No specific technologies detected"


class SelectedFile(TreeEntry):
    """A tree file that passed the importance filter."""

    kind: Literal["file"] = "file"


class FetchedContent(BaseModel):
    """Text of one selected file, capped at the per-file character limit."""

    path: str
    text: str
    truncated: bool = False


class TechnologySummary(BaseModel):
    """Languages, frameworks and tools detected in a repository."""

    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.languages or self.frameworks or self.tools)

    def render(self) -> str:
        if self.empty:
            return NO_TECHNOLOGIES
        lines = []
        if self.languages:
            lines.append(f"Languages: {', '.join(self.languages)}\n")
        if self.frameworks:
            lines.append(f"Frameworks: {', '.join(self.frameworks)}\n")
        if self.tools:
            lines.append(f"Tools: {', '.join(self.tools)}\n")
        return "".join(lines)


class RepoDigest(BaseModel):
    """The assembled digest plus the parts it was built from."""

    metadata: RepoMetadata
    tree: list[TreeEntry]
    contents: list[FetchedContent]
    technologies: TechnologySummary
    text: str
