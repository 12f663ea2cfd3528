"""Digest assembler: renders repository data into the text sent to the LLM."""

from __future__ import annotations

from collections.abc import Sequence

from readmegen.digest.models import FetchedContent, TechnologySummary
from readmegen.vcs.models import RepoMetadata, TreeEntry

MAX_TREE_DIRS = 20
MAX_TREE_FILES = 30

STRUCTURE_HEADER = "=== PROJECT STRUCTURE ==="
FILES_HEADER = "=== IMPORTANT FILES ANALYSIS ==="
TECHNOLOGIES_HEADER = "=== DETECTED TECHNOLOGIES ==="

DIR_ICON = "📁"
DEFAULT_FILE_ICON = "📄"

_FILE_ICONS: dict[str, str] = {
    "js": "📄",
    "ts": "📘",
    "jsx": "⚛️",
    "tsx": "⚛️",
    "py": "🐍",
    "java": "☕",
    "go": "🐹",
    "rs": "🦀",
    "php": "🐘",
    "rb": "💎",
    "css": "🎨",
    "scss": "🎨",
    "html": "🌐",
    "json": "📋",
    "md": "📝",
    "txt": "📄",
    "yml": "⚙️",
    "yaml": "⚙️",
    "xml": "📄",
    "sql": "🗄️",
}

# Files under these markers are left out of the rendered tree.
_TREE_EXCLUDED = ("node_modules", ".git/")


def file_icon(path: str) -> str:
    ext = path.rsplit(".", 1)[-1].lower() if "." in path else ""
    return _FILE_ICONS.get(ext, DEFAULT_FILE_ICON)


def render_metadata(metadata: RepoMetadata) -> str:
    topics = ", ".join(metadata.topics) if metadata.topics else "None"
    return (
        f"Repository: {metadata.name}\n"
        f"Description: {metadata.description or 'No description provided'}\n"
        f"Language: {metadata.language or 'Not specified'}\n"
        f"Stars: {metadata.stars}\n"
        f"Forks: {metadata.forks}\n"
        f"License: {metadata.license or 'No license'}\n"
        f"Topics: {topics}\n\n"
    )


def render_tree(
    tree: Sequence[TreeEntry],
    max_dirs: int = MAX_TREE_DIRS,
    max_files: int = MAX_TREE_FILES,
) -> str:
    """Sorted directory and file listings, each capped."""
    dirs = sorted(e.path for e in tree if e.kind == "dir")
    files = sorted(
        e.path
        for e in tree
        if e.kind == "file" and not any(m in e.path for m in _TREE_EXCLUDED)
    )

    lines = ["Directories:\n"]
    lines += [f"  {DIR_ICON} {d}/\n" for d in dirs[:max_dirs]]
    lines.append("\nKey Files:\n")
    lines += [f"  {file_icon(f)} {f}\n" for f in files[:max_files]]
    return "".join(lines)


def render_contents(contents: Sequence[FetchedContent]) -> str:
    return "".join(f"\n--- {c.path} ---\n{c.text}\n" for c in contents)


def render_body(
    metadata: RepoMetadata,
    tree: Sequence[TreeEntry],
    contents: Sequence[FetchedContent],
    max_dirs: int = MAX_TREE_DIRS,
    max_files: int = MAX_TREE_FILES,
) -> str:
    """Everything before the technology summary."""
    return (
        render_metadata(metadata)
        + f"{STRUCTURE_HEADER}\n"
        + render_tree(tree, max_dirs, max_files)
        + f"\n\n{FILES_HEADER}\n"
        + render_contents(contents)
    )


def assemble_digest(
    metadata: RepoMetadata,
    tree: Sequence[TreeEntry],
    contents: Sequence[FetchedContent],
    technologies: TechnologySummary,
    max_dirs: int = MAX_TREE_DIRS,
    max_files: int = MAX_TREE_FILES,
) -> str:
    """Join metadata, tree, file blocks and technology summary, in that order."""
    body = render_body(metadata, tree, contents, max_dirs, max_files)
    return body + f"\n{TECHNOLOGIES_HEADER}\n" + technologies.render()
