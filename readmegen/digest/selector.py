"""File selector: decides which tree files are worth a place in the digest."""

from __future__ import annotations

import re
from collections.abc import Iterable

from readmegen.digest.models import SelectedFile
from readmegen.vcs.models import TreeEntry

MAX_SELECTED_FILES = 15

# Paths that describe structure, build, infrastructure or documentation.
IMPORTANT_PATTERNS: list[re.Pattern[str]] = [
    # Root manifests
    re.compile(r"^package\.json$"),
    re.compile(r"^composer\.json$"),
    re.compile(r"^requirements\.txt$"),
    re.compile(r"^Gemfile$"),
    re.compile(r"^pom\.xml$"),
    re.compile(r"^build\.gradle$"),
    re.compile(r"^Cargo\.toml$"),
    re.compile(r"^go\.mod$"),
    re.compile(r"^setup\.py$"),
    # Infrastructure
    re.compile(r"^Dockerfile$"),
    re.compile(r"^docker-compose\.ya?ml$"),
    re.compile(r"^\.env\.example$"),
    re.compile(r"^\.github/workflows/"),
    # Source
    re.compile(r"^src/.*\.(js|ts|jsx|tsx|py|java|go|rs|php|rb)$"),
    # Docs
    re.compile(r"^.*\.(md|txt)$", re.IGNORECASE),
    # Conventional directories
    re.compile(r"^config/"),
    re.compile(r"^scripts/"),
    re.compile(r"^docs/"),
]

# Substrings marking dependency caches, VCS internals and build output.
EXCLUDED_MARKERS: tuple[str, ...] = ("node_modules", ".git/", "dist/", "build/")


def is_important(path: str) -> bool:
    return any(p.search(path) for p in IMPORTANT_PATTERNS)


def is_excluded(path: str) -> bool:
    return any(marker in path for marker in EXCLUDED_MARKERS)


def select_files(
    entries: Iterable[TreeEntry], max_files: int = MAX_SELECTED_FILES
) -> list[SelectedFile]:
    """Return the first ``max_files`` important files, in tree order.

    No relevance ranking: the listing order decides which files survive
    the cap.
    """
    selected: list[SelectedFile] = []
    for entry in entries:
        if len(selected) >= max_files:
            break
        if entry.kind != "file":
            continue
        if is_important(entry.path) and not is_excluded(entry.path):
            selected.append(SelectedFile(path=entry.path))
    return selected
