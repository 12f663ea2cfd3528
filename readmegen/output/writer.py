"""ReadmeWriter: saves generated READMEs to local files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from readmegen.config.models import OutputConfig
from readmegen.vcs.models import RepoRef

logger = logging.getLogger(__name__)


def _sanitize_repo_name(full_name: str) -> str:
    """Make an owner/repo name safe for use as a filename.

    Replaces `/` with `--`, strips `..` segments, and removes characters
    that are problematic on common filesystems.
    """
    name = full_name.replace("/", "--")
    name = name.replace("..", "")
    name = re.sub(r"[^\w\-\.@]", "", name)
    name = re.sub(r"-{3,}", "--", name)
    if not name or name.strip(".") == "":
        name = "_unnamed"
    return name


class ReadmeWriter:
    """Writes README text to ``<base_dir>/<owner>--<repo>.README.md``."""

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir)

    def path_for(self, repo: RepoRef) -> Path:
        return self.base_dir / f"{_sanitize_repo_name(repo.full_name)}.README.md"

    def write(self, repo: RepoRef, content: str, *, dry_run: bool = False) -> Path:
        """Write README content to disk; returns the (would-be) path."""
        dest = self.path_for(repo)

        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", dest, e)
            raise
        logger.info("wrote %s (%d bytes)", dest, len(content))
        return dest
