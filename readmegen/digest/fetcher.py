"""Content fetcher: reads selected files, tolerating per-file failures."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from github import GithubException

from readmegen.digest.models import TRUNCATION_MARKER, FetchedContent, SelectedFile
from readmegen.vcs.base import VCSProvider
from readmegen.vcs.models import RepoRef

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 2000


def truncate(text: str, max_chars: int = MAX_CONTENT_CHARS) -> tuple[str, bool]:
    """Cap text at max_chars, appending the truncation marker when cut."""
    if len(text) > max_chars:
        return text[:max_chars] + TRUNCATION_MARKER, True
    return text, False


class ContentFetcher:
    """Fetches selected files from a VCS provider.

    One attempt per file. A file that cannot be read is logged and left
    out, so one bad file never sinks the batch. Files are read
    concurrently but results keep the order of the input sequence.
    """

    def __init__(
        self,
        provider: VCSProvider,
        max_chars: int = MAX_CONTENT_CHARS,
        concurrency: int = 5,
    ) -> None:
        self.provider = provider
        self.max_chars = max_chars
        self.concurrency = concurrency

    async def fetch_contents(
        self, repo: RepoRef, files: Sequence[SelectedFile]
    ) -> list[FetchedContent]:
        semaphore = asyncio.Semaphore(self.concurrency)
        results = await asyncio.gather(
            *(self._fetch_one(repo, f.path, semaphore) for f in files)
        )
        return [r for r in results if r is not None]

    async def _fetch_one(
        self, repo: RepoRef, path: str, semaphore: asyncio.Semaphore
    ) -> FetchedContent | None:
        async with semaphore:
            try:
                raw = await self.provider.get_file_content(repo, path)
            except ValueError as e:
                # Directories and undecodable (binary) files.
                logger.warning("Skipping unreadable file %s: %s", path, e)
                return None
            except GithubException as e:
                logger.warning("GitHub error fetching %s: %s", path, e)
                return None
            except Exception:
                logger.warning("Could not fetch content for %s", path, exc_info=True)
                return None

        if not raw:
            logger.debug("Skipping empty file: %s", path)
            return None
        text, truncated = truncate(raw, self.max_chars)
        return FetchedContent(path=path, text=text, truncated=truncated)
