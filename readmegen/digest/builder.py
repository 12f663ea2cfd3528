"""Digest builder: the pipeline entry from a RepoRef to a digest string."""

from __future__ import annotations

import logging

from readmegen.config.models import DigestConfig
from readmegen.digest.assembler import assemble_digest, render_body
from readmegen.digest.fetcher import ContentFetcher
from readmegen.digest.models import RepoDigest
from readmegen.digest.selector import is_excluded, select_files
from readmegen.digest.technologies import detect_technologies
from readmegen.vcs.base import VCSProvider
from readmegen.vcs.models import RepoRef

logger = logging.getLogger(__name__)


class DigestBuilder:
    """Orchestrates one pass over a repository.

    Pipeline:
        metadata + recursive tree → select_files → ContentFetcher
        → detect_technologies → assemble_digest
    """

    def __init__(self, provider: VCSProvider, config: DigestConfig | None = None) -> None:
        self.provider = provider
        self.config = config or DigestConfig()
        self.fetcher = ContentFetcher(
            provider,
            max_chars=self.config.max_chars,
            concurrency=self.config.fetch_concurrency,
        )

    async def build(self, repo: RepoRef) -> RepoDigest:
        metadata = await self.provider.get_repo_metadata(repo)
        tree = await self.provider.get_tree(repo, metadata.default_branch)

        selected = select_files(tree, max_files=self.config.max_files)
        contents = await self.fetcher.fetch_contents(repo, selected)
        logger.info(
            "%s: %d tree entries, %d/%d selected files fetched",
            repo, len(tree), len(contents), len(selected),
        )

        # Detection sees everything rendered ahead of the summary block, and
        # tree paths outside dependency and build-output directories.
        body = render_body(
            metadata, tree, contents,
            self.config.max_tree_dirs, self.config.max_tree_files,
        )
        technologies = detect_technologies(
            (e.path for e in tree if not is_excluded(e.path)), body
        )
        text = assemble_digest(
            metadata, tree, contents, technologies,
            self.config.max_tree_dirs, self.config.max_tree_files,
        )
        return RepoDigest(
            metadata=metadata,
            tree=tree,
            contents=contents,
            technologies=technologies,
            text=text,
        )

    async def build_text(self, repo: RepoRef) -> str:
        return (await self.build(repo)).text
