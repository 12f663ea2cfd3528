"""Digest subsystem: turns a repository into the text handed to the LLM."""

from readmegen.digest.assembler import assemble_digest
from readmegen.digest.builder import DigestBuilder
from readmegen.digest.fetcher import ContentFetcher
from readmegen.digest.models import (
    FetchedContent,
    RepoDigest,
    SelectedFile,
    TechnologySummary,
)
from readmegen.digest.selector import select_files
from readmegen.digest.technologies import detect_technologies

__all__ = [
    "ContentFetcher",
    "DigestBuilder",
    "FetchedContent",
    "RepoDigest",
    "SelectedFile",
    "TechnologySummary",
    "assemble_digest",
    "detect_technologies",
    "select_files",
]
