"""Tests for the content fetcher."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from github import GithubException

from readmegen.digest.fetcher import MAX_CONTENT_CHARS, ContentFetcher, truncate
from readmegen.digest.models import TRUNCATION_MARKER, SelectedFile
from readmegen.vcs.base import VCSProvider


def _selected(*paths):
    return [SelectedFile(path=p) for p in paths]


class TestTruncate:
    def test_short_text_untouched(self):
        assert truncate("abc", 10) == ("abc", False)

    def test_exact_limit_untouched(self):
        text = "x" * MAX_CONTENT_CHARS
        assert truncate(text) == (text, False)

    def test_long_text_cut_with_marker(self):
        text, cut = truncate("x" * 2500)
        assert cut is True
        assert text == "x" * 2000 + TRUNCATION_MARKER
        assert len(text) == 2000 + len(TRUNCATION_MARKER)


class TestContentFetcher:
    async def test_fetches_in_input_order(self, mock_vcs_provider, sample_repo_ref):
        fetcher = ContentFetcher(mock_vcs_provider)
        result = await fetcher.fetch_contents(
            sample_repo_ref, _selected("package.json", "Dockerfile", "README.md")
        )
        assert [c.path for c in result] == ["package.json", "Dockerfile", "README.md"]
        assert result[1].text == "FROM node:20-alpine\n"
        assert not any(c.truncated for c in result)

    async def test_truncates_long_files(self, sample_repo_ref):
        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(return_value="y" * 5000)
        fetcher = ContentFetcher(provider, max_chars=100)

        [content] = await fetcher.fetch_contents(sample_repo_ref, _selected("big.md"))

        assert content.truncated is True
        assert content.text == "y" * 100 + TRUNCATION_MARKER

    async def test_failed_file_is_skipped_and_logged(self, sample_repo_ref, caplog):
        async def _content(repo, path):
            if path == "bad.md":
                raise RuntimeError("boom")
            return f"content of {path}"

        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(side_effect=_content)
        fetcher = ContentFetcher(provider)

        with caplog.at_level(logging.WARNING, logger="readmegen.digest.fetcher"):
            result = await fetcher.fetch_contents(
                sample_repo_ref, _selected("a.md", "bad.md", "b.md")
            )

        assert [c.path for c in result] == ["a.md", "b.md"]
        assert "bad.md" in caplog.text

    async def test_binary_file_skipped(self, sample_repo_ref, caplog):
        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(
            side_effect=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        )
        fetcher = ContentFetcher(provider)

        with caplog.at_level(logging.WARNING, logger="readmegen.digest.fetcher"):
            result = await fetcher.fetch_contents(sample_repo_ref, _selected("img.txt"))

        assert result == []
        assert "Skipping unreadable file img.txt" in caplog.text
        assert "invalid start byte" in caplog.text

    async def test_directory_logged_as_directory(self, sample_repo_ref, caplog):
        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(
            side_effect=ValueError("Path 'docs' is a directory, not a file.")
        )
        fetcher = ContentFetcher(provider)

        with caplog.at_level(logging.WARNING, logger="readmegen.digest.fetcher"):
            result = await fetcher.fetch_contents(sample_repo_ref, _selected("docs"))

        assert result == []
        assert "is a directory" in caplog.text
        assert "binary" not in caplog.text

    async def test_empty_file_left_out(self, sample_repo_ref):
        async def _content(repo, path):
            return "" if path == "empty.md" else f"content of {path}"

        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(side_effect=_content)
        fetcher = ContentFetcher(provider)

        result = await fetcher.fetch_contents(
            sample_repo_ref, _selected("a.md", "empty.md", "b.md")
        )

        assert [c.path for c in result] == ["a.md", "b.md"]

    async def test_github_error_skipped(self, sample_repo_ref):
        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(
            side_effect=GithubException(403, {"message": "Forbidden"}, None)
        )
        fetcher = ContentFetcher(provider)
        assert await fetcher.fetch_contents(sample_repo_ref, _selected("x.md")) == []

    async def test_one_attempt_per_file(self, sample_repo_ref):
        provider = MagicMock(spec=VCSProvider)
        provider.get_file_content = AsyncMock(side_effect=RuntimeError("down"))
        fetcher = ContentFetcher(provider)

        await fetcher.fetch_contents(sample_repo_ref, _selected("a.md", "b.md"))

        assert provider.get_file_content.await_count == 2

    async def test_empty_selection(self, mock_vcs_provider, sample_repo_ref):
        fetcher = ContentFetcher(mock_vcs_provider)
        assert await fetcher.fetch_contents(sample_repo_ref, []) == []
        mock_vcs_provider.get_file_content.assert_not_awaited()

    @pytest.mark.parametrize("concurrency", [1, 3])
    async def test_concurrency_limit_preserves_results(self, mock_vcs_provider, sample_repo_ref, concurrency):
        fetcher = ContentFetcher(mock_vcs_provider, concurrency=concurrency)
        result = await fetcher.fetch_contents(
            sample_repo_ref, _selected("README.md", "src/index.ts", "package.json")
        )
        assert [c.path for c in result] == ["README.md", "src/index.ts", "package.json"]
