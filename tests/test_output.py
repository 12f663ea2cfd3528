"""Tests for README output: local writer and GitHub publisher."""

from unittest.mock import AsyncMock

import pytest
from github import GithubException

from readmegen.config.models import OutputConfig
from readmegen.output import PublishError, ReadmePublisher, ReadmeWriter
from readmegen.output.publisher import CREATE_MESSAGE, UPDATE_MESSAGE
from readmegen.output.writer import _sanitize_repo_name
from readmegen.vcs.models import InvalidRepoRefError, RepoRef


# ── ReadmeWriter ───────────────────────────────────────────────────


class TestSanitizeRepoName:
    def test_owner_repo(self):
        assert _sanitize_repo_name("acme/widget-api") == "acme--widget-api"

    def test_strips_traversal(self):
        assert ".." not in _sanitize_repo_name("../../etc/passwd")

    def test_empty_becomes_placeholder(self):
        assert _sanitize_repo_name("") == "_unnamed"


class TestReadmeWriter:
    def test_path_for(self, tmp_path, sample_repo_ref):
        writer = ReadmeWriter(OutputConfig(base_dir=str(tmp_path)))
        assert writer.path_for(sample_repo_ref) == tmp_path / "acme--widget-api.README.md"

    def test_write(self, tmp_path, sample_repo_ref):
        writer = ReadmeWriter(OutputConfig(base_dir=str(tmp_path / "out")))
        dest = writer.write(sample_repo_ref, "# widget-api\n")
        assert dest.read_text(encoding="utf-8") == "# widget-api\n"

    def test_overwrites_existing(self, tmp_path, sample_repo_ref):
        writer = ReadmeWriter(OutputConfig(base_dir=str(tmp_path)))
        writer.write(sample_repo_ref, "old")
        dest = writer.write(sample_repo_ref, "new")
        assert dest.read_text() == "new"

    def test_dry_run_writes_nothing(self, tmp_path, sample_repo_ref):
        writer = ReadmeWriter(OutputConfig(base_dir=str(tmp_path / "out")))
        dest = writer.write(sample_repo_ref, "# x", dry_run=True)
        assert not dest.exists()
        assert not (tmp_path / "out").exists()


# ── ReadmePublisher ────────────────────────────────────────────────


class TestReadmePublisher:
    async def test_updates_existing_readme(self, mock_vcs_provider, sample_repo_ref):
        publisher = ReadmePublisher(mock_vcs_provider)
        updated = await publisher.commit_readme(sample_repo_ref, "# New")

        assert updated is True
        mock_vcs_provider.get_file_sha.assert_awaited_once_with(sample_repo_ref, "README.md")
        mock_vcs_provider.put_file.assert_awaited_once_with(
            sample_repo_ref, "README.md", "# New", UPDATE_MESSAGE, sha="sha-123"
        )

    async def test_creates_missing_readme(self, mock_vcs_provider, sample_repo_ref):
        mock_vcs_provider.get_file_sha.return_value = None
        updated = await ReadmePublisher(mock_vcs_provider).commit_readme(sample_repo_ref, "# New")

        assert updated is False
        mock_vcs_provider.put_file.assert_awaited_once_with(
            sample_repo_ref, "README.md", "# New", CREATE_MESSAGE, sha=None
        )

    async def test_accepts_string_ref(self, mock_vcs_provider):
        await ReadmePublisher(mock_vcs_provider).commit_readme("acme/widget-api", "# x")
        args = mock_vcs_provider.put_file.await_args.args
        assert args[0] == RepoRef(owner="acme", name="widget-api")

    async def test_invalid_ref_rejected_before_network(self, mock_vcs_provider):
        with pytest.raises(InvalidRepoRefError):
            await ReadmePublisher(mock_vcs_provider).commit_readme("not-a-repo", "# x")
        mock_vcs_provider.get_file_sha.assert_not_awaited()

    @pytest.mark.parametrize("content", ["", "   \n"])
    async def test_empty_content_rejected(self, mock_vcs_provider, sample_repo_ref, content):
        with pytest.raises(PublishError, match="content is required"):
            await ReadmePublisher(mock_vcs_provider).commit_readme(sample_repo_ref, content)
        mock_vcs_provider.put_file.assert_not_awaited()

    @pytest.mark.parametrize(
        "status,message",
        [
            (403, "Permission denied. Please check repository access rights."),
            (404, "Repository not found or access denied."),
            (422, "Invalid content or repository state. Please try again."),
            (500, "Failed to commit README"),
        ],
    )
    async def test_github_errors_mapped(
        self, mock_vcs_provider, sample_repo_ref, status, message
    ):
        mock_vcs_provider.put_file = AsyncMock(
            side_effect=GithubException(status, {"message": "nope"}, None)
        )
        with pytest.raises(PublishError) as exc_info:
            await ReadmePublisher(mock_vcs_provider).commit_readme(sample_repo_ref, "# x")
        assert str(exc_info.value) == message
        assert exc_info.value.status == status

    async def test_sha_lookup_error_mapped(self, mock_vcs_provider, sample_repo_ref):
        mock_vcs_provider.get_file_sha.side_effect = GithubException(404, None, None)
        with pytest.raises(PublishError, match="Repository not found"):
            await ReadmePublisher(mock_vcs_provider).commit_readme(sample_repo_ref, "# x")
        mock_vcs_provider.put_file.assert_not_awaited()

    async def test_unexpected_error(self, mock_vcs_provider, sample_repo_ref):
        mock_vcs_provider.put_file.side_effect = ConnectionError("reset")
        with pytest.raises(PublishError, match="Failed to commit README") as exc_info:
            await ReadmePublisher(mock_vcs_provider).commit_readme(sample_repo_ref, "# x")
        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, ConnectionError)
