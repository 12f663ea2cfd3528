"""Shared test fixtures for readmegen."""

import logging
from datetime import datetime, timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from readmegen.config.models import ReadmegenConfig
from readmegen.llm.base import LLMProvider
from readmegen.llm.models import LLMConfig, LLMResponse, TokenUsage
from readmegen.quota.storage import InMemoryStorage
from readmegen.vcs.base import VCSProvider
from readmegen.vcs.models import RepoMetadata, RepoRef, TreeEntry


class FakeClock:
    """Settable stand-in for datetime.now."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(autouse=True)
def _reset_readmegen_logger():
    """Undo configure_logging() so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger("readmegen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 14, 15, 30))


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def sample_repo_ref():
    return RepoRef(owner="acme", name="widget-api")


@pytest.fixture
def sample_repo_metadata():
    return RepoMetadata(
        name="widget-api",
        full_name="acme/widget-api",
        description="REST API for widget management",
        language="TypeScript",
        stars=42,
        forks=7,
        license="MIT License",
        topics=["api", "rest"],
        default_branch="main",
        url="https://github.com/acme/widget-api",
    )


@pytest.fixture
def sample_tree():
    """Recursive listing mixing key files, sources and noise."""
    return [
        TreeEntry(path=".github", kind="dir"),
        TreeEntry(path=".github/workflows", kind="dir"),
        TreeEntry(path=".github/workflows/ci.yml", kind="file"),
        TreeEntry(path="Dockerfile", kind="file"),
        TreeEntry(path="README.md", kind="file"),
        TreeEntry(path="node_modules", kind="dir"),
        TreeEntry(path="node_modules/react/index.js", kind="file"),
        TreeEntry(path="package.json", kind="file"),
        TreeEntry(path="src", kind="dir"),
        TreeEntry(path="src/index.ts", kind="file"),
        TreeEntry(path="src/logo.png", kind="file"),
        TreeEntry(path="dist/bundle.js", kind="file"),
    ]


@pytest.fixture
def file_contents():
    return {
        ".github/workflows/ci.yml": "name: CI\non: [push]\n",
        "Dockerfile": "FROM node:20-alpine\n",
        "README.md": "# widget-api\n",
        "package.json": '{"name": "widget-api", "dependencies": {"react": "^18.0.0"}}',
        "src/index.ts": "export const main = () => 1;\n",
    }


@pytest.fixture
def mock_vcs_provider(sample_repo_metadata, sample_tree, file_contents):
    provider = MagicMock(spec=VCSProvider)
    provider.list_user_repos = AsyncMock(return_value=[sample_repo_metadata])
    provider.get_repo_metadata = AsyncMock(return_value=sample_repo_metadata)
    provider.get_tree = AsyncMock(return_value=sample_tree)

    async def _content(repo, path):
        return file_contents[path]

    provider.get_file_content = AsyncMock(side_effect=_content)
    provider.get_file_sha = AsyncMock(return_value="sha-123")
    provider.put_file = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def mock_llm_provider():
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMConfig(api_key="test")
    provider.generate = AsyncMock(
        return_value=LLMResponse(
            content="# widget-api\n\nGenerated README.",
            usage=TokenUsage(input_tokens=100, output_tokens=250),
            model="gemini-2.5-flash",
        )
    )
    return provider


@pytest.fixture
def sample_config():
    return ReadmegenConfig()
