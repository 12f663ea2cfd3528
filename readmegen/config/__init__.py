from .loader import load_config
from .models import (
    DigestConfig,
    GitHubConfig,
    LLMSettings,
    ModelLimit,
    OutputConfig,
    ReadmegenConfig,
)

__all__ = [
    "DigestConfig",
    "GitHubConfig",
    "LLMSettings",
    "ModelLimit",
    "OutputConfig",
    "ReadmegenConfig",
    "load_config",
]
