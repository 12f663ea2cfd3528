from pydantic import BaseModel, Field, field_validator
from typing import Literal


class ModelLimit(BaseModel):
    name: str = Field(min_length=1)
    daily_limit: int = Field(default=0, ge=0)


def _default_models() -> list[ModelLimit]:
    # Estimated free tier limits; 2.5-pro is often 0 for free accounts.
    return [
        ModelLimit(name="gemini-3-flash-preview", daily_limit=15),
        ModelLimit(name="gemini-2.5-flash", daily_limit=20),
        ModelLimit(name="gemini-2.5-pro", daily_limit=0),
    ]


class LLMSettings(BaseModel):
    provider: Literal["google"] = "google"
    api_key_env: str = "GOOGLE_API_KEY"
    models: list[ModelLimit] = Field(default_factory=_default_models, min_length=1)
    temperature: float = Field(default=0.7, ge=0)
    top_p: float = Field(default=0.8, gt=0, le=1)
    top_k: int = Field(default=40, gt=0)
    max_output_tokens: int = Field(default=8192, gt=0)
    max_retries: int = Field(default=3, gt=0)
    retry_base_delay: float = Field(default=5.0, ge=0)
    template_fallback: bool = False

    @field_validator("models")
    @classmethod
    def validate_unique_models(cls, v: list[ModelLimit]) -> list[ModelLimit]:
        seen = set()
        for m in v:
            if m.name in seen:
                raise ValueError(f"model '{m.name}' is listed more than once")
            seen.add(m.name)
        return v

    @property
    def model_names(self) -> list[str]:
        return [m.name for m in self.models]

    @property
    def daily_limits(self) -> dict[str, int]:
        return {m.name: m.daily_limit for m in self.models}


class GitHubConfig(BaseModel):
    token_env: str = "GITHUB_TOKEN"
    api_url: str = "https://api.github.com"
    client_id: str = ""
    redirect_uri: str = ""
    server_url: str = ""


class DigestConfig(BaseModel):
    max_files: int = Field(default=15, gt=0)
    max_chars: int = Field(default=2000, gt=0)
    max_tree_dirs: int = Field(default=20, ge=0)
    max_tree_files: int = Field(default=30, ge=0)
    fetch_concurrency: int = Field(default=5, gt=0)


class OutputConfig(BaseModel):
    base_dir: str = ".readmegen"


class ReadmegenConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    digest: DigestConfig = Field(default_factory=DigestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    state_path: str = "~/.readmegen/state.json"
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
