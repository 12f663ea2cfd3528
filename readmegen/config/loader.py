"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ReadmegenConfig


def load_config(cli_path: str | None = None) -> ReadmegenConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./readmegen.yaml"),
        Path.home() / ".readmegen" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return ReadmegenConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return ReadmegenConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `readmegen config init`
DEFAULT_CONFIG_TEMPLATE = """\
# readmegen.yaml

# Generation (Google Gemini)
llm:
  provider: "google"
  api_key_env: "GOOGLE_API_KEY"
  # Tried in order; daily_limit caps requests per model per day.
  models:
    - name: "gemini-3-flash-preview"
      daily_limit: 15
    - name: "gemini-2.5-flash"
      daily_limit: 20
    - name: "gemini-2.5-pro"
      daily_limit: 0
  temperature: 0.7
  top_p: 0.8
  top_k: 40
  max_output_tokens: 8192
  max_retries: 3
  retry_base_delay: 5.0          # seconds, multiplied by the attempt number
  template_fallback: false       # emit a template README when every model fails

# GitHub
github:
  token_env: "GITHUB_TOKEN"
  api_url: "https://api.github.com"
  # OAuth login (readmegen login)
  # client_id: "${GITHUB_CLIENT_ID}"
  # redirect_uri: "http://localhost:5173/callback"
  # server_url: "${README_SERVER_URL}"

# Repository digest
digest:
  max_files: 15
  max_chars: 2000
  max_tree_dirs: 20
  max_tree_files: 30
  fetch_concurrency: 5

# Output
output:
  base_dir: ".readmegen"

# Quota counters and saved GitHub token
state_path: "~/.readmegen/state.json"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
