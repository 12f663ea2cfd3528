"""GitHub OAuth helpers: authorize URL and backend token exchange."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from readmegen.config.models import GitHubConfig

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_KEY = "github_token"


class AuthError(Exception):
    """Raised when a GitHub token cannot be obtained."""


def build_authorize_url(config: GitHubConfig) -> str:
    """Return the GitHub OAuth authorize URL requesting the `repo` scope."""
    if not config.client_id:
        raise AuthError("GitHub OAuth client_id is not configured")
    params = {"client_id": config.client_id, "scope": "repo"}
    if config.redirect_uri:
        params["redirect_uri"] = config.redirect_uri
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


async def exchange_code(config: GitHubConfig, code: str, timeout: float = 30.0) -> str:
    """Trade an OAuth callback code for an access token via the auth backend.

    The client secret lives on the backend, so the exchange is a POST of
    ``{"code": ...}`` to ``<server_url>/api/github/callback``.
    """
    if not code:
        raise AuthError("OAuth code is required")
    if not config.server_url:
        raise AuthError("GitHub token-exchange server_url is not configured")

    url = f"{config.server_url.rstrip('/')}/api/github/callback"
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.post(url, json={"code": code}, timeout=timeout)
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("GitHub token exchange failed: %s", e)
        raise AuthError(f"GitHub token exchange failed: {e}") from e

    token = data.get("access_token") if isinstance(data, dict) else None
    if not token:
        raise AuthError("No access token received from server")
    return token
