"""Configuration for the issue board command line.

Usage
-----
Load from environment variables:

>>> import os
>>> os.environ["ISSUEBOARD_GITHUB_TOKEN"] = "example-token"
>>> os.environ["ISSUEBOARD_MAX_PAGES"] = "5"
>>> BoardConfig.from_env().max_pages
5

"""

from __future__ import annotations

import dataclasses as dc
import os
from pathlib import Path

from issueboard.board.pagination import DEFAULT_MAX_PAGES
from issueboard.github.errors import GitHubConfigError
from issueboard.github.transport import (
    GITHUB_GRAPHQL_ENDPOINT,
    GitHubGraphQLConfig,
    validate_endpoint,
)

_DEFAULT_TIMEOUT_S = 20.0


@dc.dataclass(frozen=True, slots=True)
class BoardConfig:
    """Settings for fetching a board.

    Attributes
    ----------
    token
        Bearer token for the GitHub GraphQL API. Never logged.
    endpoint
        GraphQL endpoint URL.
    timeout_s
        HTTP timeout in seconds applied to each request.
    max_pages
        Upper bound on issue pages fetched per board.

    """

    token: str = dc.field(repr=False)
    endpoint: str = GITHUB_GRAPHQL_ENDPOINT
    timeout_s: float = _DEFAULT_TIMEOUT_S
    max_pages: int = DEFAULT_MAX_PAGES

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            msg = f"{env_var} must be an integer, got: {raw!r}"
            raise ValueError(msg) from exc
        if value < 1:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @staticmethod
    def _parse_positive_float(env_var: str, default: float) -> float:
        """Read a positive float env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError as exc:
            msg = f"{env_var} must be a number, got: {raw!r}"
            raise ValueError(msg) from exc
        if not value > 0:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @staticmethod
    def _read_token() -> str:
        """Return the token from the environment or the configured token file."""
        token = os.environ.get("ISSUEBOARD_GITHUB_TOKEN", "").strip()
        if token:
            return token

        raw_path = os.environ.get("ISSUEBOARD_GITHUB_TOKEN_FILE", "").strip()
        if not raw_path:
            raise GitHubConfigError.missing_token()
        path = Path(raw_path).expanduser()
        try:
            token = path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise GitHubConfigError.unreadable_token_file(path, exc) from exc
        if not token:
            raise GitHubConfigError.empty_token()
        return token

    @classmethod
    def from_env(cls) -> BoardConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``ISSUEBOARD_GITHUB_TOKEN``: bearer token.
        - ``ISSUEBOARD_GITHUB_TOKEN_FILE``: file holding the token, used when
          ``ISSUEBOARD_GITHUB_TOKEN`` is unset.
        - ``ISSUEBOARD_GITHUB_ENDPOINT``: GraphQL endpoint URL.
        - ``ISSUEBOARD_HTTP_TIMEOUT``: positive number of seconds.
        - ``ISSUEBOARD_MAX_PAGES``: positive integer.

        ``ISSUEBOARD_LOG_LEVEL`` is read by the CLI before these settings, so
        a configuration failure is logged at the requested level.

        Raises
        ------
        GitHubConfigError
            If no usable token is configured or the endpoint is not an
            http(s) URL.
        ValueError
            If a numeric variable is malformed or not positive.

        """
        endpoint = validate_endpoint(
            os.environ.get("ISSUEBOARD_GITHUB_ENDPOINT", "").strip()
            or GITHUB_GRAPHQL_ENDPOINT
        )
        return cls(
            token=cls._read_token(),
            endpoint=endpoint,
            timeout_s=cls._parse_positive_float(
                "ISSUEBOARD_HTTP_TIMEOUT", _DEFAULT_TIMEOUT_S
            ),
            max_pages=cls._parse_positive_int("ISSUEBOARD_MAX_PAGES", DEFAULT_MAX_PAGES),
        )

    def graphql_config(self) -> GitHubGraphQLConfig:
        """Return the transport configuration for these settings."""
        return GitHubGraphQLConfig(
            token=self.token,
            endpoint=self.endpoint,
            timeout_s=self.timeout_s,
        )
