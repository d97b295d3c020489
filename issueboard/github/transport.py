"""HTTP transport for GitHub GraphQL requests."""

from __future__ import annotations

import dataclasses
import typing as typ

import httpx
import msgspec

from issueboard.logging import get_logger, log_warning

from .errors import GitHubConfigError, TransportError

if typ.TYPE_CHECKING:
    import types

logger = get_logger(__name__)

GITHUB_GRAPHQL_ENDPOINT = "https://api.github.com/graphql"
_HTTP_ERROR_STATUS_THRESHOLD = 400
_ENDPOINT_SCHEMES = frozenset({"http", "https"})


def validate_endpoint(endpoint: str) -> str:
    """Return ``endpoint`` when it is an absolute http(s) URL.

    Raises
    ------
    GitHubConfigError
        If httpx cannot parse the URL or it lacks an http(s) scheme or host.

    """
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as exc:
        raise GitHubConfigError.invalid_endpoint(endpoint, str(exc)) from exc
    if url.scheme not in _ENDPOINT_SCHEMES or not url.host:
        reason = "expected an absolute http or https URL"
        raise GitHubConfigError.invalid_endpoint(endpoint, reason)
    return endpoint


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubGraphQLConfig:
    """Configuration for the GitHub GraphQL transport."""

    token: str = dataclasses.field(repr=False)
    endpoint: str = GITHUB_GRAPHQL_ENDPOINT
    timeout_s: float = 20.0
    user_agent: str = "issueboard/0.1"


class GraphQLTransport:
    """Send one authenticated GraphQL POST and decode the JSON reply.

    The transport does not look inside the decoded payload: GraphQL ``errors``
    arrays and missing ``data`` are left to the response extractor. Failures
    are never retried here.
    """

    def __init__(
        self,
        config: GitHubGraphQLConfig,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialise the transport with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()
        validate_endpoint(config.endpoint)

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=config.timeout_s)
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "User-Agent": config.user_agent,
            "Accept": "application/json",
        }

    @property
    def endpoint(self) -> str:
        """Return the GraphQL endpoint requests are sent to."""
        return self._config.endpoint

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> GraphQLTransport:
        """Return the transport for use as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close owned HTTP resources on exit."""
        self.close()

    def post(self, document: str) -> object:
        """POST ``{"query": document}`` and return the decoded JSON body.

        Raises
        ------
        TransportError
            ``kind == "network"`` when the request could not be completed and
            ``kind == "invalid_body"`` when the reply is not JSON.

        """
        try:
            response = self._client.post(
                self._config.endpoint,
                json={"query": document},
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            raise TransportError.network(self._config.endpoint, exc) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            log_warning(
                logger,
                "GitHub GraphQL returned HTTP %d from %s",
                response.status_code,
                self._config.endpoint,
            )

        try:
            return msgspec.json.decode(response.content)
        except msgspec.DecodeError as exc:
            raise TransportError.invalid_body(response.status_code) from exc
