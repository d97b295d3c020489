"""Errors raised by the GitHub query backend."""

from __future__ import annotations

import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import Repository

UNSERIALIZABLE_RESPONSE = "<unserializable response>"


def serialize_response(response: object) -> str:
    """Serialize a decoded response for diagnostics, never raising."""
    try:
        return msgspec.json.encode(response).decode("utf-8")
    except (msgspec.EncodeError, TypeError, ValueError, OverflowError):
        return UNSERIALIZABLE_RESPONSE


class TemplateError(RuntimeError):
    """Raised when a query template references a variable that is not bound."""

    def __init__(self, message: str, *, template: str, names: tuple[str, ...]) -> None:
        """Initialise with the template identity and the unbound names."""
        self.template = template
        self.names = names
        super().__init__(message)

    @classmethod
    def unbound(cls, template: str, names: typ.Iterable[str]) -> TemplateError:
        """Return an error for placeholders with no supplied value."""
        missing = tuple(sorted(names))
        joined = ", ".join(missing)
        return cls(
            f"Query template {template!r} references unbound variables: {joined}",
            template=template,
            names=missing,
        )


class TransportError(RuntimeError):
    """Raised when the GraphQL round trip itself fails."""

    NETWORK: typ.ClassVar[str] = "network"
    INVALID_BODY: typ.ClassVar[str] = "invalid_body"

    def __init__(
        self, message: str, *, kind: str, status_code: int | None = None
    ) -> None:
        """Initialise with the failure kind and optional HTTP status code."""
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def network(cls, endpoint: str, exc: BaseException) -> TransportError:
        """Return an error for connection, TLS or timeout failures."""
        return cls(
            f"GitHub GraphQL request to {endpoint} failed: {type(exc).__name__}: {exc}",
            kind=cls.NETWORK,
        )

    @classmethod
    def invalid_body(cls, status_code: int) -> TransportError:
        """Return an error for a response body that is not JSON."""
        return cls(
            f"GitHub GraphQL response (HTTP {status_code}) was not valid JSON",
            kind=cls.INVALID_BODY,
            status_code=status_code,
        )


class ExtractError(RuntimeError):
    """Raised when a response is missing a field at a known path."""

    def __init__(
        self,
        message: str,
        *,
        field: str,
        response_text: str,
        graphql_errors: object | None = None,
    ) -> None:
        """Initialise with the missing field and the serialized response."""
        self.field = field
        self.response_text = response_text
        self.graphql_errors = graphql_errors
        super().__init__(message)

    @classmethod
    def missing(cls, field: str, response: object) -> ExtractError:
        """Return an error for a missing or mistyped response field."""
        graphql_errors = (
            response.get("errors") if isinstance(response, dict) else None
        )
        response_text = serialize_response(response)
        return cls(
            f"GitHub GraphQL response missing expected field: {field}\n"
            f"{response_text}",
            field=field,
            response_text=response_text,
            graphql_errors=graphql_errors or None,
        )


class BackendError(RuntimeError):
    """Raised by a backend operation, naming the operation and repository."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        repo: Repository,
        cause: Exception,
    ) -> None:
        """Initialise with the failing operation, repository and cause."""
        self.operation = operation
        self.repo = repo
        self.cause = cause
        super().__init__(message)

    @classmethod
    def wrap(
        cls, operation: str, repo: Repository, exc: Exception
    ) -> BackendError:
        """Return an error wrapping ``exc`` raised while running ``operation``."""
        return cls(
            f"{operation} failed for {repo.slug}: {exc}",
            operation=operation,
            repo=repo,
            cause=exc,
        )


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error when no GitHub token is configured."""
        return cls(
            "ISSUEBOARD_GITHUB_TOKEN or ISSUEBOARD_GITHUB_TOKEN_FILE is required "
            "for the GitHub API"
        )

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when the provided token is empty."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_endpoint(cls, endpoint: str, reason: str) -> GitHubConfigError:
        """Return an error when the GraphQL endpoint is not a usable URL."""
        return cls(f"Invalid GitHub GraphQL endpoint {endpoint!r}: {reason}")

    @classmethod
    def unreadable_token_file(cls, path: Path, exc: OSError) -> GitHubConfigError:
        """Return an error when the token file cannot be read."""
        return cls(f"Could not read GitHub token file {path}: {exc.strerror}")
