"""Command line for fetching an issue board from GitHub.

Usage:
    issueboard board octo/reef              # three pages, one column each
    issueboard board octo/reef --pages 5 --json
    issueboard board octo/reef --with-labels
    issueboard labels octo/reef
    issueboard board octo/reef --fixture recorded.json   # offline

Environment variables are described in :mod:`issueboard.config`.
"""

from __future__ import annotations

import contextlib
import os
import sys
import typing as typ
from pathlib import Path

import msgspec
from cyclopts import App

from issueboard import __version__
from issueboard.board import DEFAULT_MAX_PAGES, load_board
from issueboard.config import BoardConfig
from issueboard.github import (
    BackendError,
    ExtractError,
    FixtureBackend,
    GitHubBackend,
    GitHubConfigError,
    GraphQLTransport,
    Repository,
    categorize_error,
)
from issueboard.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_warning,
)

if typ.TYPE_CHECKING:
    from issueboard.board import IssueBoard
    from issueboard.github import IssueBackend, IssueLabel

logger = get_logger(__name__)

app = App(
    name="issueboard",
    help="Fetch open GitHub issues into board columns.",
    version=__version__,
)

_EXIT_BACKEND_ERROR = 1
_EXIT_CONFIG_ERROR = 2


@contextlib.contextmanager
def _open_backend(
    fixture: Path | None, config: BoardConfig | None
) -> typ.Iterator[IssueBackend]:
    """Yield a fixture backend or a GitHub backend with an owned transport."""
    if fixture is not None:
        yield FixtureBackend.from_file(fixture)
        return

    if config is None:
        raise GitHubConfigError.missing_token()
    with GraphQLTransport(config.graphql_config()) as transport:
        yield GitHubBackend(transport)


def _load_config(fixture: Path | None) -> BoardConfig | None:
    """Read settings from the environment; fixture runs need no token."""
    if fixture is not None:
        return None
    return BoardConfig.from_env()


def _configure_logging() -> None:
    raw_level = os.environ.get("ISSUEBOARD_LOG_LEVEL", "INFO")
    normalized, invalid = configure_logging(raw_level)
    if invalid:
        log_warning(
            logger,
            "Invalid ISSUEBOARD_LOG_LEVEL %r, falling back to %s",
            raw_level,
            normalized,
        )


def _report_failure(exc: BackendError) -> int:
    category = categorize_error(exc)
    log_error(
        logger,
        "%s failed for %s (category=%s): %s",
        exc.operation,
        exc.repo.slug,
        category,
        type(exc.cause).__name__,
    )
    first_line = str(exc).splitlines()[0]
    print(f"error [{category}]: {first_line}", file=sys.stderr)
    return _EXIT_BACKEND_ERROR


def format_board(board: IssueBoard) -> str:
    """Render a board as plain text, one block per column."""
    lines = [f"{board.slug}: {board.issue_count} issues"]
    if board.labels:
        lines.append("labels: " + ", ".join(label.name for label in board.labels))
    for number, column in enumerate(board.columns, start=1):
        lines.append("")
        lines.append(f"== Column {number} ({len(column.issues)} issues)")
        for issue in column.issues:
            lines.append(issue.title)
            lines.append(f"  - {issue.author}")
    return "\n".join(lines)


def format_labels(labels: typ.Sequence[IssueLabel]) -> str:
    """Render labels as ``#color name: description`` lines."""
    return "\n".join(
        f"#{label.color} {label.name}: {label.description}" for label in labels
    )


_FIXTURE_ERRORS = (OSError, msgspec.DecodeError, msgspec.ValidationError, ExtractError)


def _config_failure(message: str) -> int:
    print(f"error [configuration]: {message}", file=sys.stderr)
    return _EXIT_CONFIG_ERROR


def _prepare(
    repo: str, fixture: Path | None
) -> tuple[Repository, BoardConfig | None] | int:
    """Parse the repository and settings, or return a configuration exit code."""
    _configure_logging()
    try:
        return Repository.from_slug(repo), _load_config(fixture)
    except (GitHubConfigError, ValueError) as exc:
        return _config_failure(str(exc))


@app.command
def board(
    repo: str,
    *,
    pages: int | None = None,
    json: bool = False,
    with_labels: bool = False,
    fixture: Path | None = None,
) -> int:
    """Fetch open issues into columns, one column per fetched page.

    Args:
        repo: Repository as ``owner/name`` or a github.com URL.
        pages: Number of pages to fetch (defaults to ISSUEBOARD_MAX_PAGES).
        json: Print the board as JSON instead of text.
        with_labels: Also fetch the repository labels before the issue pages.
        fixture: Serve recorded responses from this JSON file instead of GitHub.

    Returns:
        Exit code (0 for success, non-zero for failure).

    """
    prepared = _prepare(repo, fixture)
    if isinstance(prepared, int):
        return prepared
    repository, config = prepared

    if pages is not None and pages < 1:
        return _config_failure(f"--pages must be positive, got: {pages}")
    default_pages = config.max_pages if config else DEFAULT_MAX_PAGES
    max_pages = pages if pages is not None else default_pages

    try:
        with _open_backend(fixture, config) as backend:
            result = load_board(
                backend, repository, max_pages=max_pages, with_labels=with_labels
            )
    except BackendError as exc:
        return _report_failure(exc)
    except _FIXTURE_ERRORS as exc:
        return _config_failure(f"invalid fixture {fixture}: {exc}")

    print(result.to_json().decode("utf-8") if json else format_board(result))
    return 0


@app.command
def labels(repo: str, *, fixture: Path | None = None) -> int:
    """List the labels defined on a repository.

    Args:
        repo: Repository as ``owner/name`` or a github.com URL.
        fixture: Serve recorded responses from this JSON file instead of GitHub.

    Returns:
        Exit code (0 for success, non-zero for failure).

    """
    prepared = _prepare(repo, fixture)
    if isinstance(prepared, int):
        return prepared
    repository, config = prepared

    try:
        with _open_backend(fixture, config) as backend:
            result = backend.labels(repository)
    except BackendError as exc:
        return _report_failure(exc)
    except _FIXTURE_ERRORS as exc:
        return _config_failure(f"invalid fixture {fixture}: {exc}")

    print(format_labels(result))
    return 0


def main() -> int:
    """Entry point for the CLI."""
    return app()


if __name__ == "__main__":
    sys.exit(main())
