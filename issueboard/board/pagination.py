"""Caller-side pagination over an :class:`IssueBackend`.

Pages for one repository are fetched strictly in order: the cursor returned
by page N is the only valid input for page N+1, so each request waits for the
previous response.
"""

from __future__ import annotations

import typing as typ

from issueboard.github.models import Page
from issueboard.logging import get_logger, log_debug, log_info

from .models import IssueBoard, IssueColumn

if typ.TYPE_CHECKING:
    from issueboard.github.backend import IssueBackend
    from issueboard.github.models import QueryResult, Repository

logger = get_logger(__name__)

DEFAULT_MAX_PAGES = 3


def iter_pages(
    backend: IssueBackend,
    repo: Repository,
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
    start: Page | None = None,
) -> typ.Iterator[QueryResult]:
    """Yield up to ``max_pages`` query results, threading each cursor.

    Iteration also stops after a result whose ``next_page.has_next_page`` is
    ``False``. A ``None`` flag (the response did not say) never stops it, so
    only ``max_pages`` bounds a response that omits ``hasNextPage``.

    Raises
    ------
    ValueError
        If ``max_pages`` is less than 1.
    BackendError
        Propagated unchanged from the backend; pages already yielded stay
        with the caller, nothing further is fetched.

    """
    if max_pages < 1:
        msg = f"max_pages must be positive, got: {max_pages}"
        raise ValueError(msg)

    page = start or Page()
    for number in range(1, max_pages + 1):
        log_debug(
            logger, "Fetching page %d of %d for %s", number, max_pages, repo.slug
        )
        result = backend.query(repo, page)
        yield result
        page = result.next_page
        if page.has_next_page is False:
            return


def load_board(
    backend: IssueBackend,
    repo: Repository,
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
    with_labels: bool = False,
) -> IssueBoard:
    """Fetch pages of issues into a board, one column per page.

    Labels are fetched first only when ``with_labels`` is set; otherwise the
    board carries no labels and only ``query`` is called. Any backend failure
    propagates; no partially filled board is returned.
    """
    board = IssueBoard(repo_owner=repo.owner, repo_name=repo.name)
    if with_labels:
        board.labels = backend.labels(repo)
    for result in iter_pages(backend, repo, max_pages=max_pages):
        board.columns.append(IssueColumn(issues=list(result.issues)))

    log_info(
        logger,
        "Loaded board for %s: %d columns, %d issues, %d labels",
        repo.slug,
        len(board.columns),
        board.issue_count,
        len(board.labels),
    )
    return board
