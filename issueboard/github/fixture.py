"""Canned implementation of IssueBackend for tests and offline runs."""

from __future__ import annotations

import typing as typ

import msgspec

from .errors import BackendError
from .extract import extract_issue_page, extract_labels
from .models import IssueLabel, Page, QueryResult, Repository

if typ.TYPE_CHECKING:
    from pathlib import Path


class FixtureFile(msgspec.Struct, frozen=True):
    """Recorded GraphQL responses: one per search page and one for labels."""

    pages: list[typ.Any] = msgspec.field(default_factory=list)
    labels: typ.Any = None


class UnknownCursorError(LookupError):
    """Raised when a fixture backend is asked for a page it does not hold."""


class FixtureBackend:
    """Deterministic IssueBackend that serves preloaded results.

    ``Page()`` returns the first result; any other page returns the result
    that follows the one whose ``next_page`` carries the same cursor, so the
    backend honours the same cursor threading as the GitHub backend. Every
    call is recorded in ``requests`` as ``(operation, repo, page)``.
    """

    def __init__(
        self,
        *,
        pages: typ.Sequence[QueryResult] = (),
        labels: typ.Sequence[IssueLabel] = (),
    ) -> None:
        """Store the results returned by ``query`` and ``labels``."""
        self._pages = tuple(pages)
        self._labels = tuple(labels)
        self.requests: list[tuple[str, Repository, Page | None]] = []

    @classmethod
    def from_responses(
        cls, search_responses: typ.Iterable[object], labels_response: object = None
    ) -> FixtureBackend:
        """Build a backend from raw GraphQL responses using the extractors."""
        pages = []
        for response in search_responses:
            issues, next_page = extract_issue_page(response)
            pages.append(QueryResult(issues=tuple(issues), next_page=next_page))
        labels = [] if labels_response is None else extract_labels(labels_response)
        return cls(pages=pages, labels=labels)

    @classmethod
    def from_file(cls, path: Path) -> FixtureBackend:
        """Load recorded responses from a JSON fixture file."""
        fixture = msgspec.json.decode(path.read_bytes(), type=FixtureFile)
        return cls.from_responses(fixture.pages, fixture.labels)

    def _index_for(self, page: Page) -> int:
        if page.is_start:
            return 0
        for idx, result in enumerate(self._pages):
            if result.next_page.end_cursor == page.end_cursor:
                return idx + 1
        msg = f"no fixture page follows cursor {page.end_cursor!r}"
        raise UnknownCursorError(msg)

    def query(self, repo: Repository, page: Page) -> QueryResult:
        """Return the canned page that follows ``page``."""
        self.requests.append(("query", repo, page))
        try:
            idx = self._index_for(page)
        except UnknownCursorError as exc:
            raise BackendError.wrap("query", repo, exc) from exc
        if idx >= len(self._pages):
            # Past the recorded pages the API would still answer with an empty
            # page that echoes the cursor back.
            return QueryResult(
                issues=(),
                next_page=Page(end_cursor=page.end_cursor, has_next_page=False),
            )
        return self._pages[idx]

    def labels(self, repo: Repository) -> list[IssueLabel]:
        """Return the canned labels."""
        self.requests.append(("labels", repo, None))
        return list(self._labels)


__all__ = ["FixtureBackend", "FixtureFile", "UnknownCursorError"]
