"""Backends that fetch issue pages and label metadata for a repository."""

from __future__ import annotations

import typing as typ

from issueboard.logging import get_logger, log_info

from .errors import BackendError, ExtractError, TransportError
from .extract import extract_issue_page, extract_labels
from .models import IssueLabel, Page, QueryResult, Repository
from .templates import LABELS_TEMPLATE, SEARCH_TEMPLATE, QueryTemplate

if typ.TYPE_CHECKING:
    from .transport import GraphQLTransport

logger = get_logger(__name__)

SEARCH_VARIABLES = frozenset({"search", "page"})
LABELS_VARIABLES = frozenset({"owner", "repo"})


@typ.runtime_checkable
class IssueBackend(typ.Protocol):
    """Interface for fetching issues and labels for a repository.

    Examples
    --------
    >>> from issueboard.github import FixtureBackend, IssueBackend
    >>> isinstance(FixtureBackend(), IssueBackend)
    True

    """

    def query(self, repo: Repository, page: Page) -> QueryResult:
        """Fetch one page of open issues starting after ``page``."""
        ...

    def labels(self, repo: Repository) -> list[IssueLabel]:
        """Fetch every label defined on ``repo``."""
        ...


def search_filter(repo: Repository) -> str:
    """Return the issue search filter for open issues in ``repo``.

    Examples
    --------
    >>> search_filter(Repository("alice", "widgets"))
    'user:alice repo:widgets is:issue state:open'

    """
    return f"user:{repo.owner} repo:{repo.name} is:issue state:open"


def page_token(page: Page) -> str:
    """Render ``page`` as a GraphQL literal: a quoted cursor or ``null``.

    Examples
    --------
    >>> page_token(Page())
    'null'
    >>> page_token(Page("abc123"))
    '"abc123"'

    """
    if page.is_start:
        return "null"
    return f'"{page.end_cursor}"'


class GitHubBackend:
    """GitHub GraphQL implementation of :class:`IssueBackend`.

    Query documents are loaded (or injected) once at construction and checked
    against the variables each operation supplies, so a document with a stray
    placeholder fails here rather than on the first request.
    """

    def __init__(
        self,
        transport: GraphQLTransport,
        *,
        search_template: QueryTemplate | None = None,
        labels_template: QueryTemplate | None = None,
    ) -> None:
        """Initialise the backend with a transport and query documents."""
        self._transport = transport
        self._search = (
            search_template or QueryTemplate.load(SEARCH_TEMPLATE)
        ).require(SEARCH_VARIABLES)
        self._labels = (
            labels_template or QueryTemplate.load(LABELS_TEMPLATE)
        ).require(LABELS_VARIABLES)

    def render_query(self, repo: Repository, page: Page) -> str:
        """Return the issue search document for ``repo`` starting at ``page``."""
        return self._search.render(
            {"search": search_filter(repo), "page": page_token(page)}
        )

    def render_labels(self, repo: Repository) -> str:
        """Return the label-list document for ``repo``."""
        return self._labels.render({"owner": repo.owner, "repo": repo.name})

    def query(self, repo: Repository, page: Page) -> QueryResult:
        """Fetch one page of open issues for ``repo``.

        Raises
        ------
        BackendError
            Wrapping the transport or extraction failure.

        """
        document = self.render_query(repo, page)
        log_info(
            logger,
            "Querying issues for %s (page=%s)",
            repo.slug,
            page_token(page),
        )
        try:
            response = self._transport.post(document)
            issues, next_page = extract_issue_page(response)
        except (TransportError, ExtractError) as exc:
            raise BackendError.wrap("query", repo, exc) from exc
        log_info(logger, "Fetched %d issues for %s", len(issues), repo.slug)
        return QueryResult(issues=tuple(issues), next_page=next_page)

    def labels(self, repo: Repository) -> list[IssueLabel]:
        """Fetch every label defined on ``repo``.

        Raises
        ------
        BackendError
            Wrapping the transport or extraction failure.

        """
        document = self.render_labels(repo)
        log_info(logger, "Querying labels for %s", repo.slug)
        try:
            response = self._transport.post(document)
            return extract_labels(response)
        except (TransportError, ExtractError) as exc:
            raise BackendError.wrap("labels", repo, exc) from exc
