"""Typed domain records produced by the GitHub query backend."""

from __future__ import annotations

import dataclasses

from issueboard.common.slug import parse_repo_slug, repo_slug


@dataclasses.dataclass(frozen=True, slots=True)
class Repository:
    """Identity of a GitHub repository supplied by the caller."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        """Reject empty owner or name values."""
        if not self.owner.strip() or not self.name.strip():
            msg = f"Repository owner and name must be non-empty, got {self.slug!r}"
            raise ValueError(msg)

    @classmethod
    def from_slug(cls, slug: str) -> Repository:
        """Build a repository from ``owner/name`` notation."""
        owner, name = parse_repo_slug(slug)
        return cls(owner=owner, name=name)

    @property
    def slug(self) -> str:
        """Return ``owner/name``."""
        return repo_slug(self.owner, self.name)


@dataclasses.dataclass(frozen=True, slots=True)
class Page:
    """Opaque pagination cursor for the issue search query.

    ``end_cursor`` of ``None`` means "start from the beginning". A cursor read
    from a response is only ever echoed back to the next query for the same
    repository; it is never parsed.

    ``has_next_page`` mirrors ``pageInfo.hasNextPage`` when the response
    carries it as a boolean and is ``None`` otherwise. It does not take part
    in equality, so two pages with the same cursor compare equal.
    """

    end_cursor: str | None = None
    has_next_page: bool | None = dataclasses.field(default=None, compare=False)

    @property
    def is_start(self) -> bool:
        """Return True when this page starts from the beginning."""
        return self.end_cursor is None


@dataclasses.dataclass(frozen=True, slots=True)
class Issue:
    """A single open issue."""

    title: str
    author: str


@dataclasses.dataclass(frozen=True, slots=True)
class IssueLabel:
    """Label metadata for a repository."""

    name: str
    description: str
    color: str


@dataclasses.dataclass(frozen=True, slots=True)
class QueryResult:
    """One page of issues and the cursor for the page after it."""

    issues: tuple[Issue, ...]
    next_page: Page
