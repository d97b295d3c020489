"""Issue board structures assembled from backend results."""

from __future__ import annotations

import msgspec

from issueboard.common.slug import repo_slug
from issueboard.github.models import Issue, IssueLabel


class IssueColumnConfig(msgspec.Struct, kw_only=True):
    """Per-column settings.

    Attributes
    ----------
    labels : list[str]
        Label names the column is meant to show.

    """

    labels: list[str] = msgspec.field(default_factory=list)


class IssueColumn(msgspec.Struct, kw_only=True):
    """One fetched page of issues, shown as a board column."""

    config: IssueColumnConfig = msgspec.field(default_factory=IssueColumnConfig)
    issues: list[Issue] = msgspec.field(default_factory=list)


class IssueBoard(msgspec.Struct, kw_only=True):
    """Board for a single repository.

    Attributes
    ----------
    repo_owner : str
        GitHub owner or organisation.
    repo_name : str
        Repository name.
    labels : list[IssueLabel]
        Labels defined on the repository.
    columns : list[IssueColumn]
        One column per fetched page, in fetch order.

    """

    repo_owner: str
    repo_name: str
    labels: list[IssueLabel] = msgspec.field(default_factory=list)
    columns: list[IssueColumn] = msgspec.field(default_factory=list)

    @property
    def slug(self) -> str:
        """Return the GitHub-style owner/name identifier."""
        return repo_slug(self.repo_owner, self.repo_name)

    @property
    def issue_count(self) -> int:
        """Return the number of issues across all columns."""
        return sum(len(column.issues) for column in self.columns)

    def to_json(self) -> bytes:
        """Encode the board as JSON."""
        return msgspec.json.encode(self)

    @classmethod
    def from_json(cls, data: bytes | str) -> IssueBoard:
        """Decode a board previously produced by :meth:`to_json`."""
        return msgspec.json.decode(data, type=cls)
