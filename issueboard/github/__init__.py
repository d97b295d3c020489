"""GitHub GraphQL query backend for the issue board."""

from __future__ import annotations

from .backend import GitHubBackend, IssueBackend, page_token, search_filter
from .errors import (
    BackendError,
    ExtractError,
    GitHubConfigError,
    TemplateError,
    TransportError,
)
from .extract import extract_issue_page, extract_labels
from .fixture import FixtureBackend
from .models import Issue, IssueLabel, Page, QueryResult, Repository
from .observability import ErrorCategory, categorize_error, is_retryable
from .templates import QueryTemplate
from .transport import GitHubGraphQLConfig, GraphQLTransport

__all__ = [
    "BackendError",
    "ErrorCategory",
    "ExtractError",
    "FixtureBackend",
    "GitHubBackend",
    "GitHubConfigError",
    "GitHubGraphQLConfig",
    "GraphQLTransport",
    "Issue",
    "IssueBackend",
    "IssueLabel",
    "Page",
    "QueryResult",
    "QueryTemplate",
    "Repository",
    "TemplateError",
    "TransportError",
    "categorize_error",
    "extract_issue_page",
    "extract_labels",
    "is_retryable",
    "page_token",
    "search_filter",
]
