"""Convert decoded GraphQL responses into typed records.

Extraction is all-or-nothing: a single node missing a required field fails
the whole response with :class:`ExtractError`. No partial pages are returned.
"""

from __future__ import annotations

import typing as typ

from .errors import ExtractError
from .models import Issue, IssueLabel, Page

JSONPath = tuple[str, ...]

ISSUE_NODES_PATH: JSONPath = ("data", "search", "nodes")
PAGE_INFO_PATH: JSONPath = ("data", "search", "pageInfo")
LABEL_NODES_PATH: JSONPath = ("data", "labels", "nodes")
# GitHub nests the list under the repository the labels document selects.
REPOSITORY_LABEL_NODES_PATH: JSONPath = ("data", "repository", "labels", "nodes")

_MISSING = object()


def get_at(node: object, path: JSONPath) -> object:
    """Return the value at ``path`` or a sentinel when any step is absent."""
    for key in path:
        if not isinstance(node, dict):
            return _MISSING
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return _MISSING
    return node


def get_string_at(
    node: object, path: JSONPath, *, field: str, response: object
) -> str:
    """Return the string at ``path``, raising ``ExtractError`` otherwise."""
    value = get_at(node, path)
    if not isinstance(value, str):
        raise ExtractError.missing(field, response)
    return value


def get_list_at(
    node: object, path: JSONPath, *, field: str, response: object
) -> list[typ.Any]:
    """Return the JSON array at ``path``, raising ``ExtractError`` otherwise."""
    value = get_at(node, path)
    if not isinstance(value, list):
        raise ExtractError.missing(field, response)
    return value


def get_dict_at(
    node: object, path: JSONPath, *, field: str, response: object
) -> dict[str, typ.Any]:
    """Return the JSON object at ``path``, raising ``ExtractError`` otherwise."""
    value = get_at(node, path)
    if not isinstance(value, dict):
        raise ExtractError.missing(field, response)
    return value


def _issue_author(node: object, response: object) -> str:
    # Display names are optional on GitHub; the login always exists for users.
    name = get_at(node, ("author", "name"))
    if isinstance(name, str):
        return name
    return get_string_at(node, ("author", "login"), field="author", response=response)


def _issue_from_node(node: object, response: object) -> Issue:
    author = _issue_author(node, response)
    title = get_string_at(node, ("title",), field="title", response=response)
    return Issue(title=title, author=author)


def extract_issue_page(response: object) -> tuple[list[Issue], Page]:
    """Extract the issues and next-page cursor from a search response.

    Raises
    ------
    ExtractError
        If the node list, any node's ``author`` or ``title``, the
        ``pageInfo`` object or its ``endCursor`` is missing.

    """
    nodes = get_list_at(response, ISSUE_NODES_PATH, field="issues", response=response)
    issues = [_issue_from_node(node, response) for node in nodes]

    page_info = get_dict_at(
        response, PAGE_INFO_PATH, field="pageInfo", response=response
    )
    end_cursor = get_string_at(
        page_info, ("endCursor",), field="endCursor", response=response
    )
    has_next_page = page_info.get("hasNextPage")
    return issues, Page(
        end_cursor=end_cursor,
        has_next_page=has_next_page if isinstance(has_next_page, bool) else None,
    )


def _label_from_node(node: object, response: object) -> IssueLabel:
    return IssueLabel(
        name=get_string_at(node, ("name",), field="name", response=response),
        description=get_string_at(
            node, ("description",), field="description", response=response
        ),
        color=get_string_at(node, ("color",), field="color", response=response),
    )


def extract_labels(response: object) -> list[IssueLabel]:
    """Extract every label from a label-list response.

    The node list is read from ``data.labels.nodes``, or from
    ``data.repository.labels.nodes`` when the former is absent.

    Raises
    ------
    ExtractError
        If the node list is missing or any label lacks ``name``,
        ``description`` or ``color``.

    """
    path = LABEL_NODES_PATH
    if get_at(response, LABEL_NODES_PATH) is _MISSING:
        path = REPOSITORY_LABEL_NODES_PATH
    nodes = get_list_at(response, path, field="labels", response=response)
    return [_label_from_node(node, response) for node in nodes]


__all__ = [
    "ISSUE_NODES_PATH",
    "LABEL_NODES_PATH",
    "PAGE_INFO_PATH",
    "REPOSITORY_LABEL_NODES_PATH",
    "extract_issue_page",
    "extract_labels",
    "get_at",
    "get_dict_at",
    "get_list_at",
    "get_string_at",
]
