"""Behavioural tests for loading an issue board over GraphQL."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from issueboard.board import IssueBoard, load_board
from issueboard.github import BackendError, ExtractError, Repository
from tests.unit.github_backend_test_helpers import (
    issue_node,
    label_node,
    make_backend,
    search_response,
)

if typ.TYPE_CHECKING:
    from tests.unit.github_backend_test_helpers import RecordedRequest, Reply


class BoardContext(typ.TypedDict, total=False):
    """Shared state used by issue board BDD steps."""

    replies: list[Reply]
    calls: list[RecordedRequest]
    board: IssueBoard
    error: BackendError


@scenario(
    "../issue_board.feature",
    "Cursors are threaded between sequential page requests",
)
def test_cursors_are_threaded_between_pages() -> None:
    """Behavioural test: each page request carries the previous cursor."""


@scenario(
    "../issue_board.feature",
    "Login is used when the author has no display name",
)
def test_login_is_used_without_display_name() -> None:
    """Behavioural test: author falls back to the login."""


@scenario(
    "../issue_board.feature",
    "A response without pageInfo fails the board",
)
def test_missing_page_info_fails_board() -> None:
    """Behavioural test: schema drift fails loudly."""


@scenario(
    "../issue_board.feature",
    "Pagination stops on the last page before the page limit",
)
def test_pagination_stops_on_last_page() -> None:
    """Behavioural test: hasNextPage false ends pagination."""


@scenario(
    "../issue_board.feature",
    "Labels are loaded only when requested",
)
def test_labels_are_loaded_when_requested() -> None:
    """Behavioural test: label loading is opt-in."""


@pytest.fixture
def board_context() -> BoardContext:
    """Provide fresh scenario state."""
    return {}


def _pages(count: int, *, last_flagged: bool) -> list[Reply]:
    replies: list[Reply] = []
    for number in range(1, count + 1):
        has_next = None
        if last_flagged:
            has_next = number < count
        replies.append(
            (
                200,
                search_response(
                    [issue_node(f"Issue {number}")],
                    end_cursor=f"cursor-{number}",
                    has_next_page=has_next,
                ),
            )
        )
    return replies


@given(parsers.parse('the GitHub API returns {count:d} pages of issues for "{slug}"'))
def api_returns_pages(board_context: BoardContext, count: int, slug: str) -> None:
    """Queue ``count`` search replies."""
    del slug
    board_context["replies"] = _pages(count, last_flagged=False)


@given(
    parsers.parse(
        'the GitHub API returns {count:d} pages of issues for "{slug}" '
        "ending on the last page"
    )
)
def api_returns_pages_with_last_flag(
    board_context: BoardContext, count: int, slug: str
) -> None:
    """Queue search replies whose final page reports no next page."""
    del slug
    board_context["replies"] = _pages(count, last_flagged=True)


@given(
    parsers.parse(
        'the GitHub API returns the issue "{title}" by login "{login}" for "{slug}"'
    )
)
def api_returns_single_issue(
    board_context: BoardContext, title: str, login: str, slug: str
) -> None:
    """Queue a single search page holding one issue."""
    del slug
    board_context["replies"] = [
        (200, search_response([{"title": title, "author": {"login": login}}])),
    ]


@given(
    parsers.parse(
        'the GitHub API returns the label "{name}" nested under the repository'
    )
)
def api_returns_nested_label(board_context: BoardContext, name: str) -> None:
    """Queue a labels reply in GitHub's repository-nested shape."""
    nodes = [label_node(name)]
    board_context["replies"] = [
        (200, {"data": {"repository": {"labels": {"nodes": nodes}}}})
    ]


@given(
    parsers.parse('the GitHub API then returns the issue "{title}" by login "{login}"')
)
def api_then_returns_issue(board_context: BoardContext, title: str, login: str) -> None:
    """Queue a search page after the replies already queued."""
    node = {"title": title, "author": {"login": login}}
    board_context["replies"].append((200, search_response([node])))


@given("the GitHub API returns a search page without pageInfo")
def api_returns_page_without_page_info(board_context: BoardContext) -> None:
    """Queue a search page missing its pageInfo object."""
    board_context["replies"] = [
        (200, {"data": {"search": {"nodes": [issue_node("Bug")]}}}),
    ]


def _load(
    board_context: BoardContext, pages: int, slug: str, *, with_labels: bool = False
) -> None:
    backend, http_client, calls = make_backend(board_context["replies"])
    board_context["calls"] = calls
    try:
        board_context["board"] = load_board(
            backend,
            Repository.from_slug(slug),
            max_pages=pages,
            with_labels=with_labels,
        )
    finally:
        http_client.close()


@when(parsers.parse('I load a board of {pages:d} pages for "{slug}"'))
def load_board_step(board_context: BoardContext, pages: int, slug: str) -> None:
    """Load the board through the GitHub backend."""
    _load(board_context, pages, slug)


@when(parsers.parse('I try to load a board of {pages:d} pages for "{slug}"'))
def try_load_board_step(board_context: BoardContext, pages: int, slug: str) -> None:
    """Load the board and capture the expected failure."""
    with pytest.raises(BackendError) as exc:
        _load(board_context, pages, slug)
    board_context["error"] = exc.value


@when(parsers.parse('I load a board of {pages:d} pages for "{slug}" with labels'))
def load_board_with_labels_step(
    board_context: BoardContext, pages: int, slug: str
) -> None:
    """Load the board and its labels through the GitHub backend."""
    _load(board_context, pages, slug, with_labels=True)


def _search_documents(board_context: BoardContext) -> list[str]:
    documents = [call.body["query"] for call in board_context["calls"]]
    return [document for document in documents if "search(" in document]


@then(parsers.parse("the board has {count:d} columns"))
def board_has_columns(board_context: BoardContext, count: int) -> None:
    """Assert the number of columns."""
    assert len(board_context["board"].columns) == count


@then("the first search request asks for the page after null")
def first_request_uses_null(board_context: BoardContext) -> None:
    """Assert the first page is requested with a null cursor."""
    assert "after: null" in _search_documents(board_context)[0]


@then(parsers.parse('the second search request asks for the page after "{cursor}"'))
def second_request_uses_cursor(board_context: BoardContext, cursor: str) -> None:
    """Assert the second page is requested with the first page's cursor."""
    first, second = _search_documents(board_context)[:2]
    assert f'after: "{cursor}"' in second
    assert first.replace("null", f'"{cursor}"', 1) == second


@then(parsers.parse('the board lists the label "{name}"'))
def board_lists_label(board_context: BoardContext, name: str) -> None:
    """Assert the labels fetched for the board."""
    assert [label.name for label in board_context["board"].labels] == [name]


@then(parsers.parse('column {number:d} lists "{title}" by "{author}"'))
def column_lists_issue(
    board_context: BoardContext, number: int, title: str, author: str
) -> None:
    """Assert the issue and author shown in a column."""
    issues = board_context["board"].columns[number - 1].issues
    assert [(issue.title, issue.author) for issue in issues] == [(title, author)]


@then(
    parsers.parse(
        'loading fails with a missing "{field}" field for the {operation} operation'
    )
)
def loading_fails(board_context: BoardContext, field: str, operation: str) -> None:
    """Assert the failure names the operation and the missing field."""
    error = board_context["error"]
    assert error.operation == operation
    assert isinstance(error.cause, ExtractError)
    assert error.cause.field == field


@then(parsers.parse("{count:d} search requests were sent"))
def search_requests_sent(board_context: BoardContext, count: int) -> None:
    """Assert how many search pages were requested."""
    assert len(_search_documents(board_context)) == count
