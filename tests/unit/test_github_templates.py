"""Unit tests for query templates."""

from __future__ import annotations

import pytest

from issueboard.github import QueryTemplate, TemplateError
from issueboard.github.templates import LABELS_TEMPLATE, SEARCH_TEMPLATE


def test_render_substitutes_every_placeholder() -> None:
    """Placeholders are replaced textually, including repeated ones."""
    template = QueryTemplate.from_text("t", "{{a}} and {{ b }} and {{a}}")

    assert template.render({"a": "1", "b": "2"}) == "1 and 2 and 1"


def test_render_inserts_values_verbatim() -> None:
    """Values are not escaped or quoted by the engine."""
    template = QueryTemplate.from_text("t", "after: {{page}}")

    assert template.render({"page": "null"}) == "after: null"
    assert template.render({"page": '"c1"'}) == 'after: "c1"'


def test_render_ignores_extra_variables() -> None:
    """Supplying a variable the document does not use is harmless."""
    template = QueryTemplate.from_text("t", "{{a}}")

    assert template.render({"a": "x", "unused": "y"}) == "x"


def test_render_rejects_unbound_placeholder() -> None:
    """A placeholder with no value raises TemplateError naming it."""
    template = QueryTemplate.from_text("search", "{{search}} {{page}}")

    with pytest.raises(TemplateError, match="page") as exc:
        template.render({"search": "x"})

    assert exc.value.template == "search"
    assert exc.value.names == ("page",)


def test_placeholders_lists_names() -> None:
    """placeholders reports each distinct name once."""
    template = QueryTemplate.from_text("t", "{{a}} {{b}} {{a}}")

    assert template.placeholders == frozenset({"a", "b"})


def test_require_accepts_matching_names() -> None:
    """require returns the template when every placeholder is allowed."""
    template = QueryTemplate.from_text("t", "{{a}}")

    assert template.require({"a", "b"}) is template


@pytest.mark.parametrize(
    ("name", "variables"),
    [
        (SEARCH_TEMPLATE, {"search", "page"}),
        (LABELS_TEMPLATE, {"owner", "repo"}),
    ],
)
def test_bundled_documents_use_expected_placeholders(
    name: str, variables: set[str]
) -> None:
    """Bundled query documents reference exactly their operation's variables."""
    template = QueryTemplate.load(name)

    assert template.placeholders == variables


def test_scenario_search_document_renders_filter_and_null_page() -> None:
    """The search document carries the filter and a literal null cursor."""
    document = QueryTemplate.load(SEARCH_TEMPLATE).render(
        {"search": "user:alice repo:widgets is:issue state:open", "page": "null"}
    )

    assert "user:alice repo:widgets is:issue state:open" in document
    assert "null" in document
    assert "{{" not in document
