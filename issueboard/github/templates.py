"""Query template documents and placeholder substitution.

Query documents are fixed GraphQL text with ``{{name}}`` placeholders. They
are loaded once, when a backend is built, and rendered per request by plain
textual substitution. Values are inserted verbatim: callers quote strings or
emit the literal ``null`` token themselves.

Example:
>>> template = QueryTemplate.from_text("labels", 'repo: "{{repo}}"')
>>> template.render({"repo": "reef"})
'repo: "reef"'

"""

from __future__ import annotations

import dataclasses
import re
import typing as typ
from importlib import resources

from .errors import TemplateError

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")
_QUERY_PACKAGE = "issueboard.github.queries"

SEARCH_TEMPLATE = "search"
LABELS_TEMPLATE = "labels"


@dataclasses.dataclass(frozen=True, slots=True)
class QueryTemplate:
    """A named query document with ``{{name}}`` placeholders."""

    name: str
    text: str

    @classmethod
    def from_text(cls, name: str, text: str) -> QueryTemplate:
        """Build a template from in-memory text."""
        return cls(name=name, text=text)

    @classmethod
    def load(cls, name: str) -> QueryTemplate:
        """Load a bundled ``<name>.graphql`` document."""
        source = resources.files(_QUERY_PACKAGE).joinpath(f"{name}.graphql")
        return cls(name=name, text=source.read_text(encoding="utf-8"))

    @property
    def placeholders(self) -> frozenset[str]:
        """Return the names of all placeholders in the document."""
        return frozenset(_PLACEHOLDER.findall(self.text))

    def require(self, names: typ.Iterable[str]) -> QueryTemplate:
        """Check that every placeholder is one of ``names``.

        Raises
        ------
        TemplateError
            If the document references a placeholder outside ``names``.

        """
        unbound = self.placeholders - set(names)
        if unbound:
            raise TemplateError.unbound(self.name, unbound)
        return self

    def render(self, variables: typ.Mapping[str, str]) -> str:
        """Substitute every placeholder with its value from ``variables``."""
        self.require(variables)
        return _PLACEHOLDER.sub(lambda match: variables[match.group(1)], self.text)


__all__ = [
    "LABELS_TEMPLATE",
    "SEARCH_TEMPLATE",
    "QueryTemplate",
]
