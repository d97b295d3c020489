"""Repository slug utilities.

A slug is the ``owner/name`` notation GitHub uses for repositories. The CLI
accepts either a bare slug or a ``https://github.com/owner/name`` URL, so
both forms are normalised here instead of being split ad hoc by callers.
"""

from __future__ import annotations

_GITHUB_URL_PREFIXES = ("https://github.com/", "http://github.com/", "github.com/")


def repo_slug(owner: str, name: str) -> str:
    """Build a repository slug from owner and name.

    Examples
    --------
    >>> repo_slug("octo", "reef")
    'octo/reef'

    """
    return f"{owner}/{name}"


def _strip_github_url(text: str) -> str:
    for prefix in _GITHUB_URL_PREFIXES:
        if text.startswith(prefix):
            text = text.removeprefix(prefix)
            break
    return text.removesuffix(".git").rstrip("/")


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Parse a repository slug or GitHub URL into owner and name.

    Parameters
    ----------
    slug:
        ``owner/name`` or ``https://github.com/owner/name``.

    Returns
    -------
    tuple[str, str]
        ``(owner, name)``.

    Raises
    ------
    ValueError
        If the text does not identify exactly one owner and one name.

    Examples
    --------
    >>> parse_repo_slug("octo/reef")
    ('octo', 'reef')
    >>> parse_repo_slug("https://github.com/octo/reef.git")
    ('octo', 'reef')

    """
    text = _strip_github_url(slug.strip())
    parts = text.split("/")
    if len(parts) != 2 or not all(part.strip() for part in parts):  # noqa: PLR2004
        msg = f"Invalid repository slug: expected 'owner/name', got {slug!r}"
        raise ValueError(msg)

    owner, name = parts
    return owner, name
