"""Issue board assembly from paginated backend results."""

from __future__ import annotations

from .models import IssueBoard, IssueColumn, IssueColumnConfig
from .pagination import DEFAULT_MAX_PAGES, iter_pages, load_board

__all__ = [
    "DEFAULT_MAX_PAGES",
    "IssueBoard",
    "IssueColumn",
    "IssueColumnConfig",
    "iter_pages",
    "load_board",
]
