"""
Generic paginated table.

What:  Renders an in-memory list of records as fixed-size pages, using a list
       of column definitions (header label + cell function).
How:   `GenericTable` slices the data by `rows_per_page`, keeps the current
       page index, and runs each column's `cell` over the rows of that page
       only. It owns no data and does no I/O.
Who:   Used by the saved-messages table endpoint; reusable for any record
       type.

Paging rules:
    - Pages are zero-based; page_count == ceil(len(data) / rows_per_page)
    - The last page may be shorter than rows_per_page
    - Empty data has zero pages and renders headers only
    - Any requested page is clamped into range; navigation never raises

Example:
    table = GenericTable(
        data=users,
        columns=[
            ColumnDef("Name", lambda u: u.full_name),
            ColumnDef("Email", lambda u: u.email),
        ],
        rows_per_page=10,
    )
    table.go_to(3)
    rendered = table.render()
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ROWS_PER_PAGE = 6


@dataclass(frozen=True)
class ColumnDef(Generic[T]):
    """One table column: a header label and a function rendering a record's cell."""

    header: str
    cell: Callable[[T], Any]


@dataclass
class RenderedTable:
    """Output of `GenericTable.render()` for the current page."""

    headers: List[str]
    rows: List[List[Any]] = field(default_factory=list)
    page: int = 0
    page_count: int = 0
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    total_rows: int = 0
    has_previous: bool = False
    has_next: bool = False
    label: str = "Page 1 of 1"


class GenericTable(Generic[T]):
    """
    Paginated view over a sequence of records.

    Args:
        data:          Records to display. None is treated as empty.
        columns:       Column definitions, rendered in order.
        rows_per_page: Page size; non-positive values fall back to
                       DEFAULT_ROWS_PER_PAGE.
        page:          Initial zero-based page, clamped into range.
    """

    def __init__(
        self,
        data: Optional[Sequence[T]],
        columns: Sequence[ColumnDef[T]],
        rows_per_page: int = DEFAULT_ROWS_PER_PAGE,
        page: int = 0,
    ):
        self._data: List[T] = list(data) if data else []
        self.columns: List[ColumnDef[T]] = list(columns)
        self.rows_per_page = self._normalize_page_size(rows_per_page)
        self._page = 0
        self.go_to(page)

    @staticmethod
    def _normalize_page_size(rows_per_page: Any) -> int:
        if isinstance(rows_per_page, int) and not isinstance(rows_per_page, bool) and rows_per_page > 0:
            return rows_per_page
        logger.debug(
            "Invalid rows_per_page %r, using default %d", rows_per_page, DEFAULT_ROWS_PER_PAGE
        )
        return DEFAULT_ROWS_PER_PAGE

    # ── State ─────────────────────────────────────────────────────────────

    @property
    def data(self) -> List[T]:
        return self._data

    @property
    def total_rows(self) -> int:
        return len(self._data)

    @property
    def page_count(self) -> int:
        return math.ceil(len(self._data) / self.rows_per_page)

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def has_previous(self) -> bool:
        return self._page > 0

    @property
    def has_next(self) -> bool:
        return self._page < self.page_count - 1

    @property
    def pagination_label(self) -> str:
        """Human-readable position, 1-based: "Page 2 of 5". Empty tables read "Page 1 of 1"."""
        return f"Page {self._page + 1} of {max(1, self.page_count)}"

    # ── Navigation ────────────────────────────────────────────────────────

    def _clamp(self, page: Any) -> int:
        last = max(self.page_count - 1, 0)
        try:
            requested = int(page)
        except (TypeError, ValueError, OverflowError):
            # inf / -inf land on the nearest end, anything else on the first page
            if isinstance(page, float) and page == page:
                requested = last if page > 0 else 0
            else:
                requested = 0
        return min(max(requested, 0), last)

    def go_to(self, page: int) -> int:
        """Jump to `page`, clamped to [0, page_count - 1]. Returns the page actually selected."""
        self._page = self._clamp(page)
        return self._page

    def next_page(self) -> int:
        return self.go_to(self._page + 1)

    def previous_page(self) -> int:
        return self.go_to(self._page - 1)

    def set_data(self, data: Optional[Sequence[T]]) -> None:
        """Replace the dataset. Goes back to the first page if the current one no longer exists."""
        self._data = list(data) if data else []
        if self._page >= max(self.page_count, 1):
            self._page = 0

    # ── Slicing & Rendering ───────────────────────────────────────────────

    def page_items(self, page: Optional[int] = None) -> List[T]:
        """Records on `page` (default: the current page), clamped like `go_to`."""
        index = self._page if page is None else self._clamp(page)
        start = index * self.rows_per_page
        return self._data[start:start + self.rows_per_page]

    def pages(self) -> Iterator[List[T]]:
        for index in range(self.page_count):
            yield self.page_items(index)

    def render(self) -> RenderedTable:
        rows = [
            [column.cell(record) for column in self.columns]
            for record in self.page_items()
        ]
        return RenderedTable(
            headers=[column.header for column in self.columns],
            rows=rows,
            page=self._page,
            page_count=self.page_count,
            rows_per_page=self.rows_per_page,
            total_rows=self.total_rows,
            has_previous=self.has_previous,
            has_next=self.has_next,
            label=self.pagination_label,
        )
