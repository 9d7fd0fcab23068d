"""
SchoolHub Backend — GenericTable Unit Tests
=============================================

What:  Tests for paging, navigation and rendering of GenericTable.
How:   In-memory records only; no database.

What we test:
    ✅ page_count is ceil(rows / rows_per_page); the last page may be short
    ✅ Concatenating every page reproduces the data in order
    ✅ Empty data renders headers only, zero pages, "Page 1 of 1"
    ✅ Navigation and page_items are clamped and never raise
    ✅ set_data resets an out-of-range page
    ✅ Invalid page sizes fall back to the default
"""

from types import SimpleNamespace

import pytest

from schoolhub.utils.table import DEFAULT_ROWS_PER_PAGE, ColumnDef, GenericTable


def make_records(count: int):
    return [SimpleNamespace(id=i, name=f"row-{i}") for i in range(count)]


COLUMNS = [
    ColumnDef("Name", lambda r: r.name),
    ColumnDef("Id", lambda r: r.id),
]


class TestPaging:
    """Page count and slicing."""

    @pytest.mark.parametrize(
        "rows,per_page,expected",
        [(0, 6, 0), (1, 6, 1), (6, 6, 1), (7, 6, 2), (20, 6, 4), (20, 5, 4)],
    )
    def test_page_count_is_ceiling(self, rows, per_page, expected):
        table = GenericTable(make_records(rows), COLUMNS, rows_per_page=per_page)
        assert table.page_count == expected

    def test_last_page_is_short(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6)
        assert [len(p) for p in table.pages()] == [6, 6, 6, 2]

    def test_pages_concatenate_to_data(self):
        data = make_records(17)
        table = GenericTable(data, COLUMNS, rows_per_page=4)
        flattened = [record for page in table.pages() for record in page]
        assert flattened == data

    def test_page_items_of_specific_page(self):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4)
        assert [r.id for r in table.page_items(2)] == [8, 9]

    def test_page_items_clamps_negative_index(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6)
        assert [r.id for r in table.page_items(-2)] == [0, 1, 2, 3, 4, 5]

    def test_page_items_clamps_large_index(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6)
        assert [r.id for r in table.page_items(50)] == [18, 19]

    def test_page_items_on_empty_table(self):
        assert GenericTable([], COLUMNS).page_items(3) == []


class TestEmptyTable:
    """An empty dataset is a valid table."""

    def test_renders_headers_only(self):
        rendered = GenericTable([], COLUMNS).render()
        assert rendered.headers == ["Name", "Id"]
        assert rendered.rows == []
        assert rendered.page_count == 0
        assert rendered.label == "Page 1 of 1"

    def test_none_is_treated_as_empty(self):
        table = GenericTable(None, COLUMNS)
        assert table.total_rows == 0
        assert table.current_page == 0

    def test_navigation_is_a_no_op(self):
        table = GenericTable([], COLUMNS)
        assert table.next_page() == 0
        assert table.previous_page() == 0
        assert not table.has_next
        assert not table.has_previous


class TestNavigation:
    """Clamped navigation."""

    def test_initial_page_is_clamped(self):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4, page=99)
        assert table.current_page == 2

    def test_negative_page_goes_to_first(self):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4)
        assert table.go_to(-3) == 0

    def test_next_and_previous(self):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4)
        assert table.has_next and not table.has_previous

        assert table.next_page() == 1
        assert table.next_page() == 2
        assert table.next_page() == 2
        assert not table.has_next

        assert table.previous_page() == 1
        assert table.has_previous

    def test_non_numeric_page_goes_to_first(self):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4, page=2)
        assert table.go_to("abc") == 0

    @pytest.mark.parametrize(
        "requested,expected",
        [(float("inf"), 2), (float("-inf"), 0), (float("nan"), 0), (1.7, 1)],
    )
    def test_float_pages_never_raise(self, requested, expected):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4)
        assert table.go_to(requested) == expected

    def test_infinite_initial_page(self):
        table = GenericTable(make_records(10), COLUMNS, rows_per_page=4, page=float("inf"))
        assert table.current_page == 2

    def test_label_is_one_based(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6, page=1)
        assert table.pagination_label == "Page 2 of 4"


class TestSetData:
    """Replacing the dataset."""

    def test_out_of_range_page_resets_to_first(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6, page=3)
        table.set_data(make_records(5))
        assert table.current_page == 0

    def test_in_range_page_is_kept(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6, page=1)
        table.set_data(make_records(12))
        assert table.current_page == 1

    def test_set_empty_data(self):
        table = GenericTable(make_records(20), COLUMNS, rows_per_page=6, page=2)
        table.set_data([])
        assert table.current_page == 0
        assert table.render().rows == []


class TestRowsPerPage:
    """Page size validation."""

    @pytest.mark.parametrize("value", [0, -1, None, "6", True])
    def test_invalid_falls_back_to_default(self, value):
        table = GenericTable(make_records(3), COLUMNS, rows_per_page=value)
        assert table.rows_per_page == DEFAULT_ROWS_PER_PAGE

    def test_default_is_six(self):
        assert GenericTable(make_records(3), COLUMNS).rows_per_page == 6


class TestRender:
    """Cell rendering."""

    def test_cells_follow_column_order(self):
        table = GenericTable(make_records(3), COLUMNS, rows_per_page=2)
        rendered = table.render()
        assert rendered.rows == [["row-0", 0], ["row-1", 1]]
        assert rendered.has_next is True
        assert rendered.total_rows == 3

    def test_only_current_page_is_rendered(self):
        calls = []

        def cell(record):
            calls.append(record.id)
            return record.id

        table = GenericTable(make_records(10), [ColumnDef("Id", cell)], rows_per_page=3, page=1)
        table.render()
        assert calls == [3, 4, 5]
