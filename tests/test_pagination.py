import pytest

from app.core.pagination import build_meta, clamp_paging, count_total_pages, page_offset


@pytest.mark.parametrize(
    "page, paginate, expected",
    [
        (1, 10, (1, 10)),
        (0, 0, (1, 10)),
        (-3, 25, (1, 25)),
        (4, -1, (4, 10)),
        (None, None, (1, 10)),
    ],
)
def test_clamp_paging(page, paginate, expected):
    assert clamp_paging(page, paginate) == expected


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 10) == 20
    assert page_offset(0, 0) == 0


@pytest.mark.parametrize(
    "total, paginate, pages",
    [
        (0, 10, 1),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (95, 10, 10),
        (7, 3, 3),
    ],
)
def test_count_total_pages(total, paginate, pages):
    assert count_total_pages(total, paginate) == pages


def test_build_meta_reports_page_one_of_one_when_empty():
    meta = build_meta(page=1, paginate=10, total_data=0)

    assert meta.total_data == 0
    assert meta.total_pages == 1
    assert meta.page == 1
    assert meta.paginate == 10


def test_build_meta_clamps_inputs():
    meta = build_meta(page=0, paginate=0, total_data=42)

    assert meta.page == 1
    assert meta.paginate == 10
    assert meta.total_pages == 5
