# app/core/pagination.py

import math

from pydantic import BaseModel

DEFAULT_PAGINATE = 10
MAX_PAGE = 1_000_000
MAX_PAGINATE = 100


class Meta(BaseModel):
    total_data: int = 0
    total_pages: int = 1
    page: int = 1
    paginate: int = DEFAULT_PAGINATE


def clamp_paging(page: int | None, paginate: int | None, default: int = DEFAULT_PAGINATE):
    """Page below 1 becomes 1, paginate below 1 falls back to the default."""
    if page is None or page < 1:
        page = 1

    if paginate is None or paginate < 1:
        paginate = default

    return page, paginate


def page_offset(page: int, paginate: int) -> int:
    page, paginate = clamp_paging(page, paginate)
    return paginate * (page - 1)


def count_total_pages(total_data: int, paginate: int) -> int:
    # Zero rows is still "page 1 of 1"
    if total_data <= 0:
        return 1

    return max(1, math.ceil(total_data / paginate))


def build_meta(page: int, paginate: int, total_data: int) -> Meta:
    page, paginate = clamp_paging(page, paginate)

    return Meta(
        total_data=total_data,
        total_pages=count_total_pages(total_data, paginate),
        page=page,
        paginate=paginate,
    )
