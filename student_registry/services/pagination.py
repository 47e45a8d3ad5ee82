from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, computed_field
from sqlalchemy.orm import Session

from student_registry.models.student import Student

ALLOWED_PAGE_SIZES: tuple[int, ...] = (2, 3, 5, 10)
DEFAULT_PAGE_SIZE = 3


def parse_int(value: Any, default: int) -> int:
    """Lenient int parsing for query strings; anything unparsable gives ``default``."""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class PageView(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int
    allowed_page_sizes: tuple[int, ...] = ALLOWED_PAGE_SIZES

    @computed_field
    @property
    def start_item(self) -> int:
        if self.total_items == 0:
            return 0
        return (self.page - 1) * self.page_size + 1

    @computed_field
    @property
    def end_item(self) -> int:
        if self.total_items == 0:
            return 0
        return min(self.page * self.page_size, self.total_items)

    @computed_field
    @property
    def remaining_items(self) -> int:
        return max(0, self.total_items - self.end_item)

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def build_page_view(
    total_items: int, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> PageView:
    """Normalize a page request against ``total_items``. Never rejects input."""
    if page_size not in ALLOWED_PAGE_SIZES:
        page_size = DEFAULT_PAGE_SIZE
    page = max(1, page)
    total_items = max(0, total_items)
    total_pages = max(1, (total_items + page_size - 1) // page_size)
    page = min(page, total_pages)
    return PageView(
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )


@dataclass
class StudentPage:
    items: list[Student]
    view: PageView


def paginate_students(
    db: Session, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> StudentPage:
    qbase = db.query(Student).order_by(Student.id.asc())
    view = build_page_view(qbase.count(), page, page_size)
    items = qbase.offset(view.offset).limit(view.page_size).all()
    return StudentPage(items=items, view=view)
