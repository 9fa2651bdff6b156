"""Page requests and result pages for paginated repository reads."""

from dataclasses import dataclass, field
from typing import List, Optional

from .entities import User


@dataclass(frozen=True)
class PageRequest:
    """A (page index, page size) pair describing one slice of a result set."""

    page: int = 0
    size: int = 200

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")

    @classmethod
    def of(cls, page: int, size: int) -> "PageRequest":
        return cls(page=page, size=size)

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page:
    """One slice of users together with the size of the whole result set."""

    content: List[User] = field(default_factory=list)
    page: int = 0
    size: int = 0
    total_elements: int = 0

    @classmethod
    def empty(cls, page_request: Optional[PageRequest] = None) -> "Page":
        if page_request is None:
            return cls()
        return cls(page=page_request.page, size=page_request.size)

    @property
    def total_pages(self) -> int:
        if self.size < 1:
            return 0
        return -(-self.total_elements // self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
