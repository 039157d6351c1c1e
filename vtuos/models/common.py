"""Pagination shared by every list query."""

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def limit(self) -> int:
        if self.page_size < 1:
            return DEFAULT_PAGE_SIZE
        return min(self.page_size, MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit

    def total_pages(self, total: int) -> int:
        """Number of pages needed for ``total`` rows; never less than 1."""
        if self.limit <= 0:
            return 1
        pages, remainder = divmod(total, self.limit)
        if remainder:
            pages += 1
        return max(pages, 1)

    def next_page(self) -> "Pagination":
        return Pagination(page=self.page + 1, page_size=self.page_size)
