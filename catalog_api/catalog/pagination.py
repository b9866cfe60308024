"""Offset pagination for catalog results."""

from dataclasses import dataclass

from catalog_api.domain.exceptions import ValidationError


@dataclass(frozen=True)
class PageRequest:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        items_per_page: Items per page.
    """

    page: int = 1
    items_per_page: int = 10

    def validate(self, max_items_per_page: int | None = None) -> None:
        """Check the request can be paginated.

        Args:
            max_items_per_page: Optional upper limit on page size.

        Raises:
            ValidationError: If page or page size is out of range.
        """
        if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
            raise ValidationError("page", "must be a positive integer", self.page)
        if (
            isinstance(self.items_per_page, bool)
            or not isinstance(self.items_per_page, int)
            or self.items_per_page < 1
        ):
            raise ValidationError(
                "itemsPerPage", "must be a positive integer", self.items_per_page
            )
        if max_items_per_page is not None and self.items_per_page > max_items_per_page:
            raise ValidationError(
                "itemsPerPage",
                f"must not exceed {max_items_per_page}",
                self.items_per_page,
            )


@dataclass(frozen=True)
class PageWindow:
    """Slice of the result set to fetch.

    Attributes:
        skip: Number of records to skip.
        limit: Maximum records to return.
        total_pages: Number of pages for the total.
    """

    skip: int
    limit: int
    total_pages: int


@dataclass(frozen=True)
class PageResult:
    """Pagination metadata returned with a page of results.

    Attributes:
        total_items: Total matching records.
        total_pages: Number of pages.
        current_page: Requested page, echoed.
        items_per_page: Requested page size, echoed.
    """

    total_items: int
    total_pages: int
    current_page: int
    items_per_page: int

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.current_page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.current_page > 1


def total_pages(total_items: int, items_per_page: int) -> int:
    """Ceiling of total_items / items_per_page; zero when there are no items."""
    if items_per_page <= 0:
        raise ValidationError("itemsPerPage", "must be a positive integer", items_per_page)
    return (max(total_items, 0) + items_per_page - 1) // items_per_page


def paginate(total_items: int, page: int, items_per_page: int) -> PageWindow:
    """Compute the fetch window for a page.

    Pages past the end are allowed and yield a window starting at or
    beyond ``total_items``.

    Args:
        total_items: Total matching records.
        page: Requested page (1-indexed).
        items_per_page: Page size.

    Returns:
        PageWindow with skip, limit and total pages.

    Raises:
        ValidationError: If page or page size is not positive.
    """
    PageRequest(page=page, items_per_page=items_per_page).validate()
    return PageWindow(
        skip=(page - 1) * items_per_page,
        limit=items_per_page,
        total_pages=total_pages(total_items, items_per_page),
    )
