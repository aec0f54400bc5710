"""Task query domain entities for the tasks application.

This module contains the domain entities for listing tasks, representing
the filters, ordering and pagination of a task query and its result page.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from domain.entities.task import MAX_PRIORITY, MIN_PRIORITY

if TYPE_CHECKING:
    from domain.entities.task import TaskEntity

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class SortField(str, Enum):
    """Fields a task list can be sorted by."""

    CREATED_AT = "createdAt"
    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    ORDER_INDEX = "orderIndex"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass
class TaskQueryCriteria:
    """Domain entity representing a declarative task query.

    All filters are optional. The search term matches title OR description
    case-insensitively; every other filter is ANDed.

    Attributes:
        q: Free-text term (optional)
        completed: Exact completion filter (optional)
        priority: Exact priority filter, 1..3 (optional)
        tag: Exact tag name the task must be associated with (optional)
        sort_by: Secondary sort field, ``orderIndex`` always sorts first
        order: Direction of the secondary sort
        page: Page number for pagination (1-based)
        page_size: Number of results per page, 1..100
    """

    q: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[int] = None
    tag: Optional[str] = None
    sort_by: SortField = SortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        """Validate query criteria after initialization."""
        if self.page < 1:
            raise ValueError("Page number must be at least 1")
        if self.page_size < 1 or self.page_size > MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        if self.priority is not None and not (
            MIN_PRIORITY <= self.priority <= MAX_PRIORITY
        ):
            raise ValueError(
                f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}"
            )
        self.sort_by = SortField(self.sort_by)
        self.order = SortOrder(self.order)

    @property
    def offset(self) -> int:
        """Calculate the offset for database pagination."""
        return (self.page - 1) * self.page_size

    def has_text_search(self) -> bool:
        return self.q is not None and len(self.q) > 0

    def has_tag_filter(self) -> bool:
        return self.tag is not None and len(self.tag) > 0

    def needs_secondary_sort(self) -> bool:
        """Whether ``sort_by`` adds a key after the ``orderIndex`` backbone."""
        return self.sort_by != SortField.ORDER_INDEX


@dataclass
class PaginationMetadata:
    """Domain entity representing pagination information for a task page.

    Attributes:
        page: Current page number
        page_size: Number of tasks per page
        total: Total number of tasks matching the query
        total_pages: ceil(total / page_size), zero when nothing matches
        has_next: Whether there is a next page
        has_prev: Whether there is a previous page
    """

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def calculate(cls, page: int, page_size: int, total: int) -> "PaginationMetadata":
        """Calculate pagination metadata from basic parameters.

        Args:
            page: The current page number (1-based)
            page_size: Number of tasks per page
            total: Total number of tasks found

        Returns:
            PaginationMetadata: Calculated pagination information

        Example:
            >>> PaginationMetadata.calculate(page=1, page_size=1, total=3).has_next
            True
        """
        total_pages = math.ceil(total / page_size)
        return cls(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


@dataclass
class TaskPage:
    """One page of tasks together with its pagination metadata."""

    tasks: List["TaskEntity"]
    pagination: PaginationMetadata

    def __post_init__(self):
        if len(self.tasks) > self.pagination.page_size:
            raise ValueError("Number of tasks exceeds page size")

    def is_empty(self) -> bool:
        return len(self.tasks) == 0
