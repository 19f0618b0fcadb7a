"""
Pagination utilities.

A ``Page`` is the explicit (content slice, page number, page size, total count) triple the
assemblers consume. It is produced either from a natively paginated MongoDB query or from a
full in-memory sequence; both paths yield identical pages.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel, ConfigDict, Field, model_validator

from exceptions import InvalidArgumentError, ValidationException

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """Bounded, ordered slice of resource instances plus the total element count"""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    content: list[T] = Field(default_factory=list)
    number: int = Field(default=0, ge=0, description="Current page number (0-indexed)")
    size: int = Field(default=20, ge=1, description="Requested page size")
    total_elements: int = Field(default=0, ge=0, description="Total number of items across all pages")

    @model_validator(mode="after")
    def content_fits_page(self):
        if len(self.content) > self.size:
            raise ValueError(
                f"Page content holds {len(self.content)} items but page size is {self.size}"
            )
        return self

    @property
    def total_pages(self) -> int:
        return (self.total_elements + self.size - 1) // self.size if self.total_elements > 0 else 0

    @property
    def offset(self) -> int:
        return self.number * self.size

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def is_empty(self) -> bool:
        return not self.content


class PaginationHelper:
    """Helper class for paginating queries and in-memory sequences"""

    @staticmethod
    def parse_sort(
        sort: list[str] | None, allowed_fields: set[str], default: list[tuple[str, int]] | None = None
    ) -> list[tuple[str, int]]:
        """
        Convert ``field,asc`` / ``field,desc`` request parameters into a MongoDB sort spec

        Raises:
            ValidationException: on an unknown field or direction
        """
        if not sort:
            return list(default or [])
        spec: list[tuple[str, int]] = []
        for entry in sort:
            field, _, direction = entry.partition(",")
            field = field.strip()
            direction = (direction or "asc").strip().lower()
            if field not in allowed_fields:
                raise ValidationException("sort", f"Cannot sort by '{field}'")
            if direction not in ("asc", "desc"):
                raise ValidationException("sort", f"Unknown sort direction '{direction}'")
            spec.append((field, 1 if direction == "asc" else -1))
        return spec

    @staticmethod
    def calculate_skip(page: int, page_size: int) -> int:
        """Offset of the first element of a 0-indexed page"""
        return page * page_size

    @staticmethod
    def slice(sequence: Sequence[T], offset: int, size: int) -> tuple[list[T], int]:
        """
        Cut one page out of a full ordered sequence.

        Args:
            sequence: Full ordered sequence
            offset: Index of the first element (page number * page size)
            size: Maximum number of elements to return

        Returns:
            Tuple of (content, total_count). Content is empty when the offset is at or
            past the end; the upper bound is clamped to the sequence length.
        """
        if sequence is None:
            raise InvalidArgumentError("sequence")
        if offset < 0:
            raise InvalidArgumentError("offset", f"Offset must not be negative, got {offset}")
        if size < 1:
            raise InvalidArgumentError("size", f"Size must be at least 1, got {size}")

        total = len(sequence)
        if offset >= total:
            return [], total
        end = min(offset + size, total)
        return list(sequence[offset:end]), total

    @staticmethod
    def from_sequence(sequence: Sequence[T], page: int, page_size: int) -> Page[T]:
        """Paginate an unpaged in-memory sequence"""
        content, total = PaginationHelper.slice(
            sequence, PaginationHelper.calculate_skip(page, page_size), page_size
        )
        return Page(content=content, number=page, size=page_size, total_elements=total)

    @staticmethod
    def from_slice(content: list[T], page: int, page_size: int, total_count: int) -> Page[T]:
        """Wrap a slice that an upstream source already paginated"""
        return Page(content=content, number=page, size=page_size, total_elements=total_count)

    @staticmethod
    async def paginate_query(
        collection: AsyncIOMotorCollection,
        query: dict[str, Any],
        page: int,
        page_size: int,
        sort: list[tuple[str, int]] | None = None,
        projection: dict[str, int] | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Paginate a MongoDB query.

        Args:
            collection: MongoDB collection to query
            query: MongoDB query filter
            page: Page number (0-indexed)
            page_size: Number of items per page
            sort: Optional list of (field, direction) tuples for sorting
            projection: Optional MongoDB projection specification

        Returns:
            Tuple of (items, total_count)
        """
        skip = PaginationHelper.calculate_skip(page, page_size)

        total_count = await collection.count_documents(query)
        if skip >= total_count:
            return [], total_count

        cursor = collection.find(query, projection)
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(skip).limit(page_size)

        items = await cursor.to_list(length=page_size)
        return items, total_count
