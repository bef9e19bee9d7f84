"""
Paging and sorting parameters for collection reads.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from pymongo import ASCENDING, DESCENDING

DEFAULT_PAGE_SIZE = 25
DEFAULT_PAGE = 0


@dataclass(frozen=True)
class PagingSpec:
    """Window over a result set. page_size=None means DEFAULT_PAGE_SIZE."""
    page_size: Optional[int] = None
    page: int = DEFAULT_PAGE

    @property
    def skip(self) -> int:
        return self.page * (self.page_size or DEFAULT_PAGE_SIZE)


@dataclass(frozen=True)
class SortSpec:
    """Sort on one or more fields, all in the same direction."""
    keys: Union[str, Sequence[str]]
    ascending: bool = True

    def to_pymongo(self) -> List[Tuple[str, int]]:
        """Build the (field, direction) list accepted by Cursor.sort()."""
        direction = ASCENDING if self.ascending else DESCENDING
        keys = [self.keys] if isinstance(self.keys, str) else list(self.keys)
        return [(key, direction) for key in keys]


DEFAULT_PAGING = PagingSpec(page_size=DEFAULT_PAGE_SIZE, page=DEFAULT_PAGE)


def resolve_paging(paging: Optional[PagingSpec] = None) -> PagingSpec:
    """
    Resolve the effective paging for a read.

    Falls back to DEFAULT_PAGING when paging is omitted, and to
    DEFAULT_PAGE_SIZE when only page_size is unset. Never mutates
    the input.

    Raises:
        ValueError: If page is not a non-negative integer or page_size
            is not a positive integer
    """
    if paging is None:
        return DEFAULT_PAGING

    page_size = DEFAULT_PAGE_SIZE if paging.page_size is None else paging.page_size
    page = DEFAULT_PAGE if paging.page is None else paging.page

    if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size <= 0:
        raise ValueError(f"page_size must be a positive integer, got {page_size}")
    if not isinstance(page, int) or isinstance(page, bool) or page < 0:
        raise ValueError(f"page must be a non-negative integer, got {page}")

    return PagingSpec(page_size=page_size, page=page)
