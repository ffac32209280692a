"""
Custom pagination for Django Ninja list endpoints.

Implements Django Ninja's PaginationBase with page-based parameters and the
``{success, items, count}`` envelope shared by every list response.

Reference: https://django-ninja.dev/guides/response/pagination/
"""

from typing import Any

from ninja import Schema
from ninja.pagination import PaginationBase

from common.config import PaginationConfig


class PagePaginationInput(Schema):
    """Input parameters for page-based pagination.

    - page: Page number (1-based, default 1)
    - page_size: Items per page (default 20, max 100)
    """

    page: int = PaginationConfig.DEFAULT_PAGE
    page_size: int = PaginationConfig.DEFAULT_PAGE_SIZE


class PagePaginationOutput(Schema):
    """Standard paginated response."""

    success: bool = True
    items: list[Any]
    count: int


class PagePagination(PaginationBase):
    """
    Pagination class for list endpoints.

    Usage in API:
        @router.get('/', response=list[ProjectOut])
        @paginate(PagePagination)
        def list_projects(request):
            return Project.objects.filter(...)

    Out-of-range page sizes fall back to the default instead of failing.
    """

    class Input(PagePaginationInput):
        pass

    class Output(PagePaginationOutput):
        pass

    def paginate_queryset(
        self,
        queryset,
        pagination: Input,
        **params: Any,
    ) -> dict[str, Any]:
        page, page_size = self.normalize(pagination.page, pagination.page_size)
        offset = (page - 1) * page_size

        return {
            'success': True,
            'items': self._slice(queryset, offset, page_size),
            'count': self._get_total_count(queryset),
        }

    @staticmethod
    def normalize(page: int, page_size: int) -> tuple[int, int]:
        page = max(PaginationConfig.DEFAULT_PAGE, page)
        if page_size < PaginationConfig.MIN_PAGE_SIZE or page_size > PaginationConfig.MAX_PAGE_SIZE:
            page_size = PaginationConfig.DEFAULT_PAGE_SIZE
        return page, page_size

    @staticmethod
    def _get_total_count(data: Any) -> int:
        if isinstance(data, list):
            return len(data)
        if hasattr(data, 'count'):
            try:
                result = data.count()
                return int(result) if result is not None else 0
            except TypeError:
                pass
        return len(list(data))

    @staticmethod
    def _slice(data: Any, offset: int, limit: int) -> list[Any]:
        return list(data[offset : offset + limit])
