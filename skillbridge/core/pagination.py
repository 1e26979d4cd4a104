import math
from dataclasses import dataclass
from typing import Any, Dict, Sequence

from fastapi import Query

from skillbridge.core import constants


@dataclass
class PageParams:
    """Normalised page/limit pair"""
    page: int = constants.DEFAULT_PAGE
    limit: int = constants.DEFAULT_LIMIT

    def __post_init__(self):
        self.page = max(constants.DEFAULT_PAGE, self.page)
        self.limit = min(constants.MAX_LIMIT, max(1, self.limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(constants.DEFAULT_PAGE, description="Page number, 1-based"),
    limit: int = Query(constants.DEFAULT_LIMIT, description="Page size, clamped to 1-50"),
) -> PageParams:
    """Out-of-range values are clamped rather than rejected"""
    return PageParams(page=page, limit=limit)


def paginate(items: Sequence[Any], total: int, params: PageParams) -> Dict[str, Any]:
    return {
        "data": list(items),
        "pagination": {
            "page": params.page,
            "limit": params.limit,
            "total": total,
            "pages": math.ceil(total / params.limit),
        },
    }
