"""Comment statistics routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from quill.adapter.error import AdapterError
from quill.application.usecase.stats import (
    GetStatsRequest,
    GetStatsResponse,
    GetStatsUseCase,
)
from quill.domain.error import DomainError
from quill.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["stats"], route_class=DishkaRoute)


@router.get("/stats", response_model=GetStatsResponse)
async def get_stats(
    get_stats_use_case: FromDishka[GetStatsUseCase],
    start_date: datetime | None = None,
    post_id: str | None = None,
    interval: str | None = None,
) -> GetStatsResponse:
    """Comment count, recent comments, most commented posts and histogram.

    Args:
        start_date: Only count comments published from this time on
        post_id: Only count comments on this post
        interval: Histogram bucket width (``1d``, ``1w``, ``1M``, ``12h``...)
    """
    try:
        return await get_stats_use_case.execute(
            GetStatsRequest(start_date=start_date, post_id=post_id, interval=interval)
        )
    except (DomainError, AdapterError) as e:
        raise to_http_exception(e)
