from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from booking_api.api.dependencies import get_use_cases
from booking_api.api.schemas.booking import FollowUpSummaryResponse
from booking_api.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()


@router.post(
    "/workers/outbox/follow-ups",
    response_model=FollowUpSummaryResponse,
    status_code=status.HTTP_200_OK,
)
async def process_follow_ups(
    use_cases: Annotated[dict, Depends(get_use_cases)],
    rental_id: str | None = Query(default=None),
    limit: int = Query(default=10, ge=1, le=100),
    worker_id: str | None = Query(default=None, alias="worker-id"),
) -> FollowUpSummaryResponse:
    """Drain ready follow-up events (vehicle status sync, first charge), retrying on deadlock."""

    async def execute_follow_ups():
        return await use_cases["process_follow_ups"].execute(
            aggregate_code=rental_id,
            worker_id=worker_id or "worker-1",
            limit=limit,
        )

    summary = await retry_on_deadlock(execute_follow_ups, max_attempts=3, base_delay=0.1)
    return FollowUpSummaryResponse(**summary)
