import structlog
from fastapi import APIRouter, Depends

from ..exceptions import ApiError, ServerError
from ..schemas import MetricCreate, MetricListResponse, SuccessResponse
from ..services.activity_service import ActivityService
from .workouts import get_activity_service

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["metrics"])


@router.post("/metrics", response_model=SuccessResponse)
async def store_metrics(
    payload: MetricCreate,
    activity_service: ActivityService = Depends(get_activity_service),
):
    try:
        await activity_service.record_metric(payload)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("metrics_storage_failed", email=payload.email, error=str(e))
        raise ServerError(str(e)) from e
    return SuccessResponse(msg="Metrics updated")


@router.get("/metrics/{email}", response_model=MetricListResponse)
async def list_metrics(
    email: str,
    activity_service: ActivityService = Depends(get_activity_service),
):
    try:
        metrics = await activity_service.list_metrics(email)
    except Exception as e:
        logger.exception("metrics_fetch_failed", email=email, error=str(e))
        raise ServerError(str(e)) from e
    return MetricListResponse(metrics=metrics)
