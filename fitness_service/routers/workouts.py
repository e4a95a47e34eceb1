import structlog
from fastapi import APIRouter, Depends

from ..dependencies import get_store
from ..exceptions import ApiError, ServerError
from ..schemas import SuccessResponse, WorkoutCreate, WorkoutListResponse
from ..services.activity_service import ActivityService
from ..store import DocumentStore

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["workouts"])


def get_activity_service(store: DocumentStore = Depends(get_store)) -> ActivityService:
    return ActivityService(store)


@router.post("/log-workout", response_model=SuccessResponse)
async def log_workout(
    payload: WorkoutCreate,
    activity_service: ActivityService = Depends(get_activity_service),
):
    try:
        await activity_service.log_workout(payload)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("workout_log_failed", email=payload.email, type=payload.type, error=str(e))
        raise ServerError(str(e)) from e
    return SuccessResponse(msg="Workout logged")


@router.get("/workouts/{email}", response_model=WorkoutListResponse)
async def list_workouts(
    email: str,
    activity_service: ActivityService = Depends(get_activity_service),
):
    try:
        workouts = await activity_service.list_workouts(email)
    except Exception as e:
        logger.exception("workouts_fetch_failed", email=email, error=str(e))
        raise ServerError(str(e)) from e
    return WorkoutListResponse(workouts=workouts)
