import structlog
from fastapi import APIRouter, Depends

from ..dependencies import get_store
from ..exceptions import ApiError, ServerError
from ..schemas import PlanCreate, PlanListResponse, PlanUpdate, SuccessResponse
from ..services.plan_service import PlanService
from ..store import DocumentStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"])


def get_plan_service(store: DocumentStore = Depends(get_store)) -> PlanService:
    return PlanService(store)


@router.post("", response_model=SuccessResponse)
async def assign_plan(
    payload: PlanCreate,
    plan_service: PlanService = Depends(get_plan_service),
):
    try:
        await plan_service.assign(payload)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("plan_assignment_failed", trainer=payload.trainer, client=payload.client, error=str(e))
        raise ServerError(str(e)) from e
    return SuccessResponse(msg="Plan assigned")


@router.get("/{trainer}", response_model=PlanListResponse)
async def list_trainer_plans(
    trainer: str,
    plan_service: PlanService = Depends(get_plan_service),
):
    try:
        plans = await plan_service.list_for_trainer(trainer)
    except Exception as e:
        logger.exception("trainer_plans_fetch_failed", trainer=trainer, error=str(e))
        raise ServerError(str(e)) from e
    return PlanListResponse(plans=plans)


@router.put("/{plan_id}", response_model=SuccessResponse)
async def update_plan(
    plan_id: str,
    payload: PlanUpdate | None = None,
    plan_service: PlanService = Depends(get_plan_service),
):
    try:
        await plan_service.update(plan_id, payload if payload is not None else PlanUpdate())
    except Exception as e:
        logger.exception("plan_update_failed", plan_id=plan_id, error=str(e))
        raise ServerError(str(e)) from e
    return SuccessResponse(msg="Plan updated")


@router.delete("/{plan_id}", response_model=SuccessResponse)
async def delete_plan(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service),
):
    try:
        await plan_service.delete(plan_id)
    except Exception as e:
        logger.exception("plan_delete_failed", plan_id=plan_id, error=str(e))
        raise ServerError(str(e)) from e
    return SuccessResponse(msg="Plan deleted")
