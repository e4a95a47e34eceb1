from __future__ import annotations

import structlog

from ..exceptions import ValidationFailedError
from ..metrics import PLAN_CHANGES_TOTAL
from ..schemas.plan import PlanCreate, PlanResponse, PlanUpdate
from ..store import PLANS, DocumentStore
from .validation import missing_fields

logger = structlog.get_logger(__name__)


class PlanService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def assign(self, payload: PlanCreate) -> str:
        logger.info(
            "plan_assignment_started",
            trainer=payload.trainer,
            client=payload.client,
            plan_length=len(payload.plan or ""),
        )

        missing = missing_fields(trainer=payload.trainer, client=payload.client, plan=payload.plan)
        if missing:
            logger.warning(
                "plan_assignment_missing_fields",
                trainer=payload.trainer,
                client=payload.client,
                missing_fields=missing,
            )
            raise ValidationFailedError("All fields are required")

        plan_id = await self.store.insert_one(
            PLANS,
            {"trainer": payload.trainer, "client": payload.client, "plan": payload.plan},
        )

        PLAN_CHANGES_TOTAL.labels(action="assigned").inc()
        logger.info("plan_assigned", trainer=payload.trainer, client=payload.client, plan_id=plan_id)
        return plan_id

    async def list_for_trainer(self, trainer: str) -> list[PlanResponse]:
        logger.info("trainer_plans_fetch_started", trainer=trainer)
        documents = await self.store.find(PLANS, {"trainer": trainer})
        plans = [PlanResponse.model_validate(doc) for doc in documents]
        logger.info("trainer_plans_fetched", trainer=trainer, plans_count=len(plans))
        return plans

    async def update(self, plan_id: str, payload: PlanUpdate) -> None:
        # No existence check: updating an unknown id is a silent no-op.
        fields = payload.model_dump(exclude_none=True)
        await self.store.update_by_id(PLANS, plan_id, fields)
        PLAN_CHANGES_TOTAL.labels(action="updated").inc()
        logger.info("plan_updated", plan_id=plan_id, fields=sorted(fields))

    async def delete(self, plan_id: str) -> None:
        await self.store.delete_by_id(PLANS, plan_id)
        PLAN_CHANGES_TOTAL.labels(action="deleted").inc()
        logger.info("plan_deleted", plan_id=plan_id)
