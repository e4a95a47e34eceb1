from __future__ import annotations

import structlog

from ..exceptions import ValidationFailedError
from ..metrics import BODY_METRICS_RECORDED_TOTAL, WORKOUTS_LOGGED_TOTAL
from ..schemas.activity import MetricCreate, MetricResponse, WorkoutCreate, WorkoutResponse
from ..store import METRICS, WORKOUTS, DocumentStore
from .validation import missing_fields, parse_leading_int

logger = structlog.get_logger(__name__)


class ActivityService:
    """Workout log and body metric snapshots, both keyed by owner email."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def log_workout(self, payload: WorkoutCreate) -> str:
        logger.info(
            "workout_log_started",
            email=payload.email,
            type=payload.type,
            duration=payload.duration,
            calories=payload.calories,
        )

        missing = missing_fields(
            email=payload.email,
            type=payload.type,
            duration=payload.duration,
            calories=payload.calories,
            date=payload.date,
        )
        if missing:
            logger.warning("workout_log_missing_fields", email=payload.email, missing_fields=missing)
            raise ValidationFailedError("All required fields are missing")

        try:
            duration = parse_leading_int(payload.duration)
            calories = parse_leading_int(payload.calories)
        except (ValueError, OverflowError) as exc:
            logger.warning("workout_log_invalid_numbers", email=payload.email, error=str(exc))
            raise ValidationFailedError("Duration and calories must be numbers", error=str(exc))

        workout_id = await self.store.insert_one(
            WORKOUTS,
            {
                "email": payload.email,
                "type": payload.type,
                "duration": duration,
                "calories": calories,
                "date": payload.date,
                "notes": payload.notes or "",
            },
        )

        WORKOUTS_LOGGED_TOTAL.inc()
        logger.info(
            "workout_logged",
            email=payload.email,
            type=payload.type,
            duration=duration,
            calories=calories,
            workout_id=workout_id,
        )
        return workout_id

    async def list_workouts(self, email: str) -> list[WorkoutResponse]:
        logger.info("workouts_fetch_started", email=email)
        documents = await self.store.find(WORKOUTS, {"email": email})
        workouts = [WorkoutResponse.model_validate(doc) for doc in documents]
        logger.info("workouts_fetched", email=email, workouts_count=len(workouts))
        return workouts

    async def record_metric(self, payload: MetricCreate) -> str:
        fat = payload.fat or 0
        logger.info(
            "metrics_storage_started",
            email=payload.email,
            date=payload.date,
            weight=payload.weight,
            bmi=payload.bmi,
            fat=fat,
        )

        missing = missing_fields(email=payload.email, date=payload.date, weight=payload.weight, bmi=payload.bmi)
        if missing:
            logger.warning("metrics_storage_missing_fields", email=payload.email, missing_fields=missing)
            raise ValidationFailedError("All required fields must be provided")

        metric_id = await self.store.insert_one(
            METRICS,
            {
                "email": payload.email,
                "date": payload.date,
                "weight": payload.weight,
                "bmi": payload.bmi,
                "fat": fat,
            },
        )

        BODY_METRICS_RECORDED_TOTAL.inc()
        logger.info("metrics_stored", email=payload.email, date=payload.date, metrics_id=metric_id)
        return metric_id

    async def list_metrics(self, email: str) -> list[MetricResponse]:
        logger.info("metrics_fetch_started", email=email)
        documents = await self.store.find(METRICS, {"email": email})
        metrics = [MetricResponse.model_validate(doc) for doc in documents]
        logger.info("metrics_fetched", email=email, metrics_count=len(metrics))
        return metrics
