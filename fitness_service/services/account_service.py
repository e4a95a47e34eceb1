from __future__ import annotations

from typing import Any

import structlog

from ..exceptions import ConflictError, InvalidCredentialsError, ValidationFailedError
from ..metrics import ACCOUNTS_REGISTERED_TOTAL, LOGIN_ATTEMPTS_TOTAL
from ..schemas.account import (
    Account,
    ClientAccount,
    ClientProfile,
    LoginRequest,
    RegisterRequest,
    Role,
    TrainerAccount,
    TrainerProfile,
)
from ..store import ACCOUNTS, DocumentStore, DuplicateDocumentError
from .validation import missing_fields

logger = structlog.get_logger(__name__)


def build_account(payload: RegisterRequest) -> Account:
    """Pick the account variant for ``payload.role`` and check its required fields."""
    if payload.role == Role.client.value:
        if not payload.goal:
            logger.warning("registration_client_missing_goal", email=payload.email, role=payload.role)
            raise ValidationFailedError("Fitness goal is required for client registration")
        return ClientAccount(
            fullname=payload.fullname,
            email=payload.email,
            password=payload.password,
            goal=payload.goal,
        )

    if payload.role == Role.trainer.value:
        if not payload.specialization or not payload.experience:
            logger.warning(
                "registration_trainer_missing_fields",
                email=payload.email,
                role=payload.role,
                missing_specialization=not payload.specialization,
                missing_experience=not payload.experience,
            )
            raise ValidationFailedError("Specialization and experience are required for trainer registration")
        return TrainerAccount(
            fullname=payload.fullname,
            email=payload.email,
            password=payload.password,
            specialization=payload.specialization,
            experience=payload.experience,
            certification=payload.certification or "",
        )

    logger.warning("registration_unknown_role", email=payload.email, role=payload.role)
    raise ValidationFailedError("Role must be either client or trainer")


def to_profile(document: dict[str, Any]) -> ClientProfile | TrainerProfile:
    if document.get("role") == Role.trainer.value:
        return TrainerProfile(
            fullname=document["fullname"],
            email=document["email"],
            specialization=document.get("specialization"),
            experience=document.get("experience"),
            certification=document.get("certification") or "",
        )
    return ClientProfile(
        fullname=document["fullname"],
        email=document["email"],
        goal=document.get("goal"),
    )


class AccountService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def register(self, payload: RegisterRequest) -> Account:
        logger.info("registration_started", email=payload.email, role=payload.role)

        missing = missing_fields(
            fullname=payload.fullname,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
        if missing:
            logger.warning("registration_missing_fields", email=payload.email, missing_fields=missing)
            raise ValidationFailedError("Full name, email, password, and role are required")

        account = build_account(payload)

        existing = await self.store.find_one(ACCOUNTS, {"email": account.email})
        if existing is not None:
            logger.warning("registration_duplicate_user", email=account.email)
            raise ConflictError()

        try:
            account_id = await self.store.insert_one(ACCOUNTS, account.model_dump())
        except DuplicateDocumentError:
            # Lost a race with a concurrent registration; the unique index rejected the insert.
            logger.warning("registration_duplicate_user", email=account.email, source="unique_index")
            raise ConflictError()

        ACCOUNTS_REGISTERED_TOTAL.labels(role=account.role).inc()
        logger.info("registration_completed", email=account.email, role=account.role, user_id=account_id)
        return account

    async def login(self, payload: LoginRequest) -> ClientProfile | TrainerProfile:
        logger.info("login_started", email=payload.email, role=payload.role)

        missing = missing_fields(email=payload.email, password=payload.password, role=payload.role)
        if missing:
            logger.warning("login_missing_fields", email=payload.email, role=payload.role, missing_fields=missing)
            raise ValidationFailedError("All fields are required")

        try:
            document = await self.store.find_one(
                ACCOUNTS,
                {"email": payload.email, "password": payload.password, "role": payload.role},
            )
        except Exception:
            LOGIN_ATTEMPTS_TOTAL.labels(outcome="error").inc()
            raise

        if document is None:
            LOGIN_ATTEMPTS_TOTAL.labels(outcome="invalid").inc()
            logger.warning("login_invalid_credentials", email=payload.email, role=payload.role)
            raise InvalidCredentialsError()

        LOGIN_ATTEMPTS_TOTAL.labels(outcome="success").inc()
        logger.info("login_completed", email=document["email"], role=document.get("role"), user_id=document.get("_id"))
        return to_profile(document)
