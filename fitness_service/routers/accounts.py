from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, status

from ..dependencies import get_store
from ..exceptions import ApiError, ServerError
from ..schemas import EchoResponse, LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from ..services.account_service import AccountService
from ..store import DocumentStore

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["accounts"])


def get_account_service(store: DocumentStore = Depends(get_store)) -> AccountService:
    return AccountService(store)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    account_service: AccountService = Depends(get_account_service),
):
    try:
        await account_service.register(payload)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("registration_failed", email=payload.email, error=str(e))
        raise ServerError(str(e)) from e
    return MessageResponse(msg="Registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
):
    try:
        return await account_service.login(payload)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("login_failed", email=payload.email, role=payload.role, error=str(e))
        raise ServerError(str(e)) from e


@router.post("/test", response_model=EchoResponse)
async def test_endpoint(body: Any = Body(default=None)):
    logger.info("test_endpoint_hit", request_body=body)
    return EchoResponse(msg="Test endpoint working", received_data=body)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    # Login state lives on the client; there is no server session to drop.
    return MessageResponse(msg="Logged out on client side. No server session stored.")
