import structlog
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from kop_signup.core.db import get_db
from kop_signup.core.errors import DEFAULT_STATUS, ErrorCode
from kop_signup.repositories.member_repository import MongoMemberStore
from kop_signup.schemas.signup import ErrorBody, SignUpFailure, ValidationFailureResponse
from kop_signup.services.registration_service import RegistrationService
from kop_signup.services.validator import validate_signup


log = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["signup"])

VALIDATION_MESSAGE = "Please correct the highlighted fields"


def get_service() -> RegistrationService:
    return RegistrationService(MongoMemberStore.from_db(get_db()))


@router.post("/signup")
async def signup(
    payload: Any = Body(None),
    svc: RegistrationService = Depends(get_service),
):
    checked = validate_signup(payload)
    if not checked.ok:
        body = ValidationFailureResponse(
            error=ErrorBody(message=VALIDATION_MESSAGE, code=ErrorCode.VALIDATION),
            violations=checked.violations,
        )
        return JSONResponse(body.model_dump(mode="json"), status_code=DEFAULT_STATUS[ErrorCode.VALIDATION])

    result = await svc.register(checked.request)
    if isinstance(result, SignUpFailure):
        return JSONResponse(result.model_dump(mode="json"), status_code=DEFAULT_STATUS[result.error.code])
    return JSONResponse(result.model_dump(mode="json"), status_code=201)
