import json

import pytest

from kop_signup.core.errors import AppError, ErrorCode


@pytest.mark.parametrize(
    "code,status",
    [(ErrorCode.DUPLICATE, 409), (ErrorCode.VALIDATION, 422), (ErrorCode.UNKNOWN, 500)],
)
def test_default_status_per_code(code, status):
    assert AppError("boom", code).status_code == status


def test_crosses_json_boundary_unchanged():
    err = AppError("A user with this email or phone number is already registered", ErrorCode.DUPLICATE)
    wire = json.dumps(err.to_dict())
    back = AppError.from_dict(json.loads(wire))

    assert back == err
    assert back.code is ErrorCode.DUPLICATE
    assert back.message == err.message
    assert back.name == "AppError"


def test_to_dict_shape():
    assert AppError("db down", "UNKNOWN").to_dict() == {
        "message": "db down",
        "code": "UNKNOWN",
        "statusCode": 500,
        "name": "AppError",
    }


def test_from_dict_keeps_explicit_status_and_name():
    err = AppError.from_dict({"message": "x", "code": "VALIDATION", "statusCode": 400, "name": "FormError"})
    assert err.status_code == 400
    assert err.name == "FormError"


def test_unknown_code_rejected():
    with pytest.raises(ValueError):
        AppError("x", "USER_EXISTS")
