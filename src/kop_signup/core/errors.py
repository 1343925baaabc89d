"""
Classificação de erros do fluxo de cadastro.

AppError carrega mensagem, código simbólico e status HTTP, e sabe ir e
voltar de um dict simples para atravessar a fronteira HTTP sem perder
código nem mensagem.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    DUPLICATE = "DUPLICATE"
    VALIDATION = "VALIDATION"
    UNKNOWN = "UNKNOWN"


DEFAULT_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.DUPLICATE: 409,
    ErrorCode.VALIDATION: 422,
    ErrorCode.UNKNOWN: 500,
}

GENERIC_MESSAGE = "An unexpected error occurred"


class AppError(Exception):
    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)
        self.status_code = status_code if status_code is not None else DEFAULT_STATUS[self.code]
        self.name = "AppError"

    def __repr__(self) -> str:
        return f"AppError(code={self.code.value!r}, message={self.message!r}, status_code={self.status_code})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppError):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = Exception.__hash__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code.value,
            "statusCode": self.status_code,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppError":
        error = cls(data["message"], data["code"], data.get("statusCode"))
        error.name = data.get("name") or error.name
        return error
