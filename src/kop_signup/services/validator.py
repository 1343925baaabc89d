"""
Validação do formulário de cadastro.

`validate_signup` nunca levanta exceção para entrada inválida: devolve o
RegistrationRequest normalizado ou a lista de violações por campo, todas de
uma vez. A regra cruzada do convite do WhatsApp roda à parte, depois das
regras de cada campo.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional

import structlog
from pydantic import StrictBool, TypeAdapter, ValidationError

from kop_signup.schemas.signup import RegistrationRequest, ValidationResult, Violation

log = structlog.get_logger()

REQUIRED_MESSAGE = "This field is required"
BOOLEAN_MESSAGE = "Expected a boolean value"
INVITE_REQUIRED_MESSAGE = "You must agree to join the WhatsApp group if you're not already a member"
OBJECT_MESSAGE = "Expected a JSON object with the sign-up fields"

# mensagens para erros de tipo/formato gerados pelo próprio pydantic
FIELD_MESSAGES: Dict[str, str] = {
    "name": "Name must be at least 2 characters",
    "email": "Invalid email address",
    "phone": "Please enter a valid international phone number",
    "dateOfBirth": "Please enter a valid date of birth",
    "isAlreadyInWhatsapp": "Please select if you are already in the WhatsApp group",
    "shouldInviteToWhatsapp": BOOLEAN_MESSAGE,
    "shouldReceiveUpdates": BOOLEAN_MESSAGE,
}

MISSING_MESSAGES: Dict[str, str] = {
    "isAlreadyInWhatsapp": FIELD_MESSAGES["isAlreadyInWhatsapp"],
}

_bool = TypeAdapter(StrictBool)


def _message_for(field: str, error: Dict[str, Any]) -> str:
    if error["type"] == "missing":
        return MISSING_MESSAGES.get(field, REQUIRED_MESSAGE)
    if error["type"].startswith("signup_"):
        return error["msg"]
    return FIELD_MESSAGES.get(field, error["msg"])


def _violations_from(exc: ValidationError) -> List[Violation]:
    violations: List[Violation] = []
    seen = set()
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        # EmailStr/Literal podem gerar mais de um erro por campo
        if field in seen:
            continue
        seen.add(field)
        violations.append(Violation(field=field, message=_message_for(field, error)))
    return violations


def check_whatsapp_invite(membership: str, invite: bool) -> Optional[Violation]:
    """Quem ainda não está no grupo precisa aceitar o convite."""
    if membership == "no" and invite is not True:
        return Violation(field="shouldInviteToWhatsapp", message=INVITE_REQUIRED_MESSAGE)
    return None


def validate_signup(data: Any, *, today: Optional[date] = None) -> ValidationResult:
    if not isinstance(data, Mapping):
        log.info("signup-invalid", fields=["__root__"])
        return ValidationResult(violations=[Violation(field="__root__", message=OBJECT_MESSAGE)])

    violations: List[Violation] = []
    request: Optional[RegistrationRequest] = None

    try:
        request = RegistrationRequest.model_validate(dict(data), context={"today": today or date.today()})
    except ValidationError as exc:
        violations.extend(_violations_from(exc))

    failed = {v.field for v in violations}
    if not failed.intersection({"isAlreadyInWhatsapp", "shouldInviteToWhatsapp"}):
        if request is not None:
            membership, invite = request.isAlreadyInWhatsapp, request.shouldInviteToWhatsapp
        else:
            membership = data["isAlreadyInWhatsapp"]
            invite = _bool.validate_python(data.get("shouldInviteToWhatsapp", False))
        violation = check_whatsapp_invite(membership, invite)
        if violation is not None:
            violations.append(violation)

    if violations:
        log.info("signup-invalid", fields=[v.field for v in violations])
        return ValidationResult(violations=violations)
    return ValidationResult(request=request)
