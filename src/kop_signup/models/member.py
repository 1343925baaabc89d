from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from kop_signup.schemas.signup import RegistrationRequest


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class MemberRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    email: EmailStr
    phone: str
    name: str
    dateOfBirth: date
    invitedToWhatsapp: bool
    shouldInviteToWhatsapp: bool
    shouldReceiveUpdates: bool
    createdAt: datetime = Field(default_factory=_now_utc)

    @classmethod
    def from_request(cls, request: RegistrationRequest) -> "MemberRecord":
        return cls(
            email=request.email,
            phone=request.phone,
            name=request.name,
            dateOfBirth=request.dateOfBirth,
            # só quem já está no grupo conta como convidado
            invitedToWhatsapp=request.isAlreadyInWhatsapp == "yes",
            shouldInviteToWhatsapp=request.shouldInviteToWhatsapp,
            shouldReceiveUpdates=request.shouldReceiveUpdates,
        )

    def to_document(self) -> Dict[str, Any]:
        doc = self.model_dump(by_alias=True)
        # BSON não tem tipo date puro
        doc["dateOfBirth"] = datetime.combine(self.dateOfBirth, time.min).replace(tzinfo=timezone.utc)
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "MemberRecord":
        data = dict(doc)
        dob = data.get("dateOfBirth")
        if isinstance(dob, datetime):
            data["dateOfBirth"] = dob.date()
        return cls.model_validate(data)
