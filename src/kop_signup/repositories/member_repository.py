"""Persistência dos membros.

`MemberStore` é o contrato que o serviço de cadastro usa; `MongoMemberStore`
é a implementação sobre a coleção de membros, com índices únicos de email e
telefone.
"""
from __future__ import annotations

from typing import Optional, Protocol

import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from kop_signup.core.config import settings
from kop_signup.core.log import mask_phone
from kop_signup.models.member import MemberRecord

log = structlog.get_logger()


class DuplicateMemberError(Exception):
    """O banco recusou o insert por violar um índice único."""


class MemberStore(Protocol):
    async def find_by_email_or_phone(self, email: str, phone: str) -> Optional[MemberRecord]:
        ...

    async def insert(self, record: MemberRecord) -> MemberRecord:
        ...


class MongoMemberStore:
    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    @classmethod
    def from_db(cls, db) -> "MongoMemberStore":
        return cls(db[settings.MEMBERS_COLLECTION])

    async def find_by_email_or_phone(self, email: str, phone: str) -> Optional[MemberRecord]:
        doc = await self.collection.find_one({"$or": [{"email": email}, {"phone": phone}]})
        if doc is None:
            return None
        return MemberRecord.from_document(doc)

    async def insert(self, record: MemberRecord) -> MemberRecord:
        try:
            await self.collection.insert_one(record.to_document())
        except DuplicateKeyError as e:
            log.warning("member-duplicate-key", phone=mask_phone(record.phone), key=e.details.get("keyValue") if e.details else None)
            raise DuplicateMemberError(str(e)) from e
        log.info("member-created", id=record.id)
        return record
