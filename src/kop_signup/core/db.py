from __future__ import annotations

from typing import Optional

import structlog
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from kop_signup.core.config import settings

log = structlog.get_logger()

_client: Optional[AsyncMongoClient] = None


def get_client() -> AsyncMongoClient:
    global _client
    if _client is None:
        _client = AsyncMongoClient(settings.MONGO_URI, tz_aware=True)
    return _client


def get_db() -> AsyncDatabase:
    return get_client()[settings.MONGO_DB]


async def ensure_indexes(db: AsyncDatabase) -> None:
    """Índices únicos de email e telefone: a palavra final sobre duplicados."""
    coll = db[settings.MEMBERS_COLLECTION]
    await coll.create_index([("email", ASCENDING)], name="uq_email", unique=True)
    await coll.create_index([("phone", ASCENDING)], name="uq_phone", unique=True)
    log.info("indexes-ensured", collection=settings.MEMBERS_COLLECTION)


async def close_db() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
