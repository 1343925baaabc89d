from datetime import date
from typing import Dict, List, Optional

import pytest

from kop_signup.models.member import MemberRecord
from kop_signup.repositories.member_repository import DuplicateMemberError


TODAY = date(2026, 10, 19)


@pytest.fixture
def today() -> date:
    return TODAY


class FakeMemberStore:
    """In-memory store with the same uniqueness rules as the Mongo indexes."""

    def __init__(self, skip_lookup: bool = False):
        self.records: List[MemberRecord] = []
        self.skip_lookup = skip_lookup
        self.inserts = 0

    async def find_by_email_or_phone(self, email: str, phone: str) -> Optional[MemberRecord]:
        if self.skip_lookup:
            return None
        for record in self.records:
            if record.email == email or record.phone == phone:
                return record
        return None

    async def insert(self, record: MemberRecord) -> MemberRecord:
        self.inserts += 1
        for existing in self.records:
            if existing.email == record.email or existing.phone == record.phone:
                raise DuplicateMemberError("E11000 duplicate key error")
        self.records.append(record)
        return record


@pytest.fixture
def store():
    return FakeMemberStore()


@pytest.fixture
def jane() -> Dict:
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+254712345678",
        "dateOfBirth": "2000-01-01",
        "isAlreadyInWhatsapp": "no",
        "shouldInviteToWhatsapp": True,
        "shouldReceiveUpdates": True,
    }


@pytest.fixture
def racing_store():
    # a checagem prévia nunca enxerga o registro concorrente; só o índice barra
    return FakeMemberStore(skip_lookup=True)
