"""
In-memory backend: plain lists living as long as the process.
"""
from typing import Any, List, Optional, Type

from ..schemas.appointment import Appointment
from ..schemas.patient import Patient
from ..schemas.transaction import Transaction
from ..schemas.user import UserAccount
from .base import DataStore, RecordT, Repository, new_id


class InMemoryRepository(Repository[RecordT]):

    def __init__(self, record_type: Type[RecordT]):
        self.record_type = record_type
        self._records: List[RecordT] = []

    def list(self) -> List[RecordT]:
        return [record.model_copy(deep=True) for record in self._records]

    def get(self, record_id: str) -> Optional[RecordT]:
        record = self._find_one(record_id)
        return record.model_copy(deep=True) if record else None

    def find(self, **criteria: Any) -> List[RecordT]:
        return [
            record.model_copy(deep=True)
            for record in self._records
            if all(getattr(record, field) == value for field, value in criteria.items())
        ]

    def create(self, data: dict) -> RecordT:
        record = self.record_type(**{**data, "id": new_id()})
        self._records.append(record)
        return record.model_copy(deep=True)

    def update(self, record_id: str, **changes: Any) -> Optional[RecordT]:
        record = self._find_one(record_id)
        if record is None:
            return None
        for field, value in changes.items():
            setattr(record, field, value)
        return record.model_copy(deep=True)

    def delete(self, record_id: str) -> bool:
        before = len(self._records)
        self._records = [record for record in self._records if record.id != record_id]
        return len(self._records) != before

    def _find_one(self, record_id: str) -> Optional[RecordT]:
        return next((record for record in self._records if record.id == record_id), None)


def create_memory_store() -> DataStore:
    return DataStore(
        users=InMemoryRepository(UserAccount),
        patients=InMemoryRepository(Patient),
        appointments=InMemoryRepository(Appointment),
        transactions=InMemoryRepository(Transaction),
    )
