"""
Repository interface shared by the in-memory and SQL backends.

A repository holds one collection of pydantic records. Reads always hand out
copies; writes never validate business rules, callers do that.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Type, TypeVar
import uuid

from pydantic import BaseModel

from ..schemas.appointment import Appointment
from ..schemas.patient import Patient
from ..schemas.transaction import Transaction
from ..schemas.user import Profile, UserAccount

RecordT = TypeVar("RecordT", bound=BaseModel)


def new_id() -> str:
    return uuid.uuid4().hex


class Repository(ABC, Generic[RecordT]):
    record_type: Type[RecordT]

    @abstractmethod
    def list(self) -> List[RecordT]:
        """Return every record in insertion order."""

    @abstractmethod
    def get(self, record_id: str) -> Optional[RecordT]:
        """Return the record with this id, or None."""

    @abstractmethod
    def find(self, **criteria: Any) -> List[RecordT]:
        """Return records whose fields equal all of ``criteria``."""

    @abstractmethod
    def create(self, data: dict) -> RecordT:
        """Store a new record under a freshly generated id."""

    @abstractmethod
    def update(self, record_id: str, **changes: Any) -> Optional[RecordT]:
        """Apply ``changes`` in place; None when the id is unknown."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Remove the record; False when nothing was removed."""


@dataclass
class DataStore:
    users: Repository[UserAccount]
    patients: Repository[Patient]
    appointments: Repository[Appointment]
    transactions: Repository[Transaction]

    def login(self, username: str, password: str) -> Optional[Profile]:
        """Match plaintext credentials; the returned profile has no password."""
        for account in self.users.find(username=username):
            if account.password == password:
                return account.to_profile()
        return None

    def profiles(self) -> List[Profile]:
        return [account.to_profile() for account in self.users.list()]
