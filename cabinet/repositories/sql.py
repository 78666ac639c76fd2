"""
SQLAlchemy backend: the same repository contract over database tables.
"""
from typing import Any, List, Optional, Type

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from ..core.database import Base
from ..models.appointment import Appointment as AppointmentModel
from ..models.patient import Patient as PatientModel
from ..models.transaction import Transaction as TransactionModel
from ..models.user import User as UserModel
from ..schemas.appointment import Appointment
from ..schemas.patient import Patient
from ..schemas.transaction import Transaction
from ..schemas.user import UserAccount
from .base import DataStore, RecordT, Repository, new_id


class SqlRepository(Repository[RecordT]):

    def __init__(self, session_factory: sessionmaker, model: Type[Base], record_type: Type[RecordT]):
        self.session_factory = session_factory
        self.model = model
        self.record_type = record_type

    def _to_record(self, row) -> RecordT:
        return self.record_type.model_validate(row, from_attributes=True)

    def list(self) -> List[RecordT]:
        with self.session_factory() as db:
            rows = db.query(self.model).order_by(self.model.seq).all()
            return [self._to_record(row) for row in rows]

    def get(self, record_id: str) -> Optional[RecordT]:
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            return self._to_record(row) if row else None

    def find(self, **criteria: Any) -> List[RecordT]:
        with self.session_factory() as db:
            rows = db.query(self.model).filter_by(**criteria).order_by(self.model.seq).all()
            return [self._to_record(row) for row in rows]

    def create(self, data: dict) -> RecordT:
        # Round-trip through the record type so both backends coerce alike
        record = self.record_type(**{**data, "id": new_id()})
        with self.session_factory() as db:
            last = db.query(func.max(self.model.seq)).scalar() or 0
            row = self.model(seq=last + 1, **record.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def update(self, record_id: str, **changes: Any) -> Optional[RecordT]:
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def delete(self, record_id: str) -> bool:
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True


def create_sql_store(session_factory: sessionmaker) -> DataStore:
    return DataStore(
        users=SqlRepository(session_factory, UserModel, UserAccount),
        patients=SqlRepository(session_factory, PatientModel, Patient),
        appointments=SqlRepository(session_factory, AppointmentModel, Appointment),
        transactions=SqlRepository(session_factory, TransactionModel, Transaction),
    )
