from datetime import date as date_type, datetime, time as time_type, timedelta
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ..core.periods import to_local
from ..models.appointment import TreatmentType, AppointmentStatus
from ..models.transaction import PaymentMethod
from .transaction import Transaction


class Appointment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_id: str
    patient_name: str
    therapist_id: str
    therapist_name: str
    treatment_type: TreatmentType
    status: AppointmentStatus
    start_time: datetime
    end_time: datetime
    price: float
    notes: Optional[str] = None


class AppointmentCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    therapist_id: str = Field(..., min_length=1)
    treatment_type: TreatmentType = TreatmentType.CONSULTATION
    date: date_type
    time: time_type = time_type(9, 0)
    duration: int = Field(30, gt=0, le=12 * 60, description="Duration in minutes")
    price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    @property
    def start_time(self) -> datetime:
        """Naive clinic time, whatever offset the caller sent."""
        return to_local(datetime.combine(self.date, self.time))

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(minutes=self.duration)


class SettlementRequest(BaseModel):
    amount: Optional[float] = Field(None, ge=0)
    method: PaymentMethod = PaymentMethod.CARD


class SettlementResponse(BaseModel):
    appointment: Appointment
    transaction: Transaction
