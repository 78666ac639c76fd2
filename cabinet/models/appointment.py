from sqlalchemy import Column, String, DateTime, Float, Text, Enum as SQLEnum
import enum

from ..core.database import Base, InsertionOrderMixin


class TreatmentType(str, enum.Enum):
    TECAR = "tecartherapie"
    SHOCK_WAVE = "ondes de choc"
    OSTEOPATHY = "ostéopathie"
    PHYSIOTHERAPY = "kinésithérapie classique"
    REATHLETIZATION = "réathlétisation"
    STRENGTHENING = "renforcement"
    NUTRITION = "nutrition"
    CONSULTATION = "consultation"


class AppointmentStatus(str, enum.Enum):
    CONFIRMED = "Confirmé"
    PENDING = "En attente"
    DONE = "Effectué"
    CANCELLED = "Annulé"


DEFAULT_PRICE = 30.0

TREATMENT_PRICES = {
    TreatmentType.CONSULTATION: 30.0,
    TreatmentType.OSTEOPATHY: 60.0,
    TreatmentType.SHOCK_WAVE: 45.0,
    TreatmentType.NUTRITION: 50.0,
}

TERMINAL_STATUSES = frozenset({AppointmentStatus.DONE, AppointmentStatus.CANCELLED})

ALLOWED_TRANSITIONS = {
    AppointmentStatus.PENDING: frozenset({
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.DONE,
        AppointmentStatus.CANCELLED,
    }),
    AppointmentStatus.CONFIRMED: frozenset({
        AppointmentStatus.DONE,
        AppointmentStatus.CANCELLED,
    }),
    AppointmentStatus.DONE: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def default_price(treatment_type: TreatmentType) -> float:
    return TREATMENT_PRICES.get(TreatmentType(treatment_type), DEFAULT_PRICE)


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return AppointmentStatus(target) in ALLOWED_TRANSITIONS[AppointmentStatus(current)]


class Appointment(InsertionOrderMixin, Base):
    __tablename__ = "appointments"

    id = Column(String(32), primary_key=True, index=True)

    # Links, with names copied for display
    patient_id = Column(String(32), nullable=False, index=True)
    patient_name = Column(String(255), nullable=False)
    therapist_id = Column(String(32), nullable=False, index=True)
    therapist_name = Column(String(255), nullable=False)

    # Appointment details
    treatment_type = Column(SQLEnum(TreatmentType), nullable=False)
    status = Column(SQLEnum(AppointmentStatus), default=AppointmentStatus.PENDING)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    price = Column(Float, default=0.0)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, therapist_id={self.therapist_id}, start='{self.start_time}')>"
