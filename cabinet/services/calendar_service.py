from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Tuple
import logging

from fastapi import HTTPException, status

from ..core.periods import WORKING_HOURS, local_now, start_of_week, to_local, week_days
from ..core.policy import Action, Resource, can
from ..core.security import AuthorizationError, UserRole
from ..models.appointment import (
    AppointmentStatus, default_price, can_transition
)
from ..models.transaction import TransactionType
from ..repositories.base import DataStore
from ..schemas.appointment import (
    Appointment, AppointmentCreate, SettlementRequest, SettlementResponse
)
from ..schemas.user import Profile
from ..schemas.views import CalendarDay, CalendarSlot, CalendarWeek

logger = logging.getLogger(__name__)

ALL_THERAPISTS = "all"


class CalendarService:
    """Weekly planning and the appointment lifecycle."""

    def __init__(self, store: DataStore, user: Profile):
        self.store = store
        self.user = user

    @property
    def can_edit(self) -> bool:
        return can(self.user.role, Action.UPDATE, Resource.APPOINTMENTS)

    def therapists(self) -> List[Profile]:
        return [p for p in self.store.profiles() if p.role == UserRole.THERAPIST]

    def list_appointments(self, therapist_id: str = ALL_THERAPISTS) -> List[Appointment]:
        appointments = self.store.appointments.list()
        if therapist_id != ALL_THERAPISTS:
            appointments = [a for a in appointments if a.therapist_id == therapist_id]
        return appointments

    def week(self, anchor: date, therapist_id: str = ALL_THERAPISTS) -> CalendarWeek:
        """Build the Monday-to-Saturday grid holding ``anchor``.

        An appointment lands in the cell of its start day and start hour only;
        one running over several hours is not repeated in later cells.
        """
        days = week_days(anchor)
        cells: Dict[Tuple[date, int], List[Appointment]] = defaultdict(list)
        for appointment in self.list_appointments(therapist_id):
            start = to_local(appointment.start_time)
            cells[(start.date(), start.hour)].append(appointment)

        today = local_now().date()
        return CalendarWeek(
            week_start=start_of_week(anchor),
            previous_anchor=anchor - timedelta(days=7),
            next_anchor=anchor + timedelta(days=7),
            hours=WORKING_HOURS,
            therapist_filter=therapist_id,
            can_edit=self.can_edit,
            therapists=self.therapists(),
            days=[
                CalendarDay(
                    date=day,
                    is_today=day == today,
                    slots=[
                        CalendarSlot(hour=hour, appointments=cells.get((day, hour), []))
                        for hour in WORKING_HOURS
                    ],
                )
                for day in days
            ],
        )

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        self._require(Action.CREATE)

        patient = self.store.patients.get(data.patient_id)
        if not patient:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Patient not found"
            )

        therapist = self.store.users.get(data.therapist_id)
        if not therapist or therapist.role != UserRole.THERAPIST:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Therapist not found"
            )

        appointment = self.store.appointments.create({
            "patient_id": patient.id,
            "patient_name": patient.name,
            "therapist_id": therapist.id,
            "therapist_name": therapist.full_name,
            "treatment_type": data.treatment_type,
            "status": AppointmentStatus.PENDING,
            "start_time": data.start_time,
            "end_time": data.end_time,
            "price": data.price if data.price is not None else default_price(data.treatment_type),
            "notes": data.notes,
        })
        logger.info(
            f"Appointment {appointment.id} booked for {appointment.patient_name} "
            f"with {appointment.therapist_name} at {appointment.start_time}"
        )
        return appointment

    def confirm(self, appointment_id: str) -> Appointment:
        self._require(Action.UPDATE)
        appointment = self._get_for_transition(appointment_id, AppointmentStatus.CONFIRMED)
        return self.store.appointments.update(appointment.id, status=AppointmentStatus.CONFIRMED)

    def settle(self, appointment_id: str, payment: SettlementRequest) -> SettlementResponse:
        """Mark the appointment as performed and record its payment.

        Exactly one gain entry is written per settlement.
        """
        self._require(Action.SETTLE)
        appointment = self._get_for_transition(appointment_id, AppointmentStatus.DONE)

        amount = payment.amount if payment.amount is not None else appointment.price
        transaction = self.store.transactions.create({
            "type": TransactionType.GAIN,
            "category": f"Séance {appointment.treatment_type.value} - {appointment.patient_name}",
            "amount": float(amount),
            "method": payment.method,
            "date": local_now(),
        })
        settled = self.store.appointments.update(appointment.id, status=AppointmentStatus.DONE)

        logger.info(f"Appointment {appointment.id} settled: {amount:.2f} by {payment.method.value}")
        return SettlementResponse(appointment=settled, transaction=transaction)

    def cancel(self, appointment_id: str) -> Appointment:
        self._require(Action.CANCEL)
        appointment = self._get_for_transition(appointment_id, AppointmentStatus.CANCELLED)
        logger.info(f"Appointment {appointment.id} cancelled")
        return self.store.appointments.update(appointment.id, status=AppointmentStatus.CANCELLED)

    def _require(self, action: Action):
        if not can(self.user.role, action, Resource.APPOINTMENTS):
            raise AuthorizationError("Le planning est en lecture seule pour ce rôle.")

    def _get_for_transition(self, appointment_id: str, target: AppointmentStatus) -> Appointment:
        appointment = self.store.appointments.get(appointment_id)
        if not appointment:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Appointment not found"
            )
        if not can_transition(appointment.status, target):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Cannot move appointment from '{appointment.status.value}' to '{target.value}'"
            )
        return appointment

