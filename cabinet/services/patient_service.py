from typing import List, Optional, Set
import logging

from fastapi import HTTPException, status

from ..core.policy import Action, Resource, can
from ..core.security import AuthorizationError
from ..repositories.base import DataStore
from ..schemas.patient import Patient, PatientCreate
from ..schemas.user import Profile

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, store: DataStore, user: Profile):
        self.store = store
        self.user = user

    def _visible_ids(self) -> Optional[Set[str]]:
        """Ids the user may read, or None when every patient is visible.

        A therapist only sees patients booked with them at least once,
        past or future.
        """
        if can(self.user.role, Action.VIEW, Resource.ALL_PATIENTS):
            return None
        return {
            appointment.patient_id
            for appointment in self.store.appointments.find(therapist_id=self.user.id)
        }

    def list_patients(self, search: str = "") -> List[Patient]:
        patients = self.store.patients.list()

        visible = self._visible_ids()
        if visible is not None:
            patients = [p for p in patients if p.id in visible]

        needle = search.strip().lower()
        if needle:
            patients = [p for p in patients if needle in p.name.lower()]
        return patients

    def get_patient(self, patient_id: str) -> Patient:
        patient = self.store.patients.get(patient_id)
        visible = self._visible_ids()
        if not patient or (visible is not None and patient.id not in visible):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Patient not found"
            )
        return patient

    def create_patient(self, data: PatientCreate) -> Patient:
        if not can(self.user.role, Action.CREATE, Resource.PATIENTS):
            raise AuthorizationError()

        patient = self.store.patients.create(data.model_dump())
        logger.info(f"Patient {patient.id} ({patient.name}) created by {self.user.username}")
        return patient
