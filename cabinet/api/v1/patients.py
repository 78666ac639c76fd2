from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import get_store, require_view
from ...core.policy import Resource
from ...repositories.base import DataStore
from ...schemas.patient import Patient, PatientCreate
from ...schemas.user import Profile
from ...services.patient_service import PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])

patients_viewer = require_view(Resource.PATIENTS)


@router.get("", response_model=List[Patient])
async def list_patients(
    search: str = "",
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(patients_viewer)
):
    """Patients visible to the caller; therapists only see their own."""
    return PatientService(store, current_user).list_patients(search)


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(
    patient_id: str,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(patients_viewer)
):
    return PatientService(store, current_user).get_patient(patient_id)


@router.post("", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient_data: PatientCreate,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(patients_viewer)
):
    """Open a new patient file."""
    return PatientService(store, current_user).create_patient(patient_data)
