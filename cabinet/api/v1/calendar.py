from datetime import date
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from ...api.deps import get_store, require_view
from ...core.periods import local_now
from ...core.policy import Resource
from ...repositories.base import DataStore
from ...schemas.appointment import (
    Appointment, AppointmentCreate, SettlementRequest, SettlementResponse
)
from ...schemas.user import Profile
from ...schemas.views import CalendarWeek
from ...services.calendar_service import ALL_THERAPISTS, CalendarService

router = APIRouter(prefix="/calendar", tags=["Calendar"])

calendar_viewer = require_view(Resource.CALENDAR)


@router.get("/week", response_model=CalendarWeek)
async def week(
    anchor: Optional[date] = None,
    therapist_id: str = Query(ALL_THERAPISTS),
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(calendar_viewer)
):
    """Weekly grid (Monday to Saturday, 8h to 18h) around the anchor date."""
    service = CalendarService(store, current_user)
    return service.week(anchor or local_now().date(), therapist_id)


@router.get("/appointments", response_model=List[Appointment])
async def list_appointments(
    therapist_id: str = Query(ALL_THERAPISTS),
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(calendar_viewer)
):
    """All appointments, optionally for one therapist."""
    return CalendarService(store, current_user).list_appointments(therapist_id)


@router.post("/appointments", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    appointment_data: AppointmentCreate,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(calendar_viewer)
):
    """Book an appointment; it starts as pending."""
    return CalendarService(store, current_user).create_appointment(appointment_data)


@router.post("/appointments/{appointment_id}/confirm", response_model=Appointment)
async def confirm_appointment(
    appointment_id: str,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(calendar_viewer)
):
    return CalendarService(store, current_user).confirm(appointment_id)


@router.post("/appointments/{appointment_id}/settle", response_model=SettlementResponse)
async def settle_appointment(
    appointment_id: str,
    payment: Optional[SettlementRequest] = None,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(calendar_viewer)
):
    """Record the payment and mark the appointment as performed."""
    service = CalendarService(store, current_user)
    return service.settle(appointment_id, payment or SettlementRequest())


@router.post("/appointments/{appointment_id}/cancel", response_model=Appointment)
async def cancel_appointment(
    appointment_id: str,
    store: DataStore = Depends(get_store),
    current_user: Profile = Depends(calendar_viewer)
):
    return CalendarService(store, current_user).cancel(appointment_id)
