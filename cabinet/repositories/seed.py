"""
Demo fixtures loaded into an empty store.
"""
from datetime import datetime, timedelta
from typing import Optional
import logging

from ..core.periods import local_now
from ..core.security import UserRole
from ..models.appointment import AppointmentStatus, TreatmentType
from ..models.transaction import PaymentMethod, TransactionType
from .base import DataStore

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"username": "admin", "password": "123", "full_name": "Administrateur", "role": UserRole.ADMIN},
    {"username": "sophie", "password": "123", "full_name": "Sophie Kiné", "role": UserRole.THERAPIST},
    {"username": "marc", "password": "123", "full_name": "Marc Ostéo", "role": UserRole.THERAPIST},
    {"username": "julie", "password": "123", "full_name": "Julie Accueil", "role": UserRole.SECRETARY},
]

DEMO_PATIENTS = [
    {
        "name": "Jean Dupont", "age": 45, "address": "10 Rue de la Paix, Paris",
        "phone": "0601020304", "insurance": "Alan", "pathology": "Tendinite épaule",
        "email": "jean@gmail.com",
    },
    {
        "name": "Marie Curie", "age": 32, "address": "5 Avenue des Sciences, Lyon",
        "phone": "0699887766", "insurance": "MGEN", "pathology": "Lumbago",
        "email": "marie@science.com",
    },
    {
        "name": "Pierre Martin", "age": 58, "address": "12 Bd Victor Hugo, Nice",
        "phone": "0611223344", "insurance": "Swiss Life", "pathology": "Rééducation genou",
        "email": "pierre@test.com",
    },
]


def seed_demo_data(store: DataStore, now: Optional[datetime] = None) -> DataStore:
    """Fill an empty store with the demo accounts, patients and bookings.

    Appointments are placed on the day of ``now`` and the ledger entries on
    that day and the one before, so the default views are never empty.
    Stores that already hold users are left untouched.
    """
    if store.users.list():
        logger.info("Store already populated, skipping demo data")
        return store

    now = now or local_now()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    def at(hour: int, minute: int = 0) -> datetime:
        return today.replace(hour=hour, minute=minute)

    users = {u["username"]: store.users.create(u) for u in DEMO_USERS}
    jean, marie, pierre = [store.patients.create(p) for p in DEMO_PATIENTS]
    sophie, marc = users["sophie"], users["marc"]

    bookings = [
        (jean, sophie, TreatmentType.PHYSIOTHERAPY, AppointmentStatus.CONFIRMED, at(9), at(9, 30), 35.0),
        (marie, sophie, TreatmentType.TECAR, AppointmentStatus.DONE, at(10), at(10, 45), 50.0),
        (pierre, marc, TreatmentType.OSTEOPATHY, AppointmentStatus.PENDING, at(14), at(15), 60.0),
    ]
    for patient, therapist, treatment, status, start, end, price in bookings:
        store.appointments.create({
            "patient_id": patient.id,
            "patient_name": patient.name,
            "therapist_id": therapist.id,
            "therapist_name": therapist.full_name,
            "treatment_type": treatment,
            "status": status,
            "start_time": start,
            "end_time": end,
            "price": price,
        })

    yesterday = now - timedelta(days=1)
    ledger = [
        (yesterday, 50.0, TransactionType.GAIN, "Séance Tecar", PaymentMethod.CARD),
        (yesterday, 1200.0, TransactionType.EXPENSE, "Loyer", PaymentMethod.CHEQUE),
        (now, 60.0, TransactionType.GAIN, "Séance Ostéo", PaymentMethod.CASH),
    ]
    for moment, amount, kind, category, method in ledger:
        store.transactions.create({
            "date": moment,
            "amount": amount,
            "type": kind,
            "category": category,
            "method": method,
        })

    logger.info(
        f"Seeded demo data: {len(DEMO_USERS)} users, {len(DEMO_PATIENTS)} patients, "
        f"{len(bookings)} appointments, {len(ledger)} transactions"
    )
    return store
