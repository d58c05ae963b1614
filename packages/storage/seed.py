from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from packages.core.schemas.records import (
    Appointment,
    AppointmentStatus,
    Gender,
    Patient,
    Visit,
    VisitType,
    Vitals,
)
from packages.storage.collection_io import (
    APPOINTMENTS_KEY,
    PATIENTS_KEY,
    VISITS_KEY,
    write_collection,
)
from packages.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)


def _iso(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds")


def seed_patients(now: datetime) -> list[Patient]:
    created_at = _iso(now)
    return [
        Patient(
            id="p1",
            first_name="Sarah",
            last_name="Connor",
            dob="1985-05-12",
            gender=Gender.FEMALE,
            phone="555-0123",
            email="sarah.c@example.com",
            address="123 Tech Blvd, Silicon Valley",
            allergies=["Penicillin"],
            created_at=created_at,
        ),
        Patient(
            id="p2",
            first_name="John",
            last_name="Doe",
            dob="1978-11-02",
            gender=Gender.MALE,
            phone="555-0199",
            email="john.d@example.com",
            address="456 Maple Dr, Springfield",
            allergies=[],
            created_at=created_at,
        ),
    ]


def seed_visits(now: datetime) -> list[Visit]:
    return [
        Visit(
            id="v1",
            patient_id="p1",
            date=_iso(now),
            type=VisitType.ROUTINE_CHECKUP,
            symptoms="Mild headache, fatigue",
            diagnosis="Tension Headache",
            notes="Patient advised to rest and hydrate.",
            vitals=Vitals(bp="120/80", heart_rate="72", temperature="98.6", weight="65kg"),
        )
    ]


def seed_appointments(now: datetime) -> list[Appointment]:
    tomorrow = (now + timedelta(days=1)).date()
    return [
        Appointment(
            id="a1",
            patient_id="p1",
            date=tomorrow.isoformat(),
            time="10:00",
            reason="Follow up checkup",
            status=AppointmentStatus.SCHEDULED,
        )
    ]


def init_store(store: KeyValueStore, now: Optional[datetime] = None) -> bool:
    """Write the demo dataset unless the patients key already exists.

    Prescriptions are left unseeded. Returns True when seeding happened.
    """
    if store.contains(PATIENTS_KEY):
        return False
    moment = now or datetime.now()
    write_collection(store, PATIENTS_KEY, seed_patients(moment))
    write_collection(store, VISITS_KEY, seed_visits(moment))
    write_collection(store, APPOINTMENTS_KEY, seed_appointments(moment))
    logger.info("Seeded empty store with demo patients, visits and appointments")
    return True


__all__ = ["seed_patients", "seed_visits", "seed_appointments", "init_store"]
