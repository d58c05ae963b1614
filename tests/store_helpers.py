from __future__ import annotations

from datetime import date, datetime

from packages.core.schemas.records import (
    Appointment,
    AppointmentStatus,
    Gender,
    Patient,
    Prescription,
    Visit,
    VisitType,
)
from packages.storage.kv import MemoryKeyValueStore
from packages.storage.service import StorageService

TODAY = date(2024, 3, 1)
NOW = datetime(2024, 3, 1, 9, 30)


def make_service(**kwargs) -> StorageService:
    return StorageService(MemoryKeyValueStore(), today=lambda: TODAY, **kwargs)


def seeded_service(**kwargs) -> StorageService:
    service = make_service(**kwargs)
    service.init(now=NOW)
    return service


def patient(patient_id: str, first: str, last: str, phone: str = "") -> Patient:
    return Patient(
        id=patient_id,
        first_name=first,
        last_name=last,
        dob="1990-01-01",
        gender=Gender.OTHER,
        phone=phone,
        created_at="2024-03-01T08:00:00.000",
    )


def visit(visit_id: str, patient_id: str, when: str = "2024-03-01T10:00:00.000") -> Visit:
    return Visit(id=visit_id, patient_id=patient_id, date=when, type=VisitType.FOLLOW_UP)


def prescription(prescription_id: str, patient_id: str) -> Prescription:
    return Prescription(
        id=prescription_id,
        patient_id=patient_id,
        medication_name="Ibuprofen",
        dosage="200mg",
        frequency="2x daily",
        duration="5 days",
        date_prescribed="2024-03-01T10:05:00.000",
    )


def appointment(
    appointment_id: str,
    patient_id: str,
    status: AppointmentStatus = AppointmentStatus.SCHEDULED,
) -> Appointment:
    return Appointment(
        id=appointment_id,
        patient_id=patient_id,
        date="2024-03-08",
        time="14:30",
        reason="Review",
        status=status,
    )
