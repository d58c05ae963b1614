from __future__ import annotations

import uuid
from datetime import datetime
from typing import Iterable, Optional

from packages.core.schemas.records import (
    MANUAL_VISIT_ID,
    Appointment,
    AppointmentStatus,
    Gender,
    Patient,
    Prescription,
    Visit,
    VisitType,
    Vitals,
)


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).isoformat(timespec="milliseconds")


def new_patient(
    first_name: str,
    last_name: str,
    *,
    dob: str = "",
    gender: Gender = Gender.MALE,
    phone: str = "",
    email: str = "",
    address: str = "",
    allergies: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> Patient:
    return Patient(
        id=new_id(),
        first_name=first_name,
        last_name=last_name,
        dob=dob,
        gender=gender,
        phone=phone,
        email=email,
        address=address,
        allergies=list(allergies),
        created_at=now_iso(now),
    )


def new_visit(
    patient_id: str,
    *,
    type: VisitType = VisitType.ROUTINE_CHECKUP,
    symptoms: str = "",
    diagnosis: str = "",
    notes: str = "",
    vitals: Optional[Vitals] = None,
    now: Optional[datetime] = None,
) -> Visit:
    return Visit(
        id=new_id(),
        patient_id=patient_id,
        date=now_iso(now),
        type=type,
        symptoms=symptoms,
        diagnosis=diagnosis,
        notes=notes,
        vitals=vitals,
    )


def new_prescription(
    patient_id: str,
    medication_name: str,
    *,
    visit_id: str = MANUAL_VISIT_ID,
    dosage: str = "",
    frequency: str = "",
    duration: str = "",
    notes: Optional[str] = "",
    now: Optional[datetime] = None,
) -> Prescription:
    return Prescription(
        id=new_id(),
        visit_id=visit_id,
        patient_id=patient_id,
        medication_name=medication_name,
        dosage=dosage,
        frequency=frequency,
        duration=duration,
        notes=notes,
        date_prescribed=now_iso(now),
    )


def new_appointment(
    patient_id: str,
    date: str,
    time: str,
    *,
    reason: str = "",
    status: AppointmentStatus = AppointmentStatus.SCHEDULED,
) -> Appointment:
    return Appointment(
        id=new_id(),
        patient_id=patient_id,
        date=date,
        time=time,
        reason=reason,
        status=status,
    )


__all__ = [
    "new_id",
    "now_iso",
    "new_patient",
    "new_visit",
    "new_prescription",
    "new_appointment",
]
