from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MANUAL_VISIT_ID = "manual"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class VisitType(str, Enum):
    ROUTINE_CHECKUP = "Routine Checkup"
    EMERGENCY = "Emergency"
    FOLLOW_UP = "Follow Up"
    SPECIALIST_CONSULTATION = "Specialist Consultation"


class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Record(BaseModel):
    """Base for stored records: snake_case in Python, camelCase on disk."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class Patient(Record):
    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    dob: str = ""
    gender: Gender
    phone: str = ""
    email: str = ""
    address: str = ""
    allergies: List[str] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Vitals(Record):
    """Free-text measurements; units and ranges are not checked."""
    bp: Optional[str] = None
    heart_rate: Optional[str] = Field(default=None, alias="heartRate")
    temperature: Optional[str] = None
    weight: Optional[str] = None


class Visit(Record):
    id: str
    patient_id: str = Field(alias="patientId")
    date: str
    type: VisitType
    symptoms: str = ""
    diagnosis: str = ""
    notes: str = ""
    vitals: Optional[Vitals] = None


class Prescription(Record):
    id: str
    # MANUAL_VISIT_ID when not linked to a visit
    visit_id: str = Field(default=MANUAL_VISIT_ID, alias="visitId")
    patient_id: str = Field(alias="patientId")
    medication_name: str = Field(alias="medicationName")
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    notes: Optional[str] = None
    date_prescribed: str = Field(alias="datePrescribed")


class Appointment(Record):
    id: str
    patient_id: str = Field(alias="patientId")
    date: str
    time: str
    reason: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class ClinicStats(Record):
    total_patients: int = Field(alias="totalPatients")
    visits_today: int = Field(alias="visitsToday")
    active_prescriptions: int = Field(alias="activePrescriptions")
    pending_appointments: int = Field(alias="pendingAppointments")


__all__ = [
    "MANUAL_VISIT_ID",
    "Gender",
    "VisitType",
    "AppointmentStatus",
    "Record",
    "Patient",
    "Vitals",
    "Visit",
    "Prescription",
    "Appointment",
    "ClinicStats",
]
