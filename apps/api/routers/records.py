from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from packages.core.schemas.records import (
    MANUAL_VISIT_ID,
    AppointmentStatus,
    Gender,
    Record,
    VisitType,
    Vitals,
)
from packages.storage.factories import (
    new_appointment,
    new_patient,
    new_prescription,
    new_visit,
)
from packages.storage.service import StorageService

router = APIRouter(prefix="/v1")

RECENT_LIMIT = 5


class PatientCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    dob: str = ""
    gender: Gender = Gender.MALE
    phone: str = ""
    email: str = ""
    address: str = ""
    allergies: List[str] = Field(default_factory=list)


class VisitCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_id: str = Field(alias="patientId")
    type: VisitType = VisitType.ROUTINE_CHECKUP
    symptoms: str = ""
    diagnosis: str = ""
    notes: str = ""
    vitals: Optional[Vitals] = None


class PrescriptionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_id: str = Field(alias="patientId")
    visit_id: str = Field(default=MANUAL_VISIT_ID, alias="visitId")
    medication_name: str = Field(default="", alias="medicationName")
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    notes: Optional[str] = ""


class AppointmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patient_id: str = Field(alias="patientId")
    date: str
    time: str
    reason: str = ""
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


def get_service(request: Request) -> StorageService:
    return request.app.state.service


def _dump(records: List[Record]) -> list[dict]:
    return [record.model_dump(by_alias=True, mode="json") for record in records]


def _ok(content, status: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status, content=jsonable_encoder(content))


def _error(status: int, code: str, message: str, detail: Optional[dict] = None) -> JSONResponse:
    payload = {"error": {"code": code, "message": message, "detail": detail or {}}}
    return JSONResponse(status_code=status, content=payload)


@router.get("/stats")
def stats(service: StorageService = Depends(get_service)) -> JSONResponse:
    return _ok(service.get_stats().model_dump(by_alias=True))


@router.get("/dashboard")
def dashboard(
    limit: int = Query(RECENT_LIMIT, ge=0), service: StorageService = Depends(get_service)
) -> JSONResponse:
    """Counts plus the first few appointments and visits, in stored order."""
    return _ok(
        {
            "stats": service.get_stats().model_dump(by_alias=True),
            "recentAppointments": _dump(service.get_appointments()[:limit]),
            "recentVisits": _dump(service.get_visits()[:limit]),
        }
    )


@router.get("/patients")
def list_patients(q: Optional[str] = None, service: StorageService = Depends(get_service)) -> JSONResponse:
    return _ok(_dump(service.search_patients(q)))


@router.get("/patients/{patient_id}")
def patient_detail(patient_id: str, service: StorageService = Depends(get_service)) -> JSONResponse:
    patient = service.get_patient(patient_id)
    if patient is None:
        return _error(404, "not_found", "patient not found", {"patientId": patient_id})
    return _ok(
        {
            "patient": patient.model_dump(by_alias=True, mode="json"),
            "visits": _dump(service.get_visits(patient_id)),
            "prescriptions": _dump(service.get_prescriptions(patient_id)),
            "appointments": _dump(service.get_appointments(patient_id)),
        }
    )


@router.post("/patients")
def create_patient(body: PatientCreate, service: StorageService = Depends(get_service)) -> JSONResponse:
    if not body.first_name or not body.last_name:
        return _error(400, "invalid_input", "firstName and lastName are required")
    patient = new_patient(**body.model_dump())
    try:
        service.add_patient(patient)
    except RuntimeError as exc:
        return _error(500, "runtime_error", str(exc))
    return _ok(patient.model_dump(by_alias=True, mode="json"), status=201)


@router.get("/visits")
def list_visits(patient_id: Optional[str] = None, service: StorageService = Depends(get_service)) -> JSONResponse:
    return _ok(_dump(service.get_visits(patient_id)))


@router.post("/visits")
def create_visit(body: VisitCreate, service: StorageService = Depends(get_service)) -> JSONResponse:
    visit = new_visit(
        body.patient_id,
        type=body.type,
        symptoms=body.symptoms,
        diagnosis=body.diagnosis,
        notes=body.notes,
        vitals=body.vitals,
    )
    try:
        service.add_visit(visit)
    except ValueError as exc:
        return _error(404, "not_found", str(exc), {"patientId": body.patient_id})
    except RuntimeError as exc:
        return _error(500, "runtime_error", str(exc))
    return _ok(visit.model_dump(by_alias=True, mode="json"), status=201)


@router.get("/prescriptions")
def list_prescriptions(
    patient_id: Optional[str] = None, service: StorageService = Depends(get_service)
) -> JSONResponse:
    return _ok(_dump(service.get_prescriptions(patient_id)))


@router.post("/prescriptions")
def create_prescription(
    body: PrescriptionCreate, service: StorageService = Depends(get_service)
) -> JSONResponse:
    prescription = new_prescription(
        body.patient_id,
        body.medication_name,
        visit_id=body.visit_id,
        dosage=body.dosage,
        frequency=body.frequency,
        duration=body.duration,
        notes=body.notes,
    )
    try:
        service.add_prescription(prescription)
    except ValueError as exc:
        return _error(404, "not_found", str(exc), {"patientId": body.patient_id})
    except RuntimeError as exc:
        return _error(500, "runtime_error", str(exc))
    return _ok(prescription.model_dump(by_alias=True, mode="json"), status=201)


@router.get("/appointments")
def list_appointments(
    patient_id: Optional[str] = None, service: StorageService = Depends(get_service)
) -> JSONResponse:
    return _ok(_dump(service.get_appointments(patient_id)))


@router.post("/appointments")
def create_appointment(
    body: AppointmentCreate, service: StorageService = Depends(get_service)
) -> JSONResponse:
    appointment = new_appointment(
        body.patient_id,
        body.date,
        body.time,
        reason=body.reason,
        status=body.status,
    )
    try:
        service.add_appointment(appointment)
    except ValueError as exc:
        return _error(404, "not_found", str(exc), {"patientId": body.patient_id})
    except RuntimeError as exc:
        return _error(500, "runtime_error", str(exc))
    return _ok(appointment.model_dump(by_alias=True, mode="json"), status=201)
