from datetime import datetime

from packages.core.schemas.records import (
    MANUAL_VISIT_ID,
    AppointmentStatus,
    Gender,
    VisitType,
    Vitals,
)
from packages.storage.factories import (
    new_appointment,
    new_patient,
    new_prescription,
    new_visit,
)
from tests.store_helpers import make_service

NOW = datetime(2024, 3, 1, 10, 0, 0)


def test_new_patient_assigns_id_and_timestamp() -> None:
    first = new_patient("Jane", "Smith", gender=Gender.FEMALE, now=NOW)
    second = new_patient("Jane", "Smith", gender=Gender.FEMALE, now=NOW)
    assert first.id and first.id != second.id
    assert first.created_at == "2024-03-01T10:00:00.000"
    assert first.allergies == []


def test_new_visit_is_dated_now() -> None:
    item = new_visit("p1", type=VisitType.EMERGENCY, vitals=Vitals(heart_rate="110"), now=NOW)
    assert item.patient_id == "p1"
    assert item.date.startswith("2024-03-01T10:00")
    assert item.vitals.heart_rate == "110"


def test_new_prescription_defaults_to_manual_link() -> None:
    item = new_prescription("p1", "Metformin", dosage="500mg", now=NOW)
    assert item.visit_id == MANUAL_VISIT_ID
    assert item.date_prescribed == "2024-03-01T10:00:00.000"


def test_new_appointment_defaults_to_scheduled() -> None:
    item = new_appointment("p1", "2024-03-05", "09:15", reason="Bloods")
    assert item.status is AppointmentStatus.SCHEDULED


def test_factory_records_store_and_reload() -> None:
    service = make_service()
    jane = new_patient("Jane", "Smith", allergies=["Nuts"], now=NOW)
    service.add_patient(jane)
    service.add_visit(new_visit(jane.id, now=NOW))
    assert service.get_patients() == [jane]
    assert len(service.get_visits(jane.id)) == 1
