"""
storage.service
~~~~~~~~~~~~~~~

Domain-facing read/add API over the four record collections.

Every call reads (and, for adds, rewrites) the whole collection through
:mod:`packages.storage.collection_io`; nothing is cached between calls, so
statistics always reflect the store's current contents.  Adds append the
caller's entity as-is: ids and timestamps are expected to be assigned
already (see :mod:`packages.storage.factories`).
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from packages.core.schemas.records import (
    Appointment,
    AppointmentStatus,
    ClinicStats,
    Patient,
    Prescription,
    Visit,
)
from packages.core.settings import Settings
from packages.storage.collection_io import (
    APPOINTMENTS_KEY,
    PATIENTS_KEY,
    PRESCRIPTIONS_KEY,
    VISITS_KEY,
    read_collection,
    read_collection_for_update,
    write_collection,
)
from packages.storage.kv import JsonFileKeyValueStore, KeyValueStore
from packages.storage.seed import init_store

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _owned_by(items: Sequence[T], patient_id: Optional[str]) -> list[T]:
    if not patient_id:
        return list(items)
    return [item for item in items if getattr(item, "patient_id", None) == patient_id]


class StorageService:
    def __init__(
        self,
        store: KeyValueStore,
        today: Callable[[], date] = date.today,
        enforce_references: bool = False,
    ) -> None:
        self.store = store
        self.today = today
        self.enforce_references = enforce_references

    def init(self, now: Optional[datetime] = None) -> bool:
        return init_store(self.store, now=now)

    def _append(self, key: str, model: Type[T], item: T) -> None:
        items = read_collection_for_update(self.store, key, model)
        items.append(item)
        write_collection(self.store, key, items)
        logger.debug("Appended %s %s (%d stored)", model.__name__, getattr(item, "id", None), len(items))

    def _check_owner(self, patient_id: str, kind: str) -> None:
        if not self.enforce_references:
            return
        if self.get_patient(patient_id) is None:
            raise ValueError(f"{kind} references unknown patient: {patient_id!r}")

    # Patients

    def get_patients(self) -> list[Patient]:
        return read_collection(self.store, PATIENTS_KEY, Patient)

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        for patient in self.get_patients():
            if patient.id == patient_id:
                return patient
        return None

    def search_patients(self, term: Optional[str] = None) -> list[Patient]:
        """Match on full name (case-insensitive) or phone substring."""
        patients = self.get_patients()
        if not term:
            return patients
        needle = term.lower()
        return [
            patient
            for patient in patients
            if needle in patient.full_name.lower() or term in (patient.phone or "")
        ]

    def add_patient(self, patient: Patient) -> None:
        self._append(PATIENTS_KEY, Patient, patient)

    # Visits

    def get_visits(self, patient_id: Optional[str] = None) -> list[Visit]:
        return _owned_by(read_collection(self.store, VISITS_KEY, Visit), patient_id)

    def add_visit(self, visit: Visit) -> None:
        self._check_owner(visit.patient_id, "Visit")
        self._append(VISITS_KEY, Visit, visit)

    # Prescriptions

    def get_prescriptions(self, patient_id: Optional[str] = None) -> list[Prescription]:
        return _owned_by(
            read_collection(self.store, PRESCRIPTIONS_KEY, Prescription), patient_id
        )

    def add_prescription(self, prescription: Prescription) -> None:
        self._check_owner(prescription.patient_id, "Prescription")
        self._append(PRESCRIPTIONS_KEY, Prescription, prescription)

    # Appointments

    def get_appointments(self, patient_id: Optional[str] = None) -> list[Appointment]:
        return _owned_by(
            read_collection(self.store, APPOINTMENTS_KEY, Appointment), patient_id
        )

    def add_appointment(self, appointment: Appointment) -> None:
        self._check_owner(appointment.patient_id, "Appointment")
        self._append(APPOINTMENTS_KEY, Appointment, appointment)

    def get_stats(self) -> ClinicStats:
        # date-prefix match on the stored string, no timezone normalization
        today_prefix = self.today().isoformat()
        visits = self.get_visits()
        appointments = self.get_appointments()
        return ClinicStats(
            total_patients=len(self.get_patients()),
            visits_today=sum(1 for visit in visits if visit.date.startswith(today_prefix)),
            active_prescriptions=len(self.get_prescriptions()),
            pending_appointments=sum(
                1 for item in appointments if item.status == AppointmentStatus.SCHEDULED
            ),
        )


def open_service(settings: Settings) -> StorageService:
    """Service over the JSON file store named by ``settings``."""
    return StorageService(JsonFileKeyValueStore(settings.store_path))


__all__ = ["StorageService", "open_service"]
