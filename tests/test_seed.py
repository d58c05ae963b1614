from datetime import datetime

from packages.core.schemas.records import Appointment, AppointmentStatus, Patient, Visit
from packages.storage.collection_io import (
    APPOINTMENTS_KEY,
    PATIENTS_KEY,
    PRESCRIPTIONS_KEY,
    VISITS_KEY,
    read_collection,
    write_collection,
)
from packages.storage.kv import MemoryKeyValueStore
from packages.storage.seed import init_store
from tests.store_helpers import patient

NOW = datetime(2024, 12, 31, 23, 15)


def test_init_seeds_empty_store() -> None:
    store = MemoryKeyValueStore()
    assert init_store(store, now=NOW) is True
    assert store.contains(PATIENTS_KEY)
    assert store.contains(VISITS_KEY)
    assert store.contains(APPOINTMENTS_KEY)
    assert not store.contains(PRESCRIPTIONS_KEY)


def test_seed_contents() -> None:
    store = MemoryKeyValueStore()
    init_store(store, now=NOW)

    patients = read_collection(store, PATIENTS_KEY, Patient)
    assert [p.full_name for p in patients] == ["Sarah Connor", "John Doe"]
    assert patients[0].allergies == ["Penicillin"]
    assert patients[1].allergies == []

    visits = read_collection(store, VISITS_KEY, Visit)
    assert [(v.id, v.patient_id) for v in visits] == [("v1", "p1")]
    assert visits[0].date.startswith("2024-12-31")
    assert visits[0].vitals is not None and visits[0].vitals.bp == "120/80"

    appointments = read_collection(store, APPOINTMENTS_KEY, Appointment)
    assert appointments[0].date == "2025-01-01"
    assert appointments[0].time == "10:00"
    assert appointments[0].status is AppointmentStatus.SCHEDULED


def test_init_is_idempotent() -> None:
    store = MemoryKeyValueStore()
    init_store(store, now=NOW)
    snapshot = {key: store.get(key) for key in store.keys()}
    assert init_store(store, now=datetime(2025, 6, 1)) is False
    assert {key: store.get(key) for key in store.keys()} == snapshot


def test_init_skips_store_with_existing_patients() -> None:
    store = MemoryKeyValueStore()
    write_collection(store, PATIENTS_KEY, [patient("x1", "Only", "One")])
    assert init_store(store, now=NOW) is False
    assert not store.contains(VISITS_KEY)


def test_existing_empty_patient_list_blocks_seeding() -> None:
    store = MemoryKeyValueStore({PATIENTS_KEY: "[]"})
    assert init_store(store, now=NOW) is False
