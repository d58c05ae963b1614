from __future__ import annotations

import logging
from typing import List, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from packages.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

PATIENTS_KEY = "patientlog_patients"
VISITS_KEY = "patientlog_visits"
PRESCRIPTIONS_KEY = "patientlog_prescriptions"
APPOINTMENTS_KEY = "patientlog_appointments"

RESERVED_KEYS = (PATIENTS_KEY, VISITS_KEY, PRESCRIPTIONS_KEY, APPOINTMENTS_KEY)

T = TypeVar("T", bound=BaseModel)


def _adapter(model: Type[T]) -> TypeAdapter:
    return TypeAdapter(List[model])  # type: ignore[valid-type]


def read_collection(store: KeyValueStore, key: str, model: Type[T]) -> list[T]:
    """Decode the collection under ``key``; absent or undecodable reads as empty."""
    raw = store.get(key)
    if not raw:
        return []
    try:
        return list(_adapter(model).validate_json(raw))
    except ValidationError as exc:
        logger.warning(
            "Discarding undecodable collection %s (%d errors)", key, exc.error_count()
        )
        return []


def read_collection_for_update(store: KeyValueStore, key: str, model: Type[T]) -> list[T]:
    """Like :func:`read_collection`, but a stored value that does not decode raises.

    Appends rewrite the whole value, so they must not start from an empty list
    that only stands in for records which failed to decode.
    """
    raw = store.get(key)
    if not raw:
        return []
    try:
        return list(_adapter(model).validate_json(raw))
    except ValidationError as exc:
        logger.error(
            "Refusing to rewrite undecodable collection %s (%d errors)", key, exc.error_count()
        )
        raise RuntimeError(f"Stored collection {key} does not decode; not overwriting it") from exc


def write_collection(store: KeyValueStore, key: str, items: Sequence[T]) -> None:
    if not items:
        store.set(key, "[]")
        return
    model = type(items[0])
    payload = _adapter(model).dump_json(list(items), by_alias=True)
    store.set(key, payload.decode("utf-8"))


__all__ = [
    "PATIENTS_KEY",
    "VISITS_KEY",
    "PRESCRIPTIONS_KEY",
    "APPOINTMENTS_KEY",
    "RESERVED_KEYS",
    "read_collection",
    "read_collection_for_update",
    "write_collection",
]
