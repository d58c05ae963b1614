import json
from pathlib import Path

import pytest

from apps.worker import list_patients, seed_store, show_stats


def test_seed_store_is_idempotent(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    store_path = tmp_path / "store.json"
    assert seed_store.main(["--store", str(store_path)]) == 0
    assert "seeded" in capsys.readouterr().out
    assert seed_store.main(["--store", str(store_path)]) == 0
    assert "already initialized" in capsys.readouterr().out


def test_show_stats_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    store_path = tmp_path / "store.json"
    seed_store.main(["--store", str(store_path)])
    capsys.readouterr()

    assert show_stats.main(["--store", str(store_path), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "totalPatients": 2,
        "visitsToday": 1,
        "activePrescriptions": 0,
        "pendingAppointments": 1,
    }


def test_show_stats_text_on_missing_store(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert show_stats.main(["--store", str(tmp_path / "absent.json")]) == 0
    out = capsys.readouterr().out
    assert "total patients: 0" in out
    assert not (tmp_path / "absent.json").exists()


def test_list_patients_query(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    store_path = tmp_path / "store.json"
    seed_store.main(["--store", str(store_path)])
    capsys.readouterr()

    assert list_patients.main(["--store", str(store_path), "--query", "sarah"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["p1 | Sarah Connor | 555-0123 | visits=1"]

    list_patients.main(["--store", str(store_path), "--query", "nobody"])
    assert capsys.readouterr().out.strip() == "no patients"
