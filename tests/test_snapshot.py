#!/usr/bin/env python3
"""Tests for snapshot building and YAML persistence."""

from datetime import date, datetime

import yaml

from fleet import Car, ItemStatus, ServiceRecord, Status, Vehicle, build_snapshot, load_snapshot, save_snapshot


def make_vehicles():
    record = ServiceRecord(
        "AA1234BB", "2025-01-15", 74000, "Заміна масла", date(2025, 1, 15),
        raw_odometer="74 000", quantity=1, total_with_vat=1200.5, city="Київ",
    )
    oil = ItemStatus("oil change", Status.CRITICAL, "2025-01-15", 74000, 90000, 16000, 60, "2міс", "legacy")
    vehicle = Vehicle(
        Car("AA1234BB", "Київ", "Renault Master", 2015),
        [record, ServiceRecord("AA1234BB", "2025-03-01", 90000, "Мийка")],
        {"oil change": oil, "battery": None},
    )
    return {"AA1234BB": vehicle}


class TestBuildSnapshot:
    """Tests for build_snapshot."""

    def test_structure(self):
        snap = build_snapshot(make_vehicles(), datetime(2025, 3, 16, 9, 30), date(2025, 3, 16))
        assert snap["lastUpdated"] == "2025-03-16T09:30:00"
        assert snap["currentDate"] == "2025-03-16"
        car = snap["vehicles"][0]
        assert car["license"] == "AA1234BB"
        assert car["currentMileage"] == 90000
        assert car["parts"]["battery"] is None
        assert car["parts"]["oil change"] == {
            "date": "2025-01-15",
            "mileage": 74000,
            "currentMileage": 90000,
            "mileageDiff": 16000,
            "daysDiff": 60,
            "timeDiff": "2міс",
            "status": "critical",
            "source": "legacy",
        }
        assert car["history"][0]["originalMileage"] == "74 000"
        assert car["history"][0]["totalWithVAT"] == 1200.5

    def test_reference_date_defaults_to_update_day(self):
        snap = build_snapshot(make_vehicles(), datetime(2025, 3, 16, 9, 30))
        assert snap["currentDate"] == "2025-03-16"


class TestSaveLoadSnapshot:
    """Tests for YAML persistence."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        snap = build_snapshot(make_vehicles(), datetime(2025, 3, 16, 9, 30))
        save_snapshot(path, snap)
        assert load_snapshot(path) == snap

    def test_writes_readable_unicode(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        save_snapshot(path, build_snapshot(make_vehicles(), datetime(2025, 3, 16)))
        text = path.read_text(encoding="utf-8")
        assert "Заміна масла" in text
        assert yaml.safe_load(text)["vehicles"][0]["city"] == "Київ"
