#!/usr/bin/env python3
"""Tests for RegulationTable building and lookup."""

import logging

import pytest

from fleet import DEFAULT_CATALOG, PeriodType, RegulationTable

HEADER = [
    "Номер авто", "Марка", "Модель", "Рік від", "Рік до", "Запчастина",
    "Тип періоду", "Норма", "Попередження", "Критично", "Одиниця", "Пріоритет",
]


def row(item, warning="12000", critical="16000", plate="*", brand="*", model="*",
        year_from="", year_to="", period="distance", normal="10000", unit="км", priority="1"):
    return [plate, brand, model, year_from, year_to, item, period, normal, warning, critical, unit, priority]


class TestBuild:
    """Tests for RegulationTable.build."""

    def test_empty_rows(self):
        assert len(RegulationTable.build([])) == 0
        assert len(RegulationTable.build([HEADER])) == 0

    def test_parses_fields(self):
        table = RegulationTable.build([HEADER, row("oil change", year_from="2010", year_to="2020")])
        reg = table.regulations[0]
        assert reg.item == "oil change"
        assert reg.period is PeriodType.DISTANCE
        assert reg.normal == 10000
        assert reg.warning == 12000
        assert reg.critical == 16000
        assert reg.year_from == 2010
        assert reg.year_to == 2020
        assert reg.unit == "км"
        assert reg.priority == 1
        assert reg.row_number == 2

    def test_columns_matched_by_header_text(self):
        """Column order in the sheet does not matter."""
        header = list(reversed(HEADER))
        table = RegulationTable.build([header, list(reversed(row("battery", period="роки", warning="3", critical="4")))])
        reg = table.regulations[0]
        assert reg.item == "battery"
        assert reg.period is PeriodType.YEARS
        assert reg.critical == 4

    def test_locale_numbers(self):
        table = RegulationTable.build([HEADER, row("battery", period="years", warning="2,5", critical="3,5")])
        assert table.regulations[0].warning == 2.5
        assert table.regulations[0].critical == 3.5

    def test_chain_sentinel(self):
        table = RegulationTable.build([HEADER, row("timing belt", normal="chain", warning="", critical="")])
        reg = table.regulations[0]
        assert reg.chain
        assert reg.warning is None
        assert reg.critical is None

    def test_short_rows_skipped(self):
        table = RegulationTable.build([HEADER, ["*", "*", "*", "2010"], row("oil change")])
        assert len(table) == 1

    def test_blank_item_skipped(self):
        table = RegulationTable.build([HEADER, row(""), row("oil change")])
        assert len(table) == 1

    def test_blank_years_are_unbounded(self):
        reg = RegulationTable.build([HEADER, row("oil change")]).regulations[0]
        assert reg.year_from == 0
        assert reg.year_to == 9999

    def test_invalid_pattern_skips_only_that_row(self, caplog):
        rows = [HEADER, row("oil change", brand="([bad"), row("oil change", brand="renault")]
        with caplog.at_level(logging.WARNING):
            table = RegulationTable.build(rows)
        assert len(table) == 1
        assert table.regulations[0].brand == "renault"
        assert "row 2" in caplog.text

    @pytest.mark.parametrize("year", ["1e999", "Infinity", "2015.5"])
    def test_invalid_year_skips_only_that_row(self, caplog, year):
        rows = [
            HEADER,
            row("oil change", year_from=year),
            row("oil change", year_to=year),
            row("battery", year_from="2010 р."),
        ]
        with caplog.at_level(logging.WARNING):
            table = RegulationTable.build(rows)
        assert [r.item for r in table] == ["battery"]
        assert table.regulations[0].year_from == 2010
        assert "row 2" in caplog.text
        assert "row 3" in caplog.text

    def test_unknown_period_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            table = RegulationTable.build([HEADER, row("oil change", period="тижні")])
        assert len(table) == 0
        assert "period" in caplog.text

    def test_labels_resolved_with_catalog(self):
        table = RegulationTable.build([HEADER, row("Акумулятор", period="years")], DEFAULT_CATALOG)
        assert table.regulations[0].item == "battery"

    def test_sorted_by_priority_stable(self):
        rows = [
            HEADER,
            row("oil change", plate="A", priority="3"),
            row("oil change", plate="B", priority="1"),
            row("oil change", plate="C", priority="3"),
            row("oil change", plate="D", priority=""),
            row("oil change", plate="E", priority="2"),
        ]
        table = RegulationTable.build(rows)
        assert [r.plate for r in table] == ["B", "E", "A", "C", "D"]


class TestFind:
    """Tests for RegulationTable.find."""

    def test_no_match_returns_none(self):
        table = RegulationTable.build([HEADER, row("oil change", plate="AA0000AA")])
        assert table.find("AA1234BB", "Renault", 2015, "oil change") is None

    def test_never_returns_other_item(self):
        table = RegulationTable.build([HEADER, row("timing belt"), row("battery")])
        for item in ("oil change", "timing belt", "battery"):
            found = table.find("AA1234BB", "Renault", 2015, item)
            assert found is None or found.item == item

    @pytest.mark.parametrize("order", [("1", "2"), ("2", "1")])
    def test_priority_wins_regardless_of_row_order(self, order):
        first, second = order
        rows = [
            HEADER,
            row("oil change", critical="16000", priority=first),
            row("oil change", critical="20000", priority=second),
        ]
        table = RegulationTable.build(rows)
        found = table.find("AA1234BB", "Renault", 2015, "oil change")
        assert found.priority == 1

    def test_first_structural_match_wins(self):
        """A higher-priority rule for another plate does not block the match."""
        rows = [
            HEADER,
            row("oil change", plate="BB0000BB", priority="1"),
            row("oil change", brand="renault", priority="2"),
        ]
        table = RegulationTable.build(rows)
        found = table.find("AA1234BB", "Renault Master", 2015, "oil change")
        assert found.brand == "renault"

    def test_unknown_year_fails_year_bound(self):
        table = RegulationTable.build([HEADER, row("oil change", year_from="2010")])
        assert table.find("AA1234BB", "Renault", 0, "oil change") is None
        assert table.find("AA1234BB", "Renault", 2012, "oil change") is not None

    def test_for_item(self):
        table = RegulationTable.build([HEADER, row("timing belt"), row("battery"), row("timing belt")])
        assert len(table.for_item("timing belt")) == 2


class TestFindOverlaps:
    """Tests for overlap detection between regulations."""

    def test_wildcard_and_specific_overlap(self, caplog):
        rows = [HEADER, row("oil change", priority="1"), row("oil change", brand="renault", priority="2")]
        with caplog.at_level(logging.WARNING):
            table = RegulationTable.build(rows)
        overlaps = table.find_overlaps()
        assert len(overlaps) == 1
        assert overlaps[0][0].priority == 1
        assert "overlap" in caplog.text

    def test_different_items_do_not_overlap(self):
        table = RegulationTable.build([HEADER, row("oil change"), row("battery")])
        assert table.find_overlaps() == []

    def test_different_plates_do_not_overlap(self):
        table = RegulationTable.build([HEADER, row("oil change", plate="A"), row("oil change", plate="B")])
        assert table.find_overlaps() == []

    def test_disjoint_years_do_not_overlap(self):
        rows = [
            HEADER,
            row("oil change", year_from="2000", year_to="2009"),
            row("oil change", year_from="2010"),
        ]
        assert RegulationTable.build(rows).find_overlaps() == []

    def test_distinct_brand_patterns_not_reported(self):
        rows = [HEADER, row("oil change", brand="renault"), row("oil change", brand="fiat")]
        assert RegulationTable.build(rows).find_overlaps() == []
