#!/usr/bin/env python3
"""Tests for Regulation class."""
import pytest
from fleet import PeriodType, Regulation, RegulationError


class TestPeriodType:
    """Tests for period type parsing and comparison values."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("distance", PeriodType.DISTANCE),
            ("Пробіг", PeriodType.DISTANCE),
            ("months", PeriodType.MONTHS),
            ("місяці", PeriodType.MONTHS),
            ("years", PeriodType.YEARS),
            (" роки ", PeriodType.YEARS),
        ],
    )
    def test_parse(self, text, expected):
        assert PeriodType.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            PeriodType.parse("weeks")

    def test_value_of(self):
        assert PeriodType.DISTANCE.value_of(16000, 60) == 16000
        assert PeriodType.MONTHS.value_of(16000, 60) == 2
        assert PeriodType.YEARS.value_of(16000, 730) == 2

    def test_value_of_unknown_days(self):
        """Distance ignores the date; time periods need it."""
        assert PeriodType.DISTANCE.value_of(500, None) == 500
        assert PeriodType.MONTHS.value_of(500, None) is None
        assert PeriodType.YEARS.value_of(500, None) is None


class TestRegulation:
    """Tests for Regulation matching."""

    def test_wildcards_match_everything(self):
        reg = Regulation(item="oil change", warning=12000, critical=16000)
        assert reg.matches("AA1234BB", "Renault Master", 2015, "oil change")
        assert reg.matches("XX0000XX", "", 0, "oil change")

    def test_item_mismatch(self):
        reg = Regulation(item="oil change", warning=12000, critical=16000)
        assert not reg.matches("AA1234BB", "Renault Master", 2015, "timing belt")

    def test_plate_exact(self):
        reg = Regulation(item="oil change", plate="AA1234BB")
        assert reg.matches("AA1234BB", "Renault", 2015, "oil change")
        assert not reg.matches("AA1234BC", "Renault", 2015, "oil change")

    def test_brand_regex_case_insensitive(self):
        reg = Regulation(item="oil change", brand="merc(edes)?")
        assert reg.matches("AA1234BB", "MERCEDES Sprinter", 2015, "oil change")
        assert not reg.matches("AA1234BB", "Renault Master", 2015, "oil change")

    def test_model_regex_searches_model_text(self):
        reg = Regulation(item="oil change", brand="mercedes", model="sprinter|vito")
        assert reg.matches("AA1234BB", "Mercedes Vito", 2015, "oil change")
        assert not reg.matches("AA1234BB", "Mercedes Actros", 2015, "oil change")

    def test_year_range_inclusive(self):
        reg = Regulation(item="oil change", year_from=2010, year_to=2015)
        assert reg.matches("P", "M", 2010, "oil change")
        assert reg.matches("P", "M", 2015, "oil change")
        assert not reg.matches("P", "M", 2009, "oil change")
        assert not reg.matches("P", "M", 2016, "oil change")

    def test_unknown_year_fails_positive_lower_bound(self):
        reg = Regulation(item="oil change", year_from=2000)
        assert not reg.matches("P", "M", 0, "oil change")
        assert not reg.matches("P", "M", None, "oil change")

    def test_blank_patterns_are_wildcards(self):
        reg = Regulation(item="oil change", plate="", brand="", model="")
        assert reg.plate == "*"
        assert reg.matches("ANY", "anything", 1999, "oil change")

    def test_chain_drops_thresholds(self):
        reg = Regulation(item="timing belt", warning=1, critical=2, chain=True)
        assert reg.chain
        assert reg.warning is None
        assert reg.critical is None

    def test_invalid_pattern_raises(self):
        with pytest.raises(RegulationError) as exc:
            Regulation(item="oil change", brand="(unclosed", row_number=7)
        assert exc.value.row_number == 7
        assert "brand" in str(exc.value)
