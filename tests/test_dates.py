"""
Tests for date token parsing and the future-date filter.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from movement_extractor.utils.dates import (
    expand_year,
    parse_date_token,
    extract_dates_from_line,
    is_plausible_transaction_date,
)
from datetime import date

TODAY = date(2024, 6, 1)


class TestParseDateToken:

    def test_day_first_slash(self):
        assert parse_date_token("15/03/2024") == date(2024, 3, 15)

    def test_day_first_dash(self):
        assert parse_date_token("15-03-2024") == date(2024, 3, 15)

    def test_two_digit_years_pivot_at_50(self):
        assert parse_date_token("15/03/24") == date(2024, 3, 15)
        assert parse_date_token("15-03-49") == date(2049, 3, 15)
        assert parse_date_token("15/03/50") == date(1950, 3, 15)
        assert parse_date_token("15/03/99") == date(1999, 3, 15)

    def test_iso(self):
        assert parse_date_token("2024-03-15") == date(2024, 3, 15)

    def test_spanish_long_form(self):
        assert parse_date_token("15 de marzo de 2024") == date(2024, 3, 15)
        assert parse_date_token("1 de Septiembre del 2023") == date(2023, 9, 1)

    def test_impossible_dates(self):
        assert parse_date_token("31/02/2024") is None
        assert parse_date_token("99/99/9999") is None
        assert parse_date_token("15 de brumario de 2024") is None

    def test_expand_year_leaves_four_digits(self):
        assert expand_year(2024) == 2024


class TestFutureFilter:

    def test_past_dates_have_no_bound(self):
        assert is_plausible_transaction_date(date(1990, 1, 1), TODAY)

    def test_within_a_year_ahead(self):
        assert is_plausible_transaction_date(date(2025, 6, 1), TODAY)

    def test_more_than_a_year_ahead(self):
        assert not is_plausible_transaction_date(date(2025, 6, 2), TODAY)


class TestExtractDatesFromLine:

    def test_labeled_line(self):
        assert extract_dates_from_line("Fecha: 15/03/2024 14:32", TODAY) == [date(2024, 3, 15)]

    def test_due_date_is_dropped(self):
        line = "Emitida 15/03/2024 Vence 15/03/2030"
        assert extract_dates_from_line(line, TODAY) == [date(2024, 3, 15)]

    def test_deduplicates_same_date(self):
        line = "15/03/2024 - 2024-03-15"
        assert extract_dates_from_line(line, TODAY) == [date(2024, 3, 15)]

    def test_iso_is_not_misread_as_day_first(self):
        assert extract_dates_from_line("2024-03-15", TODAY) == [date(2024, 3, 15)]
