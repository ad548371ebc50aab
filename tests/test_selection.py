"""
Tests for candidate ranking and the tiered cascade.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from movement_extractor.services.cascade import (
    Tier,
    all_lines,
    first_lines,
    last_lines,
    lines_matching,
    run_cascade,
)
from movement_extractor.utils.candidates import AmountCandidate, DateCandidate
from movement_extractor.utils.scoring import select_best_amount, select_best_date, rank_candidates
from datetime import date
from decimal import Decimal
from unittest.mock import Mock
import re

TODAY = date(2024, 6, 1)


class TestAmountSelection:

    def test_value_breaks_tie_within_window(self):
        """95/500 and 90/800 are tied; the larger value wins."""
        candidates = [
            AmountCandidate(value=Decimal("500"), confidence=95),
            AmountCandidate(value=Decimal("800"), confidence=90),
        ]
        assert select_best_amount(candidates).value == Decimal("800")

    def test_window_is_inclusive(self):
        candidates = [
            AmountCandidate(value=Decimal("500"), confidence=85),
            AmountCandidate(value=Decimal("800"), confidence=75),
        ]
        assert select_best_amount(candidates).value == Decimal("800")

    def test_confidence_wins_outside_window(self):
        candidates = [
            AmountCandidate(value=Decimal("500"), confidence=95),
            AmountCandidate(value=Decimal("800"), confidence=75),
        ]
        assert select_best_amount(candidates).value == Decimal("500")

    def test_empty(self):
        assert select_best_amount([]) is None

    def test_ranking_is_stable_for_equal_values(self):
        first = AmountCandidate(value=Decimal("1500"), confidence=75, line_index=3)
        second = AmountCandidate(value=Decimal("1500"), confidence=75, line_index=8)
        ranked = rank_candidates([first, second], lambda a, b: 0)
        assert ranked == [first, second]


class TestDateSelection:

    def test_closest_to_today_breaks_tie(self):
        candidates = [
            DateCandidate(value=date(2023, 1, 1), confidence=75),
            DateCandidate(value=date(2024, 5, 30), confidence=75),
        ]
        assert select_best_date(candidates, TODAY).value == date(2024, 5, 30)

    def test_future_dates_count_by_absolute_distance(self):
        candidates = [
            DateCandidate(value=date(2024, 5, 20), confidence=75),
            DateCandidate(value=date(2024, 6, 3), confidence=75),
        ]
        assert select_best_date(candidates, TODAY).value == date(2024, 6, 3)

    def test_confidence_wins_outside_window(self):
        candidates = [
            DateCandidate(value=date(2020, 1, 1), confidence=95),
            DateCandidate(value=date(2024, 5, 30), confidence=75),
        ]
        assert select_best_date(candidates, TODAY).value == date(2020, 1, 1)


class TestCascade:

    def _values(self, line):
        return [int(token) for token in re.findall(r'\d+', line)]

    def test_later_tiers_do_not_run_once_a_tier_produces(self):
        never = Mock(return_value=[])
        tiers = (
            Tier(name='first', confidence=95, select_lines=all_lines),
            Tier(name='second', confidence=75, select_lines=never),
        )
        candidates = run_cascade(tiers, ["a 1", "b"], self._values, AmountCandidate)

        assert [c.value for c in candidates] == [1]
        assert candidates[0].tier == 'first'
        never.assert_not_called()

    def test_falls_through_empty_tiers(self):
        tiers = (
            Tier(name='labeled', confidence=95, select_lines=lines_matching(re.compile('total'))),
            Tier(name='filtered', confidence=75, select_lines=all_lines, accept=lambda v: v > 100),
            Tier(name='fallback', confidence=50, select_lines=all_lines),
        )
        candidates = run_cascade(tiers, ["x 5", "y 7"], self._values, AmountCandidate)

        assert [(c.value, c.confidence, c.tier) for c in candidates] == [
            (5, 50, 'fallback'),
            (7, 50, 'fallback'),
        ]

    def test_no_tier_produces(self):
        tiers = (Tier(name='only', confidence=50, select_lines=all_lines),)
        assert run_cascade(tiers, ["nothing here"], self._values, AmountCandidate) == []

    def test_line_selectors_keep_absolute_indices(self):
        lines = [str(i) for i in range(12)]
        assert [i for i, _ in last_lines(10)(lines)] == list(range(2, 12))
        assert [i for i, _ in last_lines(10)(lines[:3])] == [0, 1, 2]
        assert [i for i, _ in first_lines(2)(lines)] == [0, 1]

    def test_provenance(self):
        tiers = (Tier(name='only', confidence=50, select_lines=all_lines),)
        candidates = run_cascade(tiers, ["", "ticket 42"], self._values, AmountCandidate)
        assert candidates[0].source_line == "ticket 42"
        assert candidates[0].line_index == 1
