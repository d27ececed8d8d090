"""Tests for the split balance check."""

import pytest

from fiscal_rules.rules.splits import (
    DEFAULT_SPLIT_TOLERANCE_CENTS,
    is_split_balanced,
    split_delta_cents,
)


class TestSplitDeltaCents:
    @pytest.mark.parametrize(
        "parent, lines, expected",
        [
            (1000, [600, 400], 0),
            (1000, [600, 401], 1),
            (1000, [600, 397], -3),
            (1000, [], -1000),
            (-1000, [-600, -400], 0),
            (-1000, [-600, -401], -1),
        ],
    )
    def test_delta(self, parent, lines, expected) -> None:
        assert split_delta_cents(parent, lines) == expected

    def test_accepts_generators(self) -> None:
        assert split_delta_cents(300, (c for c in (100, 100, 100))) == 0


class TestIsSplitBalanced:
    def test_default_tolerance_is_two_cents(self) -> None:
        assert DEFAULT_SPLIT_TOLERANCE_CENTS == 2

    def test_tolerance_boundary_is_inclusive(self) -> None:
        assert is_split_balanced(1000, [500, 502])
        assert is_split_balanced(1000, [500, 498])

    def test_beyond_tolerance_is_unbalanced(self) -> None:
        assert not is_split_balanced(1000, [500, 503])
        assert not is_split_balanced(1000, [500, 497])

    def test_custom_tolerance(self) -> None:
        assert is_split_balanced(1000, [500, 505], tolerance_cents=5)
        assert not is_split_balanced(1000, [500, 501], tolerance_cents=0)

    def test_empty_lines(self) -> None:
        assert not is_split_balanced(1000, [])
        assert is_split_balanced(2, [])
        assert is_split_balanced(0, [])

    def test_generator_lines_are_consumed_once(self) -> None:
        assert is_split_balanced(1000, (c for c in (600, 401)))
