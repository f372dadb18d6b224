"""Tests for optional counter merging."""

import pytest

from topomerge.counters import maximum, merge_counter, summed


class TestReducers:
    """Tests for the sum and max reducers."""

    def test_summed(self):
        assert summed(10, 5) == 15

    def test_maximum(self):
        assert maximum(4, 6) == 6
        assert maximum(6, 4) == 6
        assert maximum(3, 3) == 3


class TestMergeCounter:
    """Tests for merge_counter."""

    @pytest.mark.parametrize("reducer", [summed, maximum])
    def test_absent_source_keeps_destination(self, reducer):
        """Test an unmeasured source never changes the destination."""
        assert merge_counter(10, None, reducer) == 10
        assert merge_counter(None, None, reducer) is None

    @pytest.mark.parametrize("reducer", [summed, maximum])
    def test_absent_destination_takes_source(self, reducer):
        """Test an unmeasured destination takes the source as-is."""
        assert merge_counter(None, 7, reducer) == 7

    def test_zero_is_not_absent(self):
        """Test a measured zero is kept distinct from an unmeasured counter."""
        assert merge_counter(0, None, summed) == 0
        assert merge_counter(None, 0, summed) == 0

    def test_both_present_uses_reducer(self):
        """Test present values are combined with the reducer."""
        assert merge_counter(10, 5, summed) == 15
        assert merge_counter(4, 6, maximum) == 6
        assert merge_counter(6, 4, maximum) == 6

    def test_custom_reducer(self):
        """Test any two-argument reducer can be plugged in."""
        assert merge_counter(3, 4, lambda a, b: a * b) == 12

    def test_large_values_do_not_wrap(self):
        """Test counters beyond 64 bits are summed exactly."""
        big = 2**64 - 1
        assert merge_counter(big, 1, summed) == 2**64
