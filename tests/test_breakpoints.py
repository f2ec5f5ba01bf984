"""Tests for break point search helpers."""

from src.indexing.breakpoints import (
    closest_break_point,
    find_last_word_boundary,
    find_natural_break_points,
    find_token_end,
    find_word_boundary,
)


class TestNaturalBreakPoints:
    def test_offsets_follow_blank_line_runs(self) -> None:
        assert find_natural_break_points("a\n\nb\n\n\nc") == [3, 7]

    def test_whitespace_only_line_counts_as_blank(self) -> None:
        assert find_natural_break_points("a\n  \nb") == [5]

    def test_single_newline_is_not_a_break(self) -> None:
        assert find_natural_break_points("a\nb\nc") == []

    def test_empty_text(self) -> None:
        assert find_natural_break_points("") == []


class TestClosestBreakPoint:
    def test_picks_closest_to_target(self) -> None:
        assert closest_break_point([100, 400, 700, 1100], low=300, high=1000, target=800) == 700

    def test_bounds_are_exclusive(self) -> None:
        assert closest_break_point([300, 1000], low=300, high=1000, target=500) is None

    def test_tie_prefers_earlier(self) -> None:
        assert closest_break_point([450, 550], low=0, high=1000, target=500) == 450

    def test_no_candidates(self) -> None:
        assert closest_break_point([], low=0, high=10, target=5) is None


class TestWordBoundary:
    def test_finds_space_near_target(self) -> None:
        assert find_word_boundary("aaaa bbbb", target=5, low=0, high=9) == 5

    def test_nearest_of_several(self) -> None:
        text = "aa bb cc dd"
        # Spaces at 2, 5, 8; target 6 is nearest the run at 5
        assert find_word_boundary(text, target=6, low=0, high=len(text)) in (5, 6)

    def test_no_whitespace_in_window(self) -> None:
        assert find_word_boundary("a" * 100 + " b", target=50, low=0, high=90) is None

    def test_boundary_at_low_is_excluded(self) -> None:
        assert find_word_boundary("ab cd", target=1, low=2, high=5) is None


class TestTokenEnd:
    def test_stops_at_whitespace(self) -> None:
        assert find_token_end("abc def", 1) == 3

    def test_runs_to_end_without_whitespace(self) -> None:
        assert find_token_end("abcdef", 2) == 6


class TestLastWordBoundary:
    def test_picks_last_whitespace(self) -> None:
        assert find_last_word_boundary("aa bb cc dddd", low=0, high=10) == 8

    def test_whitespace_at_high_counts(self) -> None:
        assert find_last_word_boundary("aa bb", low=0, high=2) == 2

    def test_whitespace_at_low_is_excluded(self) -> None:
        assert find_last_word_boundary("aa bbbbbb", low=2, high=8) is None
