"""Unit tests for svg_context.context.text_layout.

The mono_font fixture makes every character 5 units wide.
"""

import pytest

from svg_context import Rectangle
from svg_context.context.text_layout import (
    BoxPosition,
    Justification,
    first_line_y,
    position_in_box,
    split_first_line,
    squeeze_fits,
    text_anchor,
    truncate_to_width,
    wrap_lines,
)


class TestJustification:
    """Tests for text-anchor and box placement."""

    @pytest.mark.parametrize(
        ("justification", "anchor"),
        [
            (Justification.LEFT, "start"),
            (Justification.CENTRED_LEFT, "start"),
            (Justification.RIGHT, "end"),
            (Justification.BOTTOM_RIGHT, "end"),
            (Justification.CENTRED, "middle"),
            (Justification.CENTRED_TOP, "middle"),
        ],
    )
    def test_text_anchor(self, justification, anchor):
        """Verify justification maps to text-anchor."""
        assert text_anchor(justification) == anchor

    def test_position_centred(self):
        """Verify centred placement in a box."""
        pos = position_in_box(Rectangle(10, 20, 100, 40), Justification.CENTRED)
        assert pos == BoxPosition(60, 40, "middle", "central")

    def test_position_top_left(self):
        """Verify top-left placement in a box."""
        pos = position_in_box(Rectangle(10, 20, 100, 40), Justification.TOP_LEFT)
        assert pos == BoxPosition(10, 20, "start", "hanging")

    def test_position_bottom_right(self):
        """Verify bottom-right placement in a box."""
        pos = position_in_box(Rectangle(10, 20, 100, 40), Justification.BOTTOM_RIGHT)
        assert pos == BoxPosition(110, 60, "end", "ideographic")

    def test_first_line_y(self):
        """Verify the first baseline of a block."""
        assert first_line_y(BoxPosition(0, 50, "start", "central"), 3, 10) == 40
        assert first_line_y(BoxPosition(0, 50, "start", "ideographic"), 3, 10) == 30
        assert first_line_y(BoxPosition(0, 50, "start", "hanging"), 3, 10) == 50


class TestTruncation:
    """Tests for truncate_to_width()."""

    def test_fitting_text_unchanged(self, mono_font):
        """Verify text within the width is unchanged."""
        assert truncate_to_width("abcd", mono_font, 20, "…") == "abcd"

    def test_truncates_with_ellipsis(self, mono_font):
        """Verify truncation keeps room for the ellipsis."""
        assert truncate_to_width("abcdefgh", mono_font, 20, "…") == "abc…"

    def test_truncates_without_ellipsis(self, mono_font):
        """Verify truncation without an ellipsis."""
        assert truncate_to_width("abcdefgh", mono_font, 20) == "abcd"

    def test_terminates_when_nothing_fits(self, mono_font):
        """Zero width ends with an empty string instead of looping."""
        assert truncate_to_width("abcdefgh", mono_font, 0, "…") == ""
        assert truncate_to_width("abcdefgh", mono_font, 0) == ""

    def test_ellipsis_alone(self, mono_font):
        """Verify only the ellipsis remains when nothing else fits."""
        assert truncate_to_width("abcdefgh", mono_font, 6, "…") == "…"


class TestWrapping:
    """Tests for split_first_line() and wrap_lines()."""

    def test_split_first_line(self, mono_font):
        """Verify the first line is split at the width."""
        assert split_first_line("abcdefgh", mono_font, 20) == ("abcd", "efgh")

    def test_split_keeps_one_character(self, mono_font):
        """Verify a split keeps at least one character."""
        assert split_first_line("abc", mono_font, 1) == ("a", "bc")

    def test_wrap(self, mono_font):
        """Verify text wraps into width-limited lines."""
        assert wrap_lines("abcdefghij", mono_font, 20) == ["abcd", "efgh", "ij"]

    def test_wrap_narrow_width_terminates(self, mono_font):
        """Verify wrapping terminates when no character fits."""
        assert wrap_lines("abc", mono_font, 1) == ["a", "b", "c"]

    def test_wrap_empty(self, mono_font):
        """Verify empty text wraps to no lines."""
        assert wrap_lines("", mono_font, 20) == []

    def test_wrap_max_lines_truncates_last(self, mono_font):
        """Verify the last allowed line is truncated."""
        assert wrap_lines("abcdefghij", mono_font, 20, max_lines=2, ellipsis="…") == ["abcd", "efg…"]

    def test_wrap_max_lines_not_reached(self, mono_font):
        """Verify lines under the limit are left alone."""
        assert wrap_lines("abcdef", mono_font, 20, max_lines=3, ellipsis="…") == ["abcd", "ef"]


class TestSqueeze:
    """Tests for horizontal squeeze fitting."""

    def test_disabled_when_scale_zero(self, mono_font):
        """Verify squeezing is off when the minimum scale is zero."""
        assert not squeeze_fits("abcdefghijkl", mono_font, 50, 0.0)

    def test_within_scale(self, mono_font):
        """Verify text within the minimum scale is squeezed."""
        assert squeeze_fits("abcdefghijkl", mono_font, 50, 0.8)

    def test_beyond_scale(self, mono_font):
        """Verify text beyond the minimum scale is not squeezed."""
        assert not squeeze_fits("abcdefghijkl", mono_font, 50, 0.9)
