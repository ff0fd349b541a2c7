"""Tests for reading-order page reconstruction."""

from services.layout import group_lines, reconstruct_page_text
from services.types import TextFragment


def frag(text, x=0.0, y=0.0, seq=0):
    return TextFragment(text=text, x=x, y=y, sequence_index=seq)


class TestReconstructPageText:
    """Tests for reconstruct_page_text."""

    def test_lines_top_down_and_left_to_right(self):
        """Test the higher line first, then x-ascending within a line."""
        fragments = [
            frag("B", x=10, y=0, seq=0),
            frag("A", x=0, y=0, seq=1),
            frag("C", x=0, y=10, seq=2),
        ]
        assert reconstruct_page_text(fragments) == "C\nA B"

    def test_empty_page(self):
        """Test a page without fragments yields an empty string."""
        assert reconstruct_page_text([]) == ""

    def test_whitespace_fragments_dropped(self):
        """Test whitespace-only fragments contribute nothing."""
        fragments = [
            frag("   ", x=0, y=50, seq=0),
            frag("\t", x=5, y=50, seq=1),
            frag(" ", x=0, y=80, seq=2),
        ]
        assert reconstruct_page_text(fragments) == ""

    def test_whitespace_fragment_does_not_open_line(self):
        """Test a dropped fragment cannot anchor a line."""
        fragments = [
            frag(" ", x=0, y=101, seq=0),
            frag("low", x=0, y=99.5, seq=1),
            frag("high", x=0, y=102.5, seq=2),
        ]
        # Anchored on 99.5, 102.5 is 3 units away
        assert reconstruct_page_text(fragments) == "high\nlow"

    def test_fragment_text_whitespace_collapsed(self):
        """Test runs of spaces and tabs inside fragments collapse."""
        fragments = [
            frag("  Notice\t\tperiod  ", x=0, y=0, seq=0),
            frag("applies", x=50, y=0, seq=1),
        ]
        assert reconstruct_page_text(fragments) == "Notice period applies"

    def test_tolerance_measured_from_line_anchor(self):
        """Test first-fit grouping compares against the first fragment's y."""
        fragments = [
            frag("a", x=0, y=100, seq=0),
            frag("b", x=10, y=101.5, seq=1),
            frag("c", x=20, y=103.5, seq=2),
        ]
        assert reconstruct_page_text(fragments) == "c\na b"

    def test_first_fit_prefers_earliest_line(self):
        """Test a fragment within tolerance of two lines joins the older one."""
        fragments = [
            frag("ten", x=0, y=10, seq=0),
            frag("thirteen", x=0, y=13, seq=1),
            frag("between", x=5, y=11.5, seq=2),
        ]
        assert reconstruct_page_text(fragments) == "thirteen\nten between"

    def test_sequence_index_defines_encounter_order(self):
        """Test output does not depend on the container order."""
        fragments = [
            frag("between", x=5, y=11.5, seq=2),
            frag("thirteen", x=0, y=13, seq=1),
            frag("ten", x=0, y=10, seq=0),
        ]
        assert reconstruct_page_text(fragments) == "thirteen\nten between"

    def test_equal_x_tie_broken_by_sequence(self):
        """Test fragments at the same x keep emission order."""
        fragments = [
            frag("second", x=0, y=0, seq=5),
            frag("first", x=0, y=0, seq=1),
        ]
        assert reconstruct_page_text(fragments) == "first second"

    def test_missing_positions_group_together(self):
        """Test fragments without position share the origin line."""
        fragments = [
            TextFragment("alpha", sequence_index=0),
            TextFragment("beta", sequence_index=1),
            frag("title", x=0, y=700, seq=2),
        ]
        assert reconstruct_page_text(fragments) == "title\nalpha beta"

    def test_custom_tolerance(self):
        """Test a wider tolerance merges lines."""
        fragments = [
            frag("a", x=0, y=100, seq=0),
            frag("b", x=10, y=104, seq=1),
        ]
        assert reconstruct_page_text(fragments) == "b\na"
        assert reconstruct_page_text(fragments, line_tolerance=5) == "a b"

    def test_group_lines_returns_sorted_fragments(self):
        """Test group_lines exposes the line structure."""
        fragments = [
            frag("B", x=10, y=0, seq=0),
            frag("A", x=0, y=0, seq=1),
            frag("C", x=0, y=10, seq=2),
        ]
        lines = group_lines(fragments)
        assert [[f.text for f in line] for line in lines] == [["C"], ["A", "B"]]
