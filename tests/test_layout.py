"""Tests for canvas layout."""

import math

import pytest

from wavescribe.clock_utils import expand_clocks
from wavescribe.layout import compute_layout
from wavescribe.metrics import DocumentMetrics
from wavescribe.parser import parse_document


def _prepared(text):
    signals = parse_document(text)
    expand_clocks(signals, DocumentMetrics.collect(signals).width)
    return signals


class TestComputeLayout:

    def test_basic_document(self):
        layout = compute_layout(_prepared("+0 clk\n\n^^^___ a\n"), 16.0)

        assert layout.step == 2
        assert layout.width == 6
        assert layout.full == 16.0
        assert layout.right == 3 * 16.0
        assert layout.wide == 3 * 16.0 + 16.0 * 5
        assert layout.track_count == 2
        assert layout.high == math.ceil(1.8 * 16 * (2 + 2))

    def test_rows_only_for_named_tracks(self):
        layout = compute_layout(_prepared("+0 clk\n\n^^^___ a\n"), 16.0)
        assert [row.index for row in layout.rows] == [0, 2]

    def test_first_row_band(self):
        layout = compute_layout(_prepared("^_ a\n"), 16.0)
        row = layout.rows[0]
        assert row.top == pytest.approx(1.5 * 1.8 * 16)
        assert row.bot == pytest.approx(2.5 * 1.8 * 16)
        assert row.mid == pytest.approx(2.0 * 1.8 * 16)

    def test_spacer_is_half_height(self):
        layout = compute_layout(_prepared("^_ a\n\n^_ b\n"), 16.0)
        first, second = layout.rows
        assert second.top - first.top == pytest.approx(1.5 * 1.8 * 16)

    @pytest.mark.parametrize("spacers", [0, 1, 2, 3, 5])
    def test_no_track_overflows(self, spacers):
        text = "^_ a\n" + "\n" * spacers + "^_ b\n^^ c\n"
        layout = compute_layout(_prepared(text), 16.0)
        assert layout.rows[-1].bot <= layout.high

    def test_idempotent(self):
        signals = _prepared("+1,.25 aclk\nx<--->x d LONGER\n")
        assert compute_layout(signals, 16.0) == compute_layout(signals, 16.0)

    def test_label_widens_columns(self):
        layout = compute_layout(_prepared("x<>x d LONGNAME\n"), 10.0)
        assert layout.step == 6
        assert layout.full == pytest.approx(30.0)

    def test_image_size_rounds_up(self):
        layout = compute_layout(_prepared("^_^ a\n"), 15.0)
        width, height = layout.image_size
        assert width >= layout.wide
        assert height == layout.high

    def test_column_start(self):
        layout = compute_layout(_prepared("^^^___ a\n"), 16.0)
        assert layout.column_start(1) == layout.right
        assert layout.column_start(3) == layout.right + 2 * layout.full
        assert layout.column_start(1, 4.0) == layout.right - 4.0

    def test_row_for_unknown_index(self):
        layout = compute_layout(_prepared("^_ a\n\n^_ b\n"), 16.0)
        with pytest.raises(KeyError):
            layout.row_for(1)

    def test_row_for_maps_every_named_track(self):
        text = "".join(f"^_ s{i}\n" if i % 3 else "\n" for i in range(1, 301))
        signals = _prepared(text)
        layout = compute_layout(signals, 16.0)
        named = [i for i, sig in enumerate(signals) if not sig.is_spacer]
        assert [layout.row_for(i).index for i in named] == named
        assert [layout.row_for(i) for i in named] == list(layout.rows)
