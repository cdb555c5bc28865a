"""Tests for the kettlebell rep/round tracker."""

import pytest

from followalong.timer.timeline import Style, build_timeline, kb_round_index
from followalong.tracking import KbTracker

from helpers import boxing, kettlebell


@pytest.fixture
def timeline():
    return build_timeline(
        [boxing(1), kettlebell(2, Style.EMOM), kettlebell(3, Style.AMRAP)],
        boxing_round_count=1,
    )


@pytest.fixture
def tracker(timeline):
    return KbTracker.from_timeline(timeline)


class TestKbTracker:

    def test_one_row_per_kettlebell_segment(self, tracker):
        assert len(tracker) == 2
        assert tracker.get_state(0).style == Style.EMOM
        assert tracker.get_state(1).name == "Kettlebells Round 3"

    def test_defaults(self, tracker):
        state = tracker.get_state(0)
        assert state.completed_rounds == 0
        assert state.minute_reps == [0, 0, 0]

    def test_rounds(self, tracker):
        tracker.set_rounds(1, 4)
        tracker.inc_rounds(1, 2)
        tracker.inc_rounds(1, -10)
        assert tracker.get_state(1).completed_rounds == 0
        tracker.inc_rounds(1, 3)
        assert tracker.get_state(1).completed_rounds == 3

    def test_minutes(self, tracker):
        tracker.set_minute(0, 0, 12)
        tracker.inc_minute(0, 1, 3)
        tracker.inc_minute(0, 1, 1)
        tracker.set_minute(0, 2, -5)
        state = tracker.get_state(0)
        assert state.minute_reps == [12, 4, 0]
        assert state.total_reps == 16

    def test_minute_out_of_range_ignored(self, tracker):
        tracker.set_minute(0, 3, 10)
        tracker.inc_minute(0, -1, 10)
        assert tracker.get_state(0).minute_reps == [0, 0, 0]

    def test_routed_by_engine_index(self, timeline, tracker):
        # b1, Half-time, k2, Rest, k3
        kb = kb_round_index(timeline, 4)
        tracker.inc_rounds(kb, 1)
        assert tracker.get_state(1).completed_rounds == 1

    def test_reset(self, tracker):
        tracker.set_rounds(1, 5)
        tracker.set_minute(0, 0, 5)
        tracker.reset()
        assert tracker.get_state(1).completed_rounds == 0
        assert tracker.get_state(0).minute_reps == [0, 0, 0]

    def test_results_shape(self, tracker):
        tracker.set_minute(0, 0, 10)
        tracker.set_rounds(1, 7)
        emom, amrap = tracker.results()
        assert emom["style"] == "EMOM"
        assert emom["emom"] == {"minuteReps": [10, 0, 0]}
        assert emom["totalReps"] == 10
        assert "completedRounds" not in emom
        assert amrap["completedRounds"] == 7
        assert amrap["roundIndex"] == 1
