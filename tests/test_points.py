import pytest

from app.core.exceptions import MalformedQuestion
from app.core.points import ExamMarkingTable, PointAllocator, max_points, points_earned
from app.utils.rounding import round_half_away, round_percentage


class TestQuizPoints:

    def test_base_points(self):
        assert max_points("easy", False) == 3
        assert max_points("medium", False) == 5
        assert max_points("hard", False) == 7

    def test_open_ended_bonus(self):
        assert max_points("hard", True) == 8
        assert max_points("easy", True) == 4
        assert max_points("medium", True) == 6

    def test_unknown_difficulty(self):
        with pytest.raises(MalformedQuestion):
            max_points("impossible", False)

    def test_points_earned_rounds_to_one_decimal(self):
        assert points_earned(100, 4) == 4.0
        assert points_earned(50, 6) == 3.0
        assert points_earned(25, 3) == 0.8
        assert points_earned(48, 4) == 1.9
        assert points_earned(0, 8) == 0.0

    def test_custom_table(self):
        allocator = PointAllocator(base_points={"easy": 1, "medium": 2, "hard": 3}, open_ended_bonus=2)
        assert allocator.max_points("hard", True) == 5


class TestExamMarkingTable:

    def setup_method(self):
        self.table = ExamMarkingTable()

    def test_max_marks_is_band_upper_bound(self):
        assert self.table.max_marks("easy") == 3
        assert self.table.max_marks("medium") == 5
        assert self.table.max_marks("hard") == 8

    @pytest.mark.parametrize("combined,expected", [
        (1.0, 5.0),
        (0.9, 5.0),
        (0.75, 4.0),
        (0.55, 3.0),
        (0.35, 2.0),
        (0.2, 1.0),
        (0.1, 0.0),
    ])
    def test_written_tiers(self, combined, expected):
        assert self.table.written_marks(combined, 5) == expected

    def test_multi_select_exact(self):
        assert self.table.multi_select_marks([3, 2, 1, 0], {0, 1, 2, 3}, 8) == 8.0

    def test_multi_select_partial(self):
        # accuracy 0.75 -> 8 * (0.5 + 0.375)
        assert self.table.multi_select_marks([0, 1, 2], {0, 1, 2, 3}, 8) == 7.0
        # accuracy 0.25 -> 8 * 0.125
        assert self.table.multi_select_marks([0], {0, 1, 2, 3}, 8) == 1.0

    def test_multi_select_wrong_pick_penalty(self):
        # 7.0 reduced by 1/4 * 0.5
        assert self.table.multi_select_marks([0, 1, 2, 4], {0, 1, 2, 3}, 8) == 6.1

    def test_multi_select_penalty_is_capped(self):
        marks = self.table.multi_select_marks([0, 1, 2, 5, 6, 7, 8, 9], {0, 1, 2, 3}, 8)
        assert marks == 3.5

    def test_multi_select_nothing_right(self):
        assert self.table.multi_select_marks([4, 5], {0, 1}, 8) == 0.0
        assert self.table.multi_select_marks([], {0, 1}, 8) == 0.0


class TestRounding:

    def test_half_away_from_zero(self):
        assert round_half_away(2.5) == 3
        assert round_half_away(0.5) == 1
        assert round_half_away(-2.5) == -3
        assert round_half_away(1.05, 1) == 1.1
        assert round_half_away(0.0) == 0.0

    def test_round_percentage(self):
        assert round_percentage(7 / 18) == 39
        assert round_percentage(0.005) == 1
        assert round_percentage(1.2) == 100
