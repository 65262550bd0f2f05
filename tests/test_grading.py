"""Test cases for final grade aggregation."""

import pytest

from coursebook.core.entities import Evaluation, GradeCell
from coursebook.core.enums import GradeKind
from coursebook.core.exceptions import NotEnrolled
from coursebook.core.grading import compute_final

NUMERIC = GradeKind.NUMERIC
NP = GradeKind.NOT_PRESENTED
EMPTY = GradeKind.EMPTY


def final_of(weights, cells):
    evaluations = [Evaluation(f"E{i}", 0, weight, 500) for i, weight in enumerate(weights)]
    cells = [GradeCell(kind, score) for kind, score in cells]
    return compute_final(evaluations, lambda index: cells[index])


class TestComputeFinal:

    def test_weighted_average(self):
        assert final_of([60, 40], [(NUMERIC, 800), (NUMERIC, 600)]) == GradeCell(NUMERIC, 720)

    def test_floor_division(self):
        # (1000 + 1000 + 2) / 3 = 667.33
        assert final_of([1, 1, 1], [(NUMERIC, 1000), (NUMERIC, 1000), (NUMERIC, 2)]).score == 667

    def test_weights_not_summing_to_100(self):
        assert final_of([50, 50, 50], [(NUMERIC, 600)] * 3) == GradeCell(NUMERIC, 600)

    def test_any_empty_blocks_final(self):
        assert final_of([60, 40], [(NUMERIC, 800), (EMPTY, 0)]) == GradeCell(EMPTY, 0)

    def test_empty_wins_over_not_presented(self):
        assert final_of([60, 40], [(NP, 0), (EMPTY, 0)]) == GradeCell(EMPTY, 0)

    def test_all_not_presented(self):
        assert final_of([60, 40], [(NP, 0), (NP, 0)]) == GradeCell(NP, 0)

    def test_not_presented_caps_passing_final(self):
        assert final_of([60, 40], [(NUMERIC, 800), (NP, 0)]) == GradeCell(NUMERIC, 499)

    def test_not_presented_keeps_failing_final(self):
        assert final_of([60, 40], [(NUMERIC, 400), (NP, 0)]) == GradeCell(NUMERIC, 400)

    @pytest.mark.parametrize("score, expected", [(499, 499), (500, 499), (498, 498)])
    def test_cap_boundary(self, score, expected):
        assert final_of([60, 40], [(NUMERIC, score), (NP, 0)]).score == expected

    def test_not_presented_carries_no_weight(self):
        # Only the 30-weight evaluation counts: 300 * 30 / 30.
        assert final_of([70, 30], [(NP, 0), (NUMERIC, 300)]) == GradeCell(NUMERIC, 300)

    def test_only_zero_weight_numeric(self):
        assert final_of([0], [(NUMERIC, 800)]) == GradeCell(NP, 0)

    def test_no_evaluations(self):
        assert final_of([], []) == GradeCell(NP, 0)


class TestFinalEntryPoints:
    """Self-service and by-identity finals share one algorithm."""

    def test_scenario_all_numeric(self, graded_course):
        assert graded_course.compute_own_final("alice") == GradeCell(NUMERIC, 720)
        assert graded_course.compute_final_for("alice") == GradeCell(NUMERIC, 720)

    def test_scenario_not_presented_cap(self, graded_course):
        assert graded_course.compute_own_final("bob") == GradeCell(NUMERIC, 499)
        assert graded_course.compute_final_for("bob") == GradeCell(NUMERIC, 499)

    def test_scenario_both_not_presented(self, course):
        course.set_grade("teacher", "alice", 0, NP)
        course.set_grade("teacher", "alice", 1, NP)
        assert course.compute_own_final("alice") == GradeCell(NP, 0)

    def test_partially_graded(self, course):
        course.set_grade("teacher", "alice", 0, NUMERIC, 8)
        assert course.compute_final_for("alice") == GradeCell(EMPTY, 0)

    def test_new_evaluation_blocks_final_again(self, graded_course):
        graded_course.create_evaluation("teacher", "Project", 1775000000, 20, 5)
        assert graded_course.compute_final_for("alice").kind is EMPTY

    def test_self_service_requires_enrollment(self, graded_course):
        with pytest.raises(NotEnrolled):
            graded_course.compute_own_final("teacher")

    def test_by_identity_is_unguarded(self, graded_course):
        assert graded_course.compute_final_for("stranger") == GradeCell(EMPTY, 0)
