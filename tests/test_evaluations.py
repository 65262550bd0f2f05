"""Test cases for the evaluation registry."""

from decimal import Decimal

import pytest

from coursebook.core.evaluations import EvaluationRegistry
from coursebook.core.exceptions import (
    EmptyFieldRejected, InvalidEvaluationIndex, InvalidWeight, NotTeacher, ScoreOutOfRange
)


class TestCreateEvaluation:

    def test_returns_sequential_indices(self, course):
        assert course.create_evaluation("teacher", "Project", 1775000000, 20, 4) == 2
        assert course.create_evaluation("teacher", "Oral", 1776000000, 10, 4) == 3
        assert [e.name for e in course.list_evaluations()] == [
            "Midterm", "Final exam", "Project", "Oral"
        ]

    def test_min_pass_score_is_scaled(self, course):
        evaluation = course.get_evaluation(0)
        assert evaluation.min_pass_score == 500
        assert evaluation.weight == 60

    def test_fractional_min_pass_score(self, course):
        index = course.create_evaluation("teacher", "Quiz", 1775000000, 10, Decimal("4.75"))
        assert course.get_evaluation(index).min_pass_score == 475

    def test_weights_need_not_sum_to_100(self, course):
        course.create_evaluation("teacher", "Extra", 1775000000, 90, 5)
        assert sum(e.weight for e in course.list_evaluations()) == 190

    def test_only_teachers(self, course):
        with pytest.raises(NotTeacher):
            course.create_evaluation("owner", "Quiz", 1775000000, 10, 5)
        assert course.get_statistics().evaluation_count == 2

    def test_empty_name(self, course):
        with pytest.raises(EmptyFieldRejected):
            course.create_evaluation("teacher", "", 1775000000, 10, 5)

    def test_negative_weight(self, course):
        with pytest.raises(InvalidWeight):
            course.create_evaluation("teacher", "Quiz", 1775000000, -10, 5)

    def test_negative_min_pass_score(self, course):
        with pytest.raises(ScoreOutOfRange):
            course.create_evaluation("teacher", "Quiz", 1775000000, 10, -1)
        assert course.get_statistics().evaluation_count == 2

    @pytest.mark.parametrize("min_pass_score", ["1e999999999", Decimal("5.0000000000000000000000000001")])
    def test_unrepresentable_min_pass_score(self, course, min_pass_score):
        with pytest.raises(ScoreOutOfRange):
            course.create_evaluation("teacher", "Quiz", 1775000000, 10, min_pass_score)
        assert course.get_statistics().evaluation_count == 2


class TestRegistry:

    def test_index_lookup(self):
        registry = EvaluationRegistry()
        registry.create("Midterm", 0, 50, 5)
        assert registry.get(0).name == "Midterm"
        assert registry.is_valid(0)
        assert not registry.is_valid(1)
        assert not registry.is_valid(-1)

    def test_invalid_index(self):
        registry = EvaluationRegistry()
        with pytest.raises(InvalidEvaluationIndex):
            registry.get(0)

    def test_list_is_a_copy(self):
        registry = EvaluationRegistry()
        registry.create("Midterm", 0, 50, 5)
        registry.all().clear()
        assert len(registry) == 1
