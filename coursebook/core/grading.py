"""
Final grade aggregation.

The final is the weighted mean of the numeric grades, floored in fixed point.
A single ungraded evaluation blocks the final. Evaluations marked as not
presented carry no weight, but their presence caps a passing final at 4.99.
"""

from typing import Callable, Iterable

from .entities import Evaluation, FinalGrade, GradeCell
from .enums import GradeKind, NOT_PRESENTED_CAP


def compute_final(evaluations: Iterable[Evaluation],
                  cell_at: Callable[[int], GradeCell]) -> FinalGrade:
    """Compute a student's final grade.

    Args:
        evaluations: evaluation definitions in index order.
        cell_at: returns the student's grade cell for an evaluation index.

    Returns:
        (EMPTY, 0) if any evaluation is ungraded, (NOT_PRESENTED, 0) if no
        numeric grade carries weight, otherwise (NUMERIC, final).
    """
    weighted_sum = 0
    total_weight = 0
    not_presented = False

    for index, evaluation in enumerate(evaluations):
        cell = cell_at(index)
        if cell.kind is GradeKind.EMPTY:
            return FinalGrade(GradeKind.EMPTY, 0)
        if cell.kind is GradeKind.NOT_PRESENTED:
            not_presented = True
            continue
        weighted_sum += cell.score * evaluation.weight
        total_weight += evaluation.weight

    if total_weight == 0:
        return FinalGrade(GradeKind.NOT_PRESENTED, 0)

    final = weighted_sum // total_weight
    if not_presented and final > NOT_PRESENTED_CAP:
        final = NOT_PRESENTED_CAP
    return FinalGrade(GradeKind.NUMERIC, final)
