"""
Grade store: one cell per (student, evaluation), overwritten on every write.
"""

from decimal import Decimal
from typing import Dict, Tuple, Union

from .entities import GradeCell, EMPTY_CELL, scale_score
from .enums import GradeKind, MAX_SCORE
from .exceptions import ScoreOutOfRange


def build_cell(kind: GradeKind, raw_score: Union[int, str, Decimal] = 0) -> GradeCell:
    """Validate a grade and turn it into a cell.

    Only numeric grades carry a score; it must lie within 0.00 - 10.00.
    """
    if kind is not GradeKind.NUMERIC:
        return GradeCell(kind=kind, score=0)
    score = scale_score(raw_score)
    if score > MAX_SCORE:
        raise ScoreOutOfRange(
            f"Score {raw_score} is above the 10.00 maximum",
            details={'value': str(raw_score)}
        )
    return GradeCell(kind=kind, score=score)


class GradeStore:
    """Grade cells keyed by (student identity, evaluation index)."""

    def __init__(self):
        self._cells: Dict[Tuple[str, int], GradeCell] = {}

    def write(self, identity: str, index: int, cell: GradeCell) -> None:
        """Store a cell, replacing whatever was there."""
        self._cells[(identity, index)] = cell

    def cell(self, identity: str, index: int) -> GradeCell:
        """Stored cell, or an empty cell for a pair never written."""
        return self._cells.get((identity, index), EMPTY_CELL)
