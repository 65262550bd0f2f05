"""
Append-only registry of evaluations.

An evaluation is addressed by its position; positions are never reused,
reordered or removed.
"""

from typing import List, Union
from decimal import Decimal

from .entities import Evaluation, require_text, scale_score
from .exceptions import InvalidEvaluationIndex, InvalidWeight


class EvaluationRegistry:
    """Ordered list of evaluation definitions."""

    def __init__(self):
        self._evaluations: List[Evaluation] = []

    def create(self, name: str, due_timestamp: int, weight: int,
               min_pass_score: Union[int, str, Decimal]) -> int:
        """Append an evaluation and return its index.

        Weights are accepted one by one; nothing forces them to add up to 100.
        """
        require_text("name", name)
        if due_timestamp < 0:
            raise InvalidWeight("due_timestamp must not be negative", details={'value': due_timestamp})
        if weight < 0:
            raise InvalidWeight("weight must not be negative", details={'value': weight})
        evaluation = Evaluation(
            name=name,
            due_timestamp=int(due_timestamp),
            weight=int(weight),
            min_pass_score=scale_score(min_pass_score, "min_pass_score"),
        )
        self._evaluations.append(evaluation)
        return len(self._evaluations) - 1

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._evaluations)

    def require_index(self, index: int) -> None:
        if not self.is_valid(index):
            raise InvalidEvaluationIndex(
                f"Evaluation index {index} does not exist",
                details={'index': index, 'count': len(self._evaluations)}
            )

    def get(self, index: int) -> Evaluation:
        self.require_index(index)
        return self._evaluations[index]

    def all(self) -> List[Evaluation]:
        return list(self._evaluations)

    def __len__(self) -> int:
        return len(self._evaluations)
