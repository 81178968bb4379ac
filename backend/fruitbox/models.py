from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Cell:
    value: int

    def to_dict(self):
        return {'value': self.value}


Grid = List[List[Cell]]


def grid_to_list(grid: Grid) -> List[List[int]]:
    """Flatten a grid of Cells into rows of plain ints for transport."""
    return [[cell.value for cell in row] for row in grid]


@dataclass
class Player:
    """Score bookkeeping for one player in the session.

    ``scores`` holds one cumulative total per round the player has been part
    of; ``current_round_scores`` holds the individual deltas of the current
    round. Both are exposed as tuples; only GameState mutates the backing
    lists.
    """

    name: str
    _scores: List[int] = field(default_factory=list, repr=False)
    _current_round_scores: List[int] = field(default_factory=list, repr=False)

    @property
    def scores(self) -> Tuple[int, ...]:
        return tuple(self._scores)

    @property
    def current_round_scores(self) -> Tuple[int, ...]:
        return tuple(self._current_round_scores)

    @property
    def current_total(self) -> int:
        return self._scores[-1] if self._scores else 0

    def to_dict(self):
        return {
            'name': self.name,
            'scores': list(self._scores),
            'current_round_scores': list(self._current_round_scores),
            'current_total': self.current_total,
        }
