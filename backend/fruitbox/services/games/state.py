import heapq
import logging
import random
import threading
from typing import Dict, List, Optional, Tuple

from fruitbox.models import Grid, Player, grid_to_list
from .board import generate_grid
from .errors import InvalidArgumentError, InvalidStateError

logger = logging.getLogger(__name__)


def _require_positive(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f'{name} must be a positive integer, got {value!r}')
    return value


def _require_name(name) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError('player name must be a non-empty string')
    return name


class GameState:
    """Round, board and score bookkeeping for a single in-memory session.

    The manager owns its own ``random.Random`` seeded once at construction,
    so two managers built with the same seed and driven through the same
    calls produce the same boards. Every public method holds one lock for
    its whole duration.
    """

    def __init__(self, seed: int = 0, height: int = 10, width: int = 17,
                 fruit_types: int = 5, total_rounds: int = 0,
                 leaderboard_size: int = 10):
        self.height = _require_positive('height', height)
        self.width = _require_positive('width', width)
        self.fruit_types = _require_positive('fruit_types', fruit_types)
        self.leaderboard_size = _require_positive('leaderboard_size', leaderboard_size)
        self.seed = seed
        self.current_round = 0
        # Reserved: never advanced by any operation
        self.total_rounds = total_rounds
        self._rng = random.Random(seed)
        self._players: Dict[str, Player] = {}
        self._top_scores: List[Tuple[int, str]] = []  # min-heap of (score, name)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config) -> 'GameState':
        return cls(
            seed=int(config.get('RNG_SEED', 0)),
            height=int(config.get('GRID_HEIGHT', 10)),
            width=int(config.get('GRID_WIDTH', 17)),
            fruit_types=int(config.get('FRUIT_TYPES', 5)),
            total_rounds=int(config.get('TOTAL_ROUNDS', 0)),
            leaderboard_size=int(config.get('LEADERBOARD_SIZE', 10)),
        )

    @property
    def round_active(self) -> bool:
        return self.current_round > 0

    def init_round(self) -> Grid:
        """Start the next round and return its freshly drawn board.

        Every known player gets a new zero total and an empty delta list.
        The previous round is implicitly closed.
        """
        with self._lock:
            grid = generate_grid(self._rng, self.height, self.width, self.fruit_types)
            self.current_round += 1
            for player in self._players.values():
                player._scores.append(0)
                player._current_round_scores.clear()
            logger.debug('round %s started for %s players', self.current_round, len(self._players))
            return grid

    def get_or_add_player(self, name: str) -> Player:
        """Return the named player, creating them on first reference.

        A player created while a round is active joins that round with a
        zero total; earlier rounds are not backfilled.
        """
        _require_name(name)
        with self._lock:
            player = self._players.get(name)
            if player is None:
                player = Player(name=name)
                if self.round_active:
                    player._scores.append(0)
                self._players[name] = player
                logger.debug('player %r joined at round %s', name, self.current_round)
            return player

    def get_player(self, name: str) -> Optional[Player]:
        _require_name(name)
        with self._lock:
            return self._players.get(name)

    def has_player(self, name: str) -> bool:
        _require_name(name)
        with self._lock:
            return name in self._players

    @property
    def players(self) -> Dict[str, Player]:
        with self._lock:
            return dict(self._players)

    def update_player_score(self, name: str, delta: int) -> Player:
        """Award ``delta`` points to ``name`` in the current round.

        Raises InvalidStateError before the first round and
        InvalidArgumentError for a negative or non-integer delta.
        """
        _require_name(name)
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidArgumentError(f'score delta must be an integer, got {delta!r}')
        if delta < 0:
            raise InvalidArgumentError(f'score delta must be non-negative, got {delta}')
        with self._lock:
            if not self.round_active:
                raise InvalidStateError('no round has started yet')
            player = self.get_or_add_player(name)
            player._scores[-1] += delta
            player._current_round_scores.append(delta)
            return player

    def serialize_current_round_scores(self) -> Dict[str, List[int]]:
        with self._lock:
            return {name: list(p._current_round_scores) for name, p in self._players.items()}

    def current_totals(self) -> Dict[str, int]:
        with self._lock:
            return {name: p.current_total for name, p in self._players.items()}

    def leaderboard(self, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """Players ordered by current-round total, highest first, ties by name."""
        limit = self.leaderboard_size if limit is None else _require_positive('limit', limit)
        ranked = sorted(self.current_totals().items(), key=lambda item: (-item[1], item[0]))
        return ranked[:limit]

    def record_round_results(self) -> List[Tuple[int, str]]:
        """Fold every player's current total into the session's best scores.

        Keeps at most ``leaderboard_size`` entries; a new entry only displaces
        the lowest one when it is strictly higher.
        """
        with self._lock:
            for name, total in self.current_totals().items():
                entry = (total, name)
                if len(self._top_scores) < self.leaderboard_size:
                    heapq.heappush(self._top_scores, entry)
                elif total > self._top_scores[0][0]:
                    heapq.heapreplace(self._top_scores, entry)
            return self.top_scores()

    def top_scores(self) -> List[Tuple[int, str]]:
        with self._lock:
            return sorted(self._top_scores, key=lambda e: (-e[0], e[1]))

    def to_dict(self):
        with self._lock:
            return {
                'current_round': self.current_round,
                'total_rounds': self.total_rounds,
                'grid_size': {'height': self.height, 'width': self.width},
                'fruit_types': self.fruit_types,
                'players': {name: p.to_dict() for name, p in self._players.items()},
                'current_round_scores': self.serialize_current_round_scores(),
            }

    def round_payload(self, grid: Grid):
        return {'round': self.current_round, 'grid': grid_to_list(grid)}
