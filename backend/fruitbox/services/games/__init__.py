"""Game domain services: board generation, round/score state and timers.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics.
"""

from .errors import GameStateError, InvalidArgumentError, InvalidStateError
from .state import GameState

__all__ = ['GameState', 'GameStateError', 'InvalidArgumentError', 'InvalidStateError']
