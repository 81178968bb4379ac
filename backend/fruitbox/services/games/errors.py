class GameStateError(Exception):
    """Base class for contract violations raised by the session core."""


class InvalidStateError(GameStateError):
    """Operation needs an active round but none has started."""


class InvalidArgumentError(GameStateError):
    """Bad player name, score delta or board setting."""
