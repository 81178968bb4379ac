import random

from fruitbox.models import Cell, Grid


def generate_grid(rng: random.Random, height: int, width: int, fruit_types: int) -> Grid:
    """Draw a fresh board.

    Every cell is drawn independently and uniformly from [1, fruit_types]
    using ``rng``, row by row. The caller owns ``rng``; it is advanced, never
    reseeded, so a session's boards are reproducible from its seed.
    """
    return [
        [Cell(rng.randint(1, fruit_types)) for _ in range(width)]
        for _ in range(height)
    ]
