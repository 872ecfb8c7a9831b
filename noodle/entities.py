"""Snake and apple."""

import random
from typing import Iterable, Optional

from .constants import DIRECTIONS, OPPOSITES
from .grid import step, wrap
from .models import DeathCause, GridPosition


class Snake:
    """
    The player's snake.

    Attributes:
        body: list of GridPosition from head (index 0) to tail
        heading: current direction name
        direction_locked: set once a heading change was accepted this tick
        alive: whether the snake is still alive
        death_cause: DeathCause once dead, else None
        unwrapped_head: head of the last move before wraparound
        previous_tail: segment removed by the last move, restored by eat()
    """

    def __init__(self, body: list[GridPosition], heading: str):
        self.body = list(body)
        self.heading = heading
        self.direction_locked = False
        self.alive = True
        self.death_cause: Optional[DeathCause] = None
        self.unwrapped_head = self.body[0]
        self.previous_tail: Optional[GridPosition] = None

    @classmethod
    def spawn(cls, width: int, height: int, length: int, heading: str) -> "Snake":
        """Head at the grid centre, body trailing behind the heading."""
        dx, dy = DIRECTIONS[heading]
        x, y = width // 2, height // 2
        body = [GridPosition(wrap(x - dx * i, width), wrap(y - dy * i, height)) for i in range(length)]
        return cls(body, heading)

    @property
    def head(self) -> GridPosition:
        return self.body[0]

    @property
    def delta(self) -> tuple[int, int]:
        return DIRECTIONS[self.heading]

    def move(self, width: int, height: int):
        self.previous_tail = self.body.pop()
        # A length-1 snake has just popped its only segment.
        current = self.body[0] if self.body else self.previous_tail
        head, self.unwrapped_head = step(current, self.delta, width, height)
        self.body.insert(0, head)

    def eat(self):
        self.body.append(self.previous_tail)

    def set_heading(self, direction: str) -> bool:
        """Change heading. Returns whether the change was accepted.

        Rejected while locked, for a 180 degree reversal of the current
        heading, and for the current heading itself.
        """
        if self.direction_locked:
            return False
        if direction == self.heading or direction == OPPOSITES[self.heading]:
            return False
        self.heading = direction
        self.direction_locked = True
        return True

    def unlock(self):
        self.direction_locked = False

    def hit_body(self) -> bool:
        return self.head in self.body[1:]

    def hit_wall(self, width: int, height: int) -> bool:
        x, y = self.unwrapped_head
        return not (0 <= x < width and 0 <= y < height)

    def die(self, wall_hit: bool = False):
        self.alive = False
        self.death_cause = DeathCause.WALL_COLLISION if wall_hit else DeathCause.SELF_COLLISION


class Apple:
    def __init__(self, position: GridPosition):
        self.position = position

    @classmethod
    def spawn(cls, occupied: Iterable[GridPosition], width: int, height: int,
              rng: Optional[random.Random] = None) -> "Apple":
        apple = cls(GridPosition(0, 0))
        apple.respawn(occupied, width, height, rng)
        return apple

    def respawn(self, occupied: Iterable[GridPosition], width: int, height: int,
                rng: Optional[random.Random] = None):
        """Draw random cells until one is free.

        Never returns if `occupied` covers the whole grid.
        """
        rng = rng or random
        taken = set(occupied)
        while True:
            candidate = GridPosition(rng.randint(0, width - 1), rng.randint(0, height - 1))
            if candidate not in taken:
                self.position = candidate
                return
