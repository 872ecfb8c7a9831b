"""Data models."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional


class GridPosition(NamedTuple):
    x: int
    y: int


class DeathCause(Enum):
    SELF_COLLISION = "self_collision"
    WALL_COLLISION = "wall_collision"


@dataclass
class GameState:
    tick_duration: int
    ticks: int = 0
    movements: int = 0
    apples_eaten: int = 0
    running: bool = False
    paused: bool = False
    stopped: bool = False
    pending_tick_duration: Optional[int] = None
