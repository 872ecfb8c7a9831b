"""Core game state and logic."""

import logging
import random
from typing import Optional

from .constants import DIRECTIONS
from .entities import Apple, Snake
from .events import EventChannel
from .models import DeathCause, GameState
from .options import Options, merge_options
from .render import RenderSink
from .scheduler import IntervalScheduler

logger = logging.getLogger(__name__)


class Game:
    """
    Tick-driven snake engine.

    Owns the snake, the apple, the counters and the timer. Everything that
    happens is announced on `events`:

        start, stop, pause, resume   no payload
        tick                         tick count
        appleEaten                   apples eaten so far
        bodyHit, wallHit             no payload
        move                         direction name, (dx, dy)
    """

    def __init__(self, options: Optional[Options] = None, sink: Optional[RenderSink] = None,
                 scheduler=None, rng: Optional[random.Random] = None,
                 initial_direction: Optional[str] = None):
        self.options = options or merge_options()
        self.sink = sink
        self.scheduler = scheduler or IntervalScheduler()
        self.rng = rng or random.Random()
        self.initial_direction = initial_direction
        self.events = EventChannel()
        self.snake: Optional[Snake] = None
        self.apple: Optional[Apple] = None
        self.state = GameState(tick_duration=self.options.game.tick_duration)

    @property
    def width(self) -> int:
        return self.options.game.width

    @property
    def height(self) -> int:
        return self.options.game.height

    # ── Lifecycle ──────────────────────────────────────────────────

    def start(self):
        heading = self.initial_direction or self.rng.choice(list(DIRECTIONS))
        self.snake = Snake.spawn(self.width, self.height, self.options.snake.initial_length, heading)
        self.apple = Apple.spawn(self.snake.body, self.width, self.height, self.rng)
        self.state = GameState(tick_duration=self.options.game.tick_duration, running=True)

        if self.sink is not None:
            self.sink.clear()
        self.draw()

        self.scheduler.schedule(self.state.tick_duration, self.tick)
        logger.info("Game started: %dx%d, heading %s, solid walls %s",
                    self.width, self.height, heading, self.options.game.solid_walls)
        self.events.emit("start")

    def stop(self, clear: bool = True):
        self.scheduler.cancel()
        if clear and self.sink is not None:
            self.sink.clear()
            self.sink.flush()
        self.state.running = False
        self.state.paused = False
        self.state.stopped = True
        logger.info("Game stopped after %d ticks, %d apples", self.state.ticks, self.state.apples_eaten)
        self.events.emit("stop")

    def pause(self):
        if not self.state.running:
            return
        self.scheduler.cancel()
        self.state.running = False
        self.state.paused = True
        logger.info("Game paused at tick %d", self.state.ticks)
        self.events.emit("pause")

    def resume(self):
        if not self.state.paused:
            return
        self.scheduler.schedule(self.state.tick_duration, self.tick)
        self.state.running = True
        self.state.paused = False
        logger.info("Game resumed at tick %d", self.state.ticks)
        self.events.emit("resume")

    def set_tick_duration(self, tick_duration: int = 50):
        """Stage a new interval; it takes effect at the end of the next tick."""
        self.state.pending_tick_duration = tick_duration

    # ── Input ──────────────────────────────────────────────────────

    def request_direction(self, direction: str):
        if self.snake is None or direction not in DIRECTIONS:
            logger.debug("Ignoring direction %r", direction)
            return
        if not self.snake.set_heading(direction):
            logger.debug("Rejected direction %s (heading %s, locked %s)",
                         direction, self.snake.heading, self.snake.direction_locked)
            return
        self.state.movements += 1
        self.events.emit("move", direction, self.snake.delta)

    # ── Tick ───────────────────────────────────────────────────────

    def tick(self):
        snake = self.snake
        if not snake.alive:
            self.stop(clear=False)
            return

        self.state.ticks += 1
        self.events.emit("tick", self.state.ticks)

        if self.sink is not None:
            self.sink.clear()

        snake.move(self.width, self.height)

        if snake.head == self.apple.position:
            self.state.apples_eaten += 1
            snake.eat()
            self.apple = Apple.spawn(snake.body, self.width, self.height, self.rng)
            logger.debug("Apple eaten, next at %s", self.apple.position)
            self.events.emit("appleEaten", self.state.apples_eaten)

        # The wrapped head of a wall hit sits on a cell the snake never reached.
        wall_hit = self.options.game.solid_walls and snake.hit_wall(self.width, self.height)

        if not wall_hit and snake.hit_body():
            snake.die()
            logger.info("Snake hit itself at %s", snake.head)
            self.events.emit("bodyHit")

        if wall_hit:
            snake.die(wall_hit=True)
            logger.info("Snake hit the wall at %s", snake.unwrapped_head)
            self.events.emit("wallHit")

        self.draw()

        if self.state.pending_tick_duration is not None:
            self.state.tick_duration = self.state.pending_tick_duration
            self.state.pending_tick_duration = None
            self.scheduler.schedule(self.state.tick_duration, self.tick)
            logger.info("Tick duration now %d ms", self.state.tick_duration)

    # ── Drawing ────────────────────────────────────────────────────

    def draw(self):
        """Paint the apple, then the snake, then release the direction lock."""
        if self.sink is not None:
            self.draw_cell(self.apple.position, self.options.apple.default_color,
                           self.options.apple.border_color)
            for index, position in enumerate(self.snake.body):
                color = self.segment_color(index)
                if color is not None:
                    self.draw_cell(position, color, self.options.snake.border_color)
            self.sink.flush()
        self.snake.unlock()

    def segment_color(self, index: int) -> Optional[str]:
        settings = self.options.snake
        if self.snake.alive:
            return settings.default_color
        if self.snake.death_cause == DeathCause.WALL_COLLISION:
            # The head has wrapped to the opposite edge; leave it out.
            return None if index == 0 else settings.hit_color
        return settings.hit_color if index == 0 else settings.default_color

    def draw_cell(self, position, fill_color: str, border_color: str):
        self.sink.draw_cell_border(position.x, position.y, border_color)
        self.sink.draw_cell_fill(position.x, position.y, fill_color)

    # ── Queries ────────────────────────────────────────────────────

    def get_state(self) -> dict:
        snake = self.snake
        return {
            "movements": self.state.movements,
            "ticks": self.state.ticks,
            "apples_eaten": self.state.apples_eaten,
            "snake_positions": [list(p) for p in snake.body] if snake else [],
            "snake_direction": snake.heading if snake else None,
            "apple_position": list(self.apple.position) if self.apple else None,
            "alive": snake.alive if snake else None,
            "death_cause": snake.death_cause.value if snake and snake.death_cause else None,
            "running": self.state.running,
            "paused": self.state.paused,
            "stopped": self.state.stopped,
            "tick_duration": self.state.tick_duration,
        }

    def close(self):
        """Cancel the timer and drop every listener."""
        self.scheduler.cancel()
        self.events.clear()
