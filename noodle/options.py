"""Game options and default merging."""

import copy
import logging
from dataclasses import dataclass, field, fields
from typing import Optional

from .constants import DEFAULT_OPTIONS

logger = logging.getLogger(__name__)


@dataclass
class GameSettings:
    width: int = DEFAULT_OPTIONS["game"]["width"]
    height: int = DEFAULT_OPTIONS["game"]["height"]
    scale: int = DEFAULT_OPTIONS["game"]["scale"]
    border: int = DEFAULT_OPTIONS["game"]["border"]
    tick_duration: int = DEFAULT_OPTIONS["game"]["tick_duration"]
    solid_walls: bool = DEFAULT_OPTIONS["game"]["solid_walls"]
    background_color: str = DEFAULT_OPTIONS["game"]["background_color"]


@dataclass
class SnakeSettings:
    initial_length: int = DEFAULT_OPTIONS["snake"]["initial_length"]
    default_color: str = DEFAULT_OPTIONS["snake"]["default_color"]
    border_color: str = DEFAULT_OPTIONS["snake"]["border_color"]
    hit_color: str = DEFAULT_OPTIONS["snake"]["hit_color"]


@dataclass
class AppleSettings:
    default_color: str = DEFAULT_OPTIONS["apple"]["default_color"]
    border_color: str = DEFAULT_OPTIONS["apple"]["border_color"]


@dataclass
class Options:
    game: GameSettings = field(default_factory=GameSettings)
    snake: SnakeSettings = field(default_factory=SnakeSettings)
    apple: AppleSettings = field(default_factory=AppleSettings)


SECTIONS = {"game": GameSettings, "snake": SnakeSettings, "apple": AppleSettings}


def merge_options(overrides: Optional[dict] = None) -> Options:
    """Deep-merge a nested dict of overrides over the defaults.

    Values are taken as given; range checks are the caller's job.
    Unknown sections and keys are dropped with a warning.
    """
    merged = copy.deepcopy(DEFAULT_OPTIONS)
    for section, values in (overrides or {}).items():
        if section not in SECTIONS or not isinstance(values, dict):
            logger.warning("Ignoring unknown option section %r", section)
            continue
        known = {f.name for f in fields(SECTIONS[section])}
        for key, value in values.items():
            if key not in known:
                logger.warning("Ignoring unknown option %s.%s", section, key)
                continue
            merged[section][key] = value

    return Options(**{name: cls(**merged[name]) for name, cls in SECTIONS.items()})
