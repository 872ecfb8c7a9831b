"""Game constants."""

HOST, PORT = "0.0.0.0", 8765

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

DEFAULT_OPTIONS = {
    "game": {
        "width": 30,
        "height": 20,
        "scale": 10,
        "border": 1,
        "tick_duration": 50,
        "solid_walls": False,
        "background_color": "#000000",
    },
    "snake": {
        "initial_length": 3,
        "default_color": "#00ff00",
        "border_color": "#000000",
        "hit_color": "#0000ff",
    },
    "apple": {
        "default_color": "#ff0000",
        "border_color": "#000000",
    },
}
