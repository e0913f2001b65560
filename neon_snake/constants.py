"""Game constants."""

GRID_SIZE = 20
INITIAL_SPEED = 150  # ms per tick
MIN_SPEED = 60
SPEED_DECREMENT = 2
FOOD_REWARD = 10

INITIAL_SNAKE = [(10, 10), (10, 11), (10, 12)]
INITIAL_DIRECTION = "up"

HIGH_SCORE_KEY = "neon-snake-highscore"

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

KEY_MAP = {
    "ArrowUp": "up", "w": "up", "W": "up",
    "ArrowDown": "down", "s": "down", "S": "down",
    "ArrowLeft": "left", "a": "left", "A": "left",
    "ArrowRight": "right", "d": "right", "D": "right",
}
PAUSE_KEYS = {" ", "Space", "Spacebar"}
