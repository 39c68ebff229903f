"""
Shared constants for DOWNHILL.

Logical keys, sprite names and the gameplay numbers that the
entities and the frame loop agree on.
"""

from enum import Enum


class Key(str, Enum):
    """Logical keyboard keys understood by the game."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    JUMP = "jump"
    PAUSE = "pause"
    RESET = "reset"


class ImageName(str, Enum):
    """Names of every sprite the game can draw."""
    SKIER_CRASH = "skier_crash"
    SKIER_LEFT = "skier_left"
    SKIER_LEFTDOWN = "skier_left_down"
    SKIER_DOWN = "skier_down"
    SKIER_RIGHTDOWN = "skier_right_down"
    SKIER_RIGHT = "skier_right"
    SKIER_JUMP1 = "skier_jump_1"
    SKIER_JUMP2 = "skier_jump_2"
    SKIER_JUMP3 = "skier_jump_3"
    SKIER_JUMP4 = "skier_jump_4"
    SKIER_JUMP5 = "skier_jump_5"

    TREE = "tree_1"
    TREE_CLUSTER = "tree_cluster"
    ROCK1 = "rock_1"
    ROCK2 = "rock_2"
    JUMP_RAMP = "jump_ramp"

    RHINO = "rhino_default"
    RHINO_RUN_LEFT = "rhino_run_left"
    RHINO_RUN_LEFT2 = "rhino_run_left_2"
    RHINO_LIFT = "rhino_lift"
    RHINO_LIFT_MOUTH_OPEN = "rhino_lift_mouth_open"
    RHINO_LIFT_EAT1 = "rhino_lift_eat_1"
    RHINO_LIFT_EAT2 = "rhino_lift_eat_2"
    RHINO_LIFT_EAT3 = "rhino_lift_eat_3"
    RHINO_LIFT_EAT4 = "rhino_lift_eat_4"


# Every sprite has to be available before the game starts
IMAGES: tuple[ImageName, ...] = tuple(ImageName)

# Canvas size in world units (one unit per pixel)
GAME_WIDTH = 480
GAME_HEIGHT = 360

# Skier
STARTING_SPEED = 5
DIAGONAL_SPEED_REDUCER = 1.4142  # sqrt(2): hypotenuse of a unit right triangle
SPEED_INCREASE_THRESHOLD = 10

# Obstacles
OBSTACLE_FREQUENCY_INCREASE_THRESHOLD = 100

# Animations
ANIMATION_FRAME_SPEED_MS = 100.0
