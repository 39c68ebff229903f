"""Obstacle placement tests."""

import math

import pytest

from downhill.core.constants import GAME_HEIGHT, GAME_WIDTH
from downhill.core.geometry import Position, Rect
from downhill.entities.obstacles import (
    DISTANCE_BETWEEN_OBSTACLES,
    STARTING_OBSTACLE_GAP,
    STARTING_OBSTACLE_REDUCER,
    ObstacleKind,
)

WINDOW = Rect.centered_on(Position(0, 0), GAME_WIDTH, GAME_HEIGHT)


def moved(window: Rect, dx: float, dy: float) -> Rect:
    return Rect(window.left + dx, window.top + dy, window.right + dx, window.bottom + dy)


@pytest.fixture
def always_place(obstacle_manager):
    obstacle_manager.placement_chance = 1.0
    return obstacle_manager


class TestInitialPlacement:

    def test_places_one_per_area_below_start(self, obstacle_manager):
        obstacle_manager.place_initial_obstacles()

        expected = math.ceil(
            (GAME_WIDTH / STARTING_OBSTACLE_REDUCER) * (GAME_HEIGHT / STARTING_OBSTACLE_REDUCER)
        )
        assert len(obstacle_manager.obstacles) == expected
        for obstacle in obstacle_manager.obstacles:
            assert -STARTING_OBSTACLE_GAP <= obstacle.position.x <= GAME_WIDTH + STARTING_OBSTACLE_GAP
            assert GAME_HEIGHT / 2 + 100 <= obstacle.position.y <= GAME_HEIGHT + STARTING_OBSTACLE_GAP

    def test_obstacles_are_spaced_apart(self, obstacle_manager):
        for _ in range(20):
            obstacle_manager.place_random_obstacle(-500, 500, -500, 500)

        obstacles = obstacle_manager.obstacles
        for i, a in enumerate(obstacles):
            for b in obstacles[i + 1:]:
                assert (
                    abs(a.position.x - b.position.x) >= DISTANCE_BETWEEN_OBSTACLES
                    or abs(a.position.y - b.position.y) >= DISTANCE_BETWEEN_OBSTACLES
                )

    def test_kept_in_top_to_bottom_order(self, obstacle_manager):
        for _ in range(10):
            obstacle_manager.place_random_obstacle(-500, 500, -500, 500)

        ys = [o.position.y for o in obstacle_manager.obstacles]
        assert ys == sorted(ys)

    def test_gives_up_when_no_room(self, obstacle_manager, place_obstacle):
        place_obstacle(ObstacleKind.TREE, 0, 0)
        assert obstacle_manager.calculate_open_position(0, 0, 0, 0) is None
        assert obstacle_manager.place_random_obstacle(0, 0, 0, 0) is None
        assert len(obstacle_manager.obstacles) == 1


class TestNewObstacles:
    """Obstacles only appear along the edges the window moved towards."""

    def test_window_moving_down_places_on_bottom_edge(self, always_place):
        window = moved(WINDOW, 0, 5)
        always_place.place_new_obstacle(window, WINDOW)

        [obstacle] = always_place.obstacles
        assert obstacle.position.y == math.floor(window.bottom)
        assert window.left <= obstacle.position.x <= window.right

    def test_window_moving_up_places_on_top_edge(self, always_place):
        window = moved(WINDOW, 0, -5)
        always_place.place_new_obstacle(window, WINDOW)

        [obstacle] = always_place.obstacles
        assert obstacle.position.y == math.floor(window.top)

    def test_window_moving_left_places_on_left_edge(self, always_place):
        window = moved(WINDOW, -5, 0)
        always_place.place_new_obstacle(window, WINDOW)

        [obstacle] = always_place.obstacles
        assert obstacle.position.x == math.floor(window.left)

    def test_window_moving_right_places_on_right_edge(self, always_place):
        window = moved(WINDOW, 5, 0)
        always_place.place_new_obstacle(window, WINDOW)

        [obstacle] = always_place.obstacles
        assert obstacle.position.x == math.floor(window.right)

    def test_diagonal_move_places_on_both_edges(self, always_place):
        always_place.place_new_obstacle(moved(WINDOW, 5, 5), WINDOW)
        assert len(always_place.obstacles) == 2

    def test_still_window_places_nothing(self, always_place):
        always_place.place_new_obstacle(WINDOW, WINDOW)
        assert always_place.obstacles == []

    def test_zero_chance_places_nothing(self, obstacle_manager):
        obstacle_manager.placement_chance = 0.0
        for _ in range(50):
            obstacle_manager.place_new_obstacle(moved(WINDOW, 0, 5), WINDOW)
        assert obstacle_manager.obstacles == []


class TestPlacementChance:

    def test_increases_by_step(self, obstacle_manager):
        before = obstacle_manager.placement_chance
        obstacle_manager.increase_obstacle_placement_chance()
        assert obstacle_manager.placement_chance == pytest.approx(before + 0.01)

    def test_capped_at_max(self, obstacle_manager):
        obstacle_manager.placement_chance = 0.495
        obstacle_manager.increase_obstacle_placement_chance()
        obstacle_manager.increase_obstacle_placement_chance()
        assert obstacle_manager.placement_chance == 0.5


class TestPassedObstacles:
    """Obstacles a screen or more above the window are forgotten."""

    def test_far_above_window_is_removed(self, obstacle_manager, place_obstacle):
        cutoff = WINDOW.top - GAME_HEIGHT
        place_obstacle(ObstacleKind.TREE, 0, cutoff - 60)
        edge = place_obstacle(ObstacleKind.ROCK1, 0, cutoff)
        visible = place_obstacle(ObstacleKind.JUMP_RAMP, 0, 0)

        assert obstacle_manager.remove_passed_obstacles(WINDOW) == 1
        assert obstacle_manager.obstacles == [edge, visible]

    def test_nothing_to_remove(self, obstacle_manager):
        obstacle_manager.place_initial_obstacles()
        count = len(obstacle_manager.obstacles)

        assert obstacle_manager.remove_passed_obstacles(WINDOW) == 0
        assert len(obstacle_manager.obstacles) == count

    def test_insert_keeps_equal_ys_in_arrival_order(self, place_obstacle, obstacle_manager):
        first = place_obstacle(ObstacleKind.TREE, 0, 10)
        second = place_obstacle(ObstacleKind.ROCK2, 100, 10)
        top = place_obstacle(ObstacleKind.ROCK1, 0, -10)
        assert obstacle_manager.obstacles == [top, first, second]


class TestObstacle:

    @pytest.mark.parametrize("kind,jumpable", [
        (ObstacleKind.TREE, False),
        (ObstacleKind.TREE_CLUSTER, False),
        (ObstacleKind.ROCK1, True),
        (ObstacleKind.ROCK2, True),
        (ObstacleKind.JUMP_RAMP, True),
    ])
    def test_jumpable(self, place_obstacle, kind, jumpable):
        assert place_obstacle(kind).is_jumpable is jumpable

    def test_bounds_cover_upper_half(self, place_obstacle):
        tree = place_obstacle(ObstacleKind.TREE, 100, 100)
        image = tree.get_image()
        bounds = tree.get_bounds()

        assert bounds == Rect(
            100 - image.width / 2, 100 - image.height / 2, 100 + image.width / 2, 100
        )
