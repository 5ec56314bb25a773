# collision.py
from typing import Iterable

from flappy.config import BOUNDS_MARGIN_PX, PIPE_MARGIN_PX
from flappy.entities import Bounds, Obstacle


def out_of_bounds(actor: Bounds, world_height: float, margin_px: float = BOUNDS_MARGIN_PX) -> bool:
    # wyrozumiała granica: trzeba wyjść o margines poza ekran
    return actor.top <= -margin_px or actor.bottom >= world_height + margin_px


def overlaps(a: Bounds, b: Bounds, margin_px: float = PIPE_MARGIN_PX) -> bool:
    """AABB overlap po zmniejszeniu obu prostokątów o margines z każdej strony."""
    m = margin_px
    return (
        a.right - m > b.left + m
        and a.left + m < b.right - m
        and a.bottom - m > b.top + m
        and a.top + m < b.bottom - m
    )


def collided(
    actor: Bounds,
    world_height: float,
    obstacles: Iterable[Obstacle],
    margin_px: float = BOUNDS_MARGIN_PX,
    obstacle_margin_px: float = PIPE_MARGIN_PX,
) -> bool:
    if out_of_bounds(actor, world_height, margin_px):
        return True

    for ob in obstacles:
        if overlaps(actor, ob.bounds(), obstacle_margin_px):
            return True

    return False
