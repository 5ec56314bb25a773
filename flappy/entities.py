# entities.py
from dataclasses import dataclass
from enum import Enum

from flappy.config import GameConfig, DEFAULT_CONFIG


@dataclass(frozen=True)
class Bounds:
    left: float
    right: float
    top: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


class Role(Enum):
    UPPER = "upper"
    LOWER = "lower"


@dataclass
class Actor:
    """Spadający ptak: stałe x, zmienne y i prędkość pionowa."""
    x: float
    y: float
    radius: float
    gravity: float
    jump_impulse: float
    velocity: float = 0.0

    @classmethod
    def spawn(cls, cfg: GameConfig = DEFAULT_CONFIG) -> "Actor":
        return cls(
            x=float(cfg.bird_x),
            y=float(cfg.bird_start_y),
            radius=float(cfg.bird_radius),
            gravity=float(cfg.gravity),
            jump_impulse=float(cfg.jump_impulse),
        )

    def apply_gravity_tick(self):
        # najpierw prędkość, potem pozycja (semi-implicit Euler)
        self.velocity += self.gravity
        self.y += self.velocity

    def jump(self):
        self.velocity = self.jump_impulse

    def bounds(self) -> Bounds:
        r = self.radius
        return Bounds(self.x - r, self.x + r, self.y - r, self.y + r)


@dataclass
class Obstacle:
    x: float
    width: float
    top: float
    bottom: float
    role: Role
    scored: bool = False

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def is_upper(self) -> bool:
        return self.role is Role.UPPER

    def advance(self, speed: float):
        self.x -= speed

    def is_off_screen(self) -> bool:
        return self.x + self.width < 0

    def bounds(self) -> Bounds:
        return Bounds(self.x, self.x + self.width, self.top, self.bottom)
