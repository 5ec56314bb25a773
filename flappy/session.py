# session.py
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from flappy.config import GameConfig, DEFAULT_CONFIG
from flappy.entities import Actor, Bounds, Obstacle, Role
from flappy.obstacles import ObstaclePairGenerator
from flappy.collision import collided
from flappy.clock import SimulationClock

log = logging.getLogger("flappy.session")


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass(frozen=True)
class ActorView:
    x: float
    y: float
    radius: float
    velocity: float
    bounds: Bounds


@dataclass(frozen=True)
class ObstacleView:
    bounds: Bounds
    role: Role


@dataclass(frozen=True)
class Snapshot:
    state: GameState
    tick: int
    score: int
    actor: ActorView
    obstacles: Tuple[ObstacleView, ...]


class GameSession:
    """Stan jednej rozgrywki + maszyna stanów IDLE/RUNNING/PAUSED/OVER.

    Wszystkie metody zmieniające stan idą przez jeden lock, więc tick nigdy
    nie jest przerwany w połowie przez zdarzenie wejścia.
    """

    def __init__(
        self,
        cfg: GameConfig = DEFAULT_CONFIG,
        generator: Optional[ObstaclePairGenerator] = None,
        reporter=None,
        username: str = "player",
        clock: Optional[SimulationClock] = None,
    ):
        self.cfg = cfg
        self.generator = generator if generator is not None else ObstaclePairGenerator(cfg)
        self.reporter = reporter
        self.username = username
        self.clock = clock if clock is not None else SimulationClock(cfg.ticks_per_second, cfg.max_dt_ms)

        self._lock = threading.RLock()

        self.state = GameState.IDLE
        self.tick_count = 0
        self.score = 0
        self.obstacles: List[Obstacle] = []
        self.actor = Actor.spawn(cfg)

    # ---------- helpers ----------
    def _reset_world(self):
        self.tick_count = 0
        self.score = 0
        self.obstacles.clear()
        self.actor = Actor.spawn(self.cfg)

    def _game_over(self):
        self.state = GameState.OVER
        self.clock.stop()
        log.info("Game over at tick %d, score %d", self.tick_count, self.score)

        if self.reporter is not None:
            try:
                self.reporter.submit(self.username, self.score)
            except Exception:
                # raport nie może zablokować przejścia do OVER
                log.exception("Score reporter failed to start")

    def _update_obstacles(self):
        actor_x = self.actor.x
        for ob in self.obstacles:
            ob.advance(self.cfg.pipe_speed)
            # punkt tylko za górną rurę, żeby para liczyła się raz
            if ob.is_upper and not ob.scored and ob.x + ob.width < actor_x:
                ob.scored = True
                self.score += 1

        self.obstacles = [ob for ob in self.obstacles if not ob.is_off_screen()]

    # ---------- transitions ----------
    def start(self) -> bool:
        with self._lock:
            if self.state is not GameState.IDLE:
                return False
            self._reset_world()
            self.state = GameState.RUNNING
            self.clock.start()
            log.debug("Game started")
            return True

    def jump(self) -> bool:
        with self._lock:
            if self.state is not GameState.RUNNING:
                return False
            self.actor.jump()
            return True

    def toggle_pause(self) -> bool:
        with self._lock:
            if self.state is GameState.RUNNING:
                self.state = GameState.PAUSED
                self.clock.stop()
            elif self.state is GameState.PAUSED:
                self.state = GameState.RUNNING
                self.clock.start()
            else:
                return False
            log.debug("Pause toggled -> %s", self.state.value)
            return True

    def restart(self) -> bool:
        with self._lock:
            if self.state is GameState.IDLE:
                return False
            self.clock.stop()
            self._reset_world()
            self.state = GameState.IDLE
            log.debug("Game restarted")
            return True

    # ---------- simulation ----------
    def tick(self) -> bool:
        """Jeden krok symulacji. Zwraca False gdy gra nie jest w RUNNING."""
        with self._lock:
            if self.state is not GameState.RUNNING:
                return False

            cfg = self.cfg
            if self.tick_count % cfg.spawn_interval == 0:
                self.obstacles.extend(self.generator.generate_pair(self.score, cfg.pipe_gap))

            self._update_obstacles()
            self.actor.apply_gravity_tick()

            if collided(
                self.actor.bounds(),
                cfg.height,
                self.obstacles,
                margin_px=cfg.bounds_margin,
                obstacle_margin_px=cfg.pipe_margin,
            ):
                self._game_over()
                return True

            self.tick_count += 1
            return True

    def advance(self, dt_ms: float) -> int:
        """Przesuwa symulację o czas ściany; zwraca liczbę wykonanych ticków."""
        with self._lock:
            done = 0
            for _ in range(self.clock.advance(dt_ms)):
                if not self.tick():
                    break
                done += 1
            return done

    # ---------- render output ----------
    def snapshot(self) -> Snapshot:
        with self._lock:
            a = self.actor
            actor = ActorView(x=a.x, y=a.y, radius=a.radius, velocity=a.velocity, bounds=a.bounds())
            obstacles = tuple(ObstacleView(bounds=ob.bounds(), role=ob.role) for ob in self.obstacles)
            return Snapshot(
                state=self.state,
                tick=self.tick_count,
                score=self.score,
                actor=actor,
                obstacles=obstacles,
            )
