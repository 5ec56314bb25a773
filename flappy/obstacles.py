# obstacles.py
import random
import logging
from typing import List, Optional, Tuple

from flappy.config import GameConfig, DEFAULT_CONFIG
from flappy.entities import Obstacle, Role

log = logging.getLogger("flappy.obstacles")


class ObstaclePairGenerator:
    """Tworzy pary rur (górna + dolna) z losowo położoną bramką.

    Źródło losowości jest wstrzykiwane (``rng``) albo budowane z ``seed``,
    dzięki czemu testy dostają powtarzalne układy.
    """

    def __init__(
        self,
        cfg: GameConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.cfg = cfg
        self.rng = rng if rng is not None else random.Random(seed)

    # ---------- helpers ----------
    def gap_for(self, previous_score: int, gap_size_base: float) -> float:
        # na start łatwiej: większa bramka dopóki wynik poniżej progu
        gap = float(gap_size_base)
        if previous_score < self.cfg.easy_score_threshold:
            gap += self.cfg.easy_gap_bonus
        return gap

    def _split_heights(self, gap: float) -> Tuple[float, float]:
        h = float(self.cfg.height)
        min_h = float(self.cfg.min_pipe_height)
        max_h = h - gap - min_h

        if max_h < min_h:
            # za mało miejsca na oba minima: bramka na środku
            upper = max(0.0, (h - gap) / 2.0)
        else:
            upper = min_h + self.rng.random() * (max_h - min_h)

        lower = max(0.0, h - upper - gap)
        return upper, lower

    # ---------- API ----------
    def generate_pair(self, previous_score: int, gap_size_base: Optional[float] = None) -> List[Obstacle]:
        if gap_size_base is None:
            gap_size_base = self.cfg.pipe_gap

        gap = self.gap_for(previous_score, gap_size_base)
        upper_h, lower_h = self._split_heights(gap)

        x = float(self.cfg.width)
        w = float(self.cfg.pipe_width)
        h = float(self.cfg.height)

        upper = Obstacle(x=x, width=w, top=0.0, bottom=upper_h, role=Role.UPPER)
        lower = Obstacle(x=x, width=w, top=h - lower_h, bottom=h, role=Role.LOWER)

        log.debug("pair: upper=%.1f lower=%.1f gap=%.1f", upper_h, lower_h, gap)
        return [upper, lower]
