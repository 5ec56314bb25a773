# game.py
import sys
import random
import logging
import argparse

import pygame

from flappy.config import (
    WIDTH, HEIGHT, GROUND_HEIGHT, DEFAULT_CONFIG,
    load_user_settings, save_user_settings,
)
from flappy.logger import setup_logging
from flappy.obstacles import ObstaclePairGenerator
from flappy.reporter import ScoreReporter
from flappy.render import Renderer
from flappy.session import GameSession, GameState

log = logging.getLogger("flappy.game")

# =====================
# USTAWIENIA OKNA
# =====================
WINDOW_CAPTION = "Flappy Bird"
TARGET_FPS = 60


def jump_key_for(mode: str) -> int:
    if mode == "up":
        return pygame.K_UP
    if mode == "w":
        return pygame.K_w
    return pygame.K_SPACE


# =====================
# WEJŚCIE -> triggery sesji
# =====================
def handle_event(session: GameSession, event, jump_key: int) -> bool:
    """Mapuje zdarzenie pygame na trigger sesji. Zwraca False gdy trzeba wyjść."""
    if event.type == pygame.QUIT:
        return False

    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == jump_key:
            _start_or_jump(session)
        elif event.key == pygame.K_p:
            session.toggle_pause()
        elif event.key == pygame.K_r:
            session.restart()

    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        _start_or_jump(session)

    return True


def _start_or_jump(session: GameSession):
    if session.state is GameState.IDLE:
        session.start()
    else:
        session.jump()


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Flappy Bird.")
    parser.add_argument("--username", type=str, default=None, help="Name submitted with the score.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible pipe layouts.")
    parser.add_argument("--api-url", type=str, default=None, help="Score API base URL.")
    parser.add_argument("--log-level", type=str, default="info")
    parser.add_argument("--log-file", type=str, default=None)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    settings = load_user_settings()
    if args.username:
        settings.username = args.username.strip()[:20] or settings.username
        save_user_settings(settings)
    api_url = args.api_url or settings.api_url

    reporter = ScoreReporter(api_url)

    def _log_leaderboard():
        top = reporter.fetch_top_scores(10)
        for i, (name, score) in enumerate(top, start=1):
            log.info("#%d %s %d", i, name, score)

    reporter.on_submitted = _log_leaderboard

    session = GameSession(
        DEFAULT_CONFIG,
        generator=ObstaclePairGenerator(DEFAULT_CONFIG, rng=random.Random(args.seed)),
        reporter=reporter,
        username=settings.username,
    )

    # =====================
    # OKNO
    # =====================
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(WINDOW_CAPTION)
    clock = pygame.time.Clock()
    renderer = Renderer((WIDTH, HEIGHT), GROUND_HEIGHT)
    jump_key = jump_key_for(settings.jump_key)

    log.info("Good luck, %s!", settings.username)

    # =====================
    # PĘTLA GŁÓWNA
    # =====================
    running = True
    while running:
        dt = clock.tick(TARGET_FPS)

        for event in pygame.event.get():
            if not handle_event(session, event, jump_key):
                running = False

        session.advance(dt)

        # overlaye PAUSED/OVER rysujemy co klatkę, symulacja stoi
        renderer.draw(screen, session.snapshot())
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
