#!/usr/bin/env python3
"""Smoke tests for render.py and the input mapping in game.py (off-screen)."""

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from flappy.config import GameConfig
from flappy.game import handle_event, jump_key_for
from flappy.obstacles import ObstaclePairGenerator
from flappy.render import Renderer, BIRD_FILL
from flappy.session import GameSession, GameState


class FixedRandom:
    def random(self):
        return 0.5


def make_session():
    cfg = GameConfig()
    return GameSession(cfg, generator=ObstaclePairGenerator(cfg, rng=FixedRandom()))


class TestRenderer(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        pygame.font.init()
        cls.renderer = Renderer((800, 500), 50)

    def setUp(self):
        self.screen = pygame.Surface((800, 500))

    def test_running_frame_draws_bird(self):
        s = make_session()
        s.start()
        s.tick()
        snap = s.snapshot()
        self.renderer.draw(self.screen, snap)
        c = self.screen.get_at((int(snap.actor.x), int(snap.actor.y)))
        self.assertEqual((c.r, c.g, c.b), BIRD_FILL)

    def test_every_state_renders(self):
        s = make_session()
        self.renderer.draw(self.screen, s.snapshot())
        s.start()
        s.tick()
        s.toggle_pause()
        self.renderer.draw(self.screen, s.snapshot())
        s.toggle_pause()
        for _ in range(40):
            s.tick()
        self.assertIs(s.state, GameState.OVER)
        self.renderer.draw(self.screen, s.snapshot())


class TestInputMapping(unittest.TestCase):
    def setUp(self):
        self.s = make_session()
        self.space = jump_key_for("space")

    def key(self, k):
        return pygame.event.Event(pygame.KEYDOWN, key=k)

    def test_jump_key_modes(self):
        self.assertEqual(jump_key_for("up"), pygame.K_UP)
        self.assertEqual(jump_key_for("w"), pygame.K_w)
        self.assertEqual(jump_key_for("anything"), pygame.K_SPACE)

    def test_space_starts_then_jumps(self):
        self.assertTrue(handle_event(self.s, self.key(pygame.K_SPACE), self.space))
        self.assertIs(self.s.state, GameState.RUNNING)
        self.assertEqual(self.s.actor.velocity, 0.0)
        handle_event(self.s, self.key(pygame.K_SPACE), self.space)
        self.assertEqual(self.s.actor.velocity, self.s.cfg.jump_impulse)

    def test_click_starts(self):
        ev = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10))
        handle_event(self.s, ev, self.space)
        self.assertIs(self.s.state, GameState.RUNNING)

    def test_pause_and_restart_keys(self):
        self.s.start()
        handle_event(self.s, self.key(pygame.K_p), self.space)
        self.assertIs(self.s.state, GameState.PAUSED)
        handle_event(self.s, self.key(pygame.K_r), self.space)
        self.assertIs(self.s.state, GameState.IDLE)

    def test_quit_events(self):
        self.assertFalse(handle_event(self.s, pygame.event.Event(pygame.QUIT), self.space))
        self.assertFalse(handle_event(self.s, self.key(pygame.K_ESCAPE), self.space))


if __name__ == "__main__":
    unittest.main()
