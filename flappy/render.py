# render.py
from typing import Dict, Optional, Tuple

import pygame

from flappy.config import WIDTH, HEIGHT, GROUND_HEIGHT
from flappy.entities import Role
from flappy.session import GameState, Snapshot

# =====================
# KOLORY
# =====================
SKY_TOP = (135, 206, 235)
SKY_BOTTOM = (152, 251, 152)
GROUND_FILL = (139, 69, 19)

PIPE_FILL = (50, 205, 50)
PIPE_SHADE = (34, 139, 34)
PIPE_OUTLINE = (0, 100, 0)
PIPE_CAP_H = 30
PIPE_CAP_OVERHANG = 5

BIRD_FILL = (255, 215, 0)
BIRD_OUTLINE = (255, 69, 0)
BIRD_EYE = (0, 0, 0)

TEXT_FILL = (255, 255, 255)
TEXT_OUTLINE = (40, 40, 40)
TEXT_SHADOW = (0, 0, 0)

OVERLAY_DIM_ALPHA = 178


def render_text_styled(font: pygame.font.Font, text: str,
                       fill, outline, outline_px: int,
                       shadow=None, shadow_offset=(0, 0)) -> pygame.Surface:
    base = font.render(text, True, fill)
    outline_surf = font.render(text, True, outline)

    w = base.get_width() + outline_px * 2 + abs(shadow_offset[0])
    h = base.get_height() + outline_px * 2 + abs(shadow_offset[1])
    out = pygame.Surface((w, h), pygame.SRCALPHA)

    if shadow is not None and (shadow_offset[0] != 0 or shadow_offset[1] != 0):
        shadow_surf = font.render(text, True, shadow)
        out.blit(shadow_surf, (outline_px + shadow_offset[0], outline_px + shadow_offset[1]))

    for dx in range(-outline_px, outline_px + 1):
        for dy in range(-outline_px, outline_px + 1):
            if dx == 0 and dy == 0:
                continue
            if dx * dx + dy * dy > outline_px * outline_px:
                continue
            out.blit(outline_surf, (outline_px + dx, outline_px + dy))

    out.blit(base, (outline_px, outline_px))
    return out


class Renderer:
    """Bezstanowy (poza cache tekstów) renderer snapshotu sesji.

    Nigdy nie sięga do GameSession: dostaje tylko Snapshot.
    """

    def __init__(self, size: Tuple[int, int] = (WIDTH, HEIGHT), ground_h: int = GROUND_HEIGHT,
                 font_path: Optional[str] = None):
        self.w, self.h = int(size[0]), int(size[1])
        self.ground_h = int(ground_h)

        self.font_big = pygame.font.Font(font_path, 56)
        self.font_mid = pygame.font.Font(font_path, 40)
        self.font_small = pygame.font.Font(font_path, 26)

        self.background = self._build_background()
        self.dim_overlay = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        self.dim_overlay.fill((0, 0, 0, OVERLAY_DIM_ALPHA))

        self._text_cache: Dict[Tuple[int, str], pygame.Surface] = {}

    # ---------- cache ----------
    def _build_background(self) -> pygame.Surface:
        bg = pygame.Surface((self.w, self.h))
        for y in range(self.h):
            t = y / float(max(1, self.h - 1))
            color = tuple(int(a + (b - a) * t) for a, b in zip(SKY_TOP, SKY_BOTTOM))
            pygame.draw.line(bg, color, (0, y), (self.w, y))
        pygame.draw.rect(bg, GROUND_FILL, pygame.Rect(0, self.h - self.ground_h, self.w, self.ground_h))
        return bg

    def _text(self, font: pygame.font.Font, text: str, outline_px: int = 3) -> pygame.Surface:
        key = (id(font), text)
        surf = self._text_cache.get(key)
        if surf is None:
            surf = render_text_styled(
                font, text,
                fill=TEXT_FILL,
                outline=TEXT_OUTLINE,
                outline_px=outline_px,
                shadow=TEXT_SHADOW,
                shadow_offset=(2, 2),
            )
            # wynik zmienia się często, nie trzymaj starych wartości w nieskończoność
            if len(self._text_cache) > 64:
                self._text_cache.clear()
            self._text_cache[key] = surf
        return surf

    def _blit_centered(self, dst: pygame.Surface, surf: pygame.Surface, cy: int):
        dst.blit(surf, surf.get_rect(center=(self.w // 2, cy)).topleft)

    # ---------- layers ----------
    def draw_obstacles(self, dst: pygame.Surface, snap: Snapshot):
        for ob in snap.obstacles:
            b = ob.bounds
            body = pygame.Rect(int(b.left), int(b.top), int(round(b.width)), int(round(b.height)))
            pygame.draw.rect(dst, PIPE_FILL, body)
            pygame.draw.rect(dst, PIPE_SHADE, pygame.Rect(body.left, body.top, max(1, body.width // 4), body.height))
            pygame.draw.rect(dst, PIPE_OUTLINE, body, width=2)

            # czapka rury przy bramce
            cap_y = body.bottom if ob.role is Role.UPPER else body.top - PIPE_CAP_H
            cap = pygame.Rect(body.left - PIPE_CAP_OVERHANG, cap_y, body.width + 2 * PIPE_CAP_OVERHANG, PIPE_CAP_H)
            pygame.draw.rect(dst, PIPE_FILL, cap)
            pygame.draw.rect(dst, PIPE_OUTLINE, cap, width=2)

    def draw_actor(self, dst: pygame.Surface, snap: Snapshot):
        a = snap.actor
        c = (int(a.x), int(a.y))
        r = max(1, int(a.radius))
        pygame.draw.circle(dst, BIRD_FILL, c, r)
        pygame.draw.circle(dst, BIRD_OUTLINE, c, r, width=2)
        pygame.draw.circle(dst, BIRD_EYE, (c[0] + 5, c[1] - 3), 3)

    def draw_hud(self, dst: pygame.Surface, snap: Snapshot):
        self._blit_centered(dst, self._text(self.font_mid, f"Score: {snap.score}"), 50)

    def draw_overlay(self, dst: pygame.Surface, snap: Snapshot):
        cy = self.h // 2
        if snap.state is GameState.IDLE:
            dst.blit(self.dim_overlay, (0, 0))
            self._blit_centered(dst, self._text(self.font_mid, "Click or Press SPACE to Start!"), cy - 20)
            self._blit_centered(dst, self._text(self.font_small, "SPACE/Click - Jump, P - Pause, R - Restart", 2), cy + 30)
        elif snap.state is GameState.PAUSED:
            dst.blit(self.dim_overlay, (0, 0))
            self._blit_centered(dst, self._text(self.font_big, "PAUSED"), cy)
            self._blit_centered(dst, self._text(self.font_small, "Press P to Resume", 2), cy + 45)
        elif snap.state is GameState.OVER:
            dst.blit(self.dim_overlay, (0, 0))
            self._blit_centered(dst, self._text(self.font_big, "Game Over!"), cy - 45)
            self._blit_centered(dst, self._text(self.font_mid, f"Final Score: {snap.score}"), cy + 5)
            self._blit_centered(dst, self._text(self.font_small, "Press R to Restart", 2), cy + 50)

    def draw(self, dst: pygame.Surface, snap: Snapshot):
        dst.blit(self.background, (0, 0))
        self.draw_obstacles(dst, snap)
        self.draw_actor(dst, snap)
        self.draw_hud(dst, snap)
        self.draw_overlay(dst, snap)
