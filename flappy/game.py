"""Game loop, screens, and rendering composition for Flappy."""

from __future__ import annotations

import enum
import logging
import random
import sys

import pygame

from .assets import AssetLoader
from .config import (
    AVAILABLE_BIRDS,
    BACKGROUND_IMAGE,
    COL_BIRD,
    COL_SELECT,
    COL_SKY_BOTTOM,
    COL_SKY_TOP,
    COL_TEXT,
    COL_TUBE,
    COLLISION_SOUND,
    FPS,
    JUMP_SOUND,
    MAX_TICKS_PER_FRAME,
    TICK_MS,
    TUBE_IMAGE,
    PlayfieldConfig,
)
from .controller import RoundController, RoundSnapshot
from .utils import gradient_pixels, scale_color

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    MENU = "menu"
    SELECT = "select"
    PLAYING = "playing"


class Game:
    """Top-level shell: window, input, fixed-step driving of the round, drawing."""

    def __init__(
        self,
        playfield: PlayfieldConfig | None = None,
        assets: AssetLoader | None = None,
        rng: random.Random | None = None,
    ) -> None:
        pygame.init()
        self.playfield = playfield or PlayfieldConfig.default()
        pf = self.playfield
        self.screen = pygame.display.set_mode((pf.width, pf.height), pygame.DOUBLEBUF)
        pygame.display.set_caption("Flappy Bird")
        self.clock = pygame.time.Clock()
        self.font_big = pygame.font.SysFont(None, max(12, pf.height // 12))
        self.font_small = pygame.font.SysFont(None, max(12, pf.height // 20))
        if pygame.mixer.get_init() is None:
            logger.warning("audio unavailable, running without sound")

        self.assets = assets or AssetLoader()
        self.background = self._make_background()
        self.jump_sound = self.assets.sound(JUMP_SOUND)
        self.collision_sound = self.assets.sound(COLLISION_SOUND)

        self.selected_bird = 0
        self.mode = Mode.MENU
        self.time_accum = 0.0
        self.round = RoundController(
            pf,
            sprite_sizes={name: self.assets.sprite_size(name) for name in AVAILABLE_BIRDS},
            rng=rng,
            on_jump=self._on_jump,
            on_collision=self._on_collision,
        )

    @property
    def selected_bird_image(self) -> str:
        return AVAILABLE_BIRDS[self.selected_bird]

    def _make_background(self) -> pygame.Surface:
        pf = self.playfield
        if (self.assets.root / BACKGROUND_IMAGE).exists():
            img = self.assets.image(BACKGROUND_IMAGE, (pf.width, pf.height), COL_SKY_TOP)
            return pygame.transform.smoothscale(img, (pf.width, pf.height))
        return pygame.surfarray.make_surface(gradient_pixels(pf.width, pf.height, COL_SKY_TOP, COL_SKY_BOTTOM))

    # Round events

    def _on_jump(self) -> None:
        if self.jump_sound is not None:
            self.jump_sound.stop()
            self.jump_sound.play()

    def _on_collision(self, score: int) -> None:
        if self.collision_sound is not None:
            self.collision_sound.stop()
            self.collision_sound.play()
        self.mode = Mode.MENU

    # Screen transitions

    def start_game(self) -> None:
        self.mode = Mode.PLAYING
        self.time_accum = 0.0
        self.round.start_round(self.selected_bird_image)

    def show_bird_selection(self) -> None:
        self.mode = Mode.SELECT

    def select_previous_bird(self) -> None:
        self.selected_bird = (self.selected_bird - 1) % len(AVAILABLE_BIRDS)

    def select_next_bird(self) -> None:
        self.selected_bird = (self.selected_bird + 1) % len(AVAILABLE_BIRDS)

    def confirm_bird_selection(self) -> None:
        self.mode = Mode.MENU

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                if self.mode is Mode.SELECT:
                    self.confirm_bird_selection()
                elif self.mode is Mode.MENU:
                    self.start_game()
            elif event.key == pygame.K_s and self.mode is Mode.MENU:
                self.show_bird_selection()
            elif self.mode is Mode.SELECT:
                if event.key == pygame.K_LEFT:
                    self.select_previous_bird()
                elif event.key == pygame.K_RIGHT:
                    self.select_next_bird()
        elif event.type == pygame.KEYUP:
            # Jump fires on release, like the classic controls
            if event.key == pygame.K_SPACE and self.mode is Mode.PLAYING:
                self.round.jump_pressed()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.mode is Mode.PLAYING:
                self.round.jump_pressed()

    def update(self, dt_ms: float) -> int:
        """Run as many fixed ticks as dt_ms covers; return how many ran."""
        if self.mode is not Mode.PLAYING:
            self.time_accum = 0.0
            return 0
        self.time_accum += dt_ms
        ticks = 0
        while self.time_accum >= TICK_MS and ticks < MAX_TICKS_PER_FRAME:
            self.time_accum -= TICK_MS
            ticks += 1
            if self.round.tick():
                break
        if ticks == MAX_TICKS_PER_FRAME:
            # Drop the backlog instead of spiralling
            self.time_accum = 0.0
        return ticks

    # Drawing

    def draw(self) -> None:
        self.screen.blit(self.background, (0, 0))
        snap = self.round.snapshot()
        if self.mode is Mode.PLAYING:
            self._draw_round(self.screen, snap)
        elif self.mode is Mode.SELECT:
            self._draw_selection(self.screen)
        else:
            self._draw_menu(self.screen, snap)
        high = self.font_small.render(f"High Score: {snap.high_score}", True, COL_TEXT)
        self.screen.blit(high, (self.playfield.width - self.playfield.width // 4, 30))
        pygame.display.flip()

    def _draw_round(self, surf: pygame.Surface, snap: RoundSnapshot) -> None:
        tube_img = None
        if (self.assets.root / TUBE_IMAGE).exists():
            tube_img = self.assets.image(TUBE_IMAGE, (1, 1), COL_TUBE)
        for box in snap.obstacle_boxes:
            if tube_img is not None:
                surf.blit(pygame.transform.scale(tube_img, box.size), box.topleft)
            else:
                pygame.draw.rect(surf, COL_TUBE, box)
                pygame.draw.rect(surf, scale_color(COL_TUBE, 0.6), box, 3)
        if snap.actor_box is not None and snap.sprite_id is not None:
            surf.blit(self.assets.image(snap.sprite_id), snap.actor_box.topleft)

        score = self.font_small.render(f"Current score: {snap.score}", True, COL_TEXT)
        speed = self.font_small.render(f"Speed: {snap.speed:.1f}", True, COL_TEXT)
        surf.blit(score, (10, 30))
        surf.blit(speed, (10, 30 + score.get_height() + 10))

    def _draw_selection(self, surf: pygame.Surface) -> None:
        w, h = self.playfield.width, self.playfield.height
        title = self.font_big.render("Select Bird", True, COL_TEXT)
        surf.blit(title, title.get_rect(center=(w // 2, h // 4)))

        start_x, start_y, spacing = w // 3, h // 2, w // 6
        for i, name in enumerate(AVAILABLE_BIRDS):
            img = self.assets.image(name)
            rect = img.get_rect(center=(start_x + i * spacing, start_y))
            surf.blit(img, rect)
            if i == self.selected_bird:
                pygame.draw.rect(surf, COL_SELECT, rect.inflate(20, 20), 3)

        hint = self.font_small.render("<- -> to select    ENTER to confirm", True, COL_TEXT)
        surf.blit(hint, hint.get_rect(center=(w // 2, h * 3 // 4)))

    def _draw_menu(self, surf: pygame.Surface, snap: RoundSnapshot) -> None:
        w, h = self.playfield.width, self.playfield.height
        title = self.font_big.render("Press Enter to Start Game", True, COL_TEXT)
        surf.blit(title, title.get_rect(center=(w // 2, h // 2)))
        hint = self.font_small.render("Press S to Select Bird", True, COL_TEXT)
        surf.blit(hint, hint.get_rect(center=(w // 2, h // 2 + 60)))
        if snap.last_score:
            last = self.font_small.render(f"Last score: {snap.last_score}", True, scale_color(COL_BIRD, 0.5))
            surf.blit(last, last.get_rect(center=(w // 2, h // 2 + 100)))

    def run(self) -> None:
        while True:
            dt = self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    sys.exit(0)
                self.handle_input(event)

            self.update(dt)
            self.draw()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    Game().run()
