"""Memoized image and sound loading with silent/placeholder fallbacks."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from .config import ASSET_DIR, BIRD_SIZE, COL_BIRD

logger = logging.getLogger(__name__)

# 0.1 s of 16-bit mono silence at 44.1 kHz
SILENT_SAMPLES = bytes(4410 * 2)


class AssetLoader:
    """Loads each asset once and hands back the cached object afterwards."""

    def __init__(self, root: Path | str = ASSET_DIR) -> None:
        self.root = Path(root)
        self._images: dict[str, pygame.Surface] = {}
        self._sounds: dict[str, pygame.mixer.Sound | None] = {}

    def image(
        self,
        name: str,
        fallback_size: tuple[int, int] = BIRD_SIZE,
        fallback_color: tuple[int, int, int] = COL_BIRD,
    ) -> pygame.Surface:
        if name not in self._images:
            self._images[name] = self._load_image(name, fallback_size, fallback_color)
        return self._images[name]

    def _load_image(
        self, name: str, fallback_size: tuple[int, int], fallback_color: tuple[int, int, int]
    ) -> pygame.Surface:
        path = self.root / name
        try:
            surf = pygame.image.load(str(path))
        except (pygame.error, FileNotFoundError) as exc:
            logger.warning("could not load image %s: %s; using placeholder", path, exc)
            surf = pygame.Surface(fallback_size)
            surf.fill(fallback_color)
            return surf
        # convert_alpha needs a display mode
        if pygame.display.get_surface() is not None:
            surf = surf.convert_alpha()
        return surf

    def sprite_size(self, name: str) -> tuple[int, int]:
        return self.image(name).get_size()

    def sound(self, name: str) -> pygame.mixer.Sound | None:
        if name not in self._sounds:
            self._sounds[name] = self._load_sound(name)
        return self._sounds[name]

    def _load_sound(self, name: str) -> pygame.mixer.Sound | None:
        if pygame.mixer.get_init() is None:
            return None
        path = self.root / name
        try:
            return pygame.mixer.Sound(str(path))
        except (pygame.error, FileNotFoundError) as exc:
            logger.warning("could not load sound %s: %s; using silence", path, exc)
        try:
            return pygame.mixer.Sound(buffer=SILENT_SAMPLES)
        except pygame.error as exc:
            logger.warning("failed to create silent sound: %s", exc)
            return None
