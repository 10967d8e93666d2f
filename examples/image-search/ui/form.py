"""Search form: text field plus hint line."""
from __future__ import annotations

import pygame

from ui.constants import (
    COLOR_DIM, COLOR_FORM_BG, COLOR_INPUT_BG, COLOR_INPUT_BORDER,
    COLOR_TEXT, FORM_H, PADDING, SCREEN_W,
)

HINT = "Enter: search   Esc: cancel / zoom out   click a result to zoom"


class SearchForm:
    """Edits the query text. Reports edits through ``on_change``."""

    def __init__(self) -> None:
        self.text = ""
        self._font: pygame.font.Font | None = None
        self._hint_font: pygame.font.Font | None = None

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 18)
            self._hint_font = pygame.font.SysFont("monospace", 12)
        return self._font, self._hint_font

    def handle_key(self, event: pygame.event.Event) -> bool:
        """Apply a KEYDOWN to the text. Returns True if the text changed."""
        if event.key == pygame.K_BACKSPACE:
            if not self.text:
                return False
            self.text = self.text[:-1]
            return True
        if event.unicode and event.unicode.isprintable():
            self.text += event.unicode
            return True
        return False

    def draw(self, surface: pygame.Surface) -> None:
        font, hint_font = self._fonts()
        pygame.draw.rect(surface, COLOR_FORM_BG, pygame.Rect(0, 0, SCREEN_W, FORM_H))

        box = pygame.Rect(PADDING, 8, SCREEN_W - 2 * PADDING, 26)
        pygame.draw.rect(surface, COLOR_INPUT_BG, box)
        pygame.draw.rect(surface, COLOR_INPUT_BORDER, box, 1)

        if self.text:
            label = font.render(self.text + "_", True, COLOR_TEXT)
        else:
            label = font.render("Search the public photo feed", True, COLOR_DIM)
        surface.blit(label, (box.x + 6, box.y + 3))
        surface.blit(hint_font.render(HINT, True, COLOR_DIM), (PADDING, FORM_H - 16))
