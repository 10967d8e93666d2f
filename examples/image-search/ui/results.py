"""Result list, zoom view and status bar."""
from __future__ import annotations

from functools import lru_cache

import pygame

from machina_search import FeedItem, SearchWidget

from ui.constants import (
    COLOR_BG, COLOR_DIM, COLOR_HOVER, COLOR_TEXT, COLOR_ZOOM_BG,
    FORM_H, MODE_COLORS, PADDING, ROW_H, SCREEN_H, SCREEN_W, STATUS_H,
)

LIST_TOP = FORM_H + PADDING


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.SysFont("monospace", size)


class ResultsPanel:
    """Draws one row per feed item and maps clicks back to items."""

    def __init__(self) -> None:
        self._font: pygame.font.Font | None = None

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 15)
        return self._font

    def item_at(self, pos: tuple[int, int], items: list[FeedItem]) -> FeedItem | None:
        index = (pos[1] - LIST_TOP) // ROW_H
        if pos[1] < LIST_TOP or not 0 <= index < len(items):
            return None
        return items[index]

    def draw(self, surface: pygame.Surface, items: list[FeedItem]) -> None:
        font = self._get_font()
        hovered = self.item_at(pygame.mouse.get_pos(), items)
        for index, item in enumerate(items):
            y = LIST_TOP + index * ROW_H
            if y + ROW_H > SCREEN_H - STATUS_H:
                break
            if item is hovered:
                pygame.draw.rect(surface, COLOR_HOVER, pygame.Rect(0, y, SCREEN_W, ROW_H))
            title = item.title or "(untitled)"
            surface.blit(font.render(f"{index + 1:2d}. {title}", True, COLOR_TEXT), (PADDING, y + 4))


def draw_zoomed(surface: pygame.Surface, item: FeedItem | None) -> None:
    """Detail view for the selected item."""
    rect = pygame.Rect(0, FORM_H, SCREEN_W, SCREEN_H - FORM_H - STATUS_H)
    pygame.draw.rect(surface, COLOR_ZOOM_BG, rect)
    if item is None:
        return
    big = _font(22)
    small = _font(14)
    lines = [
        (big, item.title or "(untitled)", COLOR_TEXT),
        (small, item.author, COLOR_DIM),
        (small, item.link, COLOR_DIM),
        (small, item.media_url, COLOR_DIM),
        (small, " ".join(f"#{tag}" for tag in item.tags), COLOR_DIM),
    ]
    y = rect.y + 2 * PADDING
    for font, text, color in lines:
        if text:
            surface.blit(font.render(text, True, color), (2 * PADDING, y))
            y += font.get_linesize() + 6


def draw_loading(surface: pygame.Surface, query: str) -> None:
    font = _font(18)
    text = font.render(f"Loading '{query}', please wait...", True, MODE_COLORS["loading"])
    surface.blit(text, (PADDING, LIST_TOP))


def draw_status(surface: pygame.Surface, widget: SearchWidget) -> None:
    bar = pygame.Rect(0, SCREEN_H - STATUS_H, SCREEN_W, STATUS_H)
    pygame.draw.rect(surface, COLOR_BG, bar)
    font = _font(13)
    message = f"state: {widget.state}   mode: {widget.mode}   results: {len(widget.results)}"
    if widget.mode == "error" and widget.error:
        message += f"   error: {widget.error}"
    color = MODE_COLORS.get(widget.mode, COLOR_TEXT)
    surface.blit(font.render(message, True, color), (PADDING, bar.y + 7))
