"""Layout, color, and rendering constants."""
from __future__ import annotations

SCREEN_W = 900
SCREEN_H = 640
FPS = 60

# Layout
FORM_H = 56
STATUS_H = 28
ROW_H = 26
PADDING = 12

# Colors
COLOR_BG = (20, 20, 30)
COLOR_FORM_BG = (30, 30, 42)
COLOR_INPUT_BG = (45, 45, 60)
COLOR_INPUT_BORDER = (110, 110, 150)
COLOR_TEXT = (200, 200, 200)
COLOR_DIM = (120, 120, 130)
COLOR_HOVER = (60, 60, 85)
COLOR_ZOOM_BG = (12, 12, 18)

MODE_COLORS: dict[str, tuple[int, int, int]] = {
    "none": (200, 200, 200),
    "loading": (220, 180, 60),
    "results": (100, 200, 80),
    "zoomed": (100, 140, 220),
    "error": (255, 80, 80),
}
